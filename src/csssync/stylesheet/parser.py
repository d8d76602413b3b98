"""Hand-written scanner for plain CSS rule blocks.

Only ``selector { declarations }`` pairs are recognised. Braces are not
nested: a block ends at the first ``}`` after its ``{``. At-rules such as
``@media`` are therefore not understood; a block whose selector contains
``@`` is skipped and the rules inside it may or may not be picked up,
depending on where the first closing brace falls.

Syntax example:
    .btn { color: red; padding: 4px 8px; }
    nav > a:hover { text-decoration: underline; }
"""

from __future__ import annotations

import re

from csssync.model.rule import Rule

__all__ = [
    "format_declarations",
    "parse_declarations",
    "parse_rules",
    "parse_stylesheet_map",
    "serialize_rule",
]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Filler allowed between two rule blocks (includes `@import ...;`).
_LEADING_NOISE_RE = re.compile(r"(?:\s+|/\*.*?\*/|\}|@[^{};]*;)*", re.DOTALL)


def parse_declarations(body: str) -> dict[str, str]:
    """Parse the body of a rule block into an ordered property dictionary."""
    props: dict[str, str] = {}
    for declaration in _COMMENT_RE.sub("", body).split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip()
        value = value.strip()
        if name and value:
            props[name] = value
    return props


def parse_rules(content: str) -> list[Rule]:
    """Parse stylesheet text into rules carrying their source offsets.

    Rules without any declarations are kept, the index needs them so a
    later edit can fill them in.
    """
    rules: list[Rule] = []
    pos = 0
    while True:
        open_at = content.find("{", pos)
        if open_at == -1:
            break
        close_at = content.find("}", open_at + 1)
        if close_at == -1:
            break

        head_start = pos
        stray_close = content.rfind("}", pos, open_at)
        if stray_close != -1:
            head_start = stray_close + 1
        start = _LEADING_NOISE_RE.match(content, head_start, open_at).end()
        end = close_at + 1
        pos = end

        selector = _COMMENT_RE.sub("", content[start:open_at]).strip()
        if not selector or "@" in selector:
            continue

        rules.append(
            Rule(
                selector=selector,
                properties=parse_declarations(content[open_at + 1 : close_at]),
                source_start=start,
                source_end=end,
            )
        )
    return rules


def parse_stylesheet_map(content: str) -> dict[str, dict[str, str]]:
    """Map each selector to its declarations, for diffing two versions of a sheet.

    Empty rules are dropped and repeated selectors are merged, later
    declarations winning.
    """
    merged: dict[str, dict[str, str]] = {}
    for rule in parse_rules(content):
        if rule.properties:
            merged.setdefault(rule.selector, {}).update(rule.properties)
    return merged


def format_declarations(properties: dict[str, str]) -> str:
    """Render declarations two-space indented, one per line, ``;`` terminated."""
    if not properties:
        return ""
    body = ";\n".join(f"  {name}: {value}" for name, value in properties.items())
    return f"{body};\n"


def serialize_rule(selector: str, properties: dict[str, str]) -> str:
    """Render one rule block the way the patcher writes it back."""
    return f"{selector} {{\n{format_declarations(properties)}}}"
