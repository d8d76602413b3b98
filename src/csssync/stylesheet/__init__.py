from csssync.stylesheet.parser import (
    format_declarations,
    parse_declarations,
    parse_rules,
    parse_stylesheet_map,
    serialize_rule,
)

__all__ = [
    "format_declarations",
    "parse_declarations",
    "parse_rules",
    "parse_stylesheet_map",
    "serialize_rule",
]
