"""Fuzzy matching of candidate selectors against parsed stylesheet rules."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from csssync.model.change import SelectorVariation
from csssync.model.result import MatchResult
from csssync.model.rule import Rule

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_COMBINATOR_RE = re.compile(r"[\s>+~]")


@dataclass(frozen=True)
class MatchWeights:
    """Scoring constants; a match is accepted only above ``threshold``."""

    exact: int = 100
    class_hit: int = 30
    token_hit: int = 20
    short_penalty: int = 10
    short_length: int = 3
    threshold: int = 50


DEFAULT_WEIGHTS = MatchWeights()


def normalize_selector(selector: str) -> str:
    """Collapse whitespace runs to one space and trim. Case is kept."""
    return _WHITESPACE_RE.sub(" ", selector).strip()


def tokenize_selector(selector: str) -> list[str]:
    """Split on whitespace and the ``>``, ``+``, ``~`` combinators."""
    return [token for token in _COMBINATOR_RE.split(selector) if token]


def score_selector(
    css_selector: str,
    target: str,
    class_list: Sequence[str] = (),
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """Confidence that stylesheet selector *css_selector* is the one meant by *target*."""
    if css_selector == target:
        return weights.exact

    clean_css = normalize_selector(css_selector)
    clean_target = normalize_selector(target)
    score = 0

    for class_name in class_list:
        if f".{class_name}" in clean_css:
            score += weights.class_hit

    css_tokens = tokenize_selector(clean_css)
    for token in tokenize_selector(clean_target):
        if token in css_tokens:
            score += weights.token_hit

    if len(clean_css) < weights.short_length:
        score -= weights.short_penalty

    return max(0, score)


def find_best_match(
    variations: Sequence[SelectorVariation],
    class_list: Sequence[str],
    search_space: Iterable[tuple[str, Rule]],
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> MatchResult | None:
    """Best ``(file, rule, variation)`` over the whole cross product.

    An exact selector match outranks any fuzzy score. Among equals the
    first one found wins (file order, rule order, variation order).
    Returns None unless the best score is above ``weights.threshold``.
    """
    best: MatchResult | None = None
    best_key = (False, 0)

    for path, rule in search_space:
        for variation in variations:
            exact = rule.selector == variation.selector
            score = weights.exact if exact else score_selector(
                rule.selector, variation.selector, class_list, weights
            )
            key = (exact, score)
            if key > best_key:
                best_key = key
                best = MatchResult(
                    file=path,
                    rule=rule,
                    matched_variation_selector=variation.selector,
                    score=score,
                )

    if best is None or best.score <= weights.threshold:
        logger.debug("No match above threshold %d (best %s)", weights.threshold, best_key[1])
        return None

    logger.info("Best match %r in %s with score %d", best.rule.selector, best.file, best.score)
    return best
