from csssync.matching.scorer import (
    DEFAULT_WEIGHTS,
    MatchWeights,
    find_best_match,
    normalize_selector,
    score_selector,
    tokenize_selector,
)
from csssync.matching.variations import dedupe, generate_variations, variations_for_event

__all__ = [
    "DEFAULT_WEIGHTS",
    "MatchWeights",
    "dedupe",
    "find_best_match",
    "generate_variations",
    "normalize_selector",
    "score_selector",
    "tokenize_selector",
    "variations_for_event",
]
