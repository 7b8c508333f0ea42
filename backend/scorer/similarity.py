"""
Similarity metrics for non-numeric attributes.

String similarity is normalized Levenshtein distance. Array similarity
greedily pairs items of two lists and blends the quality of the pairs
with how much of the shorter list was covered.
"""

import logging
from typing import Any, List, Sequence

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)

# Matches are accepted strictly above threshold - MATCH_EPSILON
MATCH_EPSILON = 0.01
QUALITY_WEIGHT = 0.4
COVERAGE_WEIGHT = 0.6


def string_similarity(s1: str, s2: str, case_sensitive: bool = False) -> float:
    """
    Normalized edit-distance similarity between two strings.

    Args:
        s1: First string
        s2: Second string
        case_sensitive: Compare without case folding

    Returns:
        Similarity score (0-1); 1 for two empty strings
    """
    s1 = s1.strip()
    s2 = s2.strip()
    if not case_sensitive:
        s1 = s1.casefold()
        s2 = s2.casefold()

    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    distance = Levenshtein.distance(s1, s2)
    return 1 - distance / max(len(s1), len(s2))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def item_similarity(a: Any, b: Any, case_sensitive: bool = False) -> float:
    """Similarity of two list items: strings, numbers, or exact equality."""
    if isinstance(a, str) and isinstance(b, str):
        return string_similarity(a, b, case_sensitive=case_sensitive)
    if _is_number(a) and _is_number(b):
        max_diff = max(abs(a), abs(b))
        if max_diff == 0:
            return 1.0
        return max(0.0, 1 - abs(a - b) / max_diff)
    return 1.0 if a == b else 0.0


def array_similarity(
    source: Sequence[Any],
    target: Sequence[Any],
    case_sensitive: bool = False,
    partial: bool = True,
    threshold: float = 0.7
) -> float:
    """
    Greedy best-match similarity between two lists.

    The longer list is walked row by row; each row takes the best
    still-unused item of the other list scoring above the threshold.
    Used items are removed so they cannot be matched twice. The matching
    is greedy, not an optimal assignment.

    Args:
        source: Candidate's list (e.g. skills)
        target: Ideal list
        case_sensitive: Compare strings without case folding
        partial: Accept partial coverage; when False any unmatched item
            of the shorter list yields 0
        threshold: Minimum pair similarity for a match

    Returns:
        0.4 * match quality + 0.6 * coverage (0-1)
    """
    if not source and not target:
        return 1.0
    if not source or not target:
        return 0.0

    # Longer list drives the matching
    if len(source) >= len(target):
        rows, cols = list(source), list(target)
    else:
        rows, cols = list(target), list(source)

    matrix: List[List[float]] = [
        [item_similarity(r, c, case_sensitive=case_sensitive) for c in cols]
        for r in rows
    ]

    available = list(range(len(cols)))
    total_similarity = 0.0
    match_count = 0

    for row in matrix:
        if not available:
            break
        best_idx = -1
        best_score = threshold - MATCH_EPSILON
        for j in available:
            if row[j] > best_score:
                best_score = row[j]
                best_idx = j
        if best_idx != -1:
            total_similarity += best_score
            match_count += 1
            available.remove(best_idx)

    max_possible = min(len(source), len(target))
    if not partial and match_count < max_possible:
        logger.debug(
            f"Array match rejected: {match_count}/{max_possible} items covered"
        )
        return 0.0

    match_quality = total_similarity / match_count if match_count else 0.0
    coverage = match_count / max_possible
    return QUALITY_WEIGHT * match_quality + COVERAGE_WEIGHT * coverage
