"""
Candidate ranking with a confidence tie-break.
"""

import logging
from typing import Any, Hashable, Iterable, List, Mapping, Tuple, Union

from .models import CandidateEvaluation, RankedEntry

logger = logging.getLogger(__name__)

RankInput = Union[Mapping[str, Any], CandidateEvaluation, Tuple[Hashable, float, float]]

# Score gaps within this of tie_margin count as equal to it
MARGIN_EPSILON = 1e-9


def _unpack(item: RankInput) -> Tuple[Hashable, float, float]:
    if isinstance(item, CandidateEvaluation):
        return item.candidate_id, item.score, item.confidence
    if isinstance(item, Mapping):
        score = item.get('score')
        confidence = item.get('confidence')
        return (
            item['id'],
            float(score) if score is not None else 0.0,
            float(confidence) if confidence is not None else 1.0,
        )
    identity, score, confidence = item
    return identity, float(score), float(confidence)


class Ranker:
    """
    Orders candidates by score, using confidence to break near-ties.

    Entries are sorted by score. Starting from the best remaining score, all
    entries within tie_margin of that band leader form a band; inside a
    band the more confident entry comes first. Bands never chain, so the
    order is a deterministic total order.
    """

    def __init__(self, tie_margin: float = 0.05):
        """
        Initialize ranker.

        Args:
            tie_margin: Score difference below which confidence decides
        """
        if tie_margin < 0:
            raise ValueError("Tie margin must not be negative")
        self.tie_margin = tie_margin

    def order(self, items: Iterable[RankInput]) -> List[Tuple[Hashable, float, float]]:
        """Sorted (identity, score, confidence) tuples without rank annotation."""
        indexed = [(index,) + _unpack(item) for index, item in enumerate(items)]
        by_score = sorted(indexed, key=lambda e: (-e[2], e[0]))

        ordered = []
        start = 0
        while start < len(by_score):
            leader_score = by_score[start][2]
            end = start + 1
            while end < len(by_score) and leader_score - by_score[end][2] < self.tie_margin - MARGIN_EPSILON:
                end += 1
            band = by_score[start:end]
            if len(band) > 1:
                logger.debug(
                    f"Tie band of {len(band)} entries below score {leader_score:.4f}"
                )
            band.sort(key=lambda e: (-e[3], -e[2], e[0]))
            ordered.extend(band)
            start = end

        return [(identity, score, confidence) for _, identity, score, confidence in ordered]

    def rank(self, items: Iterable[RankInput]) -> List[RankedEntry]:
        """
        Rank candidates and annotate rank and percentile.

        Percentile is 100 * (1 - index / (n - 1)), so the best entry is 100
        and the worst is 0 whatever n is; a single entry gets 100. Dividing
        by n instead would leave the last entry at 100 / n.

        Args:
            items: CandidateEvaluation objects, {'id', 'score', 'confidence'}
                dicts, or (id, score, confidence) tuples

        Returns:
            RankedEntry list, best first; the top entry has percentile 100
            and the last has percentile 0
        """
        ordered = self.order(items)
        n = len(ordered)
        entries = []
        for index, (identity, score, confidence) in enumerate(ordered):
            percentile = 100.0 if n == 1 else 100 * (1 - index / (n - 1))
            entries.append(RankedEntry(
                identity=identity,
                score=score,
                confidence=confidence,
                rank=index + 1,
                percentile=percentile,
            ))
        return entries
