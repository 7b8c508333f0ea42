"""
Weight consensus across several evaluators.

Approximates a Delphi round: each evaluator proposes weights, extreme
proposals are discarded with a fuzzy median-absolute-deviation test, the
rest are averaged and the result is normalized to sum to 1.
"""

import logging
import statistics
from typing import Dict, List, Mapping, Optional, Sequence

from .errors import InvalidWeightsError

logger = logging.getLogger(__name__)

# Scales MAD to a consistent estimator of the standard deviation
MAD_SCALE = 1.4826
NORMAL_MEMBERSHIP_CUTOFF = 0.5


def normalize_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """
    Scale weights so they sum to 1.

    A map whose total is 0 is returned unchanged.
    """
    total = sum(weights.values())
    if total == 0:
        return dict(weights)
    return {name: weight / total for name, weight in weights.items()}


def finalize_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """
    Normalize a job's weights for scoring.

    Raises:
        InvalidWeightsError: If the weights do not sum to a positive total
    """
    if any(w < 0 for w in weights.values()):
        raise InvalidWeightsError("Weights must not be negative")
    if sum(weights.values()) <= 0:
        raise InvalidWeightsError("Sum of weights must be greater than 0")
    return normalize_weights(weights)


def remove_outliers(values: Sequence[float], outlier_tolerance: float = 0.2) -> List[float]:
    """
    Drop values far from the median.

    A value is kept when its membership in the "normal" set,
    max(0, 1 - deviation / (tolerance * MAD * 1.4826)), exceeds 0.5.
    When MAD is 0 only values equal to the median are kept. Two or fewer
    values are returned untouched, and if nothing would survive the
    original values are kept.

    Args:
        values: Proposed weights for one criterion
        outlier_tolerance: Width of the "normal" set in MAD units

    Returns:
        Surviving values in their original order
    """
    if len(values) <= 2:
        return list(values)

    median = statistics.median(values)
    mad = statistics.median(abs(v - median) for v in values)

    if mad == 0:
        kept = [v for v in values if v == median]
    else:
        scale = outlier_tolerance * mad * MAD_SCALE
        kept = [
            v for v in values
            if max(0.0, 1 - abs(v - median) / scale) > NORMAL_MEMBERSHIP_CUTOFF
        ]

    if not kept:
        logger.debug(f"Outlier filter rejected all of {list(values)}, keeping them")
        return list(values)
    return kept


class WeightConsensus:
    """
    Reduces several weight proposals to one consensus weight map.

    Example:
        consensus = WeightConsensus()
        weights = consensus.consensus([
            {"skills": 0.5, "experience": 0.5},
            {"skills": 0.6, "experience": 0.4},
            {"skills": 0.4, "experience": 0.6},
        ])
    """

    def __init__(self, outlier_tolerance: float = 0.2):
        if outlier_tolerance <= 0:
            raise ValueError("Outlier tolerance must be positive")
        self.outlier_tolerance = outlier_tolerance

    def consensus(self, proposals: Sequence[Mapping[str, Optional[float]]]) -> Dict[str, float]:
        """
        Compute consensus weights.

        Args:
            proposals: One criterion -> weight mapping per evaluator

        Returns:
            Normalized consensus weights; empty when there are no proposals
        """
        if not proposals:
            logger.warning("No weight proposals given, weights are undefined")
            return {}

        # Union of criterion names, first-seen order
        criteria: List[str] = []
        for proposal in proposals:
            for name in proposal:
                if name not in criteria:
                    criteria.append(name)

        consensus: Dict[str, float] = {}
        for name in criteria:
            values = [
                float(p[name]) for p in proposals
                if p.get(name) is not None
            ]
            if not values:
                continue
            kept = remove_outliers(values, self.outlier_tolerance)
            if len(kept) < len(values):
                logger.info(
                    f"Criterion '{name}': discarded {len(values) - len(kept)} "
                    f"outlier proposal(s) of {len(values)}"
                )
            consensus[name] = sum(kept) / len(kept)

        return normalize_weights(consensus)
