"""
Score Aggregator

Combines per-criterion (or per-stage) scores into one score with either a
confidence-weighted weighted sum (WSM) or ordered weighted averaging (OWA).
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from config import ScoringConfig
from .models import ScoreResult

logger = logging.getLogger(__name__)

# OWA confidence when the alpha-cut leaves nothing to aggregate
EMPTY_OWA_CONFIDENCE = 0.5


def alpha_cut(
    scores: Mapping[str, float],
    confidences: Optional[Mapping[str, float]],
    threshold: float
) -> Dict[str, float]:
    """
    Drop criteria whose confidence is below threshold.

    Args:
        scores: Criterion -> score
        confidences: Criterion -> confidence (missing means 1.0)
        threshold: Minimum confidence to participate

    Returns:
        Scores of the remaining criteria
    """
    confidences = confidences or {}
    return {
        name: score for name, score in scores.items()
        if confidences.get(name, 1.0) >= threshold
    }


def weighted_sum(
    scores: Mapping[str, float],
    weights: Mapping[str, float],
    confidences: Optional[Mapping[str, float]] = None
) -> ScoreResult:
    """
    Confidence-weighted weighted sum model.

    Each declared criterion present in scores contributes with weight
    w * confidence. The output confidence averages the matched confidences
    over all declared criteria, so missing scores lower it.

    Args:
        scores: Criterion -> score
        weights: Criterion -> declared weight
        confidences: Criterion -> confidence (missing means 1.0)

    Returns:
        ScoreResult; score is 0 when the effective weight is 0
    """
    confidences = confidences or {}
    weighted = 0.0
    total_weight = 0.0
    total_confidence = 0.0

    for name, weight in weights.items():
        if name not in scores:
            continue
        confidence = confidences.get(name, 1.0)
        adjusted = weight * confidence
        weighted += scores[name] * adjusted
        total_weight += adjusted
        total_confidence += confidence

    if total_weight > 0:
        score = weighted / total_weight
    else:
        if weights:
            logger.warning("Total effective weight is 0, returning score 0")
        score = 0.0

    confidence = total_confidence / len(weights) if weights else 1.0
    return ScoreResult(score=score, confidence=confidence)


def owa_profile_weights(
    profile: str,
    n: int,
    custom: Optional[Sequence[float]] = None
) -> List[float]:
    """
    Positional OWA weights for a strategy profile.

    Args:
        profile: 'optimistic', 'balanced', 'pessimistic' or 'custom'
        n: Number of positions
        custom: Explicit vector for the custom profile

    Returns:
        Weights normalized to sum to 1 (a zero vector stays zero)
    """
    if profile == "custom":
        if custom is None:
            raise ValueError("Custom OWA profile requires explicit weights")
        weights = [float(w) for w in custom]
    elif n <= 0:
        return []
    elif profile == "optimistic":
        # Front-loaded: most credit to the highest scores
        weights = [float(n - i) for i in range(n)]
    elif profile == "pessimistic":
        weights = [float(i + 1) for i in range(n)]
    elif profile == "balanced":
        weights = [1.0] * n
    else:
        raise ValueError(f"Unknown OWA strategy profile: {profile}")

    total = sum(weights)
    if total == 0:
        return weights
    return [w / total for w in weights]


def ordered_weighted_average(
    scores: Mapping[str, float],
    weights: Mapping[str, float],
    owa_weights: Sequence[float]
) -> float:
    """
    Ordered weighted averaging.

    Scores are sorted descending and the i-th best score receives the
    positional weight owa_weights[i] on top of its criterion weight.

    Args:
        scores: Criterion -> score
        weights: Criterion -> declared weight (missing means 0)
        owa_weights: Positional weights, highest score first

    Returns:
        Aggregated score; 0 when the applied weight is 0
    """
    ordered = sorted(scores.items(), key=lambda item: item[1], reverse=True)

    weighted = 0.0
    total_applied = 0.0
    for position, (name, score) in enumerate(ordered):
        criterion_weight = weights.get(name, 0.0)
        owa_weight = owa_weights[position] if position < len(owa_weights) else 0.0
        weighted += score * criterion_weight * owa_weight
        total_applied += criterion_weight * owa_weight

    return weighted / total_applied if total_applied > 0 else 0.0


class Aggregator:
    """
    Aggregates criterion scores according to a ScoringConfig.

    Example:
        aggregator = Aggregator(ScoringConfig(aggregation_method="owa",
                                              strategy_profile="pessimistic"))
        result = aggregator.aggregate(
            scores={"phone_screen": 0.8, "coding_interview": 0.6},
            weights={"phone_screen": 0.5, "coding_interview": 0.5},
        )
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def aggregate(
        self,
        scores: Mapping[str, float],
        weights: Mapping[str, float],
        confidences: Optional[Mapping[str, float]] = None
    ) -> ScoreResult:
        """
        Apply the alpha-cut, then WSM or OWA.

        Args:
            scores: Criterion -> score
            weights: Criterion -> declared weight
            confidences: Criterion -> confidence (missing means 1.0)

        Returns:
            Aggregate ScoreResult
        """
        confidences = confidences or {}
        kept = alpha_cut(scores, confidences, self.config.alpha_cut_threshold)
        if len(kept) < len(scores):
            logger.debug(
                f"Alpha-cut at {self.config.alpha_cut_threshold} dropped "
                f"{sorted(set(scores) - set(kept))}"
            )

        if self.config.aggregation_method == "owa":
            owa_weights = owa_profile_weights(
                self.config.strategy_profile,
                len(kept),
                self.config.owa_weights,
            )
            score = ordered_weighted_average(kept, weights, owa_weights)
            if kept:
                confidence = sum(confidences.get(name, 1.0) for name in kept) / len(kept)
            else:
                confidence = EMPTY_OWA_CONFIDENCE
            return ScoreResult(score=score, confidence=confidence)

        return weighted_sum(kept, weights, confidences)
