"""
Fuzzy scoring of a single attribute against its ideal value.
"""

import logging
from typing import Optional

from config import ScoringConfig
from .membership import membership_around
from .models import AttributeValue, Flag, ListValue, Number, ScoreResult, Text, to_attribute_value
from .similarity import array_similarity, string_similarity

logger = logging.getLogger(__name__)


class FuzzyScorer:
    """Scores attribute values against targets by AttributeValue variant."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize fuzzy scorer.

        Args:
            config: Scoring configuration (fuzzy factor, membership kind)
        """
        self.config = config or ScoringConfig()

    def score(
        self,
        value,
        target,
        fuzzy_factor: Optional[float] = None,
        kind: Optional[str] = None
    ) -> float:
        """
        Graded match between a value and its ideal target.

        Numbers use the configured membership function, text uses string
        similarity, lists use array similarity and flags must match
        exactly. Any other combination falls back to exact equality.

        Args:
            value: Candidate value (AttributeValue or plain Python value)
            target: Ideal value (AttributeValue or plain Python value)
            fuzzy_factor: Override for the configured fuzzy factor
            kind: Override for the configured membership kind

        Returns:
            Score between 0 and 1

        Raises:
            InvalidShapeParameters: If the numeric membership shape is degenerate
        """
        value = to_attribute_value(value)
        target = to_attribute_value(target)
        if value is None:
            return 0.0

        if fuzzy_factor is None:
            fuzzy_factor = self.config.fuzzy_factor
        if kind is None:
            kind = self.config.membership_kind

        if isinstance(value, Number) and isinstance(target, Number):
            return membership_around(kind, value.value, target.value, fuzzy_factor)
        elif isinstance(value, Text) and isinstance(target, Text):
            return string_similarity(value.value, target.value)
        elif isinstance(value, ListValue) and isinstance(target, ListValue):
            return array_similarity(value.raw, target.raw)
        elif isinstance(value, Flag) and isinstance(target, Flag):
            return 1.0 if value.value == target.value else 0.0

        # Mismatched variants: exact equality, never an error
        return 1.0 if value == target else 0.0

    def score_attribute(
        self,
        name: str,
        value: Optional[AttributeValue],
        target: Optional[AttributeValue],
        confidence: float = 1.0
    ) -> ScoreResult:
        """
        Score one named attribute.

        Args:
            name: Attribute name (used for logging)
            value: Candidate value
            target: Ideal value
            confidence: Trust in the candidate value

        Returns:
            ScoreResult with the fuzzy score and the given confidence
        """
        score = self.score(value, target)
        logger.debug(
            f"Fuzzy score for {name}: {score:.4f} "
            f"(kind={self.config.membership_kind}, factor={self.config.fuzzy_factor})"
        )
        return ScoreResult(score=score, confidence=confidence)
