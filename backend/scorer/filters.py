"""
Candidate filters applied around scoring.

HardFilter removes candidates that miss hard requirements before scoring.
Shortlister keeps the scored candidates worth interviewing.
"""

import logging
from typing import Any, Hashable, Iterable, List, Mapping, Optional

from config import ShortlistConfig
from .models import (
    AttributeValue,
    Candidate,
    CandidateEvaluation,
    ListValue,
    Number,
    RankedEntry,
    Text,
    to_attribute_value,
)
from .ranker import Ranker
from .similarity import array_similarity, string_similarity

logger = logging.getLogger(__name__)


def _meets_threshold(value: AttributeValue, threshold: AttributeValue, tolerance: float) -> bool:
    """Numeric thresholds are lowered by tolerance; others compare naturally."""
    if isinstance(value, Number) and isinstance(threshold, Number):
        return value.value >= threshold.value * (1 - tolerance)
    if type(value) is not type(threshold):
        return False
    try:
        return value.raw >= threshold.raw
    except TypeError:
        # Lists with incomparable items
        return False


class HardFilter:
    """
    Excludes candidates failing hard thresholds.

    The tolerance only ever lowers numeric thresholds: a candidate with
    4.6 years passes a 5-year requirement at tolerance 0.1, one with 4.4
    does not.
    """

    def __init__(self, tolerance: float = 0.1):
        if not 0 <= tolerance <= 1:
            raise ValueError("Tolerance must be between 0 and 1")
        self.tolerance = tolerance

    def passes(self, candidate: Candidate, thresholds: Mapping[str, Any]) -> bool:
        """
        Check one candidate against all thresholds.

        Args:
            candidate: Candidate to check
            thresholds: Attribute name -> minimum value

        Returns:
            True if every threshold is met
        """
        for name, raw_threshold in thresholds.items():
            value = candidate.attributes.get(name)
            if value is None:
                logger.debug(f"Candidate {candidate.id} excluded: missing {name}")
                return False
            threshold = to_attribute_value(raw_threshold)
            if threshold is None:
                continue
            if not _meets_threshold(value, threshold, self.tolerance):
                logger.debug(
                    f"Candidate {candidate.id} excluded: {name}={value.raw!r} "
                    f"below {threshold.raw!r}"
                )
                return False
        return True

    def filter(self, candidates: Iterable[Candidate], thresholds: Mapping[str, Any]) -> List[Candidate]:
        """Return the candidates that pass all thresholds, order preserved."""
        return [c for c in candidates if self.passes(c, thresholds)]


class Shortlister:
    """
    Selects candidates for interviews from their initial evaluations.

    Criteria thresholds are checked with fuzzy tolerance (numbers) or
    similarity floors (text and lists); attributes whose confidence is below
    the alpha-cut fail. The score threshold is lowered by the threshold
    fuzzy factor, survivors are ranked and optionally truncated.
    """

    def __init__(self, config: Optional[ShortlistConfig] = None, ranker: Optional[Ranker] = None):
        self.config = config or ShortlistConfig()
        self.ranker = ranker or Ranker()

    @property
    def score_threshold(self) -> float:
        return self.config.threshold * (1 - self.config.threshold_fuzzy_factor)

    def passes_criteria(self, candidate: Candidate) -> bool:
        """Check the per-attribute shortlist thresholds for one candidate."""
        for name, raw_threshold in self.config.criteria_thresholds.items():
            value = candidate.attributes.get(name)
            if value is None:
                return False
            if candidate.confidences.get(name, 1.0) < self.config.alpha_cut_threshold:
                return False

            threshold = to_attribute_value(raw_threshold)
            if isinstance(value, Number) and isinstance(threshold, Number):
                lowered = threshold.value * (1 - self.config.threshold_fuzzy_factor)
                if value.value < lowered:
                    return False
            elif isinstance(value, Text) and isinstance(threshold, Text):
                if string_similarity(value.value, threshold.value) < self.config.similarity_floor:
                    return False
            elif isinstance(value, ListValue) and isinstance(threshold, ListValue):
                if array_similarity(value.raw, threshold.raw) < self.config.similarity_floor:
                    return False
            elif value != threshold:
                return False
        return True

    def shortlist(
        self,
        evaluations: Iterable[CandidateEvaluation],
        candidates: Mapping[Hashable, Candidate]
    ) -> List[RankedEntry]:
        """
        Build the shortlist.

        Args:
            evaluations: Initial evaluations
            candidates: Candidate id -> Candidate, for attribute thresholds

        Returns:
            Ranked shortlisted entries
        """
        evaluations = list(evaluations)
        selected = []
        for evaluation in evaluations:
            candidate = candidates.get(evaluation.candidate_id)
            if candidate is None:
                logger.warning(f"No candidate data for evaluation {evaluation.candidate_id}")
                continue
            if not self.passes_criteria(candidate):
                continue
            if evaluation.score < self.score_threshold:
                continue
            selected.append(evaluation)

        ranked = self.ranker.rank(selected)
        if self.config.max_candidates is not None:
            ranked = ranked[:self.config.max_candidates]

        logger.info(
            f"Shortlisted {len(ranked)} of {len(evaluations)} candidates "
            f"(score threshold {self.score_threshold:.3f})"
        )
        return ranked
