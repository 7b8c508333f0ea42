"""
Exception types raised by the scoring engine.

Only conditions the caller must act on are raised. Missing attributes,
type mismatches, degenerate weight sets and empty proposal sets are
absorbed into score/confidence values instead.
"""

from typing import Optional


class ScoringError(Exception):
    """Base class for all scoring engine errors."""


class InvalidShapeParameters(ScoringError, ValueError):
    """Membership function parameters violate their ordering invariants."""


class InvalidWeightsError(ScoringError, ValueError):
    """A weight map cannot be finalized (total weight is not positive)."""


class StageNotCompletedError(ScoringError):
    """Stage scoring was requested for an interview stage that is still open."""

    def __init__(self, candidate_id, stage: str):
        self.candidate_id = candidate_id
        self.stage = stage
        super().__init__(f"{stage} is not completed yet for candidate {candidate_id}")


class CriterionScoringError(ScoringError):
    """
    A single criterion could not be scored for a candidate.

    Carries enough context for the caller to log the failure and skip
    the candidate without aborting the rest of a batch.

    Attributes:
        candidate_id: Identity of the candidate being scored
        criterion: Criterion name
        attribute: Attribute name read from the candidate
        cause: Underlying exception
    """

    def __init__(
        self,
        candidate_id,
        criterion: str,
        attribute: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        self.candidate_id = candidate_id
        self.criterion = criterion
        self.attribute = attribute or criterion
        self.cause = cause
        message = (
            f"Cannot score criterion '{criterion}' (attribute '{self.attribute}') "
            f"for candidate {candidate_id}"
        )
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
