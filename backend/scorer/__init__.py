"""
Scorer package for candidate ranking.
Provides fuzzy scoring, weight consensus, aggregation and ranking.
"""

from .engine import ScoringEngine
from .aggregator import Aggregator, alpha_cut, ordered_weighted_average, owa_profile_weights, weighted_sum
from .consensus import WeightConsensus, finalize_weights, normalize_weights
from .errors import (
    CriterionScoringError,
    InvalidShapeParameters,
    InvalidWeightsError,
    ScoringError,
    StageNotCompletedError,
)
from .filters import HardFilter, Shortlister
from .fuzzy import FuzzyScorer
from .membership import gaussian, simple, trapezoidal, triangular
from .models import (
    Candidate,
    CandidateEvaluation,
    CriteriaSet,
    Criterion,
    EvaluationReport,
    Flag,
    ListValue,
    Number,
    RankedEntry,
    ScoreResult,
    StageResult,
    Text,
    to_attribute_value,
)
from .ranker import Ranker
from .similarity import array_similarity, string_similarity

__all__ = [
    'ScoringEngine',
    'Aggregator',
    'alpha_cut',
    'ordered_weighted_average',
    'owa_profile_weights',
    'weighted_sum',
    'WeightConsensus',
    'finalize_weights',
    'normalize_weights',
    'CriterionScoringError',
    'InvalidShapeParameters',
    'InvalidWeightsError',
    'ScoringError',
    'StageNotCompletedError',
    'HardFilter',
    'Shortlister',
    'FuzzyScorer',
    'gaussian',
    'simple',
    'trapezoidal',
    'triangular',
    'Candidate',
    'CandidateEvaluation',
    'CriteriaSet',
    'Criterion',
    'EvaluationReport',
    'Flag',
    'ListValue',
    'Number',
    'RankedEntry',
    'ScoreResult',
    'StageResult',
    'Text',
    'to_attribute_value',
    'Ranker',
    'array_similarity',
    'string_similarity',
]
