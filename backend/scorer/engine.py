"""
Scoring engine for candidate ranking.
Scores candidates against job criteria, aggregates interview stages and
ranks the results.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import Config
from .aggregator import Aggregator, weighted_sum
from .consensus import WeightConsensus, normalize_weights
from .errors import CriterionScoringError, InvalidShapeParameters, StageNotCompletedError
from .filters import HardFilter, Shortlister
from .fuzzy import FuzzyScorer
from .models import (
    Candidate,
    CandidateEvaluation,
    CriteriaSet,
    EvaluationReport,
    RankedEntry,
    ScoreResult,
)
from .ranker import Ranker

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Scores, filters and ranks candidates for one job at a time."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize scoring engine.

        Args:
            config: Configuration object; defaults apply when omitted
        """
        self.config = config or Config()
        self.scorer = FuzzyScorer(self.config.scoring)
        self.aggregator = Aggregator(self.config.scoring)
        self.hard_filter = HardFilter(self.config.hard_filter.tolerance)
        self.ranker = Ranker(self.config.ranking.tie_margin)
        self.consensus = WeightConsensus(self.config.consensus.outlier_tolerance)
        self.shortlister = Shortlister(self.config.shortlist, self.ranker)

    def refine_weights(
        self,
        criteria: CriteriaSet,
        proposals: Sequence[Mapping[str, float]]
    ) -> Dict[str, float]:
        """
        Replace the job's weights with the consensus of several proposals.

        Args:
            criteria: Job criteria, updated in place
            proposals: One weight proposal per evaluator

        Returns:
            Consensus weights; empty (and criteria untouched) without proposals
        """
        weights = self.consensus.consensus(proposals)
        if weights:
            criteria.replace_weights(weights)
        return weights

    def score_candidate(
        self,
        candidate: Candidate,
        criteria: CriteriaSet,
        confidence_overrides: Optional[Mapping[str, float]] = None
    ) -> CandidateEvaluation:
        """
        Calculate the initial (pre-interview) score of a candidate.

        Every criterion with a target value is scored against the matching
        attribute; absent attributes score 0. The per-attribute scores are
        aggregated with the job weights.

        Args:
            candidate: Candidate to score
            criteria: Job criteria with weights and target values
            confidence_overrides: Attribute -> confidence, overriding the
                candidate's own confidences

        Returns:
            CandidateEvaluation

        Raises:
            CriterionScoringError: If a criterion has a degenerate membership shape
        """
        overrides = confidence_overrides or {}
        attribute_scores: Dict[str, ScoreResult] = {}
        confidences: Dict[str, float] = {}
        missing: List[str] = []

        for criterion in criteria:
            if criterion.target_value is None:
                continue
            name = criterion.name
            value = candidate.attributes.get(name)
            confidence = overrides.get(name, candidate.confidences.get(name, 1.0))
            if value is None:
                missing.append(name)

            try:
                result = self.scorer.score_attribute(name, value, criterion.target_value, confidence)
            except InvalidShapeParameters as e:
                raise CriterionScoringError(candidate.id, name, name, e) from e

            attribute_scores[name] = result
            confidences[name] = confidence

        if missing:
            logger.debug(f"Candidate {candidate.id} is missing attributes: {missing}")

        aggregate = self.aggregator.aggregate(
            {name: r.score for name, r in attribute_scores.items()},
            criteria.weights,
            confidences,
        )

        return CandidateEvaluation(
            candidate_id=candidate.id,
            score=aggregate.score,
            confidence=aggregate.confidence,
            membership_kind=self.config.scoring.membership_kind,
            attribute_scores=attribute_scores,
            missing_attributes=missing,
        )

    def evaluate(
        self,
        candidates: Iterable[Candidate],
        criteria: CriteriaSet,
        thresholds: Optional[Mapping[str, Any]] = None
    ) -> EvaluationReport:
        """
        Filter, score and rank a batch of candidates.

        Candidates are scored in parallel; a candidate whose scoring fails is
        logged and skipped without affecting the rest. Ranking runs once over
        the collected results in input order.

        Args:
            candidates: Candidates applying for the job
            criteria: Job criteria
            thresholds: Hard thresholds (defaults to the configured ones)

        Returns:
            EvaluationReport with ranking, evaluations, exclusions and failures
        """
        candidates = list(candidates)
        if thresholds is None:
            thresholds = self.config.hard_filter.thresholds

        passed = self.hard_filter.filter(candidates, thresholds) if thresholds else candidates
        passed_ids = {c.id for c in passed}
        report = EvaluationReport(
            excluded=[c.id for c in candidates if c.id not in passed_ids]
        )
        if report.excluded:
            logger.info(f"Hard filter excluded {len(report.excluded)} of {len(candidates)} candidates")

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_map = {
                executor.submit(self.score_candidate, candidate, criteria): candidate
                for candidate in passed
            }

            # Collect in submission order so the ranking input is deterministic
            for future, candidate in future_map.items():
                try:
                    report.evaluations[candidate.id] = future.result()
                except CriterionScoringError as e:
                    report.failures[candidate.id] = str(e)
                    logger.error(f"[{candidate.id}] skipped: {e}")

        report.ranking = self.ranker.rank(report.evaluations.values())
        logger.info(
            f"Ranked {len(report.ranking)} candidates "
            f"(excluded={len(report.excluded)} failed={len(report.failures)})"
        )
        return report

    def shortlist(self, report: EvaluationReport, candidates: Iterable[Candidate]) -> List[RankedEntry]:
        """
        Shortlist evaluated candidates for interviews.

        Args:
            report: Result of evaluate()
            candidates: Candidate data for attribute thresholds

        Returns:
            Ranked shortlist
        """
        by_id = {c.id: c for c in candidates}
        return self.shortlister.shortlist(report.evaluations.values(), by_id)

    def score_stage(self, candidate: Candidate, stage: str) -> ScoreResult:
        """
        Score a completed interview stage.

        Args:
            candidate: Candidate with stage results
            stage: Stage name, e.g. 'phone_screen'

        Returns:
            ScoreResult for the stage

        Raises:
            StageNotCompletedError: If the stage is missing or still open
            ValueError: If the stage is not configured
        """
        definition = self.config.stages.metrics.get(stage)
        if definition is None:
            raise ValueError(
                f"Unknown stage: {stage}. "
                f"Available stages: {', '.join(self.config.stages.metrics.keys())}"
            )

        stage_result = candidate.stages.get(stage)
        if stage_result is None or not stage_result.completed:
            raise StageNotCompletedError(candidate.id, stage)

        metric_score = stage_result.metrics.get(definition.metric, 0.0)
        return weighted_sum(
            {definition.metric: metric_score},
            {definition.metric: 1.0},
            {definition.metric: definition.confidence},
        )

    def _stage_score(self, candidate: Candidate, stage: str) -> Tuple[float, float]:
        """Stored stage score, else computed when completed, else 0."""
        stage_result = candidate.stages.get(stage)
        if stage_result is None:
            return 0.0, 1.0
        if stage_result.score is not None:
            confidence = stage_result.confidence
            return stage_result.score, confidence if confidence is not None else 1.0
        if stage_result.completed and stage in self.config.stages.metrics:
            result = self.score_stage(candidate, stage)
            return result.score, result.confidence
        return 0.0, 1.0

    def score_final(self, candidate: Candidate) -> ScoreResult:
        """
        Aggregate interview stage scores into the final score.

        Args:
            candidate: Candidate with stage results

        Returns:
            Final ScoreResult using the configured aggregation method
        """
        weights = normalize_weights(self.config.stages.weights)
        scores: Dict[str, float] = {}
        confidences: Dict[str, float] = {}
        for stage in weights:
            scores[stage], confidences[stage] = self._stage_score(candidate, stage)

        result = self.aggregator.aggregate(scores, weights, confidences)
        logger.debug(
            f"Final score for {candidate.id}: {result.score:.4f} "
            f"(confidence={result.confidence:.3f}, method={self.config.scoring.aggregation_method})"
        )
        return result

    def rank_final(self, candidates: Iterable[Candidate]) -> List[RankedEntry]:
        """Final-score and rank candidates who went through interviews."""
        results = []
        for candidate in candidates:
            result = self.score_final(candidate)
            results.append((candidate.id, result.score, result.confidence))
        return self.ranker.rank(results)
