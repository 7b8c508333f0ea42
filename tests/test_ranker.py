"""
Tests for candidate ranking.
"""

import pytest

from scorer.models import CandidateEvaluation
from scorer.ranker import Ranker


class TestRanker:
    """Test ordering, tie-breaks and percentiles."""

    def test_confidence_breaks_near_tie(self):
        ranked = Ranker().rank([
            {"id": 1, "score": 0.85, "confidence": 0.9},
            {"id": 2, "score": 0.83, "confidence": 0.95},
        ])
        assert [e.identity for e in ranked] == [2, 1]
        assert ranked[0].rank == 1
        assert ranked[0].percentile == 100.0
        assert ranked[1].rank == 2
        assert ranked[1].percentile == 0.0

    def test_clear_gap_uses_score(self):
        ranked = Ranker().rank([
            {"id": "a", "score": 0.60, "confidence": 1.0},
            {"id": "b", "score": 0.90, "confidence": 0.2},
        ])
        assert [e.identity for e in ranked] == ["b", "a"]

    def test_band_is_anchored_to_leader(self):
        ranked = Ranker().rank([
            ("a", 0.90, 0.5),
            ("b", 0.87, 0.9),
            ("c", 0.84, 1.0),
        ])
        # c is within 0.05 of b but not of the band leader a
        assert [e.identity for e in ranked] == ["b", "a", "c"]

    def test_gap_of_exactly_margin_is_not_a_tie(self):
        # 0.85 - 0.80 is 0.04999999999999993 in floating point
        ranked = Ranker().rank([
            {"id": "high", "score": 0.85, "confidence": 0.5},
            {"id": "low", "score": 0.80, "confidence": 1.0},
        ])
        assert [e.identity for e in ranked] == ["high", "low"]

    def test_gap_just_inside_margin_is_a_tie(self):
        ranked = Ranker().rank([
            {"id": "high", "score": 0.85, "confidence": 0.5},
            {"id": "low", "score": 0.8000001, "confidence": 1.0},
        ])
        assert [e.identity for e in ranked] == ["low", "high"]

    def test_percentiles_spread_evenly(self):
        ranked = Ranker().rank([(i, 1 - i * 0.1, 1.0) for i in range(5)])
        assert [e.percentile for e in ranked] == pytest.approx([100, 75, 50, 25, 0])
        assert [e.rank for e in ranked] == [1, 2, 3, 4, 5]

    def test_single_entry(self):
        ranked = Ranker().rank([("only", 0.3, 0.4)])
        assert ranked[0].rank == 1
        assert ranked[0].percentile == 100.0

    def test_empty(self):
        assert Ranker().rank([]) == []

    def test_exact_ties_keep_input_order(self):
        ranked = Ranker().rank([("x", 0.5, 1.0), ("y", 0.5, 1.0), ("z", 0.5, 1.0)])
        assert [e.identity for e in ranked] == ["x", "y", "z"]

    def test_deterministic(self):
        items = [("a", 0.71, 0.8), ("b", 0.70, 0.9), ("c", 0.74, 0.7), ("d", 0.2, 1.0)]
        ranker = Ranker()
        assert ranker.rank(items) == ranker.rank(list(items))

    def test_missing_score_and_confidence_defaults(self):
        ranked = Ranker().rank([{"id": "a"}, {"id": "b", "score": 0.5, "confidence": None}])
        assert ranked[0].identity == "b"
        assert ranked[0].confidence == 1.0
        assert ranked[1].score == 0.0

    def test_accepts_evaluations(self):
        evaluations = [
            CandidateEvaluation("a", 0.4, 1.0, "simple"),
            CandidateEvaluation("b", 0.8, 1.0, "simple"),
        ]
        assert [e.identity for e in Ranker().rank(evaluations)] == ["b", "a"]

    def test_zero_margin_is_pure_score_order(self):
        ranked = Ranker(tie_margin=0).rank([(1, 0.85, 0.9), (2, 0.83, 0.95)])
        assert [e.identity for e in ranked] == [1, 2]

    def test_negative_margin_rejected(self):
        with pytest.raises(ValueError):
            Ranker(tie_margin=-0.1)

    def test_to_dict(self):
        entry = Ranker().rank([("a", 0.5, 1.0)])[0]
        assert entry.to_dict() == {
            "id": "a",
            "score": 0.5,
            "confidence": 1.0,
            "rank": 1,
            "percentile": 100.0,
        }
