"""
Tests for the data model.
"""

import pytest

from scorer.models import (
    Candidate,
    CandidateEvaluation,
    CriteriaSet,
    Criterion,
    Flag,
    ListValue,
    Number,
    ScoreResult,
    Text,
    to_attribute_set,
    to_attribute_value,
)


class TestAttributeValues:
    """Test conversion of plain values into attribute variants."""

    def test_numbers(self):
        assert to_attribute_value(5) == Number(5.0)
        assert to_attribute_value(2.5) == Number(2.5)

    def test_bool_is_flag_not_number(self):
        assert to_attribute_value(True) == Flag(True)

    def test_text(self):
        assert to_attribute_value("python") == Text("python")

    def test_nested_list(self):
        value = to_attribute_value(["python", 3])
        assert value == ListValue((Text("python"), Number(3.0)))
        assert value.raw == ["python", 3.0]
        assert len(value) == 2

    def test_none_is_absent(self):
        assert to_attribute_value(None) is None

    def test_variant_passthrough(self):
        value = Text("x")
        assert to_attribute_value(value) is value

    def test_unsupported(self):
        with pytest.raises(TypeError):
            to_attribute_value({"nested": "dict"})
        with pytest.raises(TypeError):
            to_attribute_value(["ok", None])

    def test_attribute_set_drops_nulls(self):
        attributes = to_attribute_set({"a": 1, "b": None})
        assert attributes == {"a": Number(1.0)}


class TestCriteriaSet:
    """Test weight normalization on every mutation."""

    def test_normalized_on_construction(self):
        criteria = CriteriaSet([Criterion("a", 2, 1), Criterion("b", 6, 1)])
        assert criteria.weights == pytest.approx({"a": 0.25, "b": 0.75})

    def test_set_weight_renormalizes(self):
        criteria = CriteriaSet([
            Criterion("yearsOfExperience", 0.6, 5),
            Criterion("skills", 0.4, ["python", "sql"]),
        ])
        criteria.set_weight("skills", 0.6)
        assert criteria.weights == pytest.approx({"yearsOfExperience": 0.5, "skills": 0.5})
        assert sum(criteria.weights.values()) == pytest.approx(1.0)

    def test_add_renormalizes(self):
        criteria = CriteriaSet([Criterion("a", 1.0)])
        criteria.add(Criterion("b", 1.0))
        assert criteria.weights == pytest.approx({"a": 0.5, "b": 0.5})

    def test_replace_weights(self):
        criteria = CriteriaSet([Criterion("a", 0.5, 1), Criterion("b", 0.5, 2)])
        criteria.replace_weights({"a": 3.0, "c": 1.0})
        assert criteria.weights == pytest.approx({"a": 0.75, "b": 0.0, "c": 0.25})
        assert criteria.get("a").target_value == Number(1.0)
        assert "c" in criteria

    def test_shared_criterion_not_aliased(self):
        shared = Criterion("a", 2.0, 5)
        first = CriteriaSet([shared, Criterion("b", 2.0, 5)])
        CriteriaSet([shared])
        assert first.weights == pytest.approx({"a": 0.5, "b": 0.5})
        assert sum(first.weights.values()) == pytest.approx(1.0)
        assert shared.weight == 2.0

    def test_added_criterion_not_aliased(self):
        extra = Criterion("b", 3.0)
        first = CriteriaSet([Criterion("a", 1.0)])
        first.add(extra)
        second = CriteriaSet([Criterion("c", 1.0)])
        second.add(extra)
        assert first.weights == pytest.approx({"a": 0.25, "b": 0.75})
        assert second.weights == pytest.approx({"c": 0.25, "b": 0.75})
        assert extra.weight == 3.0

    def test_zero_total_kept(self):
        criteria = CriteriaSet([Criterion("a", 0.0), Criterion("b", 0.0)])
        assert criteria.weights == {"a": 0.0, "b": 0.0}

    def test_targets_skip_missing(self):
        criteria = CriteriaSet([Criterion("a", 1, 5), Criterion("b", 1)])
        assert criteria.targets == {"a": Number(5.0)}

    def test_rejects_negative_and_duplicates(self):
        with pytest.raises(ValueError):
            Criterion("a", -1)
        with pytest.raises(ValueError):
            CriteriaSet([Criterion("a", 1), Criterion("a", 1)])
        criteria = CriteriaSet([Criterion("a", 1)])
        with pytest.raises(ValueError):
            criteria.set_weight("a", -0.1)
        with pytest.raises(KeyError):
            criteria.set_weight("missing", 0.1)

    def test_from_list(self):
        criteria = CriteriaSet.from_list([
            {"name": "skills", "weight": 1, "target_value": ["python"]},
            {"name": "remote", "weight": 1},
        ])
        assert len(criteria) == 2
        assert [c.name for c in criteria] == ["skills", "remote"]
        assert criteria.get("skills").target_value == ListValue((Text("python"),))


class TestCandidate:
    """Test candidate construction from plain data."""

    def test_from_dict(self):
        candidate = Candidate.from_dict({
            "id": 7,
            "attributes": {"skills": ["python"], "remote": True},
            "confidences": {"skills": "0.8"},
            "stages": {"phone_screen": {"completed": True, "metrics": {"communication_skill": 0.9}}},
        })
        assert candidate.id == 7
        assert candidate.attributes["remote"] == Flag(True)
        assert candidate.confidences == {"skills": 0.8}
        assert candidate.stages["phone_screen"].completed
        assert candidate.stages["phone_screen"].metrics == {"communication_skill": 0.9}

    def test_defaults(self):
        candidate = Candidate.from_dict({"id": "x"})
        assert candidate.attributes == {}
        assert candidate.stages == {}

    def test_missing_id(self):
        with pytest.raises(ValueError, match="missing an id"):
            Candidate.from_dict({"attributes": {"skills": ["python"]}})


class TestCandidateEvaluation:
    """Test derived output fields."""

    def test_derived_fields(self):
        evaluation = CandidateEvaluation(
            candidate_id="a",
            score=0.8,
            confidence=0.9,
            membership_kind="triangular",
            attribute_scores={"skills": ScoreResult(0.7, 0.9)},
        )
        assert evaluation.derived_fields() == {
            "skills_fuzzyScore": 0.7,
            "skills_membershipFunction": "triangular",
            "skills_confidence": 0.9,
            "initialScore_confidence": 0.9,
        }
        assert evaluation.result == ScoreResult(0.8, 0.9)

    def test_to_dict(self):
        evaluation = CandidateEvaluation("a", 0.5, 1.0, "simple", missing_attributes=["skills"])
        data = evaluation.to_dict()
        assert data["initial_score"] == 0.5
        assert data["confidence_score"] == 1.0
        assert data["missing_attributes"] == ["skills"]
