"""
Tests for string and array similarity.
"""

import pytest

from scorer.similarity import array_similarity, item_similarity, string_similarity


class TestStringSimilarity:
    """Test normalized edit-distance similarity."""

    def test_identical(self):
        assert string_similarity("engineer", "engineer") == 1.0

    def test_both_empty(self):
        assert string_similarity("", "") == 1.0

    def test_one_empty(self):
        assert string_similarity("a", "") == 0.0
        assert string_similarity("", "a") == 0.0

    def test_case_and_whitespace_ignored(self):
        assert string_similarity("  Backend Engineer ", "backend engineer") == 1.0

    def test_case_sensitive(self):
        assert string_similarity("Python", "python", case_sensitive=True) == pytest.approx(5 / 6)

    def test_edit_distance(self):
        # kitten -> sitting needs 3 edits over 7 characters
        assert string_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_completely_different(self):
        assert string_similarity("abc", "xyz") == 0.0

    def test_whitespace_only_counts_as_empty(self):
        assert string_similarity("   ", "") == 1.0


class TestItemSimilarity:
    """Test pairwise item similarity used by array matching."""

    def test_numbers(self):
        assert item_similarity(8, 10) == pytest.approx(0.8)
        assert item_similarity(0, 0) == 1.0
        assert item_similarity(-5, 5) == 0.0

    def test_bools_are_not_numbers(self):
        assert item_similarity(True, 1) == 1.0  # exact equality fallback
        assert item_similarity(True, 2) == 0.0

    def test_mixed_types(self):
        assert item_similarity("1", 1) == 0.0


class TestArraySimilarity:
    """Test greedy array similarity."""

    def test_identical_arrays(self):
        skills = ["python", "sql", "docker"]
        assert array_similarity(skills, list(skills)) == 1.0

    def test_identical_with_duplicates(self):
        items = ["a", "a", "b"]
        assert array_similarity(items, list(items)) == 1.0

    def test_both_empty(self):
        assert array_similarity([], []) == 1.0

    def test_one_empty(self):
        assert array_similarity(["python"], []) == 0.0
        assert array_similarity([], ["python"]) == 0.0

    def test_no_match(self):
        assert array_similarity(["java"], ["python"]) == 0.0

    def test_subset_coverage(self):
        # Both target items found in the longer source list
        score = array_similarity(["python", "sql", "go", "rust"], ["python", "sql"])
        assert score == pytest.approx(1.0)

    def test_partial_coverage(self):
        # One of two matched, quality 1 -> 0.4 * 1 + 0.6 * 0.5
        score = array_similarity(["python", "java"], ["python", "sql"])
        assert score == pytest.approx(0.7)

    def test_fuzzy_item_match(self):
        # "postgres" vs "postgresql": 1 - 2/10 = 0.8, above threshold
        score = array_similarity(["postgres"], ["postgresql"])
        assert score == pytest.approx(0.4 * 0.8 + 0.6)

    def test_threshold_excludes_weak_pairs(self):
        assert array_similarity(["postgres"], ["postgresql"], threshold=0.9) == 0.0

    def test_matched_item_not_reused(self):
        # A single "python" in the shorter list can cover only one row
        score = array_similarity(["python", "python"], ["python"])
        assert score == pytest.approx(1.0)
        score = array_similarity(["python"], ["python", "python"])
        assert score == pytest.approx(1.0)

    def test_numeric_items(self):
        score = array_similarity([10, 20], [10, 20])
        assert score == 1.0

    def test_symmetric_for_different_lengths(self):
        a = ["python", "sql", "kubernetes"]
        b = ["sql", "pyhton"]
        assert array_similarity(a, b) == pytest.approx(array_similarity(b, a))

    def test_non_partial_requires_full_coverage(self):
        assert array_similarity(["python", "java"], ["python", "sql"], partial=False) == 0.0
        assert array_similarity(["python", "sql"], ["sql", "python"], partial=False) == 1.0

    def test_case_sensitive_option(self):
        assert array_similarity(["Python"], ["python"]) == 1.0
        score = array_similarity(["Python"], ["python"], case_sensitive=True)
        assert score == pytest.approx(0.4 * (5 / 6) + 0.6)
