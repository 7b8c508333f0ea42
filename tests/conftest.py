"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import List

from config import Config, ScoringConfig
from scorer import Candidate, CriteriaSet, Criterion, ScoringEngine


@pytest.fixture
def job_criteria() -> CriteriaSet:
    """Criteria for a backend engineering role."""
    return CriteriaSet([
        Criterion("yearsOfExperience", 0.4, 5),
        Criterion("skills", 0.4, ["python", "sql", "docker"]),
        Criterion("currentRole", 0.2, "backend engineer"),
    ])


@pytest.fixture
def candidates() -> List[Candidate]:
    """Three applicants with varying fit."""
    return [
        Candidate.from_dict({
            "id": "alice",
            "attributes": {
                "yearsOfExperience": 5,
                "skills": ["Python", "SQL", "Docker"],
                "currentRole": "Backend Engineer",
            },
        }),
        Candidate.from_dict({
            "id": "bob",
            "attributes": {
                "yearsOfExperience": 2,
                "skills": ["java"],
                "currentRole": "frontend developer",
            },
        }),
        Candidate.from_dict({
            "id": "carol",
            "attributes": {
                "yearsOfExperience": 6,
                "skills": ["python", "sql"],
            },
        }),
    ]


@pytest.fixture
def engine() -> ScoringEngine:
    """Engine with default configuration."""
    return ScoringEngine(Config())


@pytest.fixture
def triangular_config() -> ScoringConfig:
    return ScoringConfig(membership_kind="triangular", fuzzy_factor=0.3)
