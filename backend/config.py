"""
Configuration module for Candidate Ranker.
Loads and validates configuration from YAML file using Pydantic models.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Literal, Optional
import yaml
import os


MembershipKind = Literal["simple", "triangular", "trapezoidal", "gaussian"]
AggregationMethod = Literal["wsm", "owa"]
StrategyProfile = Literal["optimistic", "balanced", "pessimistic", "custom"]


class ScoringConfig(BaseModel):
    """Fuzzy scoring and aggregation settings passed through every call."""
    model_config = ConfigDict(frozen=True)

    fuzzy_factor: float = Field(default=0.2, ge=0, le=1)
    membership_kind: MembershipKind = "simple"
    aggregation_method: AggregationMethod = "wsm"
    strategy_profile: StrategyProfile = "balanced"
    owa_weights: Optional[List[float]] = None
    alpha_cut_threshold: float = Field(default=0.0, ge=0, le=1)

    @field_validator("owa_weights")
    @classmethod
    def _non_negative(cls, value):
        if value is not None and any(w < 0 for w in value):
            raise ValueError("OWA weights must not be negative")
        return value

    @model_validator(mode="after")
    def _custom_needs_weights(self):
        if self.strategy_profile == "custom" and not self.owa_weights:
            raise ValueError("strategy_profile 'custom' requires owa_weights")
        return self


class HardFilterConfig(BaseModel):
    """Hard requirements applied before scoring."""
    thresholds: Dict[str, Any] = Field(default_factory=dict)
    tolerance: float = Field(default=0.1, ge=0, le=1)


class ShortlistConfig(BaseModel):
    """Shortlisting after initial scoring."""
    threshold: float = Field(default=0.0, ge=0, le=1)
    max_candidates: Optional[int] = Field(default=None, ge=1)
    criteria_thresholds: Dict[str, Any] = Field(default_factory=dict)
    alpha_cut_threshold: float = Field(default=0.5, ge=0, le=1)
    threshold_fuzzy_factor: float = Field(default=0.1, ge=0, le=0.5)
    similarity_floor: float = Field(default=0.7, ge=0, le=1)


class StageMetric(BaseModel):
    """The metric an interview stage is scored on."""
    metric: str
    confidence: float = Field(default=1.0, ge=0, le=1)


def _default_stage_metrics() -> Dict[str, StageMetric]:
    return {
        "phone_screen": StageMetric(metric="communication_skill", confidence=0.9),
        "coding_interview": StageMetric(metric="problem_solving", confidence=0.85),
        "onsite_interview": StageMetric(metric="system_design", confidence=0.9),
    }


class StageConfig(BaseModel):
    """Interview stages, their weights and scored metrics."""
    weights: Dict[str, float] = Field(default_factory=lambda: {
        "phone_screen": 0.3,
        "coding_interview": 0.4,
        "onsite_interview": 0.3,
    })
    metrics: Dict[str, StageMetric] = Field(default_factory=_default_stage_metrics)

    @field_validator("weights")
    @classmethod
    def _valid_weights(cls, value):
        if any(w < 0 or w > 1 for w in value.values()):
            raise ValueError("Stage weights must be between 0 and 1")
        if value and sum(value.values()) <= 0:
            raise ValueError("Stage weights must sum to more than 0")
        return value


class ConsensusConfig(BaseModel):
    """Weight consensus settings."""
    outlier_tolerance: float = Field(default=0.2, gt=0)


class RankingConfig(BaseModel):
    """Ranking settings."""
    tie_margin: float = Field(default=0.05, ge=0)


class Config(BaseModel):
    """Main configuration model."""
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    hard_filter: HardFilterConfig = Field(default_factory=HardFilterConfig)
    shortlist: ShortlistConfig = Field(default_factory=ShortlistConfig)
    stages: StageConfig = Field(default_factory=StageConfig)
    consensus: ConsensusConfig = Field(default_factory=ConsensusConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    max_workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"


def load_config(path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file (default: config.yaml)

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML syntax is invalid
        ValueError: If config is empty or its structure is invalid
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Configuration file not found: {path}\n"
            f"Please copy config.example.yaml to {path} and customize it."
        )

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(
            f"Invalid YAML syntax in {path}: {e}"
        )

    if data is None:
        raise ValueError(f"Configuration file {path} is empty")

    try:
        config = Config(**data)
    except Exception as e:
        raise ValueError(
            f"Invalid configuration structure in {path}: {e}\n"
            f"Please check config.example.yaml for the correct format."
        )

    return config
