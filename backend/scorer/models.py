"""
Data model for candidate scoring.

Attribute values are a closed set of variants (Number, Text, Flag,
ListValue) so the fuzzy scorer can dispatch on them explicitly. Score
results and ranked entries are plain dataclasses owned by the caller.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .consensus import normalize_weights


@dataclass(frozen=True)
class Number:
    """Numeric attribute (years of experience, interview score, ...)."""
    value: float

    @property
    def raw(self) -> float:
        return self.value


@dataclass(frozen=True)
class Text:
    """Free-text attribute (role title, education, ...)."""
    value: str

    @property
    def raw(self) -> str:
        return self.value


@dataclass(frozen=True)
class Flag:
    """Boolean attribute (relocation, work permit, ...)."""
    value: bool

    @property
    def raw(self) -> bool:
        return self.value


@dataclass(frozen=True)
class ListValue:
    """List attribute (skills, certifications, ...)."""
    items: Tuple["AttributeValue", ...] = ()

    @property
    def raw(self) -> list:
        return [item.raw for item in self.items]

    def __len__(self) -> int:
        return len(self.items)


AttributeValue = Union[Number, Text, Flag, ListValue]
AttributeSet = Dict[str, AttributeValue]

_VARIANTS = (Number, Text, Flag, ListValue)


def to_attribute_value(raw: Any) -> Optional[AttributeValue]:
    """
    Convert a plain Python value into an AttributeValue.

    Args:
        raw: bool, int, float, str, list/tuple of those, or an AttributeValue

    Returns:
        Matching variant, or None when raw is None (attribute absent)

    Raises:
        TypeError: If the value has no attribute representation
    """
    if raw is None:
        return None
    if isinstance(raw, _VARIANTS):
        return raw
    # bool is an int subclass, check it first
    if isinstance(raw, bool):
        return Flag(raw)
    if isinstance(raw, (int, float)):
        return Number(float(raw))
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, (list, tuple)):
        items = []
        for item in raw:
            converted = to_attribute_value(item)
            if converted is None:
                raise TypeError("List attributes cannot contain null items")
            items.append(converted)
        return ListValue(tuple(items))
    raise TypeError(f"Unsupported attribute value type: {type(raw).__name__}")


def to_attribute_set(raw: Optional[Mapping[str, Any]]) -> AttributeSet:
    """Convert a raw attribute mapping, dropping null entries."""
    attributes: AttributeSet = {}
    for name, value in (raw or {}).items():
        converted = to_attribute_value(value)
        if converted is not None:
            attributes[str(name)] = converted
    return attributes


@dataclass(frozen=True)
class ScoreResult:
    """Score in [0,1] with the confidence placed in its inputs."""
    score: float
    confidence: float = 1.0

    def to_dict(self) -> dict:
        return {'score': self.score, 'confidence': self.confidence}


@dataclass(frozen=True)
class RankedEntry:
    """
    Position of one candidate in a ranking.

    Attributes:
        identity: Candidate identifier
        score: Aggregate score used for ordering
        confidence: Aggregate confidence used as tie-breaker
        rank: 1-based position
        percentile: Relative standing, 100 for the top entry
    """
    identity: Hashable
    score: float
    confidence: float
    rank: int
    percentile: float

    def to_dict(self) -> dict:
        return {
            'id': self.identity,
            'score': self.score,
            'confidence': self.confidence,
            'rank': self.rank,
            'percentile': self.percentile,
        }


@dataclass
class Criterion:
    """A job criterion with its weight and optional ideal value."""
    name: str
    weight: float
    target_value: Optional[AttributeValue] = None

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Weight for criterion '{self.name}' must not be negative")
        self.target_value = to_attribute_value(self.target_value)


class CriteriaSet:
    """
    Ordered criteria for a job.

    Weights are renormalized to sum to 1 after every mutation. A set whose
    raw total is 0 is kept as-is. The set holds its own copies of the
    criteria it is given, so one Criterion can seed several sets.

    Example:
        criteria = CriteriaSet([
            Criterion("yearsOfExperience", 0.6, 5),
            Criterion("skills", 0.4, ["python", "sql"]),
        ])
        criteria.set_weight("skills", 0.6)
        criteria.weights  # {'yearsOfExperience': 0.5, 'skills': 0.5}
    """

    def __init__(self, criteria: Iterable[Criterion] = ()):
        self._criteria: Dict[str, Criterion] = {}
        for criterion in criteria:
            if criterion.name in self._criteria:
                raise ValueError(f"Duplicate criterion: {criterion.name}")
            self._criteria[criterion.name] = replace(criterion)
        self._renormalize()

    @classmethod
    def from_list(cls, data: Iterable[Mapping[str, Any]]) -> 'CriteriaSet':
        """
        Build a criteria set from dictionaries.

        Args:
            data: Items with 'name', 'weight' and optional 'target_value'

        Returns:
            Normalized CriteriaSet
        """
        return cls(
            Criterion(
                name=item['name'],
                weight=float(item.get('weight', 0.0)),
                target_value=item.get('target_value'),
            )
            for item in data
        )

    def _renormalize(self):
        normalized = normalize_weights(
            {name: c.weight for name, c in self._criteria.items()}
        )
        for name, weight in normalized.items():
            self._criteria[name].weight = weight

    def add(self, criterion: Criterion):
        """Add a criterion and renormalize."""
        if criterion.name in self._criteria:
            raise ValueError(f"Duplicate criterion: {criterion.name}")
        self._criteria[criterion.name] = replace(criterion)
        self._renormalize()

    def set_weight(self, name: str, weight: float):
        """Change one raw weight and renormalize the whole set."""
        if name not in self._criteria:
            raise KeyError(name)
        if weight < 0:
            raise ValueError(f"Weight for criterion '{name}' must not be negative")
        self._criteria[name].weight = weight
        self._renormalize()

    def replace_weights(self, weights: Mapping[str, float]):
        """
        Replace all weights, e.g. with a consensus result.

        Criteria missing from the mapping get weight 0; names not yet in
        the set are added without a target value.
        """
        for criterion in self._criteria.values():
            criterion.weight = 0.0
        for name, weight in weights.items():
            if name in self._criteria:
                self._criteria[name].weight = weight
            else:
                self._criteria[name] = Criterion(name, weight)
        self._renormalize()

    @property
    def weights(self) -> Dict[str, float]:
        return {name: c.weight for name, c in self._criteria.items()}

    @property
    def targets(self) -> Dict[str, AttributeValue]:
        return {
            name: c.target_value
            for name, c in self._criteria.items()
            if c.target_value is not None
        }

    def get(self, name: str) -> Optional[Criterion]:
        return self._criteria.get(name)

    def __iter__(self) -> Iterator[Criterion]:
        return iter(self._criteria.values())

    def __len__(self) -> int:
        return len(self._criteria)

    def __contains__(self, name: object) -> bool:
        return name in self._criteria


@dataclass
class StageResult:
    """Outcome of one interview stage for a candidate."""
    completed: bool = False
    metrics: Dict[str, float] = field(default_factory=dict)
    score: Optional[float] = None
    confidence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StageResult':
        return cls(
            completed=bool(data.get('completed', False)),
            metrics={k: float(v) for k, v in (data.get('metrics') or {}).items()},
            score=data.get('score'),
            confidence=data.get('confidence'),
        )


@dataclass
class Candidate:
    """
    A candidate as seen by the engine.

    Attributes:
        id: Caller-supplied identity
        attributes: Attribute name to AttributeValue
        confidences: Per-attribute confidence (missing means 1.0)
        stages: Interview stage name to StageResult
    """
    id: Hashable
    attributes: AttributeSet = field(default_factory=dict)
    confidences: Dict[str, float] = field(default_factory=dict)
    stages: Dict[str, StageResult] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Candidate':
        """Build a candidate from plain data (e.g. parsed YAML or JSON)."""
        if data.get('id') is None:
            raise ValueError(f"Candidate is missing an id: {dict(data)!r}")
        return cls(
            id=data['id'],
            attributes=to_attribute_set(data.get('attributes')),
            confidences={k: float(v) for k, v in (data.get('confidences') or {}).items()},
            stages={
                name: StageResult.from_dict(stage)
                for name, stage in (data.get('stages') or {}).items()
            },
        )


@dataclass
class CandidateEvaluation:
    """Initial (pre-interview) evaluation of one candidate."""
    candidate_id: Hashable
    score: float
    confidence: float
    membership_kind: str
    attribute_scores: Dict[str, ScoreResult] = field(default_factory=dict)
    missing_attributes: List[str] = field(default_factory=list)

    @property
    def result(self) -> ScoreResult:
        return ScoreResult(self.score, self.confidence)

    def derived_fields(self) -> Dict[str, Any]:
        """
        Per-attribute fields for the caller to persist next to the candidate.

        Returns:
            Mapping like {'skills_fuzzyScore': 0.8,
            'skills_membershipFunction': 'simple', 'skills_confidence': 1.0}
        """
        fields: Dict[str, Any] = {}
        for name, result in self.attribute_scores.items():
            fields[f"{name}_fuzzyScore"] = result.score
            fields[f"{name}_membershipFunction"] = self.membership_kind
            fields[f"{name}_confidence"] = result.confidence
        fields['initialScore_confidence'] = self.confidence
        return fields

    def to_dict(self) -> dict:
        return {
            'candidate_id': self.candidate_id,
            'initial_score': self.score,
            'confidence_score': self.confidence,
            'attributes': self.derived_fields(),
            'missing_attributes': list(self.missing_attributes),
        }


@dataclass
class EvaluationReport:
    """Result of evaluating a batch of candidates against one job."""
    ranking: List[RankedEntry] = field(default_factory=list)
    evaluations: Dict[Hashable, CandidateEvaluation] = field(default_factory=dict)
    excluded: List[Hashable] = field(default_factory=list)
    failures: Dict[Hashable, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'total_candidates': len(self.evaluations) + len(self.excluded) + len(self.failures),
            'ranked_candidates': [entry.to_dict() for entry in self.ranking],
            'evaluations': [e.to_dict() for e in self.evaluations.values()],
            'excluded': list(self.excluded),
            'failures': dict(self.failures),
        }
