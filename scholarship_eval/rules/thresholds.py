from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


def _check_non_negative(owner: str, values: Mapping[str, float]) -> None:
    for field_name, raw in values.items():
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError(f"{owner} threshold '{field_name}' must be finite.")
        if value < 0.0:
            raise ValueError(f"{owner} threshold '{field_name}' must be non-negative.")


@dataclass(frozen=True, slots=True)
class GeneralThresholds:
    min_gpa: float

    def __post_init__(self) -> None:
        _check_non_negative("General", {"min_gpa": self.min_gpa})

    @classmethod
    def baseline(cls) -> GeneralThresholds:
        return cls(min_gpa=2.50)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> GeneralThresholds:
        values = payload or {}
        baseline = cls.baseline()
        return cls(min_gpa=float(values.get("min_gpa", baseline.min_gpa)))

    def to_dict(self) -> dict[str, float]:
        return {"min_gpa": self.min_gpa}


@dataclass(frozen=True, slots=True)
class MeritThresholds:
    full_gpa: float
    half_gpa: float
    recommended_months: int
    standard_months: int

    def __post_init__(self) -> None:
        _check_non_negative(
            "Merit",
            {
                "full_gpa": self.full_gpa,
                "half_gpa": self.half_gpa,
                "recommended_months": self.recommended_months,
                "standard_months": self.standard_months,
            },
        )
        if self.half_gpa > self.full_gpa:
            raise ValueError(
                f"Merit half_gpa ({self.half_gpa}) cannot exceed full_gpa ({self.full_gpa})."
            )

    @classmethod
    def baseline(cls) -> MeritThresholds:
        return cls(full_gpa=3.20, half_gpa=3.00, recommended_months=24, standard_months=12)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> MeritThresholds:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            full_gpa=float(values.get("full_gpa", baseline.full_gpa)),
            half_gpa=float(values.get("half_gpa", baseline.half_gpa)),
            recommended_months=int(values.get("recommended_months", baseline.recommended_months)),
            standard_months=int(values.get("standard_months", baseline.standard_months)),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "full_gpa": self.full_gpa,
            "half_gpa": self.half_gpa,
            "recommended_months": self.recommended_months,
            "standard_months": self.standard_months,
        }


@dataclass(frozen=True, slots=True)
class NeedThresholds:
    """Monthly income ceilings, scaled by the applicant's multiplier."""

    full_income: float
    half_income: float
    savings_bonus: float
    dependents_bonus: float
    dependents_cutoff: int
    duration_months: int

    def __post_init__(self) -> None:
        _check_non_negative(
            "Need",
            {
                "full_income": self.full_income,
                "half_income": self.half_income,
                "savings_bonus": self.savings_bonus,
                "dependents_bonus": self.dependents_bonus,
                "dependents_cutoff": self.dependents_cutoff,
                "duration_months": self.duration_months,
            },
        )
        if self.full_income > self.half_income:
            raise ValueError(
                f"Need full_income ({self.full_income}) cannot exceed half_income ({self.half_income})."
            )

    @classmethod
    def baseline(cls) -> NeedThresholds:
        return cls(
            full_income=10000.0,
            half_income=15000.0,
            savings_bonus=0.20,
            dependents_bonus=0.10,
            dependents_cutoff=3,
            duration_months=12,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> NeedThresholds:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            full_income=float(values.get("full_income", baseline.full_income)),
            half_income=float(values.get("half_income", baseline.half_income)),
            savings_bonus=float(values.get("savings_bonus", baseline.savings_bonus)),
            dependents_bonus=float(values.get("dependents_bonus", baseline.dependents_bonus)),
            dependents_cutoff=int(values.get("dependents_cutoff", baseline.dependents_cutoff)),
            duration_months=int(values.get("duration_months", baseline.duration_months)),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "full_income": self.full_income,
            "half_income": self.half_income,
            "savings_bonus": self.savings_bonus,
            "dependents_bonus": self.dependents_bonus,
            "dependents_cutoff": self.dependents_cutoff,
            "duration_months": self.duration_months,
        }


@dataclass(frozen=True, slots=True)
class ResearchThresholds:
    full_impact: float
    half_impact: float
    full_months: int
    half_months: int
    supervisor_extension_months: int

    def __post_init__(self) -> None:
        _check_non_negative(
            "Research",
            {
                "full_impact": self.full_impact,
                "half_impact": self.half_impact,
                "full_months": self.full_months,
                "half_months": self.half_months,
                "supervisor_extension_months": self.supervisor_extension_months,
            },
        )
        if self.half_impact > self.full_impact:
            raise ValueError(
                f"Research half_impact ({self.half_impact}) cannot exceed full_impact ({self.full_impact})."
            )

    @classmethod
    def baseline(cls) -> ResearchThresholds:
        return cls(
            full_impact=1.50,
            half_impact=1.00,
            full_months=12,
            half_months=6,
            supervisor_extension_months=12,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> ResearchThresholds:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            full_impact=float(values.get("full_impact", baseline.full_impact)),
            half_impact=float(values.get("half_impact", baseline.half_impact)),
            full_months=int(values.get("full_months", baseline.full_months)),
            half_months=int(values.get("half_months", baseline.half_months)),
            supervisor_extension_months=int(
                values.get("supervisor_extension_months", baseline.supervisor_extension_months)
            ),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "full_impact": self.full_impact,
            "half_impact": self.half_impact,
            "full_months": self.full_months,
            "half_months": self.half_months,
            "supervisor_extension_months": self.supervisor_extension_months,
        }


@dataclass(frozen=True, slots=True)
class RuleConfig:
    general: GeneralThresholds = field(default_factory=GeneralThresholds.baseline)
    merit: MeritThresholds = field(default_factory=MeritThresholds.baseline)
    need: NeedThresholds = field(default_factory=NeedThresholds.baseline)
    research: ResearchThresholds = field(default_factory=ResearchThresholds.baseline)

    @classmethod
    def baseline(cls) -> RuleConfig:
        return cls()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> RuleConfig:
        values = payload or {}
        return cls(
            general=GeneralThresholds.from_mapping(values.get("general")),
            merit=MeritThresholds.from_mapping(values.get("merit")),
            need=NeedThresholds.from_mapping(values.get("need")),
            research=ResearchThresholds.from_mapping(values.get("research")),
        )

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "general": self.general.to_dict(),
            "merit": self.merit.to_dict(),
            "need": self.need.to_dict(),
            "research": self.research.to_dict(),
        }


def load_rule_config(path: Path | None) -> RuleConfig:
    if path is None:
        return RuleConfig.baseline()
    if not path.exists():
        raise FileNotFoundError(f"Rule config not found: {path}")

    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Rule config must be a JSON object (received {type(payload).__name__}).")
    return RuleConfig.from_mapping(payload)
