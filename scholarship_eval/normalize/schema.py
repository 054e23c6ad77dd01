from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

import numpy as np

MIN_GPA = 0.0
MAX_GPA = 4.0


class DocumentType(Enum):
    """Supporting documents, keyed by their CSV code."""

    ENROLLMENT = "ENR"
    RECOMMENDATION = "REC"
    SAVINGS = "SAV"
    SUPERVISOR_APPROVAL = "RSV"
    GRANT_PROPOSAL = "GRP"

    @classmethod
    def from_code(cls, code: str) -> DocumentType:
        normalized = str(code).strip().upper()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown document type: {code!r}")


def _require_text(value: Optional[str], label: str) -> str:
    if value is None:
        raise ValueError(f"{label} cannot be empty.")
    cleaned = str(value).strip()
    if not cleaned:
        raise ValueError(f"{label} cannot be empty.")
    return cleaned


def _require_finite(value: float, label: str) -> float:
    numeric = float(value)
    if not math.isfinite(numeric):
        raise ValueError(f"{label} must be finite.")
    return numeric


@dataclass(frozen=True, slots=True)
class Document:
    type: DocumentType
    duration_months: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.type, DocumentType):
            raise ValueError(f"Document type must be a DocumentType (received {self.type!r}).")
        object.__setattr__(self, "duration_months", max(0, int(self.duration_months)))


@dataclass(frozen=True, slots=True)
class Publication:
    title: str
    impact_factor: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", _require_text(self.title, "Publication title"))
        object.__setattr__(
            self, "impact_factor", _require_finite(self.impact_factor, "Impact factor")
        )


@dataclass(frozen=True, slots=True)
class FamilyInfo:
    """Household data attached to Need applicants only."""

    family_income: float
    dependents: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "family_income", _require_finite(self.family_income, "Family income")
        )
        object.__setattr__(self, "dependents", max(0, int(self.dependents)))


@dataclass(frozen=True, slots=True)
class ApplicantRecord:
    """Immutable snapshot of one applicant, validated at construction.

    Invalid identity, GPA or income raise ``ValueError``; values are never
    clamped into range.
    """

    applicant_id: str
    name: str
    gpa: float
    income: float
    transcript_valid: bool = False
    documents: tuple[Document, ...] = field(default_factory=tuple)
    publications: tuple[Publication, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "applicant_id", _require_text(self.applicant_id, "Applicant ID"))
        object.__setattr__(self, "name", _require_text(self.name, "Name"))

        gpa = _require_finite(self.gpa, "GPA")
        if gpa < MIN_GPA or gpa > MAX_GPA:
            raise ValueError(f"GPA must be between {MIN_GPA} and {MAX_GPA} (received {gpa}).")
        income = _require_finite(self.income, "Income")
        if income < 0.0:
            raise ValueError(f"Income cannot be negative (received {income}).")

        object.__setattr__(self, "gpa", gpa)
        object.__setattr__(self, "income", income)
        object.__setattr__(self, "transcript_valid", bool(self.transcript_valid))
        object.__setattr__(self, "documents", _as_tuple(self.documents))
        object.__setattr__(self, "publications", _as_tuple(self.publications))

    def has_document(self, document_type: DocumentType) -> bool:
        return self.get_document(document_type) is not None

    def get_document(self, document_type: DocumentType) -> Document | None:
        for document in self.documents:
            if document.type is document_type:
                return document
        return None

    def average_impact_factor(self) -> float:
        if not self.publications:
            return 0.0
        impacts = np.array(
            [publication.impact_factor for publication in self.publications], dtype=float
        )
        return float(impacts.mean())


def _as_tuple(values: Iterable | None) -> tuple:
    if values is None:
        return ()
    return tuple(value for value in values if value is not None)
