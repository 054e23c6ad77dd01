from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ScholarshipCategory(Enum):
    MERIT = "Merit"
    NEED = "Need"
    RESEARCH = "Research"

    def __str__(self) -> str:
        return self.value


class AwardType(Enum):
    FULL = "Full"
    HALF = "Half"

    def __str__(self) -> str:
        return self.value


class RejectionReason(Enum):
    MISSING_ENROLLMENT = "missing_enrollment"
    MISSING_TRANSCRIPT = "missing_transcript"
    GPA_BELOW_MINIMUM = "gpa_below_minimum"
    MISSING_MANDATORY_DOCUMENT = "missing_mandatory_document"
    FINANCIAL_STATUS_UNSTABLE = "financial_status_unstable"
    MISSING_PUBLICATION_OR_PROPOSAL = "missing_publication_or_proposal"
    PUBLICATION_IMPACT_TOO_LOW = "publication_impact_too_low"
    MERIT_GPA_TOO_LOW = "merit_gpa_too_low"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]

    @property
    def is_shared(self) -> bool:
        """False for reasons only one category can produce."""
        return self is not RejectionReason.MERIT_GPA_TOO_LOW


_REASON_MESSAGES = {
    RejectionReason.MISSING_ENROLLMENT: "Missing Enrollment Certificate",
    RejectionReason.MISSING_TRANSCRIPT: "Missing Transcript",
    RejectionReason.GPA_BELOW_MINIMUM: "GPA below 2.5",
    RejectionReason.MISSING_MANDATORY_DOCUMENT: "Missing mandatory document",
    RejectionReason.FINANCIAL_STATUS_UNSTABLE: "Financial status unstable",
    RejectionReason.MISSING_PUBLICATION_OR_PROPOSAL: "Missing publication or proposal",
    RejectionReason.PUBLICATION_IMPACT_TOO_LOW: "Publication impact too low",
    RejectionReason.MERIT_GPA_TOO_LOW: "GPA below 3.0",
}


def format_duration(total_months: int) -> str:
    """Render a month count as e.g. ``"2 years"``, ``"6 months"`` or ``"1 year 6 months"``."""
    months_value = int(total_months)
    if months_value < 0:
        raise ValueError(f"Duration cannot be negative (received {total_months}).")

    years, months = divmod(months_value, 12)
    year_text = f"{years} year" if years == 1 else f"{years} years"
    month_text = f"{months} month" if months == 1 else f"{months} months"

    if months == 0:
        return year_text
    if years == 0:
        return month_text
    return f"{year_text} {month_text}"


@dataclass(frozen=True, slots=True)
class EvaluationOutcome:
    """Decision for one applicant.

    Accepted outcomes carry ``award`` and ``duration_months``; rejected ones
    carry ``reason``. Any other combination raises ``ValueError``.
    """

    applicant_id: str
    name: str
    category: ScholarshipCategory
    accepted: bool
    award: AwardType | None = None
    duration_months: int | None = None
    reason: RejectionReason | None = None

    def __post_init__(self) -> None:
        if self.accepted:
            if self.award is None or self.duration_months is None:
                raise ValueError("Accepted outcomes require an award and a duration.")
            if self.reason is not None:
                raise ValueError("Accepted outcomes cannot carry a rejection reason.")
        else:
            if self.reason is None:
                raise ValueError("Rejected outcomes require a rejection reason.")
            if self.award is not None or self.duration_months is not None:
                raise ValueError("Rejected outcomes cannot carry an award or duration.")

    @classmethod
    def accept(
        cls,
        applicant_id: str,
        name: str,
        category: ScholarshipCategory,
        *,
        award: AwardType,
        duration_months: int,
    ) -> EvaluationOutcome:
        return cls(
            applicant_id=applicant_id,
            name=name,
            category=category,
            accepted=True,
            award=award,
            duration_months=int(duration_months),
        )

    @classmethod
    def reject(
        cls,
        applicant_id: str,
        name: str,
        category: ScholarshipCategory,
        *,
        reason: RejectionReason,
    ) -> EvaluationOutcome:
        return cls(
            applicant_id=applicant_id,
            name=name,
            category=category,
            accepted=False,
            reason=reason,
        )

    @property
    def status(self) -> str:
        return "Accepted" if self.accepted else "Rejected"

    @property
    def duration(self) -> str | None:
        if self.duration_months is None:
            return None
        return format_duration(self.duration_months)

    @property
    def reason_message(self) -> str | None:
        return self.reason.message if self.reason is not None else None

    def formatted(self) -> str:
        head = (
            f"Applicant ID: {self.applicant_id}, Name: {self.name}, "
            f"Scholarship: {self.category}, Status: {self.status}"
        )
        if self.accepted:
            return f"{head}, Type: {self.award}, Duration: {self.duration}"
        return f"{head}, Reason: {self.reason_message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "applicant_id": self.applicant_id,
            "name": self.name,
            "category": self.category.value,
            "status": self.status,
            "accepted": self.accepted,
            "award": self.award.value if self.award is not None else None,
            "duration_months": self.duration_months,
            "duration": self.duration,
            "reason": self.reason.value if self.reason is not None else None,
            "reason_message": self.reason_message,
        }
