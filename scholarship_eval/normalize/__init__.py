"""Validated, immutable applicant data."""

from scholarship_eval.normalize.schema import (
    ApplicantRecord,
    Document,
    DocumentType,
    FamilyInfo,
    Publication,
)

__all__ = ["ApplicantRecord", "Document", "DocumentType", "FamilyInfo", "Publication"]
