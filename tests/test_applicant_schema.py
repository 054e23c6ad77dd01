from __future__ import annotations

import math

import pytest

from scholarship_eval.normalize.schema import (
    ApplicantRecord,
    Document,
    DocumentType,
    FamilyInfo,
    Publication,
)


def test_applicant_record_trims_identity_fields() -> None:
    record = ApplicantRecord(applicant_id="  1101 ", name=" Liam  ", gpa=3.5, income=1200)

    assert record.applicant_id == "1101"
    assert record.name == "Liam"
    assert record.transcript_valid is False
    assert record.documents == ()
    assert record.publications == ()


@pytest.mark.parametrize(
    "overrides",
    [
        {"applicant_id": "   "},
        {"name": ""},
        {"gpa": -0.01},
        {"gpa": 4.01},
        {"gpa": math.nan},
        {"income": -1.0},
        {"income": math.inf},
    ],
)
def test_applicant_record_rejects_invalid_values(overrides: dict) -> None:
    payload = {"applicant_id": "1101", "name": "Liam", "gpa": 3.5, "income": 1200.0}
    payload.update(overrides)

    with pytest.raises(ValueError):
        ApplicantRecord(**payload)


def test_applicant_record_accepts_gpa_bounds_without_clamping() -> None:
    low = ApplicantRecord(applicant_id="1", name="Low", gpa=0.0, income=0.0)
    high = ApplicantRecord(applicant_id="2", name="High", gpa=4.0, income=0.0)

    assert low.gpa == 0.0
    assert high.gpa == 4.0


def test_applicant_record_collections_are_immutable_tuples() -> None:
    documents = [Document(DocumentType.ENROLLMENT, 12), None]
    record = ApplicantRecord(
        applicant_id="1101",
        name="Liam",
        gpa=3.5,
        income=1200,
        documents=documents,
    )
    documents.append(Document(DocumentType.RECOMMENDATION, 24))

    assert record.documents == (Document(DocumentType.ENROLLMENT, 12),)
    assert record.has_document(DocumentType.ENROLLMENT)
    assert not record.has_document(DocumentType.RECOMMENDATION)
    with pytest.raises(AttributeError):
        record.gpa = 4.0  # type: ignore[misc]


def test_document_and_family_info_clamp_negative_counts() -> None:
    assert Document(DocumentType.SAVINGS, -5).duration_months == 0
    assert FamilyInfo(family_income=30000, dependents=-2).dependents == 0


def test_publication_requires_title() -> None:
    with pytest.raises(ValueError):
        Publication(title="  ", impact_factor=1.0)

    publication = Publication(title=" Sparse Attention ", impact_factor=-0.5)
    assert publication.title == "Sparse Attention"
    assert publication.impact_factor == -0.5


def test_document_type_from_code_is_case_insensitive() -> None:
    assert DocumentType.from_code(" rsv ") is DocumentType.SUPERVISOR_APPROVAL
    with pytest.raises(ValueError):
        DocumentType.from_code("XYZ")


def test_average_impact_factor_handles_empty_and_mean() -> None:
    empty = ApplicantRecord(applicant_id="3301", name="Sophia", gpa=3.7, income=0)
    record = ApplicantRecord(
        applicant_id="3302",
        name="James",
        gpa=3.7,
        income=0,
        publications=(Publication("A", 1.0), Publication("B", 2.0)),
    )

    assert empty.average_impact_factor() == 0.0
    assert record.average_impact_factor() == pytest.approx(1.5)
