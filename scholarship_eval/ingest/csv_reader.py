from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Mapping

import pandas as pd

from scholarship_eval.normalize.schema import (
    ApplicantRecord,
    Document,
    DocumentType,
    FamilyInfo,
    Publication,
)

logger = logging.getLogger(__name__)

RAW_COLUMNS = ["kind", "applicant_id", "field_1", "field_2", "field_3"]


@dataclass(frozen=True, slots=True)
class ApplicationBatch:
    """Validated applicants plus the family data keyed by applicant ID."""

    applicants: tuple[ApplicantRecord, ...] = ()
    family_info: Mapping[str, FamilyInfo] = field(default_factory=dict)
    skipped: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "applicants", tuple(self.applicants))
        object.__setattr__(self, "family_info", MappingProxyType(dict(self.family_info)))
        object.__setattr__(self, "skipped", tuple(self.skipped))


def _cell(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _require_cell(row: Mapping[str, Any], column: str, kind: str) -> str:
    value = _cell(row.get(column))
    if value is None:
        raise ValueError(f"'{kind}' row is missing {column}.")
    return value


def _read_text(source: Path | IO[str]) -> str:
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")
    return source.read()


def read_raw_rows(source: Path | IO[str]) -> pd.DataFrame:
    """Split A/D/P/T/I lines on plain commas into raw string columns.

    Quote characters are ordinary text, so a stray quote only affects its own
    line. Short lines are padded with empty cells. Non-empty fields past the
    fifth are ignored with a warning; trailing empty fields are dropped silently.
    """
    lines = pd.Series(_read_text(source).splitlines(), dtype=object)
    lines = lines[lines.str.strip() != ""]
    if lines.empty:
        logger.warning("Applications input is empty.")
        return pd.DataFrame(columns=RAW_COLUMNS)

    fields = lines.str.split(",", expand=True).fillna("")
    fields = fields.apply(lambda column: column.str.strip())

    width = len(RAW_COLUMNS)
    if fields.shape[1] > width:
        overflow = (fields.iloc[:, width:] != "").any(axis=1)
        for line in lines[overflow]:
            logger.warning("Ignoring fields past the fifth in line: %s", line)

    fields = fields.reindex(columns=range(width), fill_value="")
    fields.columns = RAW_COLUMNS
    return fields.reset_index(drop=True)


def read_applications_csv(path: Path) -> ApplicationBatch:
    if not path.exists():
        raise FileNotFoundError(f"Applications file not found: {path}")
    return parse_application_rows(read_raw_rows(path))


def _parse_document(row: Mapping[str, Any]) -> Document:
    document_type = DocumentType.from_code(_require_cell(row, "field_1", "D"))
    duration = int(_require_cell(row, "field_2", "D"))
    return Document(type=document_type, duration_months=duration)


def _parse_publication(row: Mapping[str, Any]) -> Publication:
    title = _require_cell(row, "field_1", "P")
    impact = float(_require_cell(row, "field_2", "P"))
    return Publication(title=title, impact_factor=impact)


def _parse_transcript(row: Mapping[str, Any]) -> bool:
    return _require_cell(row, "field_1", "T").upper() == "Y"


def _parse_family_info(row: Mapping[str, Any]) -> FamilyInfo:
    family_income = float(_require_cell(row, "field_1", "I"))
    dependents = int(_require_cell(row, "field_2", "I"))
    return FamilyInfo(family_income=family_income, dependents=dependents)


def _build_applicant(
    applicant_id: str, rows: list[dict[str, Any]], family_info: dict[str, FamilyInfo]
) -> ApplicantRecord | None:
    base_row = next((row for row in rows if (_cell(row.get("kind")) or "").upper() == "A"), None)
    if base_row is None:
        logger.warning("Skipping applicant %s: 'A' (applicant) row not found.", applicant_id)
        return None

    documents: list[Document] = []
    publications: list[Publication] = []
    transcript_valid = False
    applicant_family: FamilyInfo | None = None

    for row in rows:
        kind = (_cell(row.get("kind")) or "").upper()
        try:
            if kind == "A":
                continue
            if kind == "D":
                documents.append(_parse_document(row))
            elif kind == "P":
                publications.append(_parse_publication(row))
            elif kind == "T":
                transcript_valid = _parse_transcript(row)
            elif kind == "I":
                applicant_family = _parse_family_info(row)
            else:
                logger.warning("Skipping unknown row type %r for applicant %s.", kind, applicant_id)
        except ValueError as exc:
            logger.warning("Skipping malformed '%s' row for applicant %s: %s", kind, applicant_id, exc)

    try:
        record = ApplicantRecord(
            applicant_id=applicant_id,
            name=_require_cell(base_row, "field_1", "A"),
            gpa=float(_require_cell(base_row, "field_2", "A")),
            income=float(_require_cell(base_row, "field_3", "A")),
            transcript_valid=transcript_valid,
            documents=tuple(documents),
            publications=tuple(publications),
        )
    except ValueError as exc:
        logger.warning("Skipping applicant %s: invalid 'A' row. %s", applicant_id, exc)
        return None

    if applicant_family is not None:
        family_info[record.applicant_id] = applicant_family
    return record


def parse_application_rows(raw_df: pd.DataFrame) -> ApplicationBatch:
    """Group raw CSV rows by applicant and build validated records.

    Problems are contained to the row or applicant they affect; the rest of
    the batch is still returned.
    """
    frame = raw_df.reindex(columns=RAW_COLUMNS)
    rows_by_applicant: dict[str, list[dict[str, Any]]] = {}
    for row in frame.to_dict(orient="records"):
        kind = _cell(row.get("kind"))
        applicant_id = _cell(row.get("applicant_id"))
        if kind is None or applicant_id is None:
            logger.warning("Skipping malformed line: %s", row)
            continue
        rows_by_applicant.setdefault(applicant_id, []).append(row)

    applicants: list[ApplicantRecord] = []
    family_info: dict[str, FamilyInfo] = {}
    skipped: list[str] = []
    for applicant_id, rows in rows_by_applicant.items():
        record = _build_applicant(applicant_id, rows, family_info)
        if record is None:
            skipped.append(applicant_id)
            continue
        applicants.append(record)

    logger.info(
        "Loaded %d applicants (%d skipped, %d with family info).",
        len(applicants),
        len(skipped),
        len(family_info),
    )
    return ApplicationBatch(applicants=tuple(applicants), family_info=family_info, skipped=tuple(skipped))
