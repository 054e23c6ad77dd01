from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from scholarship_eval.io.results import format_results, summarize_outcomes, write_results
from scholarship_eval.rules.outcome import (
    AwardType,
    EvaluationOutcome,
    RejectionReason,
    ScholarshipCategory,
)


def _outcomes() -> list[EvaluationOutcome]:
    return [
        EvaluationOutcome.accept(
            "1101", "Liam", ScholarshipCategory.MERIT, award=AwardType.FULL, duration_months=24
        ),
        EvaluationOutcome.reject(
            "2203", "Mia", ScholarshipCategory.NEED, reason=RejectionReason.FINANCIAL_STATUS_UNSTABLE
        ),
        EvaluationOutcome.reject(
            "3304", "Henry", ScholarshipCategory.RESEARCH, reason=RejectionReason.MISSING_TRANSCRIPT
        ),
    ]


def test_format_results_handles_empty_input() -> None:
    assert format_results([]) == ["No applications were processed."]
    assert format_results(_outcomes())[0].startswith("Applicant ID: 1101, Name: Liam")


def test_summarize_outcomes_counts_by_category_and_reason() -> None:
    summary = summarize_outcomes(_outcomes())

    assert summary["total"] == 3
    assert summary["accepted"] == 1
    assert summary["rejected"] == 2
    assert summary["by_category"] == {"Merit": 1, "Need": 1, "Research": 1}
    assert summary["by_award"] == {"Full": 1}
    assert summary["by_reason"] == {"financial_status_unstable": 1, "missing_transcript": 1}


def test_write_results_json_and_csv(tmp_path: Path) -> None:
    json_path = write_results(_outcomes(), tmp_path / "out" / "results.json")
    csv_path = write_results(_outcomes(), tmp_path / "out" / "results.csv")

    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["summary"]["total"] == 3
    assert [row["applicant_id"] for row in payload["results"]] == ["1101", "2203", "3304"]

    frame = pd.read_csv(csv_path, dtype={"applicant_id": str})
    assert frame["applicant_id"].tolist() == ["1101", "2203", "3304"]
    assert frame.loc[0, "duration"] == "2 years"
    assert sorted(path.name for path in (tmp_path / "out").iterdir()) == ["results.csv", "results.json"]


def test_write_results_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_results(_outcomes(), tmp_path / "results.xlsx")
