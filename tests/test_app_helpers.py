from __future__ import annotations

from pathlib import Path

import pytest

from app.helpers import (
    DISPLAY_COLUMNS,
    load_viewer_config,
    outcome_rows,
    reason_counts_text,
    status_badge,
)
from scholarship_eval.rules.outcome import (
    AwardType,
    EvaluationOutcome,
    RejectionReason,
    ScholarshipCategory,
)
from scholarship_eval.rules.thresholds import RuleConfig


def test_outcome_rows_renders_accepted_and_rejected() -> None:
    outcomes = [
        EvaluationOutcome.accept(
            "3302", "James", ScholarshipCategory.RESEARCH, award=AwardType.HALF, duration_months=18
        ),
        EvaluationOutcome.reject(
            "1103", "Noah", ScholarshipCategory.MERIT, reason=RejectionReason.MERIT_GPA_TOO_LOW
        ),
    ]

    frame = outcome_rows(outcomes)

    assert frame.columns.tolist() == DISPLAY_COLUMNS
    assert frame.loc[0, "Duration"] == "1 year 6 months"
    assert frame.loc[0, "Reason"] == ""
    assert frame.loc[1, "Reason"] == "GPA below 3.0"
    assert frame.loc[1, "Type"] == ""
    assert outcome_rows([]).empty


def test_reason_counts_text_orders_by_count_then_code() -> None:
    text = reason_counts_text(
        {
            "missing_transcript": 1,
            "financial_status_unstable": 3,
            "missing_enrollment": 1,
            "unknown_code": 1,
        }
    )

    assert text == (
        "Financial status unstable (3), Missing Enrollment Certificate (1), Missing Transcript (1)"
    )
    assert reason_counts_text({}) == "No rejections"


def test_status_badge_handles_missing_values() -> None:
    assert status_badge(True) == "✅ Accepted"
    assert status_badge(False) == "❌ Rejected"
    assert status_badge(None) == "Unknown"


def test_load_viewer_config_reads_shipped_example() -> None:
    example = Path(__file__).resolve().parents[1] / "data" / "rule_config.example.json"

    assert load_viewer_config(example) == RuleConfig.baseline()


def test_load_viewer_config_falls_back_to_baseline_when_missing(tmp_path: Path) -> None:
    assert load_viewer_config(tmp_path / "absent.json") == RuleConfig.baseline()


def test_load_viewer_config_rejects_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "rule_config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        load_viewer_config(path)
