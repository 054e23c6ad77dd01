from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from scholarship_eval.rules.outcome import EvaluationOutcome, RejectionReason
from scholarship_eval.rules.thresholds import RuleConfig, load_rule_config

DISPLAY_COLUMNS = ["Applicant ID", "Name", "Scholarship", "Status", "Type", "Duration", "Reason"]


def status_badge(accepted: Any) -> str:
    if accepted is None or (isinstance(accepted, float) and pd.isna(accepted)):
        return "Unknown"
    return "✅ Accepted" if bool(accepted) else "❌ Rejected"


def outcome_rows(outcomes: Iterable[EvaluationOutcome]) -> pd.DataFrame:
    rows = [
        {
            "Applicant ID": outcome.applicant_id,
            "Name": outcome.name,
            "Scholarship": outcome.category.value,
            "Status": status_badge(outcome.accepted),
            "Type": outcome.award.value if outcome.award is not None else "",
            "Duration": outcome.duration or "",
            "Reason": outcome.reason_message or "",
        }
        for outcome in outcomes
    ]
    if not rows:
        return pd.DataFrame(columns=DISPLAY_COLUMNS)
    return pd.DataFrame(rows)[DISPLAY_COLUMNS]


def reason_counts_text(by_reason: Mapping[str, int] | None, *, max_items: int = 3) -> str:
    if not by_reason:
        return "No rejections"

    ranked = sorted(by_reason.items(), key=lambda item: (-item[1], item[0]))
    parts: list[str] = []
    for code, count in ranked[:max_items]:
        parts.append(f"{_reason_label(code)} ({count})")
    return ", ".join(parts)


def _reason_label(code: str) -> str:
    try:
        return RejectionReason(code).message
    except ValueError:
        return str(code)


def load_viewer_config(path: Path) -> RuleConfig:
    """Thresholds from ``path`` when it exists, otherwise the baseline."""
    if path.exists():
        return load_rule_config(path)
    return RuleConfig.baseline()
