from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any, Iterable, Sequence
from uuid import uuid4

from scholarship_eval.rules.dispatch import outcomes_to_frame
from scholarship_eval.rules.outcome import EvaluationOutcome

EMPTY_RESULTS_MESSAGE = "No applications were processed."


def format_results(outcomes: Iterable[EvaluationOutcome]) -> list[str]:
    lines = [outcome.formatted() for outcome in outcomes]
    return lines or [EMPTY_RESULTS_MESSAGE]


def summarize_outcomes(outcomes: Sequence[EvaluationOutcome]) -> dict[str, Any]:
    accepted = sum(1 for outcome in outcomes if outcome.accepted)
    by_category = Counter(outcome.category.value for outcome in outcomes)
    by_award = Counter(outcome.award.value for outcome in outcomes if outcome.award is not None)
    by_reason = Counter(outcome.reason.value for outcome in outcomes if outcome.reason is not None)
    return {
        "total": len(outcomes),
        "accepted": accepted,
        "rejected": len(outcomes) - accepted,
        "by_category": dict(sorted(by_category.items())),
        "by_award": dict(sorted(by_award.items())),
        "by_reason": dict(sorted(by_reason.items())),
    }


def write_json_atomic(payload: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_csv_atomic(outcomes: Sequence[EvaluationOutcome], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        outcomes_to_frame(outcomes).to_csv(temp_path, index=False)
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_results(outcomes: Sequence[EvaluationOutcome], output_path: Path) -> Path:
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        write_csv_atomic(outcomes, output_path)
    elif suffix == ".json":
        payload = {
            "summary": summarize_outcomes(outcomes),
            "results": [outcome.to_dict() for outcome in outcomes],
        }
        write_json_atomic(payload, output_path)
    else:
        raise ValueError("Unsupported output format. Use .csv or .json")
    return output_path
