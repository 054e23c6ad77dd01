from __future__ import annotations

import logging
from typing import Iterable, Mapping

import pandas as pd

from scholarship_eval.ingest.csv_reader import ApplicationBatch
from scholarship_eval.rules.evaluation import Application
from scholarship_eval.rules.outcome import EvaluationOutcome, ScholarshipCategory
from scholarship_eval.rules.thresholds import RuleConfig

logger = logging.getLogger(__name__)

CATEGORY_PREFIXES: dict[str, ScholarshipCategory] = {
    "11": ScholarshipCategory.MERIT,
    "22": ScholarshipCategory.NEED,
    "33": ScholarshipCategory.RESEARCH,
}

RESULT_COLUMNS = [
    "applicant_id",
    "name",
    "category",
    "status",
    "accepted",
    "award",
    "duration_months",
    "duration",
    "reason",
    "reason_message",
]


def category_for_id(
    applicant_id: str, prefixes: Mapping[str, ScholarshipCategory] | None = None
) -> ScholarshipCategory | None:
    table = prefixes if prefixes is not None else CATEGORY_PREFIXES
    for prefix, category in table.items():
        if applicant_id.startswith(prefix):
            return category
    return None


def build_applications(
    batch: ApplicationBatch,
    *,
    prefixes: Mapping[str, ScholarshipCategory] | None = None,
) -> list[Application]:
    applications: list[Application] = []
    for record in batch.applicants:
        category = category_for_id(record.applicant_id, prefixes)
        if category is None:
            logger.warning("Unknown applicant ID prefix: %s; skipping.", record.applicant_id)
            continue

        family_info = None
        if category is ScholarshipCategory.NEED:
            family_info = batch.family_info.get(record.applicant_id)
        applications.append(Application(category=category, record=record, family_info=family_info))
    return applications


def evaluate_applications(
    applications: Iterable[Application], config: RuleConfig | None = None
) -> list[EvaluationOutcome]:
    outcomes = [application.evaluate(config) for application in applications]
    return sorted(outcomes, key=lambda outcome: outcome.applicant_id)


def evaluate_batch(
    batch: ApplicationBatch,
    config: RuleConfig | None = None,
    *,
    prefixes: Mapping[str, ScholarshipCategory] | None = None,
) -> list[EvaluationOutcome]:
    applications = build_applications(batch, prefixes=prefixes)
    outcomes = evaluate_applications(applications, config)
    accepted = sum(1 for outcome in outcomes if outcome.accepted)
    logger.info(
        "Evaluated %d applications (accepted=%d, rejected=%d).",
        len(outcomes),
        accepted,
        len(outcomes) - accepted,
    )
    return outcomes


def outcomes_to_frame(outcomes: Iterable[EvaluationOutcome]) -> pd.DataFrame:
    rows = [outcome.to_dict() for outcome in outcomes]
    if not rows:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    return pd.DataFrame(rows)[RESULT_COLUMNS]
