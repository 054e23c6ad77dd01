"""Scholarship rule sets and the dispatcher that applies them."""

from scholarship_eval.rules.evaluation import (
    EVALUATORS,
    Application,
    evaluate_application,
    evaluate_merit,
    evaluate_need,
    evaluate_research,
    need_multiplier,
    perform_general_checks,
)
from scholarship_eval.rules.outcome import (
    AwardType,
    EvaluationOutcome,
    RejectionReason,
    ScholarshipCategory,
    format_duration,
)
from scholarship_eval.rules.thresholds import RuleConfig, load_rule_config

__all__ = [
    "EVALUATORS",
    "Application",
    "AwardType",
    "EvaluationOutcome",
    "RejectionReason",
    "RuleConfig",
    "ScholarshipCategory",
    "evaluate_application",
    "evaluate_merit",
    "evaluate_need",
    "evaluate_research",
    "format_duration",
    "load_rule_config",
    "need_multiplier",
    "perform_general_checks",
]
