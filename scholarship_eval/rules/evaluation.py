from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from scholarship_eval.normalize.schema import ApplicantRecord, DocumentType, FamilyInfo
from scholarship_eval.rules.outcome import (
    AwardType,
    EvaluationOutcome,
    RejectionReason,
    ScholarshipCategory,
)
from scholarship_eval.rules.thresholds import (
    GeneralThresholds,
    MeritThresholds,
    NeedThresholds,
    ResearchThresholds,
    RuleConfig,
)


def perform_general_checks(
    record: ApplicantRecord, thresholds: GeneralThresholds | None = None
) -> RejectionReason | None:
    """Return the first failing shared precondition, or None when all pass.

    Order is fixed: enrollment, then transcript, then minimum GPA.
    """
    limits = thresholds or GeneralThresholds.baseline()

    if not record.has_document(DocumentType.ENROLLMENT):
        return RejectionReason.MISSING_ENROLLMENT
    if not record.transcript_valid:
        return RejectionReason.MISSING_TRANSCRIPT
    if record.gpa < limits.min_gpa:
        return RejectionReason.GPA_BELOW_MINIMUM
    return None


def _reject(
    record: ApplicantRecord, category: ScholarshipCategory, reason: RejectionReason
) -> EvaluationOutcome:
    return EvaluationOutcome.reject(record.applicant_id, record.name, category, reason=reason)


def _accept(
    record: ApplicantRecord,
    category: ScholarshipCategory,
    award: AwardType,
    duration_months: int,
) -> EvaluationOutcome:
    return EvaluationOutcome.accept(
        record.applicant_id,
        record.name,
        category,
        award=award,
        duration_months=duration_months,
    )


def evaluate_merit(
    record: ApplicantRecord, config: RuleConfig | None = None
) -> EvaluationOutcome:
    rules = config or RuleConfig.baseline()
    limits: MeritThresholds = rules.merit
    category = ScholarshipCategory.MERIT

    general_reason = perform_general_checks(record, rules.general)
    if general_reason is not None:
        return _reject(record, category, general_reason)

    if record.gpa >= limits.full_gpa:
        award = AwardType.FULL
    elif record.gpa >= limits.half_gpa:
        award = AwardType.HALF
    else:
        return _reject(record, category, RejectionReason.MERIT_GPA_TOO_LOW)

    if record.has_document(DocumentType.RECOMMENDATION):
        duration_months = limits.recommended_months
    else:
        duration_months = limits.standard_months
    return _accept(record, category, award, duration_months)


def need_multiplier(
    record: ApplicantRecord,
    family_info: FamilyInfo,
    thresholds: NeedThresholds | None = None,
) -> float:
    """Additive threshold scaling: savings and large households each add a bonus."""
    limits = thresholds or NeedThresholds.baseline()
    multiplier = 1.0
    if record.has_document(DocumentType.SAVINGS):
        multiplier += limits.savings_bonus
    if family_info.dependents >= limits.dependents_cutoff:
        multiplier += limits.dependents_bonus
    return multiplier


def evaluate_need(
    record: ApplicantRecord,
    family_info: FamilyInfo | None,
    config: RuleConfig | None = None,
) -> EvaluationOutcome:
    rules = config or RuleConfig.baseline()
    limits: NeedThresholds = rules.need
    category = ScholarshipCategory.NEED

    general_reason = perform_general_checks(record, rules.general)
    if general_reason is not None:
        return _reject(record, category, general_reason)

    if family_info is None:
        return _reject(record, category, RejectionReason.MISSING_MANDATORY_DOCUMENT)

    multiplier = need_multiplier(record, family_info, limits)
    full_threshold = limits.full_income * multiplier
    half_threshold = limits.half_income * multiplier

    # Only the applicant's own income counts; family income is informational.
    if record.income <= full_threshold:
        award = AwardType.FULL
    elif record.income <= half_threshold:
        award = AwardType.HALF
    else:
        return _reject(record, category, RejectionReason.FINANCIAL_STATUS_UNSTABLE)

    return _accept(record, category, award, limits.duration_months)


def evaluate_research(
    record: ApplicantRecord, config: RuleConfig | None = None
) -> EvaluationOutcome:
    rules = config or RuleConfig.baseline()
    limits: ResearchThresholds = rules.research
    category = ScholarshipCategory.RESEARCH

    general_reason = perform_general_checks(record, rules.general)
    if general_reason is not None:
        return _reject(record, category, general_reason)

    if not record.publications and not record.has_document(DocumentType.GRANT_PROPOSAL):
        return _reject(record, category, RejectionReason.MISSING_PUBLICATION_OR_PROPOSAL)

    # A proposal without publications averages to 0.0 and falls through to the impact check.
    average_impact = record.average_impact_factor()
    if average_impact >= limits.full_impact:
        award = AwardType.FULL
        duration_months = limits.full_months
    elif average_impact >= limits.half_impact:
        award = AwardType.HALF
        duration_months = limits.half_months
    else:
        return _reject(record, category, RejectionReason.PUBLICATION_IMPACT_TOO_LOW)

    if record.has_document(DocumentType.SUPERVISOR_APPROVAL):
        duration_months += limits.supervisor_extension_months
    return _accept(record, category, award, duration_months)


Evaluator = Callable[[ApplicantRecord, FamilyInfo | None, RuleConfig | None], EvaluationOutcome]

EVALUATORS: dict[ScholarshipCategory, Evaluator] = {
    ScholarshipCategory.MERIT: lambda record, _family, config: evaluate_merit(record, config),
    ScholarshipCategory.NEED: evaluate_need,
    ScholarshipCategory.RESEARCH: lambda record, _family, config: evaluate_research(record, config),
}


def evaluate_application(
    category: ScholarshipCategory,
    record: ApplicantRecord,
    family_info: FamilyInfo | None = None,
    config: RuleConfig | None = None,
) -> EvaluationOutcome:
    try:
        evaluator = EVALUATORS[category]
    except KeyError as exc:
        raise ValueError(f"No rule set registered for category {category!r}.") from exc
    return evaluator(record, family_info, config)


@dataclass(frozen=True, slots=True)
class Application:
    """An applicant tagged with the scholarship category that will judge them."""

    category: ScholarshipCategory
    record: ApplicantRecord
    family_info: FamilyInfo | None = None

    @property
    def applicant_id(self) -> str:
        return self.record.applicant_id

    def evaluate(self, config: RuleConfig | None = None) -> EvaluationOutcome:
        return evaluate_application(self.category, self.record, self.family_info, config)
