"""
Eligibility service for assessing a learner against every funding stream
"""
import logging
import math
from functools import lru_cache
from typing import List, Optional

from ..config import FundingConstants, get_funding_constants
from ..models.assessment import (
    AssessmentResult,
    AssessmentSummary,
    EligibilityResult,
    LearnerSnapshot,
    PrimaryRecommendation
)
from ..models.learner import normalize_postcode
from ..rules_evaluator import (
    RULE_TABLE,
    FundingRule,
    LearnerFacts,
    LearnerInput,
    QualificationInput,
    course_level_of
)
from .postcode_service import PostcodeResolver, get_postcode_resolver

logger = logging.getLogger(__name__)


class EligibilityService:
    """Service for checking learner eligibility against the funding rule table"""

    def __init__(
        self,
        constants: Optional[FundingConstants] = None,
        postcode_resolver: Optional[PostcodeResolver] = None,
        rules: Optional[List[FundingRule]] = None
    ):
        self.constants = constants or FundingConstants()
        self.postcode_resolver = postcode_resolver
        self.rules = list(rules) if rules is not None else list(RULE_TABLE)

    def evaluate(
        self,
        learner: LearnerInput,
        qualification: QualificationInput = None
    ) -> AssessmentResult:
        """
        Assess a learner against every funding stream

        Args:
            learner: Validated LearnerProfile or raw learner data
            qualification: Course being checked (if None, the learner's own
                highest qualification is used where a level matters)

        Returns:
            AssessmentResult with one result per funding stream
        """
        facts = LearnerFacts.from_learner(learner)
        course_level = course_level_of(qualification)

        results = [self._check_single_stream(rule, facts, course_level) for rule in self.rules]

        response = AssessmentResult(
            results=results,
            summary=self._build_summary(results),
            learner_profile=self._create_learner_snapshot(facts)
        )

        logger.info(
            f"Eligibility assessment completed: "
            f"{response.summary.total_eligible}/{response.summary.total_streams} streams eligible"
        )
        return response

    def _check_single_stream(
        self,
        rule: FundingRule,
        facts: LearnerFacts,
        course_level: Optional[str]
    ) -> EligibilityResult:
        try:
            eligible, reasoning = rule.check(facts, course_level, self.constants)
        except Exception as e:
            logger.error(f"Error checking eligibility for stream {rule.stream_id.value}: {e}")
            eligible, reasoning = False, f"Not eligible - {rule.label} could not be assessed"

        return EligibilityResult(
            stream_id=rule.stream_id,
            label=rule.label,
            eligible=eligible,
            reasoning=reasoning
        )

    def _build_summary(self, results: List[EligibilityResult]) -> AssessmentSummary:
        eligible_streams = [result.stream_id for result in results if result.eligible]
        total = len(results)
        rate = math.floor(100 * len(eligible_streams) / total + 0.5) if total else 0

        return AssessmentSummary(
            total_streams=total,
            total_eligible=len(eligible_streams),
            eligible_streams=eligible_streams,
            eligibility_rate=rate,
            has_any_funding=bool(eligible_streams),
            primary_recommendation=self._primary_recommendation(eligible_streams)
        )

    def _primary_recommendation(self, eligible_streams: List[str]) -> PrimaryRecommendation:
        candidates = [rule for rule in self.rules if rule.stream_id in eligible_streams]
        if not candidates:
            return PrimaryRecommendation(
                stream=None,
                title="No suitable funding found",
                reasoning="Consider reviewing eligibility criteria or exploring alternative options"
            )

        best = min(candidates, key=lambda rule: rule.priority)
        return PrimaryRecommendation(
            stream=best.stream_id,
            title=best.label,
            reasoning=best.recommendation
        )

    def _create_learner_snapshot(self, facts: LearnerFacts) -> LearnerSnapshot:
        age = facts.age
        known_age = math.isfinite(age)

        age_group = "Unknown"
        if known_age:
            if 16 <= age <= 18:
                age_group = "Young Person (16-18)"
            elif 19 <= age <= 24:
                age_group = "Young Adult (19-24)"
            elif age >= 25:
                age_group = "Adult (25+)"

        pay = 0 if not math.isfinite(facts.take_home_pay) else int(facts.take_home_pay)
        postcode = normalize_postcode(facts.postcode) or None
        authority = None
        if postcode and self.postcode_resolver is not None:
            authority = self.postcode_resolver.resolve_authority(postcode)

        return LearnerSnapshot(
            age=int(age) if known_age else None,
            age_group=age_group,
            employment_status=facts.employment_status or "Not specified",
            has_unemployment_benefits=any(
                b in self.constants.unemployment_benefits for b in facts.benefits
            ),
            benefit_count=len(facts.benefits),
            has_income=pay > 0,
            monthly_income=pay,
            highest_qualification=facts.qualification_level or "Not specified",
            is_joint_benefit_claim=facts.partner_benefit_claim,
            is_uk_resident=facts.is_uk_resident,
            postcode=postcode,
            funding_authority=authority
        )


@lru_cache(maxsize=1)
def get_eligibility_service() -> EligibilityService:
    """Global eligibility service with configured constants and postcode data"""
    return EligibilityService(
        constants=get_funding_constants(),
        postcode_resolver=get_postcode_resolver()
    )
