"""
Pydantic models for eligibility assessments, validation results and API requests
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from .learner import CamelModel


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class FundingStreamId(str, Enum):
    SIXTEEN_TO_NINETEEN = "16-19"
    ADULT = "adult"
    FREE_COURSES_FOR_JOBS = "freeCoursesForJobs"
    ADVANCED_LEARNER_LOAN = "advancedLearnerLoan"
    APPRENTICESHIP = "apprenticeship"


class EligibilityResult(CamelModel):
    """Result of the eligibility check for a single funding stream"""
    stream_id: FundingStreamId = Field(..., description="Funding stream identifier")
    label: str = Field(..., description="Funding stream name")
    eligible: bool = Field(..., description="Whether the learner is eligible")
    reasoning: str = Field(..., description="Explanation of the verdict")


class PrimaryRecommendation(CamelModel):
    stream: Optional[FundingStreamId] = None
    title: str
    reasoning: str


class AssessmentSummary(CamelModel):
    total_streams: int
    total_eligible: int
    eligible_streams: List[FundingStreamId] = Field(default_factory=list)
    eligibility_rate: int = Field(..., ge=0, le=100, description="Percentage of streams the learner is eligible for")
    has_any_funding: bool
    primary_recommendation: PrimaryRecommendation


class LearnerSnapshot(CamelModel):
    """Summary of the learner as seen by the rule engine"""
    age: Optional[int] = None
    age_group: str = "Unknown"
    employment_status: str = "Not specified"
    has_unemployment_benefits: bool = False
    benefit_count: int = 0
    has_income: bool = False
    monthly_income: int = 0
    highest_qualification: str = "Not specified"
    is_joint_benefit_claim: bool = False
    is_uk_resident: bool = False
    postcode: Optional[str] = None
    funding_authority: Optional[str] = None


class AssessmentResult(CamelModel):
    """Complete funding assessment for a learner"""
    results: List[EligibilityResult] = Field(..., description="One result per funding stream")
    summary: AssessmentSummary
    learner_profile: LearnerSnapshot
    assessed_at: datetime = Field(default_factory=get_current_utc_time)

    def __eq__(self, other):
        # assessed_at is not part of an assessment's identity
        if not isinstance(other, AssessmentResult):
            return NotImplemented
        return self.model_dump(exclude={"assessed_at"}) == other.model_dump(exclude={"assessed_at"})

    def get(self, stream_id: str) -> Optional[EligibilityResult]:
        for result in self.results:
            if result.stream_id == stream_id:
                return result
        return None

    def is_eligible(self, stream_id: str) -> bool:
        result = self.get(stream_id)
        return bool(result and result.eligible)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [
                    {
                        "streamId": "adult",
                        "label": "Adult Education Budget",
                        "eligible": True,
                        "reasoning": "Eligible due to age (25 - 19 or over)"
                    }
                ],
                "summary": {
                    "totalStreams": 5,
                    "totalEligible": 3,
                    "eligibleStreams": ["adult", "freeCoursesForJobs", "apprenticeship"],
                    "eligibilityRate": 60,
                    "hasAnyFunding": True,
                    "primaryRecommendation": {
                        "stream": "freeCoursesForJobs",
                        "title": "Free Courses for Jobs",
                        "reasoning": "Best option for unemployed adults - fully funded with no repayment"
                    }
                },
                "assessedAt": "2025-05-28T09:15:00Z"
            }
        }
    )


class FieldValidation(CamelModel):
    """Outcome of validating a single input field"""
    is_valid: bool
    error: Optional[str] = None
    sanitized: Any = None


class ValidationIssue(CamelModel):
    field: str
    message: str


class ValidationResult(CamelModel):
    """Outcome of validating a complete learner or qualification record"""
    is_valid: bool
    sanitized_data: Optional[Dict[str, Any]] = None
    errors: List[ValidationIssue] = Field(default_factory=list)


class FundingOption(CamelModel):
    """A course's funding through one stream, personalised for a learner"""
    stream_id: FundingStreamId
    title: str
    funded: bool
    rate: float
    eligible: Optional[bool] = None
    reasoning: Optional[str] = None


class AssessmentRequest(CamelModel):
    """Request to assess a learner, optionally against a course"""
    learner: Dict[str, Any] = Field(..., description="Raw learner form data")
    qualification: Optional[Dict[str, Any]] = Field(None, description="Raw course data")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "learner": {
                    "age": 25,
                    "employmentStatus": "unemployed",
                    "benefits": ["jsa"],
                    "qualificationLevel": "2"
                },
                "qualification": {"qualificationLevel": "3"}
            }
        }
    )


class CourseFundingRequest(CamelModel):
    learner: Optional[Dict[str, Any]] = Field(None, description="Raw learner form data")
