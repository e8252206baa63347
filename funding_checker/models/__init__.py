"""
Models package for the Learner Funding Eligibility Checker
"""

from .learner import (
    LearnerProfile,
    EmploymentStatus,
    BenefitType,
    QualificationLevel,
    normalize_postcode
)

from .qualification import (
    QualificationProfile,
    FundingStreamRate
)

from .assessment import (
    FundingStreamId,
    EligibilityResult,
    PrimaryRecommendation,
    AssessmentSummary,
    LearnerSnapshot,
    AssessmentResult,
    FieldValidation,
    ValidationIssue,
    ValidationResult,
    FundingOption,
    AssessmentRequest,
    CourseFundingRequest
)

__all__ = [
    # Learner models
    "LearnerProfile",
    "EmploymentStatus",
    "BenefitType",
    "QualificationLevel",
    "normalize_postcode",

    # Qualification models
    "QualificationProfile",
    "FundingStreamRate",

    # Assessment models
    "FundingStreamId",
    "EligibilityResult",
    "PrimaryRecommendation",
    "AssessmentSummary",
    "LearnerSnapshot",
    "AssessmentResult",
    "FieldValidation",
    "ValidationIssue",
    "ValidationResult",
    "FundingOption",
    "AssessmentRequest",
    "CourseFundingRequest"
]
