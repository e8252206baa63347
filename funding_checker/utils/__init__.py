"""
Utility functions for the Learner Funding Eligibility Checker
"""

from .validators import (
    validate_age,
    validate_employment_status,
    validate_qualification_level,
    validate_monthly_income,
    validate_benefits,
    validate_postcode,
    validate_learning_aim_reference,
    validate_course_title,
    validate_learner_data,
    validate_qualification_data,
    sanitize_search_term,
    check_data_completeness,
    format_validation_errors,
    format_field_name
)

__all__ = [
    "validate_age",
    "validate_employment_status",
    "validate_qualification_level",
    "validate_monthly_income",
    "validate_benefits",
    "validate_postcode",
    "validate_learning_aim_reference",
    "validate_course_title",
    "validate_learner_data",
    "validate_qualification_data",
    "sanitize_search_term",
    "check_data_completeness",
    "format_validation_errors",
    "format_field_name"
]
