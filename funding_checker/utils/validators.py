"""
Utility functions for validating and sanitizing learner and course input
"""
import math
import re
from datetime import date
from typing import Any, Dict, List, Optional

from ..config import FundingConstants, get_funding_constants
from ..models.assessment import FieldValidation, ValidationIssue, ValidationResult
from ..models.learner import BenefitType, EmploymentStatus, QualificationLevel, normalize_postcode
from ..rules_evaluator import parse_int

VALID_EMPLOYMENT_STATUSES = [status.value for status in EmploymentStatus]
VALID_QUALIFICATION_LEVELS = [level.value for level in QualificationLevel]
VALID_BENEFITS = [benefit.value for benefit in BenefitType]

REQUIRED_LEARNER_FIELDS = ['age', 'employmentStatus', 'qualificationLevel']

UK_POSTCODE_PATTERN = re.compile(r'^[A-Z]{1,2}[0-9][A-Z0-9]?[0-9][A-Z]{2}$')

FIELD_DISPLAY_NAMES = {
    'age': 'Age',
    'employmentStatus': 'Employment Status',
    'takeHomePay': 'Monthly Take-Home Pay',
    'qualificationLevel': 'Qualification Level',
    'benefits': 'Benefits',
    'partnerBenefitClaim': 'Partner Benefit Claim',
    'postcode': 'Postcode',
    'learningAimRef': 'Learning Aim Reference',
    'learningAimTitle': 'Course Title',
    'guidedLearningHours': 'Guided Learning Hours',
    'totalQualificationTime': 'Total Qualification Time',
    'lastNewStartDate': 'Last New Start Date',
    'certificationEndDate': 'Certification End Date',
    'fundingStreams': 'Funding Streams'
}


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _invalid(error: str) -> FieldValidation:
    return FieldValidation(is_valid=False, error=error, sanitized=None)


def _get(data: Dict[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def validate_age(age: Any, constants: Optional[FundingConstants] = None) -> FieldValidation:
    """
    Validate age input

    Args:
        age: Age value to validate (number or numeric string)
        constants: Funding constants (defaults to settings)

    Returns:
        FieldValidation with the age as an integer when valid
    """
    constants = constants or get_funding_constants()

    if _is_missing(age):
        return _invalid("Age is required")

    num_age = parse_int(age)
    if math.isnan(num_age):
        return _invalid("Age must be a valid number")

    if num_age < constants.min_age or num_age > constants.max_age:
        return _invalid(f"Age must be between {constants.min_age} and {constants.max_age}")

    return FieldValidation(is_valid=True, sanitized=int(num_age))


def validate_employment_status(status: Any) -> FieldValidation:
    if _is_missing(status):
        return _invalid("Employment status is required")

    if status not in VALID_EMPLOYMENT_STATUSES:
        return _invalid("Invalid employment status")

    return FieldValidation(is_valid=True, sanitized=status)


def validate_qualification_level(level: Any) -> FieldValidation:
    if _is_missing(level):
        return _invalid("Qualification level is required")

    # Levels arrive as numbers from some forms
    if isinstance(level, int) and not isinstance(level, bool):
        level = str(level)

    if level not in VALID_QUALIFICATION_LEVELS:
        return _invalid("Invalid qualification level")

    return FieldValidation(is_valid=True, sanitized=level)


def validate_monthly_income(income: Any, constants: Optional[FundingConstants] = None) -> FieldValidation:
    """
    Validate monthly take-home pay

    Income is optional; a missing value is valid and sanitized to 0.
    """
    constants = constants or get_funding_constants()

    if _is_missing(income):
        return FieldValidation(is_valid=True, sanitized=0)

    num_income = parse_int(income)
    if math.isnan(num_income):
        return _invalid("Income must be a valid number")

    if num_income < 0:
        return _invalid("Income cannot be negative")

    if num_income > constants.max_monthly_income:
        return _invalid("Income seems unusually high - please check")

    return FieldValidation(is_valid=True, sanitized=int(num_income))


def validate_benefits(benefits: Any = None) -> FieldValidation:
    """
    Validate a list of benefit codes

    Returns:
        FieldValidation with duplicates removed, first occurrence order kept
    """
    if benefits is None:
        return FieldValidation(is_valid=True, sanitized=[])

    if not isinstance(benefits, (list, tuple, set)):
        return FieldValidation(is_valid=False, error="Benefits must be an array", sanitized=[])

    invalid_benefits = [str(b) for b in benefits if b not in VALID_BENEFITS]
    if invalid_benefits:
        return FieldValidation(
            is_valid=False,
            error=f"Invalid benefit codes: {', '.join(invalid_benefits)}",
            sanitized=[]
        )

    return FieldValidation(is_valid=True, sanitized=list(dict.fromkeys(benefits)))


def validate_postcode(postcode: Any) -> FieldValidation:
    """Check an optional postcode against the UK format, returning it normalized"""
    if _is_missing(postcode):
        return FieldValidation(is_valid=True, sanitized=None)

    if not isinstance(postcode, str):
        return _invalid("Postcode must be text")

    normalized = normalize_postcode(postcode)
    if not UK_POSTCODE_PATTERN.match(normalized):
        return _invalid("Postcode is not a valid UK postcode")

    return FieldValidation(is_valid=True, sanitized=normalized)


def validate_learning_aim_reference(lar: Any) -> FieldValidation:
    if _is_missing(lar):
        return _invalid("Learning Aim Reference is required")

    sanitized = str(lar).strip().upper()

    # 8 characters, alphanumeric
    if not re.match(r'^[A-Z0-9]{8}$', sanitized):
        return _invalid("Learning Aim Reference must be 8 alphanumeric characters")

    return FieldValidation(is_valid=True, sanitized=sanitized)


def validate_course_title(title: Any) -> FieldValidation:
    if _is_missing(title):
        return _invalid("Course title is required")

    sanitized = str(title).strip()

    if len(sanitized) < 5:
        return _invalid("Course title must be at least 5 characters")

    if len(sanitized) > 200:
        return _invalid("Course title must be less than 200 characters")

    return FieldValidation(is_valid=True, sanitized=sanitized)


def _validate_bounded_int(value: Any, low: int, high: int, message: str) -> FieldValidation:
    number = parse_int(value)
    if math.isnan(number) or number < low or number > high:
        return _invalid(message)
    return FieldValidation(is_valid=True, sanitized=int(number))


def _validate_date(value: Any, label: str) -> FieldValidation:
    if isinstance(value, date):
        return FieldValidation(is_valid=True, sanitized=value.isoformat())
    try:
        return FieldValidation(is_valid=True, sanitized=date.fromisoformat(str(value)).isoformat())
    except ValueError:
        return _invalid(f"{label} must be a date in YYYY-MM-DD format")


def _validate_funding_streams(streams: Any) -> FieldValidation:
    if not isinstance(streams, dict):
        return _invalid("Funding streams must be an object")

    sanitized = {}
    for stream_id, stream in streams.items():
        if not isinstance(stream, dict):
            return _invalid(f"Funding stream '{stream_id}' must be an object")
        try:
            rate = float(stream.get('rate', 0) or 0)
        except (ValueError, TypeError):
            return _invalid(f"Funding rate for '{stream_id}' must be a number")
        if not math.isfinite(rate):
            return _invalid(f"Funding rate for '{stream_id}' must be a number")
        if rate < 0:
            return _invalid(f"Funding rate for '{stream_id}' cannot be negative")
        sanitized[stream_id] = {'funded': bool(stream.get('funded')), 'rate': rate}

    return FieldValidation(is_valid=True, sanitized=sanitized)


def validate_learner_data(
    learner_data: Any,
    constants: Optional[FundingConstants] = None
) -> ValidationResult:
    """
    Validate a complete learner record

    Args:
        learner_data: Raw learner form data (camelCase or snake_case keys)
        constants: Funding constants (defaults to settings)

    Returns:
        ValidationResult; sanitized_data is only set when there are no errors
    """
    if not isinstance(learner_data, dict):
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(field='learner', message='Learner data must be an object')]
        )

    constants = constants or get_funding_constants()
    errors: List[ValidationIssue] = []
    sanitized_data: Dict[str, Any] = {}

    checks = [
        ('age', validate_age(learner_data.get('age'), constants)),
        ('employmentStatus', validate_employment_status(
            _get(learner_data, 'employmentStatus', 'employment_status'))),
        ('qualificationLevel', validate_qualification_level(
            _get(learner_data, 'qualificationLevel', 'qualification_level'))),
        ('takeHomePay', validate_monthly_income(
            _get(learner_data, 'takeHomePay', 'take_home_pay'), constants)),
        ('benefits', validate_benefits(learner_data.get('benefits'))),
    ]

    for field, check in checks:
        if check.is_valid:
            sanitized_data[field] = check.sanitized
        else:
            errors.append(ValidationIssue(field=field, message=check.error))

    sanitized_data['partnerBenefitClaim'] = bool(
        _get(learner_data, 'partnerBenefitClaim', 'partner_benefit_claim')
    )
    # Postcode is free-form; an unknown one simply resolves to no authority
    postcode = learner_data.get('postcode')
    sanitized_data['postcode'] = None if _is_missing(postcode) else normalize_postcode(str(postcode))

    location = learner_data.get('location')
    sanitized_data['location'] = 'england' if _is_missing(location) else str(location).strip()

    for field, snake in (('nationality', 'nationality'), ('visaType', 'visa_type')):
        value = _get(learner_data, field, snake)
        if not _is_missing(value):
            sanitized_data[field] = str(value).strip()

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        sanitized_data=sanitized_data if not errors else None
    )


def validate_qualification_data(qualification_data: Any) -> ValidationResult:
    """
    Validate a course (learning aim) record

    Every field is optional; present fields are range-checked and sanitized.
    """
    if not isinstance(qualification_data, dict):
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(field='qualification', message='Qualification data must be an object')]
        )

    errors: List[ValidationIssue] = []
    sanitized_data: Dict[str, Any] = {}

    def record(field: str, check: FieldValidation):
        if check.is_valid:
            sanitized_data[field] = check.sanitized
        else:
            errors.append(ValidationIssue(field=field, message=check.error))

    value = _get(qualification_data, 'learningAimRef', 'learning_aim_ref')
    if value:
        record('learningAimRef', validate_learning_aim_reference(value))

    value = _get(qualification_data, 'learningAimTitle', 'learning_aim_title')
    if value:
        record('learningAimTitle', validate_course_title(value))

    value = _get(qualification_data, 'qualificationLevel', 'qualification_level')
    if value:
        record('qualificationLevel', validate_qualification_level(value))

    value = _get(qualification_data, 'guidedLearningHours', 'guided_learning_hours')
    if value is not None:
        record('guidedLearningHours', _validate_bounded_int(
            value, 0, 2000, "Guided Learning Hours must be between 0 and 2000"))

    value = _get(qualification_data, 'totalQualificationTime', 'total_qualification_time')
    if value is not None:
        record('totalQualificationTime', _validate_bounded_int(
            value, 0, 5000, "Total Qualification Time must be between 0 and 5000"))

    value = _get(qualification_data, 'lastNewStartDate', 'last_new_start_date')
    if value:
        record('lastNewStartDate', _validate_date(value, "Last new start date"))

    value = _get(qualification_data, 'certificationEndDate', 'certification_end_date')
    if value:
        record('certificationEndDate', _validate_date(value, "Certification end date"))

    value = _get(qualification_data, 'fundingStreams', 'funding_streams')
    if value is not None:
        record('fundingStreams', _validate_funding_streams(value))

    # Copy other fields as-is after basic sanitization
    value = _get(qualification_data, 'awardOrgCode', 'award_org_code')
    if value:
        sanitized_data['awardOrgCode'] = str(value).strip().upper()

    for field in ('sector', 'status'):
        if qualification_data.get(field):
            sanitized_data[field] = str(qualification_data[field]).strip()

    for field, snake in (
        ('compatible16to19', 'compatible_16_to_19'),
        ('compatibleASF', 'compatible_asf'),
        ('compatibleApprenticeship', 'compatible_apprenticeship'),
    ):
        value = _get(qualification_data, field, snake)
        if value is not None:
            sanitized_data[field] = bool(value)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        sanitized_data=sanitized_data if not errors else None
    )


def sanitize_search_term(search_term: Any) -> str:
    """Trim a search term, drop angle brackets and cap it at 100 characters"""
    if not search_term or not isinstance(search_term, str):
        return ""

    return re.sub(r'[<>]', '', search_term.strip())[:100]


def check_data_completeness(learner_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check whether learner data has every field needed for an assessment

    Returns:
        Dict with is_complete, missing_fields, completion_percentage, can_proceed
    """
    missing_fields = [
        field for field in REQUIRED_LEARNER_FIELDS
        if _is_missing(learner_data.get(field))
    ]

    present = len(REQUIRED_LEARNER_FIELDS) - len(missing_fields)
    completion_percentage = math.floor(present / len(REQUIRED_LEARNER_FIELDS) * 100 + 0.5)

    return {
        "is_complete": not missing_fields,
        "missing_fields": missing_fields,
        "completion_percentage": completion_percentage,
        "can_proceed": completion_percentage >= 100
    }


def format_field_name(field_name: str) -> str:
    return FIELD_DISPLAY_NAMES.get(field_name, field_name)


def format_validation_errors(errors: List[ValidationIssue]) -> Dict[str, Any]:
    """Format validation errors for display"""
    if not errors:
        return {"has_errors": False, "summary": "", "details": [], "count": 0}

    summary = (
        "1 validation error found" if len(errors) == 1
        else f"{len(errors)} validation errors found"
    )

    return {
        "has_errors": True,
        "summary": summary,
        "details": [
            {
                "field": error.field,
                "message": error.message,
                "display_name": format_field_name(error.field)
            }
            for error in errors
        ],
        "count": len(errors)
    }
