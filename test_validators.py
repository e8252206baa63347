"""
Input validation tests
"""
import pytest

from funding_checker.models import LearnerProfile, ValidationIssue
from funding_checker.utils.validators import (
    check_data_completeness,
    format_field_name,
    format_validation_errors,
    sanitize_search_term,
    validate_age,
    validate_benefits,
    validate_course_title,
    validate_employment_status,
    validate_learner_data,
    validate_learning_aim_reference,
    validate_monthly_income,
    validate_postcode,
    validate_qualification_data,
    validate_qualification_level
)


def valid_learner(**overrides):
    data = {
        "age": "25",
        "employmentStatus": "unemployed",
        "qualificationLevel": "2",
        "benefits": ["jsa"],
        "takeHomePay": "",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize("age,message", [
    ("abc", "Age must be a valid number"),
    (13, "Age must be between 14 and 100"),
    (101, "Age must be between 14 and 100"),
    ("", "Age is required"),
    (None, "Age is required"),
    (True, "Age must be a valid number"),
])
def test_validate_age_rejects(age, message):
    check = validate_age(age)
    assert not check.is_valid
    assert check.error == message
    assert check.sanitized is None


@pytest.mark.parametrize("age,expected", [(16, 16), (100, 100), (14, 14), ("42", 42)])
def test_validate_age_accepts_inclusive_bounds(age, expected):
    check = validate_age(age)
    assert check.is_valid
    assert check.sanitized == expected


def test_validate_employment_status():
    assert validate_employment_status("self-employed").is_valid
    assert validate_employment_status("retired").error == "Invalid employment status"
    assert validate_employment_status("").error == "Employment status is required"


def test_validate_qualification_level():
    assert validate_qualification_level("4+").sanitized == "4+"
    assert validate_qualification_level(3).sanitized == "3"
    assert validate_qualification_level("5").error == "Invalid qualification level"
    assert validate_qualification_level(None).error == "Qualification level is required"


@pytest.mark.parametrize("income,expected", [(None, 0), ("", 0), ("250", 250), (50000, 50000)])
def test_validate_monthly_income_accepts(income, expected):
    check = validate_monthly_income(income)
    assert check.is_valid
    assert check.sanitized == expected


@pytest.mark.parametrize("income,message", [
    ("lots", "Income must be a valid number"),
    (-1, "Income cannot be negative"),
    (50001, "Income seems unusually high - please check"),
])
def test_validate_monthly_income_rejects(income, message):
    assert validate_monthly_income(income).error == message


def test_validate_benefits_dedupes():
    check = validate_benefits(["jsa", "pip", "jsa"])
    assert check.is_valid
    assert check.sanitized == ["jsa", "pip"]


def test_validate_benefits_rejects_unknown_codes():
    check = validate_benefits(["jsa", "housing", "dla"])
    assert not check.is_valid
    assert check.error == "Invalid benefit codes: housing, dla"
    assert validate_benefits("jsa").error == "Benefits must be an array"
    assert validate_benefits(None).sanitized == []


def test_validate_postcode():
    assert validate_postcode("sw1a 1aa").sanitized == "SW1A1AA"
    assert validate_postcode("").is_valid
    assert validate_postcode("12345").error == "Postcode is not a valid UK postcode"


def test_validate_learning_aim_reference_and_title():
    assert validate_learning_aim_reference(" 6000345a ").sanitized == "6000345A"
    assert not validate_learning_aim_reference("1234").is_valid
    assert validate_course_title("  Level 2 Maths  ").sanitized == "Level 2 Maths"
    assert validate_course_title("Art").error == "Course title must be at least 5 characters"
    assert validate_course_title("x" * 201).error == "Course title must be less than 200 characters"


def test_validate_learner_data_success():
    result = validate_learner_data(valid_learner(benefits=["jsa", "jsa"], postcode="m1 1ae"))
    assert result.is_valid
    assert result.errors == []
    data = result.sanitized_data
    assert data["age"] == 25
    assert data["takeHomePay"] == 0
    assert data["benefits"] == ["jsa"]
    assert data["postcode"] == "M11AE"
    assert data["partnerBenefitClaim"] is False
    assert data["location"] == "england"

    profile = LearnerProfile.model_validate(data)
    assert profile.age == 25
    assert profile.employment_status == "unemployed"


def test_validate_learner_data_reports_every_field():
    result = validate_learner_data({"age": "abc", "takeHomePay": -5, "benefits": ["bogus"]})
    assert not result.is_valid
    assert result.sanitized_data is None
    fields = [error.field for error in result.errors]
    assert fields == ["age", "employmentStatus", "qualificationLevel", "takeHomePay", "benefits"]


def test_validate_learner_data_accepts_snake_case_keys():
    result = validate_learner_data({
        "age": 30,
        "employment_status": "employed",
        "qualification_level": "3",
        "take_home_pay": 100,
        "partner_benefit_claim": True,
    })
    assert result.is_valid
    assert result.sanitized_data["takeHomePay"] == 100
    assert result.sanitized_data["partnerBenefitClaim"] is True


def test_validate_learner_data_rejects_non_object():
    result = validate_learner_data(["age", 20])
    assert not result.is_valid
    assert result.errors[0].field == "learner"


def test_validate_qualification_data():
    result = validate_qualification_data({
        "learningAimRef": "60003456",
        "learningAimTitle": "BTEC Level 3 National Diploma",
        "qualificationLevel": "3",
        "guidedLearningHours": "720",
        "lastNewStartDate": "2025-07-31",
        "awardOrgCode": " pearson ",
        "fundingStreams": {"adult": {"funded": True, "rate": 2840}},
        "compatibleASF": 1,
    })
    assert result.is_valid
    data = result.sanitized_data
    assert data["guidedLearningHours"] == 720
    assert data["awardOrgCode"] == "PEARSON"
    assert data["fundingStreams"]["adult"] == {"funded": True, "rate": 2840.0}
    assert data["compatibleASF"] is True


def test_validate_qualification_data_errors():
    result = validate_qualification_data({
        "guidedLearningHours": 2001,
        "totalQualificationTime": -1,
        "lastNewStartDate": "31/07/2025",
        "fundingStreams": {"adult": {"funded": True, "rate": -10}},
    })
    assert not result.is_valid
    assert [e.field for e in result.errors] == [
        "guidedLearningHours", "totalQualificationTime", "lastNewStartDate", "fundingStreams"
    ]


def test_sanitize_search_term():
    assert sanitize_search_term("  <b>Maths</b> ") == "bMaths/b"
    assert sanitize_search_term(None) == ""
    assert len(sanitize_search_term("a" * 150)) == 100


def test_check_data_completeness():
    check = check_data_completeness({"age": 20, "employmentStatus": ""})
    assert check["missing_fields"] == ["employmentStatus", "qualificationLevel"]
    assert check["completion_percentage"] == 33
    assert not check["can_proceed"]
    assert check_data_completeness(valid_learner())["is_complete"]


def test_format_validation_errors():
    assert format_validation_errors([])["has_errors"] is False
    formatted = format_validation_errors([
        ValidationIssue(field="takeHomePay", message="Income cannot be negative"),
    ])
    assert formatted["summary"] == "1 validation error found"
    assert formatted["details"][0]["display_name"] == "Monthly Take-Home Pay"
    assert format_field_name("unknownField") == "unknownField"


@pytest.mark.parametrize("postcode,normalized", [
    ("SW1A", "SW1A"),
    ("GIR 0AA", "GIR0AA"),
    ("bfpo 801", "BFPO801"),
    ("not a postcode", "NOTAPOSTCODE"),
])
def test_learner_postcode_is_free_form(postcode, normalized):
    result = validate_learner_data(valid_learner(postcode=postcode))
    assert result.is_valid
    assert result.errors == []
    assert result.sanitized_data["postcode"] == normalized


def test_missing_learner_postcode_is_none():
    assert validate_learner_data(valid_learner()).sanitized_data["postcode"] is None
    assert validate_learner_data(valid_learner(postcode="  ")).sanitized_data["postcode"] is None


def test_location_is_coerced_to_text():
    assert validate_learner_data(valid_learner(location=7)).sanitized_data["location"] == "7"
    assert validate_learner_data(valid_learner(location=" wales ")).sanitized_data["location"] == "wales"
    assert validate_learner_data(valid_learner(location="")).sanitized_data["location"] == "england"


def test_overlong_numbers_are_field_errors_not_exceptions():
    assert validate_age("1" * 5000).error == "Age must be between 14 and 100"
    assert validate_age("-" + "1" * 5000).error == "Age must be between 14 and 100"
    assert validate_age(10 ** 400).error == "Age must be between 14 and 100"
    assert validate_monthly_income("9" * 400).error == "Income seems unusually high - please check"
    assert validate_monthly_income("-" + "9" * 5000).error == "Income cannot be negative"

    result = validate_learner_data(valid_learner(age="1" * 5000))
    assert not result.is_valid
    assert [e.field for e in result.errors] == ["age"]


def test_qualification_rejects_non_finite_rates_and_hours():
    result = validate_qualification_data({
        "guidedLearningHours": "9" * 5000,
        "fundingStreams": {"adult": {"funded": True, "rate": "1e999"}},
    })
    assert [e.field for e in result.errors] == ["guidedLearningHours", "fundingStreams"]
    assert result.errors[1].message == "Funding rate for 'adult' must be a number"
