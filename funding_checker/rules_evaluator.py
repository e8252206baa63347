import logging
import math
import re
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from funding_checker.config import FundingConstants
from funding_checker.models import FundingStreamId, LearnerProfile, QualificationProfile

logger = logging.getLogger(__name__)

LearnerInput = Union[LearnerProfile, Mapping[str, Any]]
QualificationInput = Union[QualificationProfile, Mapping[str, Any], None]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _within_float_range(number: int) -> float:
    try:
        float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf
    return number


def parse_int(value: Any) -> float:
    """
    Parse the leading integer of a value.

    Returns NaN for anything that does not start with a number, so that every
    threshold comparison against it is False. Integers too large for a float
    come back as +/- infinity.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, int):
        return _within_float_range(value)
    if isinstance(value, float):
        return math.trunc(value) if math.isfinite(value) else math.nan
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            digits = match.group(1)
            try:
                return _within_float_range(int(digits))
            except ValueError:
                # Past the interpreter's digit limit, far beyond float range
                return -math.inf if digits.startswith("-") else math.inf
    return math.nan


def describe_number(value: float) -> str:
    if not math.isfinite(value):
        return "unknown"
    return str(int(value))


def _finite_or_nan(number: float) -> float:
    return number if math.isfinite(number) else math.nan


def _read(data: Mapping[str, Any], name: str) -> Any:
    """Read a field by snake_case name or its camelCase alias"""
    if name in data:
        return data[name]
    return data.get(to_camel(name))


def _plain(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return _plain(value)


class LearnerFacts(BaseModel):
    """Learner attributes as the rule engine sees them"""
    age: float
    take_home_pay: float
    benefits: Tuple[str, ...] = ()
    partner_benefit_claim: bool = False
    employment_status: Optional[str] = None
    qualification_level: Optional[str] = None
    nationality: Optional[str] = None
    visa_type: Optional[str] = None
    postcode: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_learner(cls, learner: LearnerInput) -> "LearnerFacts":
        if isinstance(learner, LearnerProfile):
            data = learner.model_dump()
        else:
            data = learner or {}

        # Out-of-range numbers are as unusable as unreadable ones
        age = _finite_or_nan(parse_int(_read(data, "age")))
        if math.isnan(age):
            logger.warning(f"Unreadable age {str(_read(data, 'age'))[:20]!r}, treating as unknown")

        raw_pay = _read(data, "take_home_pay")
        take_home_pay = 0 if raw_pay is None or raw_pay == "" else _finite_or_nan(parse_int(raw_pay))

        raw_benefits = _read(data, "benefits")
        if isinstance(raw_benefits, (list, tuple, set, frozenset)):
            benefits = tuple(dict.fromkeys(_plain(b) for b in raw_benefits))
        else:
            benefits = ()

        return cls(
            age=age,
            take_home_pay=take_home_pay,
            benefits=benefits,
            partner_benefit_claim=bool(_read(data, "partner_benefit_claim")),
            employment_status=_text(_read(data, "employment_status")),
            qualification_level=_text(_read(data, "qualification_level")),
            nationality=_text(_read(data, "nationality")),
            visa_type=_text(_read(data, "visa_type")),
            postcode=_text(_read(data, "postcode")),
        )

    @property
    def is_uk_resident(self) -> bool:
        return self.nationality == "UK" or self.visa_type == "settled"


def course_level_of(qualification: QualificationInput) -> Optional[str]:
    """Level of the course being checked, or None when no course level is known"""
    if qualification is None:
        return None
    if isinstance(qualification, QualificationProfile):
        level = qualification.qualification_level
    else:
        level = _read(qualification, "qualification_level")
    if level in (None, ""):
        return None
    return str(level)


RuleCheck = Callable[[LearnerFacts, Optional[str], FundingConstants], Tuple[bool, str]]


class FundingRule(BaseModel):
    """A funding stream definition in the rule table"""
    stream_id: FundingStreamId
    label: str
    priority: int
    recommendation: str
    check: RuleCheck

    model_config = ConfigDict(frozen=True)


def check_16_to_19(learner: LearnerFacts, course_level: Optional[str], constants: FundingConstants) -> Tuple[bool, str]:
    low, high = constants.young_person_min_age, constants.young_person_max_age
    age = describe_number(learner.age)
    if low <= learner.age <= high:
        return True, f"Eligible due to age ({age} - within {low}-{high} range)"
    return False, f"Not eligible - must be aged {low}-{high} (currently {age})"


def check_adult(learner: LearnerFacts, course_level: Optional[str], constants: FundingConstants) -> Tuple[bool, str]:
    minimum = constants.adult_min_age
    age = describe_number(learner.age)
    if learner.age >= minimum:
        return True, f"Eligible due to age ({age} - {minimum} or over)"
    return False, f"Not eligible - must be {minimum} or over (currently {age})"


def check_free_courses_for_jobs(
    learner: LearnerFacts,
    course_level: Optional[str],
    constants: FundingConstants
) -> Tuple[bool, str]:
    minimum = constants.adult_min_age
    if not learner.age >= minimum:
        return False, f"Not eligible - must be {minimum} or over (currently {describe_number(learner.age)})"

    if not any(b in constants.unemployment_benefits for b in learner.benefits):
        return False, "Not eligible - must be receiving JSA, ESA, or Universal Credit"

    # Universal Credit is means-tested, JSA and ESA are not
    if "universal-credit" in learner.benefits:
        threshold = constants.income_threshold(learner.partner_benefit_claim)
        claim = "joint claim" if learner.partner_benefit_claim else "single claim"
        pay = describe_number(learner.take_home_pay)
        if math.isnan(learner.take_home_pay):
            return False, (
                f"Not eligible - take-home pay could not be read; Universal Credit claimants "
                f"must earn below £{threshold} ({claim})"
            )
        if learner.take_home_pay < threshold:
            return True, (
                f"Eligible - receiving Universal Credit with income £{pay} "
                f"below £{threshold} threshold ({claim})"
            )
        return False, f"Not eligible - Universal Credit income £{pay} exceeds £{threshold} threshold ({claim})"

    benefit_names = "/".join(b.upper() for b in learner.benefits if b in ("jsa", "esa"))
    return True, f"Eligible - receiving {benefit_names} (unemployment benefit)"


def check_advanced_learner_loan(
    learner: LearnerFacts,
    course_level: Optional[str],
    constants: FundingConstants
) -> Tuple[bool, str]:
    minimum = constants.adult_min_age
    age = describe_number(learner.age)
    if not learner.age >= minimum:
        return False, f"Not eligible - must be {minimum} or over (currently {age})"

    if course_level is not None:
        level, source = course_level, "course level"
    else:
        level, source = learner.qualification_level, "your highest qualification"

    if level not in constants.higher_qualification_levels:
        shown = f"Level {level}" if level else "not specified"
        return False, f"Not eligible - course must be Level 3 or above ({source}: {shown})"
    return True, f"Eligible - age {age} ({minimum}+) studying Level {level} qualification ({source})"


def check_apprenticeship(learner: LearnerFacts, course_level: Optional[str], constants: FundingConstants) -> Tuple[bool, str]:
    minimum = constants.young_person_min_age
    age = describe_number(learner.age)
    if not learner.age >= minimum:
        return False, f"Not eligible - must be {minimum} or over (currently {age})"
    if learner.employment_status == "unemployed":
        return True, f"Eligible - age {age}, seeking employment through apprenticeship"
    return True, f"Eligible - age {age}, can undertake apprenticeship training"


# Display order; priority drives the primary recommendation
RULE_TABLE: List[FundingRule] = [
    FundingRule(
        stream_id=FundingStreamId.SIXTEEN_TO_NINETEEN,
        label="16-19 Education Funding",
        priority=1,
        recommendation="Primary pathway for young learners - fully funded",
        check=check_16_to_19,
    ),
    FundingRule(
        stream_id=FundingStreamId.ADULT,
        label="Adult Education Budget",
        priority=3,
        recommendation="Standard adult funding pathway",
        check=check_adult,
    ),
    FundingRule(
        stream_id=FundingStreamId.FREE_COURSES_FOR_JOBS,
        label="Free Courses for Jobs",
        priority=2,
        recommendation="Best option for unemployed adults - fully funded with no repayment",
        check=check_free_courses_for_jobs,
    ),
    FundingRule(
        stream_id=FundingStreamId.ADVANCED_LEARNER_LOAN,
        label="Advanced Learner Loan",
        priority=4,
        recommendation="Loan-based funding for higher level qualifications",
        check=check_advanced_learner_loan,
    ),
    FundingRule(
        stream_id=FundingStreamId.APPRENTICESHIP,
        label="Apprenticeship Funding",
        priority=5,
        recommendation="Work-based learning with employer involvement",
        check=check_apprenticeship,
    ),
]


def get_rule(stream_id: str, rules: Optional[List[FundingRule]] = None) -> Optional[FundingRule]:
    for rule in rules if rules is not None else RULE_TABLE:
        if rule.stream_id == stream_id:
            return rule
    return None
