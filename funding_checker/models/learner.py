"""
Pydantic models for learner profiles
"""
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True
    )


class EmploymentStatus(str, Enum):
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"
    SELF_EMPLOYED = "self-employed"
    STUDENT = "student"


class BenefitType(str, Enum):
    JSA = "jsa"
    ESA = "esa"
    UNIVERSAL_CREDIT = "universal-credit"
    PIP = "pip"
    OTHER = "other"


class QualificationLevel(str, Enum):
    NONE = "none"
    LEVEL_1 = "1"
    LEVEL_2 = "2"
    LEVEL_3 = "3"
    LEVEL_4_PLUS = "4+"


def normalize_postcode(postcode: Optional[str]) -> str:
    """Strip all whitespace and upper-case a postcode"""
    if not postcode:
        return ""
    return re.sub(r"\s+", "", postcode).upper()


class LearnerProfile(CamelModel):
    """Validated learner information used for funding assessment"""
    age: int = Field(..., ge=14, le=100, description="Learner's age in years")
    employment_status: Optional[EmploymentStatus] = Field(None, description="Current employment status")
    benefits: List[BenefitType] = Field(default_factory=list, description="Benefits currently received")
    take_home_pay: int = Field(0, ge=0, description="Monthly take-home pay")
    partner_benefit_claim: bool = Field(False, description="Whether benefits are claimed jointly with a partner")
    qualification_level: Optional[QualificationLevel] = Field(None, description="Highest qualification held")
    nationality: Optional[str] = Field(None, description="Nationality, e.g. 'UK'")
    visa_type: Optional[str] = Field(None, description="Immigration status, e.g. 'settled'")
    postcode: Optional[str] = Field(None, description="Home postcode")
    location: str = Field("england", description="Region of residence")

    @field_validator('benefits')
    @classmethod
    def dedupe_benefits(cls, v):
        return list(dict.fromkeys(v))

    @field_validator('postcode')
    @classmethod
    def validate_postcode(cls, v):
        if v:
            return normalize_postcode(v) or None
        return None

    @property
    def is_uk_resident(self) -> bool:
        return self.nationality == "UK" or self.visa_type == "settled"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "age": 25,
                "employmentStatus": "unemployed",
                "benefits": ["universal-credit"],
                "takeHomePay": 300,
                "partnerBenefitClaim": False,
                "qualificationLevel": "2",
                "nationality": "UK",
                "postcode": "SW1A 1AA"
            }
        }
    )
