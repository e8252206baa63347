"""
Pydantic models for qualifications (learning aims) and their funding rates
"""
from datetime import date
from typing import Dict, Optional

from pydantic import ConfigDict, Field, field_validator

from .learner import CamelModel, QualificationLevel


class FundingStreamRate(CamelModel):
    """Funding available for a qualification through one stream"""
    funded: bool = Field(False, description="Whether the stream funds this qualification")
    rate: float = Field(0, ge=0, description="Funding rate in pounds")


class QualificationProfile(CamelModel):
    """A course or learning aim a learner is being assessed against"""
    learning_aim_ref: Optional[str] = Field(None, pattern=r"^[A-Z0-9]{8}$", description="Learning Aim Reference")
    learning_aim_title: Optional[str] = Field(None, min_length=5, max_length=200)
    qualification_level: Optional[QualificationLevel] = Field(None, description="Level of the course")
    funding_streams: Dict[str, FundingStreamRate] = Field(default_factory=dict)
    compatible_16_to_19: bool = Field(False, alias="compatible16to19")
    compatible_asf: bool = Field(False, alias="compatibleASF")
    compatible_apprenticeship: bool = Field(False)
    guided_learning_hours: Optional[int] = Field(None, ge=0, le=2000)
    total_qualification_time: Optional[int] = Field(None, ge=0, le=5000)
    last_new_start_date: Optional[date] = None
    certification_end_date: Optional[date] = None
    award_org_code: Optional[str] = None
    sector: Optional[str] = None
    status: Optional[str] = None

    @field_validator('learning_aim_ref', mode='before')
    @classmethod
    def normalize_reference(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('award_org_code')
    @classmethod
    def normalize_award_org(cls, v):
        if v:
            return v.strip().upper()
        return v

    def funds(self, stream_id: str) -> bool:
        stream = self.funding_streams.get(stream_id)
        return bool(stream and stream.funded)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "learningAimRef": "60003456",
                "learningAimTitle": "BTEC Level 3 National Diploma in Information Technology",
                "qualificationLevel": "3",
                "fundingStreams": {
                    "adult": {"funded": True, "rate": 2840},
                    "advancedLearnerLoan": {"funded": True, "rate": 2840}
                },
                "guidedLearningHours": 720,
                "lastNewStartDate": "2025-07-31"
            }
        }
    )
