"""
API routes for funding eligibility assessment
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ..models.assessment import AssessmentRequest, AssessmentResult, ValidationResult
from ..rules_evaluator import RULE_TABLE
from ..services.eligibility_service import EligibilityService, get_eligibility_service
from ..utils.validators import (
    format_validation_errors,
    validate_learner_data,
    validate_qualification_data
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/validate", response_model=ValidationResult)
async def validate_learner(learner: Dict[str, Any]):
    """
    Validate learner form data without assessing it
    """
    return validate_learner_data(learner)


@router.post("/assess", response_model=AssessmentResult)
async def assess_eligibility(
    request: AssessmentRequest,
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Assess learner eligibility for every funding stream
    """
    try:
        learner_validation = validate_learner_data(request.learner)
        errors = list(learner_validation.errors)

        qualification = None
        if request.qualification is not None:
            qualification_validation = validate_qualification_data(request.qualification)
            errors.extend(qualification_validation.errors)
            qualification = qualification_validation.sanitized_data

        if errors:
            formatted = format_validation_errors(errors)
            raise HTTPException(
                status_code=400,
                detail={
                    "summary": formatted["summary"],
                    "errors": formatted["details"]
                }
            )

        return service.evaluate(learner_validation.sanitized_data, qualification)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error assessing eligibility: {e}")
        raise HTTPException(status_code=500, detail="Failed to assess eligibility")


@router.get("/streams")
async def get_funding_streams() -> List[Dict[str, Any]]:
    """
    List the funding streams every assessment covers, in display order
    """
    return [
        {
            "streamId": rule.stream_id.value,
            "label": rule.label,
            "priority": rule.priority
        }
        for rule in RULE_TABLE
    ]
