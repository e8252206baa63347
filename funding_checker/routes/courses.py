"""
API routes for course search and personalised course funding
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.assessment import CourseFundingRequest, FundingOption
from ..models.qualification import QualificationProfile
from ..services.course_service import CourseService, get_course_service
from ..services.eligibility_service import EligibilityService, get_eligibility_service
from ..utils.validators import format_validation_errors, validate_learner_data

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/search", response_model=List[QualificationProfile])
async def search_courses(
    q: str = Query("", description="Learning Aim Reference or part of a course title"),
    service: CourseService = Depends(get_course_service)
):
    """
    Search courses by reference or title
    """
    return service.search(q)


@router.get("/{learning_aim_ref}", response_model=QualificationProfile)
async def get_course(
    learning_aim_ref: str,
    service: CourseService = Depends(get_course_service)
):
    """
    Get a specific course by Learning Aim Reference
    """
    course = service.get_course(learning_aim_ref)
    if not course:
        raise HTTPException(status_code=404, detail=f"Course not found: {learning_aim_ref}")
    return course


@router.post("/{learning_aim_ref}/funding", response_model=List[FundingOption])
async def get_course_funding(
    learning_aim_ref: str,
    request: CourseFundingRequest,
    courses: CourseService = Depends(get_course_service),
    eligibility: EligibilityService = Depends(get_eligibility_service)
):
    """
    Funding available for a course, with the learner's eligibility for each stream
    """
    try:
        course = courses.get_course(learning_aim_ref)
        if not course:
            raise HTTPException(status_code=404, detail=f"Course not found: {learning_aim_ref}")

        assessment = None
        if request.learner is not None:
            validation = validate_learner_data(request.learner)
            if not validation.is_valid:
                formatted = format_validation_errors(validation.errors)
                raise HTTPException(
                    status_code=400,
                    detail={"summary": formatted["summary"], "errors": formatted["details"]}
                )
            assessment = eligibility.evaluate(validation.sanitized_data, course)

        return courses.funding_options(course, assessment)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building funding options for {learning_aim_ref}: {e}")
        raise HTTPException(status_code=500, detail="Failed to get course funding")
