"""
Services package for the Learner Funding Eligibility Checker
"""

from .postcode_service import PostcodeResolver, get_postcode_resolver
from .eligibility_service import EligibilityService, get_eligibility_service
from .course_service import CourseService, get_course_service

__all__ = [
    "PostcodeResolver",
    "EligibilityService",
    "CourseService",
    "get_postcode_resolver",
    "get_eligibility_service",
    "get_course_service"
]
