"""
API routes for the Learner Funding Eligibility Checker
"""

from .eligibility import router as eligibility_router
from .courses import router as courses_router
from .postcodes import router as postcodes_router

__all__ = [
    "eligibility_router",
    "courses_router",
    "postcodes_router"
]
