"""
Course catalogue service: search and personalised funding for learning aims
"""
import json
import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from ..config import settings
from ..models.assessment import AssessmentResult, FundingOption
from ..models.qualification import QualificationProfile
from ..rules_evaluator import RULE_TABLE
from ..utils.validators import sanitize_search_term

logger = logging.getLogger(__name__)


class CourseService:
    """In-memory catalogue of learning aims"""

    def __init__(self, courses: List[QualificationProfile]):
        self.courses = list(courses)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "CourseService":
        """Load the catalogue from a JSON list of course records"""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            records = json.load(f)
        courses = [QualificationProfile.model_validate(record) for record in records]
        logger.info(f"Loaded {len(courses)} courses from {path}")
        return cls(courses)

    def search(self, term: Optional[str]) -> List[QualificationProfile]:
        """
        Find courses whose reference or title contains the search term

        Args:
            term: Raw search text (case-insensitive)

        Returns:
            Matching courses in catalogue order; empty for an empty term
        """
        needle = sanitize_search_term(term).lower()
        if not needle:
            return []

        return [
            course for course in self.courses
            if needle in (course.learning_aim_ref or "").lower()
            or needle in (course.learning_aim_title or "").lower()
        ]

    def get_course(self, learning_aim_ref: str) -> Optional[QualificationProfile]:
        reference = (learning_aim_ref or "").strip().upper()
        for course in self.courses:
            if course.learning_aim_ref == reference:
                return course
        return None

    @staticmethod
    def funding_options(
        course: QualificationProfile,
        assessment: Optional[AssessmentResult] = None
    ) -> List[FundingOption]:
        """Funding streams this course is funded through, with the learner's verdict when known"""
        options = []
        for rule in RULE_TABLE:
            rate = course.funding_streams.get(rule.stream_id.value)
            if rate is None or not rate.funded:
                continue

            result = assessment.get(rule.stream_id.value) if assessment else None
            options.append(FundingOption(
                stream_id=rule.stream_id,
                title=rule.label,
                funded=rate.funded,
                rate=rate.rate,
                eligible=result.eligible if result else None,
                reasoning=result.reasoning if result else None
            ))
        return options

    @staticmethod
    def accepting_new_starts(course: QualificationProfile, on: Optional[date] = None) -> bool:
        if course.last_new_start_date is None:
            return True
        return course.last_new_start_date >= (on or date.today())


@lru_cache(maxsize=1)
def get_course_service() -> CourseService:
    return CourseService.from_json_file(settings.course_data_path)
