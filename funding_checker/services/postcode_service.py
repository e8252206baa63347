"""
Postcode to funding authority lookup
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Union

from ..config import settings
from ..models.learner import normalize_postcode

logger = logging.getLogger(__name__)


class PostcodeResolver:
    """Resolves normalized postcodes to the authority that funds learners there"""

    def __init__(self, mapping: Dict[str, str]):
        self._mapping = dict(mapping)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "PostcodeResolver":
        """
        Load a resolver from a JSON object of postcode -> authority label

        Args:
            path: JSON file produced by the postcode preprocessing step

        Returns:
            PostcodeResolver over the file's mapping
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            mapping = json.load(f)
        if not isinstance(mapping, dict):
            raise ValueError(f"Postcode data in {path} must be a JSON object")
        logger.info(f"Loaded {len(mapping)} postcode authorities from {path}")
        return cls(mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def resolve_authority(self, postcode: Optional[str]) -> Optional[str]:
        """Return the funding authority for a postcode, or None if unknown"""
        normalized = normalize_postcode(postcode)
        if not normalized:
            return None
        return self._mapping.get(normalized)


@lru_cache(maxsize=1)
def get_postcode_resolver() -> PostcodeResolver:
    """Global resolver loaded once from the configured data file"""
    return PostcodeResolver.from_json_file(settings.postcode_data_path)
