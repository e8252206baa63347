"""
Configuration settings for the Learner Funding Eligibility Checker
"""
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = Field(default="Learner Funding Eligibility Checker")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # API Configuration
    api_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:8080")

    # Reference data
    postcode_data_path: Path = Field(default=DATA_DIR / "postcode_authorities.json")
    course_data_path: Path = Field(default=DATA_DIR / "courses.json")

    # Funding thresholds
    min_age: int = Field(default=14, description="Lowest age accepted on input")
    max_age: int = Field(default=100, description="Highest age accepted on input")
    young_person_min_age: int = Field(default=16)
    young_person_max_age: int = Field(default=18)
    adult_min_age: int = Field(default=19)
    uc_single_threshold: int = Field(default=345, description="Monthly take-home pay limit, single claim")
    uc_joint_threshold: int = Field(default=552, description="Monthly take-home pay limit, joint claim")
    max_monthly_income: int = Field(default=50000)

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


class FundingConstants(BaseModel):
    """Immutable thresholds and code lists used by the rule engine and validators"""
    min_age: int = 14
    max_age: int = 100
    young_person_min_age: int = 16
    young_person_max_age: int = 18
    adult_min_age: int = 19
    uc_single_threshold: int = 345
    uc_joint_threshold: int = 552
    max_monthly_income: int = 50000
    unemployment_benefits: FrozenSet[str] = frozenset({"jsa", "esa", "universal-credit"})
    higher_qualification_levels: FrozenSet[str] = frozenset({"3", "4+"})

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FundingConstants":
        return cls(
            min_age=settings.min_age,
            max_age=settings.max_age,
            young_person_min_age=settings.young_person_min_age,
            young_person_max_age=settings.young_person_max_age,
            adult_min_age=settings.adult_min_age,
            uc_single_threshold=settings.uc_single_threshold,
            uc_joint_threshold=settings.uc_joint_threshold,
            max_monthly_income=settings.max_monthly_income,
        )

    def income_threshold(self, joint_claim: bool) -> int:
        """Universal Credit take-home pay limit for a single or joint claim"""
        return self.uc_joint_threshold if joint_claim else self.uc_single_threshold


# Create global settings instance
settings = Settings()


@lru_cache(maxsize=1)
def get_funding_constants() -> FundingConstants:
    """Funding constants built once from the global settings"""
    return FundingConstants.from_settings(settings)
