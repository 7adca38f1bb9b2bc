"""Settings for CrossCriteria."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CrossCriteriaSettings(BaseSettings):
    """CrossCriteria configuration settings."""

    LOG_LEVEL: str = "INFO"

    # Prefix of handler methods on Criteria subclasses: criteria_<field>
    CRITERIA_METHOD_PREFIX: str = "criteria"

    # Escape %, _ and \ in LIKE operands before wrapping them in %...%
    CRITERIA_ESCAPE_LIKE: bool = True
    CRITERIA_LIKE_OPERATOR: Literal["like", "ilike"] = "ilike"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = CrossCriteriaSettings()
