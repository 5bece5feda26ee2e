from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings


def bounded_int(value, default: int, minimum: int, maximum: int) -> int:
    """
    Coerces a raw environment value into [minimum, maximum].

    Missing, unparsable or below-minimum values fall back to the default,
    values above the maximum are clamped to the maximum.
    """
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    return min(number, maximum)


class Settings(BaseSettings):
    # API
    project_name: str = "Team Productivity"
    api_v1_str: str = "/api/v1"
    cors_origins: List[str] = ["*"]

    # Jira connection
    jira_url: str = ""
    jira_username: str = ""
    jira_api_token: str = ""

    # Jira retrieval tuning
    jira_page_size: int = 100
    jira_rate_limit_delay_ms: int = 1000
    jira_request_timeout_ms: int = 30000
    jira_retry_attempts: int = 3
    jira_retry_base_delay_ms: int = 1000

    # External providers
    leave_api_url: str = "http://localhost:3001/api/talent-leave"
    holiday_api_url: str = "https://api-harilibur.vercel.app/api"
    holiday_request_timeout_ms: int = 10000

    sprint_cache_ttl_seconds: int = 300

    @field_validator("jira_page_size", mode="before")
    @classmethod
    def _page_size(cls, value):
        return bounded_int(value, 100, 1, 1000)

    @field_validator("jira_rate_limit_delay_ms", mode="before")
    @classmethod
    def _rate_limit_delay(cls, value):
        return bounded_int(value, 1000, 100, 30000)

    @field_validator("jira_request_timeout_ms", mode="before")
    @classmethod
    def _request_timeout(cls, value):
        return bounded_int(value, 30000, 5000, 120000)

    @field_validator("jira_retry_attempts", mode="before")
    @classmethod
    def _retry_attempts(cls, value):
        return bounded_int(value, 3, 1, 10)

    class Config:
        env_file = ".env"


settings = Settings()
