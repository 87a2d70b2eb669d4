from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings


load_dotenv()

class Settings(BaseSettings):
    gitlab_api_url: str = "https://gitlab.com/api/v4"
    request_timeout: float = 15
    # 1이면 프로젝트를 순차적으로 조회
    max_workers: int = 1
    group_by: Literal["name", "id"] = "name"
    display_timezone: str = "UTC"
    log_level: str = "INFO"

    class Config:
        # GITLAB_API_URL, REQUEST_TIMEOUT, MAX_WORKERS, GROUP_BY, DISPLAY_TIMEZONE, LOG_LEVEL
        env_prefix = ""
        case_sensitive = False

    @field_validator("display_timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
