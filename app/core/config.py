"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    DATABASE_URL: str = "sqlite:///./travel_planner.db"
    DB_ECHO: bool = False
    READINESS_TIMEOUT_SECONDS: int = 3
    APP_ENV: str = "development"
    DOCS_MODE: str = "public"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_EXPOSE_HEADERS: str = "X-Total-Count,Content-Range"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True
    TRUSTED_HOSTS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("READINESS_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def _clamp_readiness_timeout(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 3
        except (TypeError, ValueError):
            numeric = 3
        return min(30, max(1, numeric))


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
