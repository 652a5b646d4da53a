"""Uvicorn 기본 포맷에 맞춘 로깅 설정."""

from __future__ import annotations

import copy
import logging.config
import os
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

# 애플리케이션 로거. SQL 로그는 DB_ECHO가 켜져 있을 때만 INFO로 남긴다.
_APP_LOGGERS = ("app.services", "app.database", "app.api")


def _resolve_log_level(level: str | None = None) -> str:
    """인자 또는 환경변수에서 로그 레벨을 결정합니다."""
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", "INFO").upper()


def build_logging_config(level: str | None = None, *, sql_echo: bool = False) -> dict[str, Any]:
    """Uvicorn 기본 포맷터를 재사용하는 로깅 설정을 생성합니다."""
    log_level = _resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["root"] = {"handlers": ["default"], "level": log_level}

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        config["loggers"][name]["level"] = log_level

    for name in _APP_LOGGERS:
        config["loggers"][name] = {"level": log_level}

    config["loggers"]["sqlalchemy.engine"] = {"level": "INFO" if sql_echo else "WARNING"}

    return config


def configure_logging(level: str | None = None, *, sql_echo: bool = False) -> None:
    """dictConfig로 로깅을 구성합니다."""
    logging.config.dictConfig(build_logging_config(level, sql_echo=sql_echo))
