"""애플리케이션 준비성(readiness) 체크 유틸.

공유 저장소 핸들을 통해 실제 요청과 같은 경로로 DB에 접근해 본다.
잠금 대기가 제한 시간을 넘기면 저장소가 점유된 것으로 보고 실패 처리한다.
"""

from __future__ import annotations

import asyncio

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from app.database import StorageHandle

ReadinessCheck = dict[str, str | bool]

REQUIRED_TABLES = frozenset({"places", "accommodations", "restaurants", "travel_plans", "plan_items"})


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _fetch_table_names(storage: StorageHandle) -> set[str]:
    """임계 구역 안에서 `SELECT 1`을 실행하고 존재하는 테이블 이름을 돌려준다."""
    with storage.access() as session:
        session.execute(text("SELECT 1"))
        return set(inspect(session.connection()).get_table_names())


async def _check_database_readiness(storage: StorageHandle, timeout_seconds: float) -> ReadinessCheck:
    try:
        tables = await asyncio.wait_for(asyncio.to_thread(_fetch_table_names, storage), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return _fail(f"저장소 잠금을 {timeout_seconds}초 안에 얻지 못했습니다.")
    except SQLAlchemyError as exc:
        return _fail(f"DB 연결 실패: {exc}")

    missing = sorted(REQUIRED_TABLES - tables)
    if missing:
        return _fail(f"테이블이 없습니다: {', '.join(missing)}")
    return _ok("DB 연결 및 스키마 확인 완료")


async def collect_readiness_status(storage: StorageHandle, *, timeout_seconds: float = 3) -> dict[str, object]:
    """DB 의존성 준비 상태를 점검합니다.

    Args:
        storage: 애플리케이션이 공유하는 저장소 핸들.
        timeout_seconds: 잠금 획득과 쿼리 실행을 기다릴 최대 시간.

    Returns:
        전체 상태(`ready` / `not_ready`)와 항목별 점검 결과.
    """
    checks: dict[str, ReadinessCheck] = {
        "db": await _check_database_readiness(storage, timeout_seconds),
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
