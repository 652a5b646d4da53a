"""Readiness 체크 유틸 테스트."""

from __future__ import annotations

import asyncio
import threading

from app.database import StorageHandle
from app.core.readiness import collect_readiness_status


def _make_storage(*, with_schema: bool = True) -> StorageHandle:
    storage = StorageHandle.from_url("sqlite://")
    if with_schema:
        storage.create_schema()
    return storage


def test_collect_readiness_status_ready_with_schema() -> None:
    result = asyncio.run(collect_readiness_status(_make_storage()))

    assert result["status"] == "ready"
    assert result["checks"]["db"]["status"] == "ok"


def test_collect_readiness_status_not_ready_without_schema() -> None:
    result = asyncio.run(collect_readiness_status(_make_storage(with_schema=False)))

    assert result["status"] == "not_ready"
    assert result["checks"]["db"]["status"] == "fail"
    assert "travel_plans" in result["checks"]["db"]["detail"]


def test_collect_readiness_status_not_ready_while_storage_is_held() -> None:
    storage = _make_storage()
    entered = threading.Event()

    def _hold() -> None:
        with storage.access():
            entered.set()
            threading.Event().wait(1.5)

    holder = threading.Thread(target=_hold)
    holder.start()
    assert entered.wait(timeout=5)

    result = asyncio.run(collect_readiness_status(storage, timeout_seconds=0.2))
    holder.join(timeout=5)

    assert result["status"] == "not_ready"
    assert storage.locked() is False


def test_collect_readiness_status_releases_lock() -> None:
    storage = _make_storage()

    asyncio.run(collect_readiness_status(storage))

    assert storage.locked() is False
