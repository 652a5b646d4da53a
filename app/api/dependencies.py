"""API 의존성 모음."""

from collections.abc import Callable

from fastapi import Depends, Request, Response

from app.database import StorageHandle
from app.schemas.enums import EntityKind
from app.services.entity_service import EntityStore
from app.services.plan_service import PlanRepository
from app.services.search_service import SearchAggregator


def get_storage(request: Request) -> StorageHandle:
    """애플리케이션 시작 시 생성된 공유 저장소 핸들을 제공합니다."""
    return request.app.state.storage


def get_plan_repository(storage: StorageHandle = Depends(get_storage)) -> PlanRepository:  # noqa: B008
    return PlanRepository(storage)


def get_search_aggregator(storage: StorageHandle = Depends(get_storage)) -> SearchAggregator:  # noqa: B008
    return SearchAggregator.from_storage(storage)


def entity_store_provider(kind: EntityKind) -> Callable[[StorageHandle], EntityStore]:
    """엔티티 종류별 저장소 의존성 함수를 만듭니다."""

    def _provide(storage: StorageHandle = Depends(get_storage)) -> EntityStore:  # noqa: B008
        return EntityStore(storage, kind)

    return _provide


def set_count_headers(response: Response, resource: str, count: int, total: int) -> None:
    """목록 응답에 컬렉션 크기 헤더를 붙입니다.

    `X-Total-Count`는 총 개수만, `Content-Range`는 simple-rest 관리 화면이
    읽는 `<resource> <start>-<end>/<total>` 형식이다.
    """
    response.headers["X-Total-Count"] = str(total)
    end = max(count - 1, 0)
    response.headers["Content-Range"] = f"{resource} 0-{end}/{total}"
