"""세 종류의 엔티티를 한 번에 검색하는 통합 검색기."""

from __future__ import annotations

from collections.abc import Mapping

from app.core.logger import get_logger
from app.database import StorageHandle
from app.schemas.enums import EntityKind
from app.schemas.search import SearchResultItem
from app.services.entity_service import EntityStore

logger = get_logger(__name__)


def build_like_pattern(query: str) -> str:
    """검색어를 부분 문자열 `LIKE` 패턴으로 감쌉니다.

    `%`, `_`는 이스케이프하지 않으므로 검색어 안에서도 와일드카드로 동작하고,
    빈 검색어는 `%%`가 되어 DB 규칙대로 전체와 일치한다.
    """
    return f"%{query}%"


class SearchAggregator:
    """하나의 검색어를 장소, 숙소, 식당 저장소에 차례로 보내 결과를 합친다.

    결과는 place → accommodation → restaurant 순서로 이어 붙이며, 종류 내부는
    저장소 기본 순서를 따른다. 순위, 중복 제거, 페이지네이션은 하지 않는다.
    """

    def __init__(self, stores: Mapping[EntityKind, EntityStore]) -> None:
        self._stores = stores

    @classmethod
    def from_storage(cls, storage: StorageHandle) -> SearchAggregator:
        return cls({kind: EntityStore(storage, kind) for kind in EntityKind})

    def search(self, query: str) -> list[SearchResultItem]:
        """모든 엔티티 종류에서 이름 또는 설명에 검색어가 포함된 항목을 찾습니다.

        Args:
            query: 검색어. 빈 문자열도 그대로 패턴에 사용한다.

        Returns:
            출처 종류가 표시된 통합 결과 목록.

        Raises:
            PersistenceError: 하위 검색 중 하나라도 실패한 경우. 계획 항목 조회와
                달리 부분 결과를 돌려주지 않고 첫 실패에서 중단한다.
        """
        pattern = build_like_pattern(query)
        results: list[SearchResultItem] = []

        for kind in EntityKind:
            records = self._stores[kind].search_by_name_or_description(pattern)
            results.extend(
                SearchResultItem(
                    id=record.id,
                    name=record.name,
                    entity_type=kind,
                    description=record.description,
                    location=record.location,
                )
                for record in records
            )

        logger.debug("Search pattern %r matched %d entities", pattern, len(results))
        return results
