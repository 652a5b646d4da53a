"""통합 검색 API."""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_search_aggregator
from app.core.logger import get_logger
from app.schemas.search import SearchResultItem
from app.services.search_service import SearchAggregator

router = APIRouter(tags=["search"])
logger = get_logger(__name__)


@router.get("/search", response_model=list[SearchResultItem])
def search_entities(
    q: str = Query(..., description="이름 또는 설명에 포함된 부분 문자열"),
    aggregator: SearchAggregator = Depends(get_search_aggregator),  # noqa: B008
) -> list[SearchResultItem]:
    """장소, 숙소, 식당을 한 번에 검색합니다."""
    logger.info("Search request received: q=%s", q)
    results = aggregator.search(q)
    logger.info("Search completed: %d entities found", len(results))
    return results
