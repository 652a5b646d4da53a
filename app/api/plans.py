"""여행 계획 및 계획 항목 API."""

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_plan_repository, set_count_headers
from app.core.logger import get_logger
from app.schemas.plan import PlanItem, PlanItemRequest, TravelPlan, TravelPlanRequest
from app.services.plan_service import PlanRepository

router = APIRouter(prefix="/plans", tags=["plans"])
logger = get_logger(__name__)

NOT_FOUND_RESPONSE = {404: {"description": "계획 또는 항목이 존재하지 않음 (본문 없음)"}}


@router.get("", response_model=list[TravelPlan])
def list_plans(
    response: Response,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> list[TravelPlan]:
    """계획 메타데이터 목록을 반환합니다. 항목은 포함하지 않습니다."""
    plans, total = repository.list_plans()
    set_count_headers(response, "plans", len(plans), total)
    return plans


@router.post("", response_model=TravelPlan, status_code=status.HTTP_201_CREATED)
def create_plan(
    request: TravelPlanRequest,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> TravelPlan:
    """새 여행 계획을 생성합니다."""
    plan = repository.create_plan(request)
    logger.info("Travel plan created: id=%s", plan.id)
    return plan


@router.get("/{plan_id}", response_model=TravelPlan, responses=NOT_FOUND_RESPONSE)
def get_plan(
    plan_id: int,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> TravelPlan:
    """계획과 전체 항목을 반환합니다."""
    return repository.get_plan(plan_id)


@router.put("/{plan_id}", response_model=TravelPlan, responses=NOT_FOUND_RESPONSE)
def update_plan(
    plan_id: int,
    request: TravelPlanRequest,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> TravelPlan:
    """계획 메타데이터를 수정합니다. 항목이 필요하면 다시 조회해야 합니다."""
    plan = repository.update_plan(plan_id, request)
    logger.info("Travel plan updated: id=%s", plan_id)
    return plan


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND_RESPONSE)
def delete_plan(
    plan_id: int,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> Response:
    """계획과 소속 항목을 모두 삭제합니다."""
    repository.delete_plan(plan_id)
    logger.info("Travel plan deleted: id=%s", plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{plan_id}/items", response_model=PlanItem, status_code=status.HTTP_201_CREATED)
def add_plan_item(
    plan_id: int,
    request: PlanItemRequest,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> PlanItem:
    """계획에 항목을 추가합니다. 계획이 없으면 500으로 응답합니다."""
    item = repository.add_plan_item(plan_id, request)
    logger.info("Plan item added: plan_id=%s, item_id=%s", plan_id, item.id)
    return item


@router.put("/{plan_id}/items/{item_id}", response_model=PlanItem, responses=NOT_FOUND_RESPONSE)
def update_plan_item(
    plan_id: int,
    item_id: int,
    request: PlanItemRequest,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> PlanItem:
    """계획 ID와 항목 ID가 모두 일치하는 항목을 수정합니다."""
    item = repository.update_plan_item(plan_id, item_id, request)
    logger.info("Plan item updated: plan_id=%s, item_id=%s", plan_id, item_id)
    return item


@router.delete(
    "/{plan_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND_RESPONSE,
)
def delete_plan_item(
    plan_id: int,
    item_id: int,
    repository: PlanRepository = Depends(get_plan_repository),  # noqa: B008
) -> Response:
    """계획 ID와 항목 ID가 모두 일치하는 항목을 삭제합니다."""
    repository.delete_plan_item(plan_id, item_id)
    logger.info("Plan item deleted: plan_id=%s, item_id=%s", plan_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
