"""여행 계획 애그리거트 리포지토리.

`TravelPlan`은 자신에게 속한 `PlanItem`들의 생명주기를 소유한다.
계획을 삭제하면 항목도 같은 삭제 안에서 함께 사라진다.
"""

from __future__ import annotations

from pydantic import ValidationError
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logger import get_logger
from app.database import StorageHandle
from app.models.travel_plan import PlanItem as PlanItemRow
from app.models.travel_plan import TravelPlan as TravelPlanRow
from app.schemas.plan import PlanItem, PlanItemRequest, TravelPlan, TravelPlanRequest

logger = get_logger(__name__)

_PLAN_COLUMNS = (
    TravelPlanRow.id,
    TravelPlanRow.name,
    TravelPlanRow.start_date,
    TravelPlanRow.end_date,
)
_ITEM_COLUMNS = (
    PlanItemRow.id,
    PlanItemRow.plan_id,
    PlanItemRow.entity_type,
    PlanItemRow.entity_id,
    PlanItemRow.visit_date,
    PlanItemRow.notes,
)


def _fail(operation: str, exc: Exception) -> PersistenceError:
    logger.error("Failed to %s: %s", operation, exc)
    return PersistenceError(operation, exc)


class PlanRepository:
    """여행 계획과 계획 항목의 CRUD.

    항목 관련 작업은 항상 부모 계획 ID로 범위가 제한된다. 수정/삭제에서
    "없음"의 유일한 신호는 영향받은 행 수가 0인 것이다.
    """

    def __init__(self, storage: StorageHandle) -> None:
        self._storage = storage

    def list_plans(self) -> tuple[list[TravelPlan], int]:
        """계획 메타데이터 목록과 총 개수를 반환합니다.

        응답 크기를 줄이기 위해 항목은 조회하지 않으며 `items`는 `None`이다.
        행 하나라도 변환에 실패하면 전체 조회가 실패한다.
        """
        try:
            with self._storage.access() as session:
                rows = session.execute(select(*_PLAN_COLUMNS)).all()
                total = session.scalar(select(func.count()).select_from(TravelPlanRow)) or 0
        except SQLAlchemyError as exc:
            raise _fail("list travel plans", exc) from exc

        try:
            plans = [TravelPlan.model_validate(dict(row._mapping)) for row in rows]
        except ValidationError as exc:
            raise _fail("read travel plan row", exc) from exc
        return plans, total

    def create_plan(self, request: TravelPlanRequest) -> TravelPlan:
        try:
            with self._storage.access() as session:
                row = TravelPlanRow(
                    name=request.name,
                    start_date=request.start_date,
                    end_date=request.end_date,
                )
                session.add(row)
                session.flush()
                plan_id = row.id
        except SQLAlchemyError as exc:
            raise _fail("insert travel plan", exc) from exc

        return TravelPlan(id=plan_id, items=None, **request.model_dump())

    def get_plan(self, plan_id: int) -> TravelPlan:
        """계획과 전체 항목을 함께 조회합니다.

        메타데이터와 항목 조회를 하나의 임계 구역에서 수행하므로, 그 사이에
        다른 요청이 계획을 삭제해 오래된 항목이 붙는 경우는 생기지 않는다.
        변환할 수 없는 항목 행은 로그만 남기고 건너뛴다.

        Raises:
            NotFoundError: 계획이 존재하지 않는 경우.
            PersistenceError: 구문 실행에 실패한 경우.
        """
        try:
            with self._storage.access() as session:
                plan_row = session.execute(select(*_PLAN_COLUMNS).where(TravelPlanRow.id == plan_id)).one_or_none()
                if plan_row is None:
                    raise NotFoundError("travel_plan", plan_id)
                item_rows = session.execute(select(*_ITEM_COLUMNS).where(PlanItemRow.plan_id == plan_id)).all()
        except SQLAlchemyError as exc:
            raise _fail("fetch travel plan", exc) from exc

        # 항목 행 단위 실패는 부분 결과로 처리한다 (통합 검색은 첫 실패에서 중단)
        items: list[PlanItem] = []
        for item_row in item_rows:
            try:
                items.append(PlanItem.model_validate(dict(item_row._mapping)))
            except ValidationError as exc:
                logger.warning(
                    "Skipping unreadable plan item row: plan_id=%s, item_id=%s: %s", plan_id, item_row.id, exc
                )

        plan = TravelPlan.model_validate(dict(plan_row._mapping))
        plan.items = items
        return plan

    def update_plan(self, plan_id: int, request: TravelPlanRequest) -> TravelPlan:
        """계획 메타데이터만 교체합니다. 응답에 항목은 포함하지 않는다."""
        try:
            with self._storage.access() as session:
                result = session.execute(
                    update(TravelPlanRow)
                    .where(TravelPlanRow.id == plan_id)
                    .values(
                        name=request.name,
                        start_date=request.start_date,
                        end_date=request.end_date,
                    )
                )
                if result.rowcount == 0:
                    raise NotFoundError("travel_plan", plan_id)
        except SQLAlchemyError as exc:
            raise _fail("update travel plan", exc) from exc

        return TravelPlan(id=plan_id, items=None, **request.model_dump())

    def delete_plan(self, plan_id: int) -> None:
        """계획과 소속 항목을 함께 삭제합니다.

        외래키 CASCADE를 강제하지 않는 백엔드에서도 같은 결과가 나오도록
        항목을 먼저 지운다. 계획이 없으면 항목 삭제까지 롤백된다.
        """
        try:
            with self._storage.access() as session:
                session.execute(delete(PlanItemRow).where(PlanItemRow.plan_id == plan_id))
                result = session.execute(delete(TravelPlanRow).where(TravelPlanRow.id == plan_id))
                if result.rowcount == 0:
                    raise NotFoundError("travel_plan", plan_id)
        except SQLAlchemyError as exc:
            raise _fail("delete travel plan", exc) from exc

    def add_plan_item(self, plan_id: int, request: PlanItemRequest) -> PlanItem:
        """계획에 항목을 추가합니다.

        부모 계획이 없으면 외래키 위반으로 삽입이 실패하며, 이는 별도의
        "부모 없음"이 아닌 `PersistenceError`로 전달된다. `entity_id`가 실제
        엔티티를 가리키는지는 확인하지 않는다.
        """
        try:
            with self._storage.access() as session:
                row = PlanItemRow(
                    plan_id=plan_id,
                    entity_type=request.entity_type,
                    entity_id=request.entity_id,
                    visit_date=request.visit_date,
                    notes=request.notes,
                )
                session.add(row)
                session.flush()
                item_id = row.id
        except SQLAlchemyError as exc:
            raise _fail("insert plan item", exc) from exc

        return PlanItem(id=item_id, plan_id=plan_id, **request.model_dump())

    def update_plan_item(self, plan_id: int, item_id: int, request: PlanItemRequest) -> PlanItem:
        """항목 ID와 계획 ID가 모두 일치하는 행만 수정합니다.

        다른 계획의 항목 ID를 넘겨도 수정되지 않고 `NotFoundError`가 발생한다.
        """
        try:
            with self._storage.access() as session:
                result = session.execute(
                    update(PlanItemRow)
                    .where(PlanItemRow.id == item_id, PlanItemRow.plan_id == plan_id)
                    .values(
                        entity_type=request.entity_type,
                        entity_id=request.entity_id,
                        visit_date=request.visit_date,
                        notes=request.notes,
                    )
                )
                if result.rowcount == 0:
                    raise NotFoundError("plan_item", (plan_id, item_id))
        except SQLAlchemyError as exc:
            raise _fail("update plan item", exc) from exc

        return PlanItem(id=item_id, plan_id=plan_id, **request.model_dump())

    def delete_plan_item(self, plan_id: int, item_id: int) -> None:
        try:
            with self._storage.access() as session:
                result = session.execute(
                    delete(PlanItemRow).where(PlanItemRow.id == item_id, PlanItemRow.plan_id == plan_id)
                )
                if result.rowcount == 0:
                    raise NotFoundError("plan_item", (plan_id, item_id))
        except SQLAlchemyError as exc:
            raise _fail("delete plan item", exc) from exc
