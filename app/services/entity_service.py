"""장소/숙소/식당 단일 테이블 저장소."""

from __future__ import annotations

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logger import get_logger
from app.database import StorageHandle
from app.models.entity import Accommodation, EntityColumnsMixin, Place, Restaurant
from app.schemas.entity import EntityRecord, EntityRequest
from app.schemas.enums import EntityKind

logger = get_logger(__name__)

ENTITY_MODELS: dict[EntityKind, type[EntityColumnsMixin]] = {
    EntityKind.PLACE: Place,
    EntityKind.ACCOMMODATION: Accommodation,
    EntityKind.RESTAURANT: Restaurant,
}


class EntityStore:
    """한 종류의 엔티티에 대한 CRUD와 부분 문자열 검색.

    레코드 간 불변식이 없으므로 모든 작업은 한 번의 임계 구역 안에서
    단일 테이블만 다룬다. 엔티티를 삭제해도 이를 참조하는 계획 항목은 남는다.
    """

    def __init__(self, storage: StorageHandle, kind: EntityKind) -> None:
        self._storage = storage
        self.kind = kind
        self._model = ENTITY_MODELS[kind]

    def _fail(self, operation: str, exc: SQLAlchemyError) -> PersistenceError:
        logger.error("Failed to %s %s: %s", operation, self.kind.value, exc)
        return PersistenceError(f"{operation} {self.kind.value}", exc)

    def list_all(self) -> tuple[list[EntityRecord], int]:
        """전체 레코드와 총 개수를 반환합니다."""
        model = self._model
        try:
            with self._storage.access() as session:
                rows = session.scalars(select(model)).all()
                total = session.scalar(select(func.count()).select_from(model)) or 0
                records = [EntityRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc
        return records, total

    def get(self, entity_id: int) -> EntityRecord:
        try:
            with self._storage.access() as session:
                row = session.get(self._model, entity_id)
                if row is None:
                    raise NotFoundError(self.kind.value, entity_id)
                return EntityRecord.model_validate(row)
        except SQLAlchemyError as exc:
            raise self._fail("get", exc) from exc

    def create(self, request: EntityRequest) -> EntityRecord:
        """새 레코드를 저장하고 할당된 ID와 함께 반환합니다."""
        try:
            with self._storage.access() as session:
                row = self._model(
                    name=request.name,
                    description=request.description,
                    location=request.location,
                )
                session.add(row)
                session.flush()
                return EntityRecord.model_validate(row)
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc

    def update(self, entity_id: int, request: EntityRequest) -> EntityRecord:
        """레코드를 덮어씁니다. 영향받은 행이 없으면 `NotFoundError`."""
        model = self._model
        try:
            with self._storage.access() as session:
                result = session.execute(
                    update(model)
                    .where(model.id == entity_id)
                    .values(
                        name=request.name,
                        description=request.description,
                        location=request.location,
                    )
                )
                if result.rowcount == 0:
                    raise NotFoundError(self.kind.value, entity_id)
        except SQLAlchemyError as exc:
            raise self._fail("update", exc) from exc

        return EntityRecord(id=entity_id, **request.model_dump())

    def delete(self, entity_id: int) -> None:
        model = self._model
        try:
            with self._storage.access() as session:
                result = session.execute(delete(model).where(model.id == entity_id))
                if result.rowcount == 0:
                    raise NotFoundError(self.kind.value, entity_id)
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc

    def search_by_name_or_description(self, pattern: str) -> list[EntityRecord]:
        """이름 또는 설명이 `LIKE` 패턴과 일치하는 레코드를 반환합니다.

        패턴은 호출자가 만든 그대로 사용하며, 대소문자 구분 여부는 DB를 따릅니다.

        Args:
            pattern: `LIKE` 패턴 (예: "%Lake%").

        Returns:
            저장소 기본 순서의 레코드 목록.

        Raises:
            PersistenceError: 구문 실행에 실패한 경우.
        """
        model = self._model
        try:
            with self._storage.access() as session:
                rows = session.scalars(
                    select(model).where(or_(model.name.like(pattern), model.description.like(pattern)))
                ).all()
                return [EntityRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise self._fail("search", exc) from exc
