"""장소/숙소/식당 CRUD API."""

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import entity_store_provider, set_count_headers
from app.core.logger import get_logger
from app.schemas.entity import EntityRecord, EntityRequest
from app.schemas.enums import EntityKind
from app.services.entity_service import EntityStore

logger = get_logger(__name__)

ENTITY_PREFIXES: dict[EntityKind, str] = {
    EntityKind.PLACE: "places",
    EntityKind.ACCOMMODATION: "accommodations",
    EntityKind.RESTAURANT: "restaurants",
}


def build_entity_router(kind: EntityKind) -> APIRouter:
    """엔티티 종류 하나에 대한 CRUD 라우터를 생성합니다."""
    resource = ENTITY_PREFIXES[kind]
    router = APIRouter(prefix=f"/{resource}", tags=[resource])
    provide_store = entity_store_provider(kind)

    @router.get("", response_model=list[EntityRecord])
    def list_entities(
        response: Response,
        store: EntityStore = Depends(provide_store),  # noqa: B008
    ) -> list[EntityRecord]:
        records, total = store.list_all()
        set_count_headers(response, resource, len(records), total)
        return records

    @router.post("", response_model=EntityRecord, status_code=status.HTTP_201_CREATED)
    def create_entity(
        request: EntityRequest,
        store: EntityStore = Depends(provide_store),  # noqa: B008
    ) -> EntityRecord:
        record = store.create(request)
        logger.info("%s created: id=%s", kind.value, record.id)
        return record

    @router.get("/{entity_id}", response_model=EntityRecord)
    def get_entity(
        entity_id: int,
        store: EntityStore = Depends(provide_store),  # noqa: B008
    ) -> EntityRecord:
        return store.get(entity_id)

    @router.put("/{entity_id}", response_model=EntityRecord)
    def update_entity(
        entity_id: int,
        request: EntityRequest,
        store: EntityStore = Depends(provide_store),  # noqa: B008
    ) -> EntityRecord:
        record = store.update(entity_id, request)
        logger.info("%s updated: id=%s", kind.value, entity_id)
        return record

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_entity(
        entity_id: int,
        store: EntityStore = Depends(provide_store),  # noqa: B008
    ) -> Response:
        store.delete(entity_id)
        logger.info("%s deleted: id=%s", kind.value, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


routers = [build_entity_router(kind) for kind in EntityKind]
