"""여행 계획 리포지토리 테스트."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import func, select, text

from app.core.exceptions import NotFoundError, PersistenceError
from app.database import StorageHandle
from app.models.travel_plan import PlanItem as PlanItemRow
from app.schemas.plan import PlanItemRequest, TravelPlanRequest
from app.services.plan_service import PlanRepository


def _make_repository() -> tuple[PlanRepository, StorageHandle]:
    storage = StorageHandle.from_url("sqlite://")
    storage.create_schema()
    return PlanRepository(storage), storage


def _count_items(storage: StorageHandle, plan_id: int) -> int:
    with storage.access() as session:
        return session.scalar(select(func.count()).select_from(PlanItemRow).where(PlanItemRow.plan_id == plan_id))


def test_create_plan_assigns_id_without_items() -> None:
    repository, _ = _make_repository()

    plan = repository.create_plan(TravelPlanRequest(name="Trip", start_date="2024-01-01", end_date="2024-01-05"))

    assert plan.id == 1
    assert plan.name == "Trip"
    assert plan.start_date == "2024-01-01"
    assert plan.end_date == "2024-01-05"
    assert plan.items is None


def test_list_plans_omits_items_and_reports_total() -> None:
    repository, _ = _make_repository()
    first = repository.create_plan(TravelPlanRequest(name="Spring"))
    repository.create_plan(TravelPlanRequest(name="Autumn"))
    repository.add_plan_item(first.id, PlanItemRequest(entity_type="place", entity_id=1))

    plans, total = repository.list_plans()

    assert total == 2
    assert [plan.name for plan in plans] == ["Spring", "Autumn"]
    assert all(plan.items is None for plan in plans)


def test_get_plan_returns_empty_items_list() -> None:
    repository, _ = _make_repository()
    created = repository.create_plan(TravelPlanRequest(name="Empty"))

    plan = repository.get_plan(created.id)

    assert plan.items == []


def test_get_missing_plan_raises_not_found() -> None:
    repository, _ = _make_repository()

    with pytest.raises(NotFoundError):
        repository.get_plan(42)


def test_added_item_round_trips_through_get_plan() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip", start_date="2024-01-01", end_date="2024-01-05"))

    item = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7, notes="see fountain"))

    assert item.id == 1
    assert item.plan_id == plan.id

    fetched = repository.get_plan(plan.id)
    assert [entry.model_dump() for entry in fetched.items] == [
        {
            "id": 1,
            "plan_id": plan.id,
            "entity_type": "place",
            "entity_id": 7,
            "visit_date": None,
            "notes": "see fountain",
        }
    ]


def test_items_keep_insertion_order() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    for entity_type, entity_id in [("restaurant", 3), ("place", 1), ("accommodation", 2)]:
        repository.add_plan_item(plan.id, PlanItemRequest(entity_type=entity_type, entity_id=entity_id))

    items = repository.get_plan(plan.id).items

    assert [item.entity_type for item in items] == ["restaurant", "place", "accommodation"]


def test_get_plan_skips_unreadable_item_rows(caplog) -> None:
    repository, storage = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7))
    with storage.access() as session:
        session.execute(
            text("INSERT INTO plan_items (plan_id, entity_type, entity_id) VALUES (:plan_id, 'place', 'not-a-number')"),
            {"plan_id": plan.id},
        )
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="restaurant", entity_id=9))

    with caplog.at_level(logging.WARNING, logger="app.services.plan_service"):
        fetched = repository.get_plan(plan.id)

    assert [item.entity_id for item in fetched.items] == [7, 9]
    assert "Skipping unreadable plan item row" in caplog.text


def test_update_plan_replaces_metadata_and_keeps_items() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Draft"))
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=1))

    updated = repository.update_plan(plan.id, TravelPlanRequest(name="Final", start_date="2024-03-01"))

    assert updated.name == "Final"
    assert updated.start_date == "2024-03-01"
    assert updated.end_date is None
    assert updated.items is None
    assert len(repository.get_plan(plan.id).items) == 1


def test_update_missing_plan_raises_not_found() -> None:
    repository, _ = _make_repository()

    with pytest.raises(NotFoundError):
        repository.update_plan(5, TravelPlanRequest(name="Ghost"))


def test_delete_plan_removes_all_items() -> None:
    repository, storage = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    other = repository.create_plan(TravelPlanRequest(name="Other"))
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7))
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="restaurant", entity_id=8))
    repository.add_plan_item(other.id, PlanItemRequest(entity_type="place", entity_id=7))

    repository.delete_plan(plan.id)

    with pytest.raises(NotFoundError):
        repository.get_plan(plan.id)
    assert _count_items(storage, plan.id) == 0
    assert _count_items(storage, other.id) == 1


def test_database_cascade_removes_items_on_plan_delete() -> None:
    repository, storage = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7))

    with storage.access() as session:
        session.execute(text("DELETE FROM travel_plans WHERE id = :plan_id"), {"plan_id": plan.id})

    assert _count_items(storage, plan.id) == 0


def test_delete_missing_plan_raises_not_found() -> None:
    repository, _ = _make_repository()

    with pytest.raises(NotFoundError):
        repository.delete_plan(1)


def test_add_item_to_missing_plan_is_persistence_error() -> None:
    repository, _ = _make_repository()

    with pytest.raises(PersistenceError):
        repository.add_plan_item(99, PlanItemRequest(entity_type="place", entity_id=1))


def test_add_item_does_not_validate_entity_reference() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))

    item = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="museum", entity_id=12345))

    assert item.entity_type == "museum"
    assert repository.get_plan(plan.id).items[0].entity_id == 12345


def test_update_plan_item_requires_matching_plan() -> None:
    repository, _ = _make_repository()
    first = repository.create_plan(TravelPlanRequest(name="First"))
    second = repository.create_plan(TravelPlanRequest(name="Second"))
    item = repository.add_plan_item(first.id, PlanItemRequest(entity_type="place", entity_id=1))

    with pytest.raises(NotFoundError):
        repository.update_plan_item(second.id, item.id, PlanItemRequest(entity_type="restaurant", entity_id=2))

    assert repository.get_plan(first.id).items[0].entity_type == "place"


def test_update_plan_item_replaces_fields() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    item = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=1, notes="morning"))

    updated = repository.update_plan_item(
        plan.id, item.id, PlanItemRequest(entity_type="restaurant", entity_id=2, visit_date="2024-01-02")
    )

    assert updated.id == item.id
    assert updated.plan_id == plan.id
    assert updated.notes is None
    stored = repository.get_plan(plan.id).items[0]
    assert stored.entity_type == "restaurant"
    assert stored.entity_id == 2
    assert stored.visit_date == "2024-01-02"
    assert stored.notes is None


def test_update_unknown_plan_item_raises_not_found() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))

    with pytest.raises(NotFoundError):
        repository.update_plan_item(plan.id, 999, PlanItemRequest(entity_type="place", entity_id=1))


def test_delete_plan_item_requires_matching_plan() -> None:
    repository, storage = _make_repository()
    first = repository.create_plan(TravelPlanRequest(name="First"))
    second = repository.create_plan(TravelPlanRequest(name="Second"))
    item = repository.add_plan_item(first.id, PlanItemRequest(entity_type="place", entity_id=1))

    with pytest.raises(NotFoundError):
        repository.delete_plan_item(second.id, item.id)
    assert _count_items(storage, first.id) == 1

    repository.delete_plan_item(first.id, item.id)
    assert _count_items(storage, first.id) == 0

    with pytest.raises(NotFoundError):
        repository.delete_plan_item(first.id, item.id)


def test_deleted_plan_and_item_ids_are_not_reused() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    item = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7))

    repository.delete_plan(plan.id)
    new_plan = repository.create_plan(TravelPlanRequest(name="Trip again"))
    new_item = repository.add_plan_item(new_plan.id, PlanItemRequest(entity_type="place", entity_id=7))

    assert new_plan.id != plan.id
    assert new_item.id != item.id


def test_deleted_plan_item_id_is_not_reused_within_plan() -> None:
    repository, _ = _make_repository()
    plan = repository.create_plan(TravelPlanRequest(name="Trip"))
    item = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=7))

    repository.delete_plan_item(plan.id, item.id)
    replacement = repository.add_plan_item(plan.id, PlanItemRequest(entity_type="place", entity_id=8))

    assert replacement.id != item.id
