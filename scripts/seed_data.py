import os
import sys

from sqlalchemy import select

# 경로 설정 - 스크립트 위치 기준으로 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.database import StorageHandle, create_storage_handle
from app.models.entity import Accommodation, Place, Restaurant
from app.models.travel_plan import PlanItem, TravelPlan

logger = get_logger("scripts.seed_data")

SAMPLE_ENTITIES = {
    Place: [
        {"name": "Lake View Cabin", "description": "Quiet cabin overlooking the lake", "location": "North Shore"},
        {"name": "Old Town Fountain", "description": "Baroque fountain in the main square", "location": "Old Town"},
        {"name": "City Museum", "description": "Local history and art collections", "location": "Museum Quarter"},
    ],
    Accommodation: [
        {"name": "Harbor Hotel", "description": "Rooms with a view of the lake harbor", "location": "Harbor"},
        {"name": "Hillside Hostel", "description": "Budget dorms near the station", "location": "Central Station"},
    ],
    Restaurant: [
        {"name": "Lakeside Café", "description": "Breakfast and coffee by the water", "location": "North Shore"},
        {"name": "Trattoria Roma", "description": "Handmade pasta", "location": "Old Town"},
    ],
}

SAMPLE_PLAN = {"name": "Weekend by the Lake", "start_date": "2024-06-01", "end_date": "2024-06-02"}


def seed_entities(storage: StorageHandle) -> int:
    """샘플 장소/숙소/식당을 저장합니다.

    같은 이름의 행이 이미 있으면 건너뛰므로 여러 번 실행해도 중복되지 않습니다.

    Returns:
        새로 저장한 행 수.
    """
    inserted = 0
    with storage.access() as session:
        for model, samples in SAMPLE_ENTITIES.items():
            for sample in samples:
                exists = session.scalar(select(model.id).where(model.name == sample["name"]))
                if exists is not None:
                    logger.info("⏭️ 이미 존재: %s (%s)", sample["name"], model.__tablename__)
                    continue
                session.add(model(**sample))
                inserted += 1
    return inserted


def seed_plan(storage: StorageHandle) -> int | None:
    """샘플 계획 하나와 항목들을 저장합니다. 이미 있으면 `None`."""
    with storage.access() as session:
        if session.scalar(select(TravelPlan.id).where(TravelPlan.name == SAMPLE_PLAN["name"])) is not None:
            logger.info("⏭️ 이미 존재: %s", SAMPLE_PLAN["name"])
            return None

        cabin_id = session.scalar(select(Place.id).where(Place.name == "Lake View Cabin"))
        cafe_id = session.scalar(select(Restaurant.id).where(Restaurant.name == "Lakeside Café"))

        plan = TravelPlan(**SAMPLE_PLAN)
        if cabin_id is not None:
            plan.items.append(PlanItem(entity_type="place", entity_id=cabin_id, visit_date="2024-06-01"))
        if cafe_id is not None:
            plan.items.append(
                PlanItem(entity_type="restaurant", entity_id=cafe_id, visit_date="2024-06-02", notes="brunch")
            )
        session.add(plan)
        session.flush()
        return plan.id


def main():
    """스키마를 만들고 샘플 데이터를 적재합니다."""
    configure_logging(sql_echo=get_settings().DB_ECHO)
    logger.info("🚀 샘플 데이터 적재 시작...")

    storage = create_storage_handle()
    try:
        storage.create_schema()
        inserted = seed_entities(storage)
        plan_id = seed_plan(storage)
    finally:
        storage.dispose()

    logger.info("✅ 엔티티 %d건 저장, 계획 ID: %s", inserted, plan_id)


if __name__ == "__main__":
    main()
