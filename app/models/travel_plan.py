# app/models/travel_plan.py
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


# 여행 계획 (애그리거트 루트)
class TravelPlan(Base):
    __tablename__ = "travel_plans"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # ISO-8601 날짜 문자열 (예: 2024-01-01). 형식은 강제하지 않는다.
    start_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # 삭제는 DB의 ON DELETE CASCADE에 맡긴다
    items: Mapped[list["PlanItem"]] = relationship(
        back_populates="plan",
        passive_deletes=True,
        order_by="PlanItem.id",
    )

    def __repr__(self):
        return f"<TravelPlan(id={self.id}, name={self.name})>"


# 여행 계획 항목 (하나의 TravelPlan에 종속)
class PlanItem(Base):
    __tablename__ = "plan_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    plan_id: Mapped[int] = mapped_column(
        ForeignKey("travel_plans.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    # 'place', 'accommodation', 'restaurant' 등 자유 형식 태그.
    # entity_id가 실제 행을 가리키는지는 검증하지 않는다.
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)

    visit_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    plan: Mapped[TravelPlan] = relationship(back_populates="items")

    def __repr__(self):
        return f"<PlanItem(id={self.id}, plan_id={self.plan_id}, entity_type={self.entity_type})>"
