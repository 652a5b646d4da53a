# app/models/entity.py
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class EntityColumnsMixin:
    """장소/숙소/식당이 공유하는 단일 테이블 컬럼 정의."""

    # 삭제된 ID를 재사용하지 않도록 SQLite AUTOINCREMENT를 사용한다
    __table_args__ = {"sqlite_autoincrement": True}

    # 저장소가 생성 시 할당하는 기본키 (이후 변경 불가)
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, name={self.name})>"


# 관광지 테이블
class Place(EntityColumnsMixin, Base):
    __tablename__ = "places"


# 숙소 테이블
class Accommodation(EntityColumnsMixin, Base):
    __tablename__ = "accommodations"


# 식당 테이블
class Restaurant(EntityColumnsMixin, Base):
    __tablename__ = "restaurants"
