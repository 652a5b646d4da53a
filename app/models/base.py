# app/models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """모든 SQLAlchemy 모델의 기반이 되는 선언적 기본 클래스.

    장소/숙소/식당 테이블과 여행 계획 테이블이 동일한 메타데이터 레지스트리를
    공유하므로, `Base.metadata.create_all()` 한 번으로 전체 스키마가 생성됩니다.
    """

    pass
