"""통합 검색 응답 스키마."""

from pydantic import BaseModel, Field

from app.schemas.enums import EntityKind


class SearchResultItem(BaseModel):
    """통합 검색 결과의 개별 항목.

    저장되지 않는 읽기 전용 투영(projection)이며, 어느 테이블에서
    왔는지를 `entity_type`으로 표시한다.
    """

    id: int = Field(..., description="원본 테이블의 ID")
    name: str = Field(..., description="이름")
    entity_type: EntityKind = Field(..., description="원본 엔티티 종류")
    description: str | None = Field(default=None, description="설명")
    location: str | None = Field(default=None, description="위치")
