"""장소/숙소/식당 공통 요청·응답 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class EntityRequest(BaseModel):
    """엔티티 생성/수정 요청 본문.

    원본 API와의 호환을 위해 본문에 포함된 `id`는 무시한다.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="이름")
    description: str | None = Field(default=None, description="설명")
    location: str | None = Field(default=None, description="위치")


class EntityRecord(BaseModel):
    """저장된 엔티티 레코드."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="저장소가 할당한 ID")
    name: str = Field(..., description="이름")
    description: str | None = Field(default=None, description="설명")
    location: str | None = Field(default=None, description="위치")
