"""여행 계획(TravelPlan)과 계획 항목(PlanItem) 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class PlanItem(BaseModel):
    """계획에 종속된 항목.

    `entity_type`은 자유 형식 태그이며 `entity_id`가 실제로 존재하는지는
    확인하지 않는다. 이미 삭제된 엔티티를 가리킬 수도 있다.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="항목 ID")
    plan_id: int = Field(..., description="소유 계획 ID")
    entity_type: str = Field(..., description="엔티티 종류 (place / accommodation / restaurant 등)")
    entity_id: int = Field(..., description="해당 엔티티 저장소의 ID")
    visit_date: str | None = Field(default=None, description="방문 예정일")
    notes: str | None = Field(default=None, description="메모")


class PlanItemRequest(BaseModel):
    """계획 항목 생성/수정 요청 본문. `plan_id`는 경로에서 받는다."""

    model_config = ConfigDict(extra="ignore")

    entity_type: str = Field(..., description="엔티티 종류")
    entity_id: int = Field(..., description="엔티티 ID")
    visit_date: str | None = Field(default=None, description="방문 예정일")
    notes: str | None = Field(default=None, description="메모")


class TravelPlanRequest(BaseModel):
    """여행 계획 생성/수정 요청 본문.

    원본 API는 계획 전체 객체를 그대로 받았으므로 `id`, `items`가 섞여 와도
    무시한다. 항목은 `/plans/{plan_id}/items`로만 변경한다.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="계획 이름")
    start_date: str | None = Field(default=None, description="시작일 (YYYY-MM-DD)")
    end_date: str | None = Field(default=None, description="종료일 (YYYY-MM-DD)")


class TravelPlan(BaseModel):
    """여행 계획.

    `items`는 단건 조회에서만 채워지고, 목록 조회/생성/수정 응답에서는 `None`이다.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="계획 ID")
    name: str = Field(..., description="계획 이름")
    start_date: str | None = Field(default=None, description="시작일")
    end_date: str | None = Field(default=None, description="종료일")
    items: list[PlanItem] | None = Field(default=None, description="계획 항목 (단건 조회 시에만 포함)")
