"""공용 열거형 정의."""

from enum import Enum


class EntityKind(str, Enum):
    """검색/계획 항목이 가리키는 엔티티 종류.

    선언 순서가 곧 통합 검색 결과의 정렬 순서다.
    """

    PLACE = "place"
    ACCOMMODATION = "accommodation"
    RESTAURANT = "restaurant"
