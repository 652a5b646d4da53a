"""저장소 계층에서 발생하는 예외 정의.

라우터는 이 예외들을 직접 잡지 않고, `app.main`에 등록된 예외 핸들러가
HTTP 응답으로 변환한다.
"""


class StorageError(Exception):
    """저장소 작업 실패의 공통 기반 예외."""


class NotFoundError(StorageError):
    """조회/수정/삭제 키와 일치하는 행이 없는 경우.

    수정/삭제 경로에서는 영향받은 행 수가 0인 것만으로 판단한다.
    """

    def __init__(self, resource: str, key: object) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found: {key}")


class PersistenceError(StorageError):
    """구문 준비/실행 실패. 제약 조건 위반도 구분하지 않고 여기에 포함된다."""

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
