"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from app.api import entities, plans, search
from app.core.config import Settings, get_settings
from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.readiness import collect_readiness_status
from app.database import StorageHandle, create_storage_handle

configure_logging(sql_echo=get_settings().DB_ECHO)
logger = get_logger(__name__)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in {"disabled", "public"}:
        return normalized
    logger.warning("유효하지 않은 DOCS_MODE 값입니다. disabled로 대체합니다: %s", mode)
    return "disabled"


def _configure_trusted_hosts(app_: FastAPI, settings: Settings) -> None:
    trusted_hosts = _split_csv(settings.TRUSTED_HOSTS)
    if not trusted_hosts:
        return

    app_.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)


def _configure_cors(app_: FastAPI, settings: Settings) -> None:
    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_methods = _split_csv(settings.CORS_ALLOW_METHODS) or ["GET"]
    allow_headers = _split_csv(settings.CORS_ALLOW_HEADERS) or ["Content-Type"]
    allow_credentials = settings.CORS_ALLOW_CREDENTIALS

    if "*" in origins and allow_credentials:
        logger.warning(
            "CORS_ALLOW_ORIGINS에 '*'와 CORS_ALLOW_CREDENTIALS=true가 함께 설정되어 "
            "allow_credentials를 false로 강제합니다."
        )
        allow_credentials = False

    # 관리 화면이 목록 크기 헤더를 읽을 수 있도록 노출한다
    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=allow_methods,
        allow_headers=allow_headers,
        expose_headers=_split_csv(settings.CORS_EXPOSE_HEADERS),
    )


def _register_exception_handlers(app_: FastAPI, settings: Settings) -> None:
    @app_.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
        """일치하는 행이 없으면 본문 없는 404로 응답합니다."""
        logger.info("Not found on %s %s: %s", request.method, request.url.path, exc)
        return Response(status_code=404)

    @app_.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        """저장소 실패는 내부 정보를 숨긴 채 500으로 응답합니다."""
        logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
        message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "저장소 처리 중 오류가 발생했습니다."
        return JSONResponse(status_code=500, content={"detail": message})

    @app_.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """예상하지 못한 예외를 표준 형식으로 처리합니다."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "내부 서버 오류가 발생했습니다."
        return JSONResponse(status_code=500, content={"detail": message})


def create_app(settings: Settings | None = None, storage: StorageHandle | None = None) -> FastAPI:
    """애플리케이션을 생성합니다.

    Args:
        settings: 사용할 설정. 없으면 환경 변수에서 읽는다.
        storage: 공유 저장소 핸들. 없으면 `DATABASE_URL`로 새로 만든다.

    Returns:
        라우터, 미들웨어, 예외 핸들러가 등록된 `FastAPI` 인스턴스.
    """
    resolved_settings = settings or get_settings()
    storage_handle = storage or create_storage_handle(resolved_settings)
    docs_mode = _resolve_docs_mode(resolved_settings.DOCS_MODE)

    @asynccontextmanager
    async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
        storage_handle.create_schema()
        yield
        storage_handle.dispose()

    app_ = FastAPI(
        title="Travel Planner API",
        lifespan=lifespan,
        docs_url="/docs" if docs_mode == "public" else None,
        redoc_url="/redoc" if docs_mode == "public" else None,
        openapi_url="/openapi.json" if docs_mode == "public" else None,
    )
    app_.state.settings = resolved_settings
    app_.state.storage = storage_handle

    _configure_trusted_hosts(app_, resolved_settings)
    _configure_cors(app_, resolved_settings)
    _register_exception_handlers(app_, resolved_settings)

    for router in entities.routers:
        app_.include_router(router)
    app_.include_router(search.router)
    app_.include_router(plans.router)

    @app_.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        """기본 보안 헤더를 응답에 추가합니다."""
        response = await call_next(request)
        if not resolved_settings.SECURITY_HEADERS_ENABLED:
            return response

        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        return response

    @app_.get("/")
    def health_check() -> dict:
        """헬스 체크 엔드포인트."""
        return {"status": "ok", "message": "Travel Planner API is running"}

    @app_.get("/health/ready")
    async def readiness_check() -> JSONResponse:
        """DB 준비 상태를 점검합니다. 준비되지 않았으면 503."""
        result = await collect_readiness_status(
            storage_handle, timeout_seconds=resolved_settings.READINESS_TIMEOUT_SECONDS
        )
        status_code = 200 if result["status"] == "ready" else 503
        return JSONResponse(status_code=status_code, content=result)

    return app_


app = create_app()
