"""
FastAPI メインアプリケーション
LifeLog - 個人向けライフログ管理 API
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

load_dotenv()

from app.auth import router as auth_router
from app.config import settings, validate_settings
from app.database import Base, check_connection, engine
from app.errors import AppError
from app.rate_limiter import limiter
from app.routers.boards import router as boards_router
from app.routers.document_categories import router as document_categories_router
from app.routers.documents import router as documents_router
from app.routers.health import router as health_router
from app.routers.items import router as items_router
from app.routers.journals import router as journals_router
from app.routers.lendings import router as lendings_router
from app.routers.locations import router as locations_router
from app.routers.notebooks import router as notebooks_router
from app.routers.notes import router as notes_router
from app.routers.tags import router as tags_router
from app.routers.tasks import router as tasks_router
from app.routers.user import router as user_router
from app.routers.vault_categories import router as vault_categories_router
from app.routers.vault_items import router as vault_items_router

from app import models  # noqa: F401  テーブル定義を Base.metadata に登録

# ログ設定
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================
# ライフサイクル管理
# ============================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションの起動・終了処理"""
    logger.info(f"{settings.PROJECT_NAME} Backend starting... (env={settings.ENV})")

    # 本番環境では設定不備があれば起動しない
    validate_settings()

    if check_connection():
        logger.info("Database connection test successful")
        Base.metadata.create_all(bind=engine)
    else:
        logger.error("Database connection test failed")

    yield

    logger.info(f"{settings.PROJECT_NAME} Backend shutting down...")
    engine.dispose()


# ============================================
# FastAPI アプリケーション
# ============================================
app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="タスク・ジャーナル・ノート・保管庫・ドキュメント・持ち物を管理する個人向け API",
    version=settings.VERSION,
    lifespan=lifespan,
)

# レート制限
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    max_age=3600,
)


# ============================================
# ミドルウェア
# ============================================
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """リクエストのメソッド・パス・ステータス・処理時間を記録"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
    )
    return response


# ============================================
# 例外ハンドラ
# ============================================
def _error_body(error: str, message: str, status_code: int, **extra) -> dict:
    return {
        "error": error,
        "message": message,
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **extra,
    }


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.message} ({request.method} {request.url.path})")
    extra = {"details": exc.details} if exc.details is not None else {}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error, exc.message, exc.status_code, **extra),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "ValidationError", "Invalid request data", status.HTTP_400_BAD_REQUEST, details=details
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # ルート未定義の 404 のみ共通形式にする（それ以外は FastAPI 標準の {detail}）
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(
                "NotFound",
                f"Route {request.method}:{request.url.path} not found",
                status.HTTP_404_NOT_FOUND,
            ),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {request.method} {request.url.path}")
    message = "Internal Server Error" if settings.is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal Server Error", message, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


# ルータ登録
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(boards_router)
app.include_router(tasks_router)
app.include_router(journals_router)
app.include_router(notebooks_router)
app.include_router(notes_router)
app.include_router(tags_router)
app.include_router(vault_categories_router)
app.include_router(vault_items_router)
app.include_router(document_categories_router)
app.include_router(documents_router)
app.include_router(locations_router)
app.include_router(items_router)
app.include_router(lendings_router)


# ============================================
# 基本エンドポイント
# ============================================
@app.get("/api")
def api_info():
    """API 情報とエンドポイント一覧"""
    return {
        "message": f"{settings.PROJECT_NAME} Backend API",
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "health": "/health",
            "auth": "/api/auth",
            "users": "/api/users",
            "boards": "/api/boards",
            "tasks": "/api/tasks",
            "journals": "/api/journals",
            "notebooks": "/api/notebooks",
            "notes": "/api/notes",
            "tags": "/api/tags",
            "vaultCategories": "/api/vault-categories",
            "vaultItems": "/api/vault-items",
            "documentCategories": "/api/document-categories",
            "documents": "/api/documents",
            "locations": "/api/locations",
            "items": "/api/items",
            "lendings": "/api/lendings",
        },
    }


# ============================================
# 開発サーバー起動
# ============================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info"
    )
