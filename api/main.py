import logging
import sys
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from api.shared.dtos import HealthCheckResponse
from api.shared.exceptions import ChatServiceException, DatabaseError
from core.logging import configure_logging
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

configure_logging(log_level=SETTINGS.APP.LOG_LEVEL, json_logs=SETTINGS.APP.JSON_LOGS)

logger = logging.getLogger("chat")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("Starting application initialization...")
    start_time = time.time()

    try:
        logger.info("Initializing database connection...")
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        async with db_resource.engine.begin() as _conn:
            if db_resource.engine.dialect.name == "postgresql":
                await _conn.execute(text("SET lock_timeout = '4s'"))
                await _conn.execute(text("SET statement_timeout = '8s'"))
            await _conn.execute(text("SELECT 1"))
        logger.info(
            f"Application startup completed in {time.time() - start_time:.2f}s"
        )
    except DatabaseError as e:
        # /health stays up; persistence endpoints report the error code
        logger.warning(f"Database unavailable at startup: {e.error_code}: {e.message}")
    except Exception as e:
        logger.exception(f"Failed to initialize application: {e}")
        raise

    yield

    try:
        db_resource = _app.container.infrastructure.database()
        if db_resource:
            await db_resource.shutdown()
        logger.info("Application shutdown complete")
    except Exception:
        logger.exception("Error during shutdown")


def create_fastapi_app() -> CustomFastAPI:
    origins = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    _app = CustomFastAPI(
        title="Support Chat API",
        description="Chat sessions with LLM-generated support replies",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    _app.container = DependencyContainer()
    _app.container.wire(modules=[sys.modules[__name__]])
    _app.container.init_resources()

    _app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.features.chat.router import router as chat_router

    _app.include_router(chat_router, prefix="/chat", tags=["Chat"])

    return _app


app = create_fastapi_app()


@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/ready", response_model=HealthCheckResponse)
async def ready():
    try:
        await app.container.infrastructure.database().ping()
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=503,
            content={"error": "database_unavailable", "status_code": 503},
        )
    return HealthCheckResponse(status="ok", dependencies={"database": "ok"})


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "detail": str(exc),
            "status_code": 422,
        },
    )


@app.exception_handler(ChatServiceException)
async def chat_exception_handler(request: Request, exc: ChatServiceException):
    if exc.status_code >= 500:
        logger.error(f"Request failed: {exc.error_code}: {exc.message}")
    else:
        logger.info(f"Request error: {exc.error_code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "status_code": exc.status_code},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "status_code": 500},
    )


def run() -> None:
    uvicorn.run(
        "api.main:app",
        host=SETTINGS.APP.HOST,
        port=SETTINGS.APP.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
