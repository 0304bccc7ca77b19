# main.py
from fastapi import FastAPI, HTTPException, Request
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from dotenv import load_dotenv
from starlette.exceptions import HTTPException as StarletteHTTPException
from common.config import initialize_config, get_config, is_configured
from common.logger import get_app_logger, get_all_timing_stats
from common.logger.logger_middleware import RequestLoggingMiddleware
from common.api_error import ConfigurationError, AppError
from typing import Any, Optional
from hospital.api.v1 import api_router
from hospital.auth import IdentityProvider
from hospital.db import DbManager
from hospital.services.v1 import AssetUploadClient
from contextlib import asynccontextmanager
from fastapi.responses import JSONResponse

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    import sys

    sys.exit(1)

config = get_config()
logger = get_app_logger(name=__name__, track_timing=True)

app_title = config.app_title
app_version = config.app_version


@asynccontextmanager
async def lifespan(app: FastAPI):
    _db_config = config.database
    if not _db_config:
        raise RuntimeError("Database configuration required (DB_URL or DB_HOST)")

    logger.info("Database target", **_db_config.to_dict_safe())

    db_manager = DbManager.from_config(_db_config)
    await db_manager.verify_connection()

    try:
        await db_manager.prepare_schema(auto_create=_db_config.auto_create)
    except RuntimeError as e:
        logger.error(f"❌ Migration check failed: {e}")
        await db_manager.dispose()
        raise

    identity_provider = IdentityProvider(config.auth)
    identity_provider.start()

    asset_client: Optional[AssetUploadClient] = None
    if config.assets is not None:
        asset_client = AssetUploadClient(config.assets)
    else:
        logger.warning("ASSET_CLOUD_NAME not set, image uploads disabled")

    app.state.db_manager = db_manager
    app.state.identity_provider = identity_provider
    app.state.asset_client = asset_client

    yield
    logger.info("shutting down")
    identity_provider.close()
    if asset_client is not None:
        await asset_client.aclose()
    await db_manager.dispose()


app = FastAPI(
    title=app_title,
    version=app_version,
    description=f"Running in {config.environment} environment",
    lifespan=lifespan,
)
app.state.config = config
app.add_middleware(
    RequestLoggingMiddleware,
    log_client_info=config.environment != "production",
)
app.include_router(api_router)


def _error_body(code: str, message: str) -> dict[str, str]:
    return {
        "error": code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    request_logger = logger.bind(request_id=getattr(request.state, "request_id", None))
    log = request_logger.error if exc.status_code >= 500 else request_logger.warning
    log(
        f"Domain Error: {exc.code}",
        path=request.url.path,
        error_code=exc.code,
        message=exc.message,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes fall through to here as well as explicit HTTPExceptions
    if exc.status_code == 404 and exc.detail == "Not Found":
        body = _error_body("NOT_FOUND", f"No route for {request.url.path}")
    elif isinstance(exc.detail, dict):
        body = exc.detail
    else:
        body = _error_body(f"HTTP_{exc.status_code}", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    logging_configured: bool = Field(..., description="Logging configuration status")
    log_level: str = Field(..., description="Application log level")
    database: dict[str, Any] = Field(..., description="Record store ping result")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message describing the failure")
    timestamp: datetime = Field(..., description="Server time when the error occurred")


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    responses={
        200: {"description": "System is healthy", "model": HealthCheckResponse},
        503: {"description": "Record store unreachable", "model": ErrorResponse},
    },
)
async def check_health(request: Request) -> HealthCheckResponse:
    database = await request.app.state.db_manager.health_check()
    if not database["healthy"]:
        logger.error("Health check failed", endpoint="/health", error=database.get("error"))
        err = ErrorResponse(
            error="record store unreachable",
            timestamp=datetime.now(timezone.utc),
        )
        raise HTTPException(status_code=503, detail=err.model_dump(mode="json"))

    logger.debug("Health check passed", version=app_version, endpoint="/health")
    return HealthCheckResponse(
        status="Healthy",
        timestamp=datetime.now(timezone.utc),
        version=app_version,
        logging_configured=is_configured(),
        log_level=get_config().logging.level_value,
        database=database,
    )


@app.get("/metrics")
async def metrics() -> dict[str, Any]:
    """Time spent in log calls, per timed logger."""
    return {"loggers": get_all_timing_stats()}


__all__ = ["app", "config"]
