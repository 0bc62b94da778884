from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scoresheet.config import settings
from scoresheet.logging_config import configure_logging
from scoresheet.middleware.body_limit import BodyLimitMiddleware
from scoresheet.middleware.logging import AccessLogMiddleware
from scoresheet.routers import match_data
from scoresheet.services.record_store import RecordStoreError
from scoresheet.validate_env import validate_env

validate_env()
configure_logging(service="scoresheet-api", environment=settings.environment, log_level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="scoresheet-api", version="1.0.0")

app.add_middleware(BodyLimitMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(match_data.router)


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
    logger.error("record_store_failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
