"""Match data endpoints: read, edit and upload the current scoresheet."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import settings
from ..dependencies import (
    get_current_match_id,
    get_orchestrator,
    get_record_store,
    get_upload_dir,
)
from ..models import MatchRecord
from ..services.extraction import ExtractionError, ExtractionOrchestrator
from ..services.normalization import normalize_record
from ..services.record_store import RecordStore, RecordStoreError, load_or_default
from ..services.uploads import UploadTooLargeError, store_upload

router = APIRouter(prefix="/api", tags=["match-data"])
logger = logging.getLogger(__name__)


class AckResponse(BaseModel):
    ok: bool = True


class UploadResponse(BaseModel):
    ok: bool = True
    filename: str
    path: str
    extracted: bool = True


@router.get("/data", response_model=MatchRecord)
async def get_match_data(
    store: RecordStore = Depends(get_record_store),
    match_id: str = Depends(get_current_match_id),
) -> MatchRecord:
    """Return the current record, creating a default one on first read."""
    return load_or_default(store, match_id)


@router.put("/data", response_model=AckResponse)
async def replace_match_data(
    payload: Any = Body(None),
    store: RecordStore = Depends(get_record_store),
    match_id: str = Depends(get_current_match_id),
) -> AckResponse:
    """Replace the record with the normalized body.

    Keys missing from the body take their default values; the stored
    record is not consulted. Use PATCH to keep stored values.
    """
    store.save(match_id, normalize_record(payload))
    return AckResponse()


@router.patch("/data", response_model=AckResponse)
async def update_match_data(
    payload: Any = Body(None),
    store: RecordStore = Depends(get_record_store),
    match_id: str = Depends(get_current_match_id),
) -> AckResponse:
    """Overlay the body's camelCase keys on the stored record, then normalize."""
    merged = load_or_default(store, match_id).to_wire()
    if isinstance(payload, dict):
        merged.update(payload)
    store.save(match_id, normalize_record(merged))
    return AckResponse()


@router.post("/upload", response_model=UploadResponse)
async def upload_scoresheet(
    scoresheet: UploadFile | None = File(None),
    store: RecordStore = Depends(get_record_store),
    match_id: str = Depends(get_current_match_id),
    upload_dir: Path = Depends(get_upload_dir),
    orchestrator: ExtractionOrchestrator = Depends(get_orchestrator),
) -> UploadResponse | JSONResponse:
    """Store an uploaded scoresheet and replace the record with its extraction.

    Example response:
        {"ok": true, "filename": "sheet.pdf", "path": "1760781234567-sheet.pdf", "extracted": true}

    On extraction failure the file is kept and the record is untouched:
        {"error": "...", "uploaded": true, "filename": "sheet.pdf"}
    """
    if scoresheet is None:
        return JSONResponse({"error": "No file uploaded"}, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        stored = store_upload(
            scoresheet.file,
            scoresheet.filename,
            upload_dir,
            max_bytes=settings.max_upload_bytes,
        )
    except UploadTooLargeError as e:
        return JSONResponse({"error": str(e)}, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)

    try:
        result = await orchestrator.extract(stored.path, stored.original_name)
        store.save(match_id, result.record)
    except (ExtractionError, RecordStoreError) as e:
        logger.error(
            "scoresheet_extraction_failed",
            extra={"stored_name": stored.stored_name, "error": str(e)},
        )
        return JSONResponse(
            {"error": str(e) or "Extraction failed", "uploaded": True, "filename": stored.original_name},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return UploadResponse(filename=stored.original_name, path=stored.stored_name)
