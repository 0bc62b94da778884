"""FastAPI dependencies for the scoresheet API."""

from scoresheet.dependencies.services import (
    get_current_match_id,
    get_orchestrator,
    get_record_store,
    get_upload_dir,
)

__all__ = [
    "get_current_match_id",
    "get_orchestrator",
    "get_record_store",
    "get_upload_dir",
]
