"""Health check and web page endpoints."""
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, JSONResponse

from app.core.config import settings
from app.models.responses import DependencyStatus, HealthData

router = APIRouter(tags=["health"])

INDEX_PAGE = Path(__file__).resolve().parent.parent / "web" / "index.html"


@lru_cache()
def _load_index_page() -> str:
    return INDEX_PAGE.read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
async def root():
    """Serve the web form."""
    return HTMLResponse(content=_load_index_page())


@router.get("/health")
async def health_check():
    """
    Health check endpoint with dependency configuration status
    """
    dependencies = DependencyStatus(
        youtube_data_api="configured" if settings.youtube_api_key else "not_configured",
        openai="configured" if settings.openai_api_key else "not_configured"
    )

    health_data = HealthData(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.api_version,
        dependencies=dependencies
    )

    return JSONResponse(
        status_code=200,
        content=health_data.model_dump()
    )
