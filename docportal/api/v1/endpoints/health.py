from fastapi import APIRouter
from typing import Any

from docportal.core.config import settings

router = APIRouter()


@router.get("", response_model=dict[str, Any])
def health_check() -> Any:
    """
    Liveness probe with the running version.
    """
    return {"status": "ok", "service": settings.PROJECT_NAME, "version": settings.VERSION}
