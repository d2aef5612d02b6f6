from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from ..audit import entity_history
from ..errors import StorageError
from .deps import db_path

router = APIRouter()


@router.get("/api/history/{entity_type}")
def api_history(
    entity_type: Literal["owner", "pet"],
    entity_id: int | None = None,
    action: str | None = None,
    result: str | None = None,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    path: str = Depends(db_path),
):
    try:
        total, items = entity_history(path, entity_type, entity_id, action, result, page, size)
    except StorageError as se:
        raise HTTPException(status_code=500, detail=str(se))
    return {"total": total, "items": items}
