from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.responses import Response
from pydantic import BaseModel

from learntree.apis.deps import CurrentWorkspace
from learntree.core.config import settings
from learntree.modules.transfer.importer import ImportFormatError
from learntree.modules.tree.utils import count_nodes


router = APIRouter()

BASE = f"/{settings.app.version}/workspaces/{{workspace_id}}"


class ImportResponse(BaseModel):
    shape: str
    total_nodes: int
    total_cards: int


@router.get(f"{BASE}/export", tags=["transfer"])
async def export_json(ws: CurrentWorkspace) -> Response:
    return Response(
        content=ws.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="learntree-{ws.id}.json"'},
    )


@router.get(f"{BASE}/export.csv", tags=["transfer"])
async def export_csv(ws: CurrentWorkspace) -> Response:
    return Response(
        content=ws.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="learntree-{ws.id}.csv"'},
    )


@router.post(f"{BASE}/import", response_model=ImportResponse, tags=["transfer"])
async def import_data(ws: CurrentWorkspace, payload: Any = Body(...)) -> ImportResponse:
    try:
        result = ws.import_data(payload)
    except ImportFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ImportResponse(
        shape=result.shape.value,
        total_nodes=count_nodes(ws.tree),
        total_cards=len(ws.cards),
    )
