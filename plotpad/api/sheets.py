"""
Sheet API Endpoints

CRUD, tagging, encryption and chart generation for stored sheets.
"""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query, status
import logging

from ..charts import ChartResponse
from ..models import (
    SheetCreateRequest, SheetRenameRequest, SheetContentRequest, TagRequest,
    PasswordRequest, RelockRequest, ChartsRequest, SheetResponse, UnlockResponse
)
from ..sheets import SheetService
from ..utils import handle_error, handle_unlock_failure
from .dependencies import get_sheet_service

logger = logging.getLogger(__name__)

# Create router for sheet endpoints
router = APIRouter(prefix="/sheets", tags=["sheets"])


@router.post("", response_model=SheetResponse, status_code=status.HTTP_201_CREATED)
async def create_sheet(request: SheetCreateRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.create(request.name))
    except Exception as e:
        raise handle_error(e)


@router.get("", response_model=List[SheetResponse])
async def list_sheets(
    q: Optional[str] = Query(default=None, description="Filter by name or tag"),
    service: SheetService = Depends(get_sheet_service)
):
    try:
        return [SheetResponse.from_sheet(sheet) for sheet in await service.search(q or "")]
    except Exception as e:
        raise handle_error(e)


@router.get("/{sheet_id}", response_model=SheetResponse)
async def get_sheet(sheet_id: int, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.get(sheet_id))
    except Exception as e:
        raise handle_error(e)


@router.patch("/{sheet_id}", response_model=SheetResponse)
async def rename_sheet(sheet_id: int, request: SheetRenameRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.rename(sheet_id, request.name))
    except Exception as e:
        raise handle_error(e)


@router.put("/{sheet_id}/content", response_model=SheetResponse)
async def update_content(sheet_id: int, request: SheetContentRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.update_content(sheet_id, request.content))
    except Exception as e:
        raise handle_error(e)


@router.post("/{sheet_id}/tags", response_model=SheetResponse)
async def add_tag(sheet_id: int, request: TagRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.add_tag(sheet_id, request.tag))
    except Exception as e:
        raise handle_error(e)


@router.delete("/{sheet_id}/tags/{tag}", response_model=SheetResponse)
async def remove_tag(sheet_id: int, tag: str, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.remove_tag(sheet_id, tag))
    except Exception as e:
        raise handle_error(e)


@router.post("/{sheet_id}/lock", response_model=SheetResponse)
async def lock_sheet(sheet_id: int, request: PasswordRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        return SheetResponse.from_sheet(await service.lock(sheet_id, request.password))
    except Exception as e:
        raise handle_error(e)


@router.post("/{sheet_id}/unlock", response_model=UnlockResponse)
async def unlock_sheet(sheet_id: int, request: PasswordRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        result = await service.unlock(sheet_id, request.password)
    except Exception as e:
        raise handle_error(e)
    if not result.ok:
        raise handle_unlock_failure(result.failure)
    return UnlockResponse(content=result.content)


@router.post("/{sheet_id}/relock", response_model=SheetResponse)
async def relock_sheet(sheet_id: int, request: RelockRequest, service: SheetService = Depends(get_sheet_service)):
    try:
        sheet = await service.relock(
            sheet_id,
            request.password,
            new_password=request.new_password,
            content=request.content
        )
        return SheetResponse.from_sheet(sheet)
    except Exception as e:
        raise handle_error(e)


@router.delete("/{sheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sheet(sheet_id: int, service: SheetService = Depends(get_sheet_service)):
    try:
        await service.delete(sheet_id)
    except Exception as e:
        raise handle_error(e)


@router.post("/{sheet_id}/charts", response_model=ChartResponse)
async def generate_sheet_charts(
    sheet_id: int,
    request: Optional[ChartsRequest] = None,
    service: SheetService = Depends(get_sheet_service)
):
    """
    Generate charts for a stored sheet.

    Encrypted sheets need the password; a wrong one returns 403.
    """
    try:
        specs = await service.generate_charts(sheet_id, request.password if request else None)
        charts = service.pipeline.render(specs)
        return ChartResponse(charts=charts, recommendations=len(charts))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Chart generation error for sheet {sheet_id}: {str(e)}")
        raise handle_error(e)
