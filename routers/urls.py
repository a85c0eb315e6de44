from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth import get_current_identity
from config import Settings, get_settings
from database import get_db
from schemas import Identity, LinkCreate
from services import create_short_url, resolve_and_record

router = APIRouter()


@router.post("")
async def create_link(
    link: Optional[LinkCreate] = None,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    short_id = await create_short_url(db, identity, link.Url if link else None, settings)
    return {"Id": short_id}


@router.get("/{short_id}")
async def redirect_link(
    short_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    original_url = await resolve_and_record(db, identity, short_id)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
