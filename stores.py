import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import DateTime, insert, literal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from errors import DuplicateEmailError, ShortIdTakenError
from models import AccessRecord, UrlMapping, User

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, full_name: str, email: str, hashed_password: str) -> User:
    if await find_user_by_email(db, email) is not None:
        raise DuplicateEmailError()
    new_user = User(full_name=full_name, email=email, hashed_password=hashed_password)
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup for the same email
        await db.rollback()
        raise DuplicateEmailError()
    await db.refresh(new_user)
    return new_user


async def find_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    stmt = select(User).filter(User.email == email)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_mapping(db: AsyncSession, original_url: str, short_id: str) -> UrlMapping:
    mapping = UrlMapping(original_url=original_url, short_id=short_id)
    db.add(mapping)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ShortIdTakenError()
    await db.refresh(mapping)
    return mapping


async def short_id_exists(db: AsyncSession, short_id: str) -> bool:
    stmt = select(UrlMapping.id).filter(UrlMapping.short_id == short_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none() is not None


async def find_by_short_id(db: AsyncSession, short_id: str) -> Optional[UrlMapping]:
    stmt = (
        select(UrlMapping)
        .options(selectinload(UrlMapping.visits))
        .filter(UrlMapping.short_id == short_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def record_access(db: AsyncSession, short_id: str, timestamp: datetime) -> Optional[UrlMapping]:
    # lookup and append in one statement; no row is written for an unknown id
    source = select(UrlMapping.id, literal(timestamp, DateTime(timezone=True))).filter(
        UrlMapping.short_id == short_id
    )
    stmt = insert(AccessRecord).from_select(["url_id", "visited_at"], source)
    result = await db.execute(stmt)
    if result.rowcount == 0:
        await db.rollback()
        return None
    await db.commit()
    # access log is not loaded here
    stmt = select(UrlMapping).filter(UrlMapping.short_id == short_id)
    result = await db.execute(stmt)
    return result.scalar_one()
