import logging
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from config import Settings
from errors import MissingFieldError, ShortIdExhaustedError, ShortIdTakenError, UrlNotFoundError
from schemas import Identity
from stores import create_mapping, record_access, short_id_exists
from utils import generate_short_id

logger = logging.getLogger(__name__)


async def create_short_url(db: AsyncSession, identity: Identity, original_url: str, settings: Settings) -> str:
    if not original_url:
        raise MissingFieldError("Url is Required")
    for attempt in range(1, settings.max_short_id_retries + 1):
        short_id = generate_short_id(settings.short_id_length)
        if await short_id_exists(db, short_id):
            logger.warning("Short id collision on %s (attempt %d)", short_id, attempt)
            continue
        try:
            mapping = await create_mapping(db, original_url, short_id)
        except ShortIdTakenError:
            logger.warning("Short id %s taken on insert (attempt %d)", short_id, attempt)
            continue
        logger.info("Link created by user %s: %s", identity.user_id, mapping.short_id)
        return mapping.short_id
    logger.error("Gave up generating a short id after %d attempts", settings.max_short_id_retries)
    raise ShortIdExhaustedError()


async def resolve_and_record(db: AsyncSession, identity: Identity, short_id: str) -> str:
    mapping = await record_access(db, short_id, datetime.now(timezone.utc))
    if mapping is None:
        raise UrlNotFoundError()
    logger.info("Redirected link %s for user %s", short_id, identity.user_id)
    return mapping.original_url
