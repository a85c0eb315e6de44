import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from passlib.context import CryptContext
from config import Settings
from errors import ExpiredTokenError, InvalidTokenError, LoginRequired, TokenMissingError
from schemas import Identity

logger = logging.getLogger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_COOKIE = "token"
cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE, auto_error=False)


def get_password_hash(password: str):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, settings: Settings, now: datetime = None):
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": str(user_id), "iat": issued_at, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity:
    """Check the signature, then the expiry, and return the caller's identity.

    Raises ExpiredTokenError for a well-signed token past its ``exp`` and
    InvalidTokenError for anything else that fails to decode.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise ExpiredTokenError()
    except jwt.PyJWTError as e:
        logger.warning("JWT decode error: %s", e)
        raise InvalidTokenError()
    try:
        return Identity(user_id=int(payload["sub"]))
    except ValueError:
        logger.warning("JWT subject is not a user id: %r", payload["sub"])
        raise InvalidTokenError()


def authenticate(token: Optional[str], settings: Settings) -> Identity:
    if not token:
        raise TokenMissingError()
    return decode_access_token(token, settings)


async def get_current_identity(request: Request, token: Optional[str] = Depends(cookie_scheme)) -> Identity:
    settings = request.app.state.settings
    try:
        identity = authenticate(token, settings)
    except TokenMissingError:
        if settings.login_path:
            raise LoginRequired(settings.login_path)
        raise
    request.state.identity = identity
    return identity
