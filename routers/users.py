import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from auth import TOKEN_COOKIE, create_access_token, get_password_hash, verify_password
from config import Settings, get_settings
from database import get_db
from errors import DuplicateEmailError, InvalidCredentialsError, MissingFieldError, ShortenerError
from schemas import UserCreate, UserLogin, UserOut
from stores import create_user, find_user_by_email

logger = logging.getLogger(__name__)
router = APIRouter()

ALL_FIELDS_REQUIRED = "All fields are required"


def _server_error(e: Exception):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})


@router.post("")
async def register_user(user: Optional[UserCreate] = None, db: AsyncSession = Depends(get_db)):
    if user is None or not (user.full_name and user.email and user.password):
        raise MissingFieldError(ALL_FIELDS_REQUIRED)
    try:
        # bcrypt is slow on purpose; keep it off the event loop
        hashed = await run_in_threadpool(get_password_hash, user.password)
        new_user = await create_user(db, user.full_name, user.email, hashed)
    except DuplicateEmailError:
        logger.warning("Signup rejected, email already registered: %s", user.email)
        raise
    except Exception as e:
        logger.exception("Signup failed for %s", user.email)
        return _server_error(e)
    logger.info("User registered: %s", new_user.email)
    return {
        "success": "Registed Successfully",
        "USER": UserOut.model_validate(new_user).model_dump(mode="json", by_alias=True),
    }


@router.get("/login")
async def login_page():
    return {"message": "Log in by POSTing userEmail and userPassword to /user/login"}


@router.post("/login")
async def login_for_access_token(
    credentials: Optional[UserLogin] = None,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if credentials is None or not (credentials.email and credentials.password):
        raise MissingFieldError(ALL_FIELDS_REQUIRED)
    try:
        user = await find_user_by_email(db, credentials.email)
        if not user or not await run_in_threadpool(verify_password, credentials.password, user.hashed_password):
            logger.warning("Login rejected for %s", credentials.email)
            raise InvalidCredentialsError()
        token = create_access_token(user.id, settings)
    except ShortenerError:
        raise
    except Exception as e:
        logger.exception("Login failed for %s", credentials.email)
        return _server_error(e)
    logger.info("User logged in: %s", user.email)
    response = JSONResponse(content={"success": "Login Successfully", "Token": token})
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/logout")
async def logout():
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(TOKEN_COOKIE)
    return response
