import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from config import Settings
from database import Database
from errors import LoginRequired, ShortenerError
from routers import users, urls

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    db = Database(settings.database_url, echo=settings.sql_echo)
    # an unreachable database aborts startup
    await db.init_models()
    app.state.db = db
    logger.info("URL shortener started")
    yield
    await db.dispose()
    logger.info("URL shortener stopped")


async def shortener_error_handler(request: Request, exc: ShortenerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={exc.body_key: exc.message})


async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(url=exc.login_path, status_code=status.HTTP_302_FOUND)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(
        title="FastAPI URL Shortener",
        version="1.0.0",
        description="URL shortening service with user accounts",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(LoginRequired, login_required_handler)

    app.include_router(users.router, prefix="/user", tags=["users"])
    app.include_router(urls.router, prefix="/urls", tags=["urls"])

    @app.get("/")
    async def read_root():
        return {"message": "FastAPI URL Shortener", "version": app.version}

    return app


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
