import os
from dataclasses import dataclass
from fastapi import Request

DEFAULT_DATABASE_URL = "postgresql://myuser:090695@db:5432/fastapi_db"


def _async_url(url: str) -> str:
    return url.replace("postgresql://", "postgresql+asyncpg://")


@dataclass
class Settings:
    """Process-wide configuration, built once at startup."""

    database_url: str = _async_url(DEFAULT_DATABASE_URL)
    secret_key: str = "my_super_secret_key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 120
    short_id_length: int = 5
    max_short_id_retries: int = 5
    login_path: str = "/user/login"
    log_level: str = "INFO"
    sql_echo: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=_async_url(os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)),
            secret_key=os.environ.get("SECRET_KEY", "my_super_secret_key"),
            algorithm=os.environ.get("ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 120)),
            short_id_length=int(os.environ.get("SHORT_ID_LENGTH", 5)),
            max_short_id_retries=int(os.environ.get("MAX_SHORT_ID_RETRIES", 5)),
            login_path=os.environ.get("LOGIN_PATH", "/user/login"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            sql_echo=os.environ.get("SQL_ECHO", "0") == "1",
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", 8080)),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
