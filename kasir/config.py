import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv
from sqlalchemy.engine import URL

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SQLITE_PATH = PROJECT_ROOT / "data" / "kasir.db"


def _first_env(environ: Mapping[str, str], keys: list[str]) -> str | None:
    for key in keys:
        value = environ.get(key)
        if value:
            return value
    return None


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def resolve_database_url(environ: Mapping[str, str]) -> str:
    """
    Pick the database URL from the environment.

    A full URL wins; otherwise a PostgreSQL URL is assembled from the DB_* parts
    when DB_HOST is present; otherwise a local SQLite file is used.
    """
    explicit = _first_env(environ, ["DATABASE_URL", "SQLALCHEMY_DATABASE_URL"])
    if explicit:
        # Heroku-style scheme is not accepted by SQLAlchemy 2.x
        if explicit.startswith("postgres://"):
            explicit = "postgresql://" + explicit[len("postgres://"):]
        return explicit

    host = environ.get("DB_HOST")
    if host:
        url = URL.create(
            "postgresql+psycopg2",
            username=environ.get("DB_USER", "postgres"),
            password=environ.get("DB_PASSWORD") or None,
            host=host,
            port=int(environ.get("DB_PORT", "5432")),
            database=environ.get("DB_NAME", "kasir"),
            query={"sslmode": environ.get("DB_SSLMODE", "disable")},
        )
        return url.render_as_string(hide_password=False)

    return f"sqlite+pysqlite:///{DEFAULT_SQLITE_PATH}"


@dataclass(frozen=True)
class Settings:
    database_url: str
    server_host: str = "localhost"
    server_port: int = 8080
    app_name: str = "Kasir API"
    app_version: str = "1.0"
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    seed_demo_data: bool = False

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    if environ is None:
        load_dotenv()
        environ = os.environ

    raw_cors_origins = environ.get("CORS_ORIGINS")
    cors_origins = (
        [origin.strip() for origin in raw_cors_origins.split(",") if origin.strip()]
        if raw_cors_origins
        else ["*"]
    )

    return Settings(
        database_url=resolve_database_url(environ),
        server_host=environ.get("SERVER_HOST", "localhost"),
        server_port=int(_first_env(environ, ["SERVER_PORT", "PORT"]) or "8080"),
        app_name=environ.get("APP_NAME", "Kasir API"),
        app_version=environ.get("APP_VERSION", "1.0"),
        environment=environ.get("APP_ENVIRONMENT", "development"),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        cors_origins=cors_origins,
        seed_demo_data=_as_bool(environ.get("SEED_DEMO_DATA")),
    )
