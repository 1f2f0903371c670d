import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import PROJECT_ROOT
from .errors import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def create_db_engine(raw_url: str, *, echo: bool = False) -> Engine:
    url = make_url(raw_url)

    connect_args: dict[str, object] = {}
    engine_kwargs: dict[str, object] = {"pool_pre_ping": True}

    if url.drivername.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        engine_kwargs.pop("pool_pre_ping", None)
        if url.database in (None, "", ":memory:"):
            # every connection must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        else:
            db_path = Path(url.database)
            if not db_path.is_absolute():
                db_path = (PROJECT_ROOT / db_path).resolve()
            else:
                db_path = db_path.expanduser()
            db_path.parent.mkdir(parents=True, exist_ok=True)
            url = url.set(database=str(db_path))

    engine = create_engine(
        url,
        echo=echo,
        future=True,
        connect_args=connect_args,
        **engine_kwargs,
    )

    if url.drivername.startswith("sqlite"):

        @event.listens_for(engine, "connect", insert=True)
        def set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()

    logger.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def translate_store_errors(db: Session, action: str) -> Iterator[None]:
    """Roll the session back and re-raise any SQLAlchemy failure as StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise StoreError(f"failed to {action}: {exc}") from exc
