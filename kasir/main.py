import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from .config import Settings, load_settings
from .database import Base, create_db_engine, create_session_factory
from .errors import KasirError
from .routers import categories, products, reports, transactions
from .schemas import HealthOut
from .seed import seed_demo_data

logger = logging.getLogger("kasir")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    loc = errors[0].get("loc", ())
    if loc and loc[0] == "path":
        # product_id -> "Invalid product ID"
        name = str(loc[-1]).removesuffix("_id").replace("_", " ")
        return f"Invalid {name} ID"
    if loc and loc[0] == "query":
        return f"Invalid query parameter: {loc[-1]}"
    return "Invalid request body"


async def kasir_error_handler(request: Request, exc: KasirError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _describe_request_error(exc)},
    )


def create_app(engine: Optional[Engine] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    owns_engine = engine is None
    engine = engine or create_db_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Base.metadata.create_all(bind=engine)
        if settings.seed_demo_data:
            with session_factory() as session:
                seed_demo_data(session)
        logger.info("%s %s ready (%s)", settings.app_name, settings.app_version, settings.environment)
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(KasirError, kasir_error_handler)
    app.add_exception_handler(RequestValidationError, request_error_handler)

    @app.get("/api/health", response_model=HealthOut, tags=["health"])
    def health() -> HealthOut:
        return HealthOut(status="OK", message=f"{settings.app_name} is running")

    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(transactions.router)
    app.include_router(reports.router)
    return app


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Server running on %s", settings.server_address)
    uvicorn.run(
        "kasir.main:create_app",
        factory=True,
        host=settings.server_host,
        port=settings.server_port,
    )


if __name__ == "__main__":
    run()
