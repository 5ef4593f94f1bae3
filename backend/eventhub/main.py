import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from eventhub import __version__
from eventhub.api.exception_handlers import register_exception_handlers
from eventhub.api.router import api_router
from eventhub.api.routes import fallback
from eventhub.core.config import Settings, get_settings
from eventhub.db.init_db import seed_demo_data
from eventhub.store import Store, build_store

logger = logging.getLogger("eventhub")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _run_migrations_if_needed(settings: Settings) -> None:
    """Apply Alembic migrations on startup in production (AUTO_CREATE_TABLES off).

    Migration failures are logged and the app keeps starting; they can be
    retried with `alembic upgrade head`.
    """
    if not settings.is_prod or not settings.database_url or settings.auto_create_tables:
        return
    from alembic import command
    from alembic.config import Config
    alembic_ini = Path(__file__).resolve().parents[1] / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("[migrate] alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # Ensure script_location resolves correctly when launched from arbitrary CWD
    cfg.set_main_option("script_location", str(alembic_ini.parent / "alembic"))
    logger.info("[migrate] Applying Alembic migrations -> head ...")
    try:
        command.upgrade(cfg, "head")
    except Exception:
        logger.exception("[migrate] Migration failed")
        return
    logger.info("[migrate] Migrations applied successfully")


class _RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the application. Tests pass their own settings and store."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _run_migrations_if_needed(settings)
        app.state.store.open()
        if settings.seed_demo_data:
            seed_demo_data(app.state.store, settings)
        logger.info("[startup] %s ready (%s store)", settings.app_name, type(app.state.store).__name__)
        yield
        app.state.store.close()

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or build_store(settings)

    origins = settings.cors_origins
    logger.info("[startup] Resolved CORS origins: %s", origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(_RequestLogMiddleware)
    register_exception_handlers(app, settings)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(fallback.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("eventhub.main:app", host="0.0.0.0", port=8000)
