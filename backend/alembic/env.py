from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
import os
import logging
import sys
from pathlib import Path

# Ensure the backend directory (which contains the 'eventhub' package) is on sys.path even
# if Alembic is executed with CWD set to the 'alembic' directory.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)
logger = logging.getLogger("alembic.env")

from eventhub.db.session import normalize_database_url  # noqa: E402
from eventhub.models import Base  # noqa: E402

target_metadata = Base.metadata

DB_URL = os.getenv("DATABASE_URL")
if not DB_URL:
    raise SystemExit("DATABASE_URL env var is required for migrations")
DB_URL = normalize_database_url(DB_URL)


def run_migrations_offline():
    context.configure(
        url=DB_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        {"sqlalchemy.url": DB_URL},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()
    logger.info("migrations applied against %s", connectable.url.render_as_string(hide_password=True))


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
