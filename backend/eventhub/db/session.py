from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
import importlib.util


def normalize_database_url(url: str) -> str:
    """Point plain postgres URLs at the psycopg (v3) driver when psycopg2 is absent.

    A plain 'postgresql://' (or legacy 'postgres://') URL makes SQLAlchemy load
    psycopg2; we only depend on psycopg v3.
    """
    psycopg2_present = importlib.util.find_spec("psycopg2") is not None
    if not psycopg2_present and url.startswith(("postgres://", "postgresql://")) and "+psycopg" not in url:
        # Normalize legacy prefix 'postgres://' -> 'postgresql://'
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def make_engine(url: str) -> Engine:
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        # Handlers run on a thread pool; an in-memory database must share one connection
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)
