"""Database engine construction and schema helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def create_db_engine(url: str) -> Engine:
    """Create an engine for ``url``.

    SQLite files get their parent directory created. In-memory SQLite shares
    a single connection so every session sees the same database.
    """

    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if parsed.database in (None, "", ":memory:"):
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

    Path(parsed.database).resolve().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


def init_db(engine: Engine, *, reset: bool = False) -> None:
    from .. import models  # noqa: F401 - ensure models are registered with SQLModel

    if reset:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


__all__ = ["create_db_engine", "init_db"]
