"""
Declarative base and session factory for the rule/booking store.

No engine is created at import time; callers build a session factory
explicitly and pass sessions into the repositories.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .core.config import settings

logger = logging.getLogger(__name__)

Base: DeclarativeMeta = declarative_base()


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    if db_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in db_url or db_url.rstrip("/") == "sqlite:":
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    db_url = database_url or settings.database_url
    logger.debug("Creating database engine for dialect %s", db_url.split(":", 1)[0])
    return create_engine(db_url, **_build_engine_kwargs(db_url))


def create_session_factory(database_url: Optional[str] = None, *, create_tables: bool = False) -> sessionmaker:
    """Build a sessionmaker bound to a fresh engine."""
    engine = create_db_engine(database_url)
    if create_tables:
        # Import models so their tables register on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
