"""
Store containers.

A container is one independently opened data store (an SQLAlchemy engine
plus the store tables).  Two can be open at once: the legacy local store and
the active, possibly cloud-synced, store.

Opening is modelled as an explicit attempt result (``Opened`` or ``Failed``)
and the fallback policy lives in the pure :func:`select_store`, so it can be
tested without touching storage.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from trainlog.core.exceptions import FatalStoreError, StoreOpenError
from trainlog.models import STORE_TABLES

logger = logging.getLogger(__name__)


class StoreKind(str, Enum):
    LOCAL = "local"
    CLOUD = "cloud"


@dataclass(frozen=True)
class StoreLocation:
    """Where a store lives.  ``path`` is set for file-backed stores."""

    kind: StoreKind
    url: str
    path: Optional[Path] = None

    @classmethod
    def sqlite(cls, kind: StoreKind, path: Path) -> "StoreLocation":
        return cls(kind=kind, url=f"sqlite:///{path}", path=path)

    def exists(self) -> bool:
        """Whether the backing file is on disk.  Non-file stores always report False."""
        return self.path is not None and self.path.exists()


class StoreContainer:
    """An opened store."""

    def __init__(self, location: StoreLocation, engine: Engine):
        self.location = location
        self.engine = engine

    @property
    def kind(self) -> StoreKind:
        return self.location.kind

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"StoreContainer(kind={self.kind.value!r}, url={self.location.url!r})"


def _verify_schema(engine: Engine) -> None:
    """Raise ``StoreOpenError`` when an existing table lacks expected columns."""
    inspector = inspect(engine)
    for table in STORE_TABLES:
        present = {column["name"] for column in inspector.get_columns(table.name)}
        missing = {column.name for column in table.columns} - present
        if missing:
            raise StoreOpenError(str(engine.url), f"schema mismatch in {table.name}: missing {sorted(missing)}")


def open_store(location: StoreLocation, echo: bool = False) -> StoreContainer:
    """
    Open a store, creating its tables when they don't exist yet.

    Args:
        location: Store to open
        echo: Log SQL statements

    Returns:
        The opened container

    Raises:
        StoreOpenError: If the store is corrupt, unreachable or has a different schema
    """
    connect_args = {"check_same_thread": False} if location.url.startswith("sqlite") else {}
    engine = None
    try:
        if location.path is not None:
            location.path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(location.url, echo=echo, pool_pre_ping=True, connect_args=connect_args)
        SQLModel.metadata.create_all(engine, tables=STORE_TABLES)
        _verify_schema(engine)
    except StoreOpenError:
        engine.dispose()
        raise
    except (SQLAlchemyError, OSError) as exc:
        if engine is not None:
            engine.dispose()
        raise StoreOpenError(location.url, str(exc)) from exc

    logger.debug("Opened %s store at %s", location.kind.value, location.url)
    return StoreContainer(location, engine)


@dataclass(frozen=True)
class Opened:
    container: StoreContainer


@dataclass(frozen=True)
class Failed:
    location: StoreLocation
    reason: str


OpenAttempt = Union[Opened, Failed]


def attempt_open(location: StoreLocation, echo: bool = False) -> OpenAttempt:
    """Open a store and report the outcome instead of raising."""
    try:
        return Opened(open_store(location, echo=echo))
    except StoreOpenError as exc:
        logger.error("%s store open error: %s", location.kind.value.capitalize(), exc.reason)
        return Failed(location, exc.reason)


def select_store(cloud: Optional[OpenAttempt], local: Optional[OpenAttempt]) -> StoreContainer:
    """
    Pick the active store from the cloud and local attempts.

    The cloud store wins when it opened; otherwise the local store is used
    (degraded mode).  ``None`` means the store was not attempted.

    Raises:
        FatalStoreError: If neither attempt produced a store
    """
    if isinstance(cloud, Opened):
        return cloud.container
    if isinstance(local, Opened):
        if isinstance(cloud, Failed):
            logger.warning("Cloud store unavailable, continuing with the local store")
        return local.container

    reasons = [f"{attempt.location.kind.value}: {attempt.reason}" for attempt in (cloud, local)
               if isinstance(attempt, Failed)]
    raise FatalStoreError("No usable store could be opened (" + ("; ".join(reasons) or "nothing attempted") + ")")
