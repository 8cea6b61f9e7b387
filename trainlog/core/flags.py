"""
Durable process-wide flags.

A small key/value store for "migration already done" booleans and the raw
legacy values the one-shot migrations consume.  It lives in its own SQLite
file, independent of the local and cloud data stores, so a flag survives
whichever store happens to be active.

The store is passed explicitly to the migrator and the runtime stores;
tests use :class:`MemoryFlagStore`.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine

logger = logging.getLogger(__name__)

MIGRATE_LOCAL_STORE_TO_CLOUD = "didMigrateLocalStoreToCloud"
MIGRATE_FAVORITE_EXERCISE_IDS = "didMigrateFavoriteExerciseIDsToSwiftData"
MIGRATE_USER_SETTINGS = "didMigrateUserSettingsToSwiftData"

LEGACY_FAVORITE_EXERCISE_IDS = "favoriteExerciseIDs"
LEGACY_WEIGHT_UNIT = "weightUnit"

_TRUE = "true"


class FlagStore(ABC):
    """Durable boolean flags plus raw legacy string values."""

    @abstractmethod
    def get_string(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_string(self, key: str, value: Optional[str]) -> None:
        """Store ``value`` under ``key``; ``None`` removes the key."""

    def get(self, key: str) -> bool:
        """Return the flag value, ``False`` when unset."""
        return self.get_string(key) == _TRUE

    def set(self, key: str, value: bool = True) -> None:
        self.set_string(key, _TRUE if value else None)


class MemoryFlagStore(FlagStore):
    """In-memory flag store; lives as long as the instance."""

    def __init__(self, initial: Optional[dict] = None):
        self.values: dict[str, str] = dict(initial or {})

    def get_string(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set_string(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self.values.pop(key, None)
        else:
            self.values[key] = value


class DefaultsEntry(SQLModel, table=True):
    """One persisted key/value pair."""

    __tablename__ = "defaults_entries"

    key: str = Field(primary_key=True, max_length=255)
    value: str = Field(nullable=False)


class SQLFlagStore(FlagStore):
    """Flag store persisted in a dedicated SQLite file.

    Read failures report the key as unset and write failures are logged;
    the flags are a guard, never the source of truth for data.
    """

    def __init__(self, path: Path, echo: bool = False):
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.engine = create_engine(f"sqlite:///{path}", echo=echo,
                                    connect_args={"check_same_thread": False})
        SQLModel.metadata.create_all(self.engine, tables=[DefaultsEntry.__table__])

    def get_string(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                entry = session.get(DefaultsEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as exc:
            logger.error("Defaults read error for %r: %s", key, exc)
            return None

    def set_string(self, key: str, value: Optional[str]) -> None:
        try:
            with Session(self.engine) as session:
                entry = session.get(DefaultsEntry, key)
                if value is None:
                    if entry:
                        session.delete(entry)
                elif entry:
                    entry.value = value
                    session.add(entry)
                else:
                    session.add(DefaultsEntry(key=key, value=value))
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Defaults write error for %r: %s", key, exc)

    def close(self) -> None:
        self.engine.dispose()
