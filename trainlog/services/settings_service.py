"""
User settings store.

Resolves the canonical settings record of the bound session and caches the
weight unit.  Resolving, in order:

1. collapse duplicate records, keeping the most recently updated one;
2. once, seed a missing record from the legacy ``weightUnit`` value;
3. create a default (kilograms) record if there is still none;
4. rewrite an unknown unit code as kilograms.

A failed write rolls the session back and reloads, the same policy as the
favorites store.
"""

import datetime
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from trainlog.core.flags import LEGACY_WEIGHT_UNIT, MIGRATE_USER_SETTINGS, FlagStore
from trainlog.db.repositories.user_settings import UserSettingsRepository
from trainlog.models.base import utcnow
from trainlog.models.user_settings import UserSettings, WeightUnit
from trainlog.sync.reconcile import collapse_settings

logger = logging.getLogger(__name__)


class UserSettingsStore:
    """Cached weight unit with write-through to the bound session."""

    def __init__(self, flags: FlagStore, initial_weight_unit: WeightUnit = WeightUnit.KG):
        self.flags = flags
        self.weight_unit = initial_weight_unit
        self._stored_unit = initial_weight_unit
        self.session: Optional[Session] = None
        self.settings: Optional[UserSettings] = None

    @property
    def updated_at(self) -> Optional[datetime.datetime]:
        return self.settings.updated_at if self.settings else None

    def bind(self, session: Session) -> None:
        """Bind to ``session``; binding the session already bound does nothing."""
        if self.session is session:
            return
        self.session = session
        self.load()

    def update_weight_unit(self, unit: WeightUnit) -> None:
        if unit == self.weight_unit:
            return
        self.weight_unit = unit
        self._persist_weight_unit(unit)

    def load(self) -> None:
        if self.session is None:
            return
        try:
            self.settings = self._resolve_settings()
        except SQLAlchemyError as exc:
            logger.error("UserSettings load error: %s", exc)
            self.session.rollback()
            self.weight_unit = self._stored_unit
            return
        self.weight_unit = self._stored_unit = self.settings.weight_unit

    def _resolve_settings(self) -> UserSettings:
        repository = UserSettingsRepository(self.session)
        primary = collapse_settings(self.session)

        legacy_pending = not self.flags.get(MIGRATE_USER_SETTINGS)
        if legacy_pending and primary is None:
            raw = self.flags.get_string(LEGACY_WEIGHT_UNIT) or WeightUnit.KG.value
            primary = UserSettings(weight_unit_raw=raw)
            repository.add(primary)

        if primary is None:
            primary = UserSettings(weight_unit_raw=WeightUnit.KG.value)
            repository.add(primary)

        unit = WeightUnit.from_raw(primary.weight_unit_raw)
        if unit.value != primary.weight_unit_raw:
            logger.info("Normalizing unknown weight unit %r to %s", primary.weight_unit_raw, unit.value)
            primary.weight_unit_raw = unit.value
            primary.updated_at = utcnow()

        if self.session.new or self.session.dirty or self.session.deleted:
            self.session.commit()
        if legacy_pending:
            self.flags.set(MIGRATE_USER_SETTINGS)
        return primary

    def _persist_weight_unit(self, unit: WeightUnit) -> None:
        if self.session is None:
            return

        if self.settings is not None:
            self.settings.weight_unit_raw = unit.value
            self.settings.updated_at = utcnow()
            self.session.add(self.settings)
        else:
            self.settings = UserSettings(weight_unit_raw=unit.value)
            UserSettingsRepository(self.session).add(self.settings)

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.error("UserSettings save error: %s", exc)
            self.session.rollback()
            self.load()
            return
        self._stored_unit = unit
