"""
User settings repository.
"""

from sqlmodel import Session, select

from trainlog.models.user_settings import UserSettings


class UserSettingsRepository:
    """Repository for UserSettings database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_all_by_recency(self) -> list[UserSettings]:
        """
        Get every settings record, most recently updated first.

        Ties on ``updated_at`` are broken by id so the order is deterministic.

        Returns:
            List of settings records
        """
        statement = select(UserSettings).order_by(UserSettings.updated_at.desc(), UserSettings.id)
        return list(self.session.exec(statement).all())

    def exists_any(self) -> bool:
        return self.session.exec(select(UserSettings.id)).first() is not None

    def add(self, user_settings: UserSettings) -> None:
        self.session.add(user_settings)

    def delete(self, user_settings: UserSettings) -> None:
        self.session.delete(user_settings)
