"""
Cloud account status.

The account status decides whether the cloud store is attempted at all.
The lookup is asynchronous and bounded by a timeout; a lookup that errors
or does not answer in time counts as unknown, which is treated as
unavailable.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import create_engine

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 1.0


class AccountStatus(str, Enum):
    AVAILABLE = "available"
    NO_ACCOUNT = "noAccount"
    RESTRICTED = "restricted"
    COULD_NOT_DETERMINE = "couldNotDetermine"
    TEMPORARILY_UNAVAILABLE = "temporarilyUnavailable"


class Availability(str, Enum):
    AVAILABLE = "available"
    NO_ACCOUNT = "noAccount"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"


_AVAILABILITY = {
    AccountStatus.AVAILABLE: Availability.AVAILABLE,
    AccountStatus.NO_ACCOUNT: Availability.NO_ACCOUNT,
    AccountStatus.RESTRICTED: Availability.RESTRICTED,
}


def availability_for(status: Optional[AccountStatus]) -> Availability:
    """Collapse an account status (or a failed lookup) into an availability."""
    return _AVAILABILITY.get(status, Availability.UNKNOWN)


class AccountStatusChecker(ABC):
    """Source of the cloud account status."""

    @abstractmethod
    async def account_status(self) -> AccountStatus:
        ...


class StaticAccountStatus(AccountStatusChecker):
    """Always answers with the configured status."""

    def __init__(self, status: AccountStatus):
        self.status = status

    async def account_status(self) -> AccountStatus:
        return self.status


class DatabaseAccountStatus(AccountStatusChecker):
    """Reports the cloud account as available when its database answers a ping."""

    def __init__(self, url: str):
        self.url = url

    async def account_status(self) -> AccountStatus:
        return await asyncio.to_thread(self._ping)

    def _ping(self) -> AccountStatus:
        try:
            engine = create_engine(self.url, pool_pre_ping=True)
        except SQLAlchemyError as exc:
            logger.warning("Invalid cloud database URL: %s", exc)
            return AccountStatus.COULD_NOT_DETERMINE
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return AccountStatus.AVAILABLE
        except OperationalError as exc:
            logger.warning("Cloud database unreachable: %s", exc)
            return AccountStatus.TEMPORARILY_UNAVAILABLE
        except SQLAlchemyError as exc:
            logger.warning("Cloud database ping failed: %s", exc)
            return AccountStatus.COULD_NOT_DETERMINE
        finally:
            engine.dispose()


async def fetch_account_status(checker: AccountStatusChecker,
                               timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Optional[AccountStatus]:
    """
    Ask ``checker`` for the account status, giving up after ``timeout`` seconds.
    Any error raised by the checker is logged and reads as an unknown status.

    Returns:
        The account status, or None when the lookup failed or timed out
    """
    try:
        return await asyncio.wait_for(checker.account_status(), timeout)
    except asyncio.TimeoutError:
        logger.warning("Account status lookup timed out after %.1fs", timeout)
        return None
    except Exception as exc:
        logger.warning("Account status lookup failed: %s", exc)
        return None
