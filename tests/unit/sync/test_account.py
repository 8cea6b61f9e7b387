"""Tests for the cloud account status lookup."""

import asyncio

import pytest

from trainlog.sync.account import (
    AccountStatus,
    AccountStatusChecker,
    Availability,
    DatabaseAccountStatus,
    StaticAccountStatus,
    availability_for,
    fetch_account_status,
)


class SlowAccountStatus(AccountStatusChecker):
    async def account_status(self) -> AccountStatus:
        await asyncio.sleep(5)
        return AccountStatus.AVAILABLE


class BrokenAccountStatus(AccountStatusChecker):
    async def account_status(self) -> AccountStatus:
        raise RuntimeError("account service crashed")


class TestFetchAccountStatus:
    def test_returns_status(self):
        status = asyncio.run(fetch_account_status(StaticAccountStatus(AccountStatus.RESTRICTED)))
        assert status is AccountStatus.RESTRICTED

    def test_timeout_is_unknown(self):
        status = asyncio.run(fetch_account_status(SlowAccountStatus(), timeout=0.05))
        assert status is None

    def test_error_is_unknown(self):
        assert asyncio.run(fetch_account_status(BrokenAccountStatus())) is None


class TestAvailability:
    @pytest.mark.parametrize("status, expected", [
        (AccountStatus.AVAILABLE, Availability.AVAILABLE),
        (AccountStatus.NO_ACCOUNT, Availability.NO_ACCOUNT),
        (AccountStatus.RESTRICTED, Availability.RESTRICTED),
        (AccountStatus.COULD_NOT_DETERMINE, Availability.UNKNOWN),
        (AccountStatus.TEMPORARILY_UNAVAILABLE, Availability.UNKNOWN),
        (None, Availability.UNKNOWN),
    ])
    def test_mapping(self, status, expected):
        assert availability_for(status) is expected


class TestDatabaseAccountStatus:
    def test_reachable_database_is_available(self, tmp_path):
        checker = DatabaseAccountStatus(f"sqlite:///{tmp_path / 'cloud.store'}")
        assert asyncio.run(checker.account_status()) is AccountStatus.AVAILABLE

    def test_unreachable_database(self, tmp_path):
        checker = DatabaseAccountStatus(f"sqlite:///{tmp_path / 'missing-dir' / 'cloud.store'}")
        assert asyncio.run(checker.account_status()) is AccountStatus.TEMPORARILY_UNAVAILABLE

    def test_invalid_url(self):
        checker = DatabaseAccountStatus("nosuchdialect://host/db")
        assert asyncio.run(checker.account_status()) is AccountStatus.COULD_NOT_DETERMINE
