from __future__ import annotations

from typing import Callable

import pytest

from mailotp.core.settings import AccountSettings, ImapSettings, ScannerSettings


@pytest.fixture
def settings() -> ScannerSettings:
    return ScannerSettings(
        accounts=[
            AccountSettings(email="alice@example.com", imap=ImapSettings(host="imap.test", username="alice")),
            AccountSettings(email="bob@work.com", imap=ImapSettings(host="imap.test", username="bob")),
        ],
        default_account="alice@example.com",
        message_limit=5,
        watch_interval_seconds=0.01,
    )


@pytest.fixture
def source_factory() -> Callable:
    """Build a source factory that maps account emails to prepared sources."""

    def factory(sources):
        def build(account: AccountSettings):
            return sources[account.email]

        return build

    return factory
