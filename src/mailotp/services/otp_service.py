"""Account-aware OTP retrieval on top of the extraction engine."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Dict, List, Optional, Set

from mailotp.core.errors import AccountNotFoundError, NoDefaultAccountError, NoMessagesError
from mailotp.core.models import AccountInfo, ExtractionInput, OTPResult, ScannedMessage
from mailotp.core.settings import AccountSettings, ScannerSettings
from mailotp.otp.scanner import extract_from_input, find_otp, scan_message
from mailotp.services.audit_logger import AuditLogger
from mailotp.services.email import EmailInboxService, MessageSource
from mailotp.utils.logging import get_logger


SourceFactory = Callable[[AccountSettings], MessageSource]


class OtpService:
    """Resolves accounts to message sources and scans them for codes."""

    def __init__(
        self,
        settings: ScannerSettings,
        *,
        source_factory: Optional[SourceFactory] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> None:
        self._settings = settings
        self._source_factory = source_factory or self._imap_source
        self._audit_logger = audit_logger
        self._sources: Dict[str, MessageSource] = {}
        self.logger = get_logger("mailotp.service")

    def _imap_source(self, account: AccountSettings) -> MessageSource:
        return EmailInboxService.from_settings(account.imap, timeout=self._settings.fetch_timeout_seconds)

    def source_for(self, email: str) -> MessageSource:
        account = self._settings.account(email)
        if account is None:
            raise AccountNotFoundError(email)
        key = account.email.lower()
        if key not in self._sources:
            self._sources[key] = self._source_factory(account)
        return self._sources[key]

    def default_email(self) -> str:
        if not self._settings.default_account:
            raise NoDefaultAccountError()
        return self._settings.default_account

    def list_accounts(self) -> List[AccountInfo]:
        default = (self._settings.default_account or "").lower()
        return [
            AccountInfo(email=account.email, is_default=account.email.lower() == default)
            for account in self._settings.accounts
        ]

    async def get_otp(self, email: str) -> OTPResult:
        return await self.get_otp_by_source(self.source_for(email), account=email)

    async def get_otp_default(self) -> OTPResult:
        return await self.get_otp(self.default_email())

    async def get_otp_by_source(self, source: MessageSource, *, account: str = "") -> OTPResult:
        """Scan the latest messages of ``source``.

        Raises NoMessagesError for an empty mailbox and OTPNotFoundError when
        none of the messages carries a code.
        """
        messages = await source.list_messages(self._settings.message_limit)
        if not messages:
            raise NoMessagesError()
        result = find_otp(messages)
        self.logger.info("OTP retrieved for %s from message %s", account or "source", result.message_id)
        if self._audit_logger:
            await self._audit_logger.log_result(event="otp.retrieved", account=account, result=result)
        return result

    async def get_messages(self, email: str, limit: Optional[int] = None) -> List[ScannedMessage]:
        source = self.source_for(email)
        messages = await source.list_messages(limit or self._settings.message_limit)
        return [
            ScannedMessage(message=message, code=extract_from_input(ExtractionInput.from_message(message)))
            for message in messages
        ]

    async def get_messages_default(self, limit: Optional[int] = None) -> List[ScannedMessage]:
        return await self.get_messages(self.default_email(), limit)

    async def watch(
        self,
        email: str,
        *,
        interval: Optional[float] = None,
        max_polls: Optional[int] = None,
    ) -> AsyncIterator[OTPResult]:
        """Poll an account and yield codes from messages that arrive after the first poll."""
        interval = self._settings.watch_interval_seconds if interval is None else interval
        if interval <= 0:
            raise ValueError("watch interval must be positive")
        source = self.source_for(email)
        seen: Optional[Set[str]] = None
        polls = 0
        while max_polls is None or polls < max_polls:
            polls += 1
            try:
                messages = await source.list_messages(self._settings.message_limit)
            except (RuntimeError, OSError, asyncio.TimeoutError) as exc:
                self.logger.warning("Failed to poll %s: %s", email, exc)
                messages = None
            if messages is not None:
                # Only the ids of the latest window are remembered.
                current = {message.id for message in messages}
                if seen is None:
                    self.logger.info("Watching %s (%d existing message(s) skipped)", email, len(current))
                    seen = current
                else:
                    previous, seen = seen, current
                    handled: Set[str] = set()
                    for message in messages:
                        if message.id in previous or message.id in handled:
                            continue
                        handled.add(message.id)
                        result = scan_message(message)
                        if result is None:
                            continue
                        if self._audit_logger:
                            await self._audit_logger.log_result(event="otp.watched", account=email, result=result)
                        yield result
            if max_polls is not None and polls >= max_polls:
                break
            await asyncio.sleep(interval)
