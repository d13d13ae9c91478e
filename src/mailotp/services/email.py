"""IMAP inbox integration used as a message source for OTP scans."""

from __future__ import annotations

import asyncio
import email
import imaplib
import re
from contextlib import contextmanager
from email import policy
from email.message import EmailMessage
from email.utils import getaddresses, parsedate_to_datetime
from typing import Iterator, List, Protocol

from mailotp.core.models import EmailParticipant, Message
from mailotp.core.settings import ImapSettings
from mailotp.utils.logging import get_logger

SNIPPET_LENGTH = 200

_WHITESPACE = re.compile(r"\s+")
_TAGS = re.compile(r"<[^<>]{0,500}>")

logger = get_logger("mailotp.email")


class MessageSource(Protocol):
    """Anything able to list recent messages, newest first."""

    async def list_messages(self, limit: int) -> List[Message]:
        ...


def _part_text(part: EmailMessage) -> str:
    try:
        return part.get_content()
    except (LookupError, UnicodeDecodeError):
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="ignore")


def _body_parts(message: EmailMessage) -> tuple[str, str]:
    """Return (plain, html) text of a message; either may be empty."""
    plain = message.get_body(preferencelist=("plain",))
    html = message.get_body(preferencelist=("html",))
    return (
        _part_text(plain) if plain is not None else "",
        _part_text(html) if html is not None else "",
    )


def make_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    collapsed = _WHITESPACE.sub(" ", _TAGS.sub(" ", text)).strip()
    return collapsed[:length]


def parse_message(raw: bytes, *, fallback_id: str = "") -> Message:
    """Convert RFC 822 bytes into a Message.

    The plain-text part is preferred as body; the HTML part is kept with its
    markup when it is the only one.
    """
    parsed = email.message_from_bytes(raw, policy=policy.default)
    plain, html = _body_parts(parsed)
    body = plain or html

    senders = [
        EmailParticipant(email=address, name=name or None)
        for name, address in getaddresses(parsed.get_all("From", []))
        if address
    ]

    received_at = None
    date_header = parsed.get("Date")
    if date_header:
        try:
            received_at = parsedate_to_datetime(str(date_header))
        except (TypeError, ValueError):
            logger.debug("Unparseable Date header on message %s", fallback_id)

    message_id = str(parsed.get("Message-ID", "") or "").strip() or fallback_id
    return Message(
        id=message_id,
        subject=str(parsed.get("Subject", "") or ""),
        body=body,
        snippet=make_snippet(plain or html),
        from_=senders,
        received_at=received_at,
    )


class EmailInboxService:
    """IMAP email reader listing recent messages for OTP extraction."""

    def __init__(
        self,
        host: str,
        *,
        port: int = 993,
        username: str,
        password: str,
        folder: str = "INBOX",
        use_ssl: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.folder = folder
        self.use_ssl = use_ssl
        self.timeout = timeout

    @contextmanager
    def _client(self) -> Iterator[imaplib.IMAP4]:
        client = imaplib.IMAP4_SSL(self.host, self.port) if self.use_ssl else imaplib.IMAP4(self.host, self.port)
        try:
            client.login(self.username, self.password)
            yield client
        finally:
            try:
                client.logout()
            except (imaplib.IMAP4.error, OSError):
                pass

    async def list_messages(self, limit: int) -> List[Message]:
        """Fetch up to ``limit`` of the most recent messages, newest first."""
        return await asyncio.wait_for(
            asyncio.to_thread(self._list_messages_sync, limit),
            timeout=self.timeout,
        )

    def _list_messages_sync(self, limit: int) -> List[Message]:
        with self._client() as client:
            status, _ = client.select(self.folder, readonly=True)
            if status != "OK":
                raise RuntimeError("Unable to select email folder")

            status, data = client.search(None, "ALL")
            if status != "OK" or not data or not data[0]:
                return []

            ids = data[0].split()[-limit:]
            messages: List[Message] = []
            for msg_id in reversed(ids):
                status, message_data = client.fetch(msg_id, "(RFC822)")
                if status != "OK" or not message_data or not isinstance(message_data[0], tuple):
                    continue
                messages.append(parse_message(message_data[0][1], fallback_id=msg_id.decode()))
            logger.debug("Fetched %d message(s) from %s/%s", len(messages), self.host, self.folder)
            return messages

    @classmethod
    def from_settings(cls, imap: ImapSettings, *, timeout: float = 30.0) -> "EmailInboxService":
        return cls(
            imap.host,
            port=imap.port,
            username=imap.username,
            password=imap.resolved_password(),
            folder=imap.folder,
            use_ssl=imap.use_ssl,
            timeout=timeout,
        )
