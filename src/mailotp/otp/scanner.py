"""Scans a sequence of messages for the first one carrying a code."""

from __future__ import annotations

from typing import Iterable, Optional

from mailotp.core.errors import OTPNotFoundError
from mailotp.core.models import ExtractionInput, Message, OTPResult
from mailotp.otp.extractor import extract_otp
from mailotp.utils.logging import get_logger

logger = get_logger("mailotp.scanner")


def extract_from_input(source: ExtractionInput) -> str:
    """Try the body first, then the snippet."""
    code = extract_otp(source.subject, source.body)
    if not code and source.snippet:
        code = extract_otp(source.subject, source.snippet)
    return code


def scan_message(message: Message) -> Optional[OTPResult]:
    code = extract_from_input(ExtractionInput.from_message(message))
    if not code:
        return None
    return OTPResult(
        code=code,
        source_email=message.sender,
        subject=message.subject,
        received_at=message.received_at,
        message_id=message.id,
    )


def find_otp(messages: Iterable[Message]) -> OTPResult:
    """Return the code from the first message that has one.

    Messages are scanned in the order given; scanning stops at the first hit.
    Raises OTPNotFoundError when no message yields a code.
    """
    scanned = 0
    for message in messages:
        scanned += 1
        result = scan_message(message)
        if result is not None:
            # Never log the code itself.
            logger.debug("OTP found in message %s after scanning %d message(s)", message.id, scanned)
            return result
    logger.debug("No OTP found in %d message(s)", scanned)
    raise OTPNotFoundError()
