"""Error types raised by mailotp."""

from __future__ import annotations


class MailOtpError(Exception):
    """Base class for mailotp errors."""


class OTPNotFoundError(MailOtpError):
    """No message in the scanned sequence carried a code.

    Scanning is deterministic, so retrying with the same messages gives the
    same outcome.
    """

    def __init__(self, message: str = "no OTP found in messages") -> None:
        super().__init__(message)


class NoMessagesError(MailOtpError):
    def __init__(self, message: str = "no messages found") -> None:
        super().__init__(message)


class AccountNotFoundError(MailOtpError):
    def __init__(self, email: str) -> None:
        super().__init__(f"account not found: {email}")
        self.email = email


class NoDefaultAccountError(MailOtpError):
    def __init__(self, message: str = "no default account configured") -> None:
        super().__init__(message)


class ConfigError(MailOtpError, ValueError):
    """Settings file is missing or invalid."""
