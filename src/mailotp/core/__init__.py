"""Core models, errors and settings."""

from .errors import (
    AccountNotFoundError,
    ConfigError,
    MailOtpError,
    NoDefaultAccountError,
    NoMessagesError,
    OTPNotFoundError,
)
from .models import AccountInfo, EmailParticipant, ExtractionInput, Message, OTPResult, ScannedMessage
from .settings import AccountSettings, ImapSettings, ScannerSettings

__all__ = [
    "AccountInfo",
    "AccountNotFoundError",
    "AccountSettings",
    "ConfigError",
    "EmailParticipant",
    "ExtractionInput",
    "ImapSettings",
    "MailOtpError",
    "Message",
    "NoDefaultAccountError",
    "NoMessagesError",
    "OTPNotFoundError",
    "OTPResult",
    "ScannedMessage",
    "ScannerSettings",
]
