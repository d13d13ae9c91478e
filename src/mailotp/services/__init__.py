"""Service providers used by the CLI."""

from .audit_logger import AuditLogger, mask_code
from .email import EmailInboxService, MessageSource, parse_message
from .otp_service import OtpService

__all__ = [
    "AuditLogger",
    "EmailInboxService",
    "MessageSource",
    "OtpService",
    "mask_code",
    "parse_message",
]
