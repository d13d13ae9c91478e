"""One-time password extraction engine."""

from .disambiguation import is_likely_valid
from .extractor import OtpReader, extract_otp
from .fallback import is_strong_subject, spaced_digits, strong_subject
from .matcher import match, normalize_candidate
from .patterns import PATTERN_RULES, PatternRule
from .scanner import find_otp, scan_message

__all__ = [
    "OtpReader",
    "PATTERN_RULES",
    "PatternRule",
    "extract_otp",
    "find_otp",
    "is_likely_valid",
    "is_strong_subject",
    "match",
    "normalize_candidate",
    "scan_message",
    "spaced_digits",
    "strong_subject",
]
