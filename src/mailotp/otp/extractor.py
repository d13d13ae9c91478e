"""Helpers for extracting one-time passwords from email text."""

from __future__ import annotations

from typing import Optional, Sequence

from mailotp.otp.fallback import spaced_digits, strong_subject
from mailotp.otp.matcher import match
from mailotp.otp.patterns import PATTERN_RULES, PatternRule


def extract_otp(subject: str, body: str) -> str:
    """Return the verification code carried by a message, or ``""``.

    Subject and body are joined with a single space and run through the
    pattern cascade; the spaced-digit and strong-subject passes are tried
    only when the cascade finds nothing.
    """
    return OtpReader().parse(subject, body) or ""


class OtpReader:
    """OTP parser over a fixed rule table."""

    def __init__(self, rules: Sequence[PatternRule] = PATTERN_RULES) -> None:
        self._rules = tuple(rules)

    def parse(self, subject: str, body: str = "") -> Optional[str]:
        content = f"{subject} {body}"
        code = match(content, self._rules)
        if code:
            return code
        code = spaced_digits(content)
        if code:
            return code
        return strong_subject(subject, body)
