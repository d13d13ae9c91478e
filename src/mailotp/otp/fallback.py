"""Secondary passes tried when the cascade finds nothing."""

from __future__ import annotations

from typing import Optional

from mailotp.otp.disambiguation import is_likely_valid
from mailotp.otp.matcher import is_valid_shape
from mailotp.otp.patterns import SPACED_DIGITS, STANDALONE_CODE, STRONG_SUBJECTS


def spaced_digits(content: str) -> Optional[str]:
    """Join "code: 1 2 3 4 5 6" style codes into one token."""
    found = SPACED_DIGITS.search(content)
    if not found:
        return None
    code = found.group(1).replace(" ", "")
    if is_valid_shape(code) and is_likely_valid(code, content):
        return code
    return None


def is_strong_subject(subject: str) -> bool:
    """True when the whole subject is a bare OTP announcement such as "Verification Code"."""
    return subject.strip().lower() in STRONG_SUBJECTS


def strong_subject(subject: str, body: str) -> Optional[str]:
    # Deliberately permissive: any standalone run in the body, no year check.
    if not is_strong_subject(subject):
        return None
    found = STANDALONE_CODE.search(body)
    return found.group(1) if found else None
