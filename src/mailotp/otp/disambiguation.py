"""Rejects year-like candidates that are unlikely to be codes."""

from __future__ import annotations

from mailotp.otp.patterns import COPYRIGHT_MARKERS, OTP_CONTEXT

YEAR_MIN = 1900
YEAR_MAX = 2099


def is_likely_valid(code: str, content: str) -> bool:
    """Return False when a 4 digit candidate reads as a calendar year.

    Only 4 digit candidates are checked; every other length is accepted.
    A year-like value is rejected next to copyright markers or inside a
    year range ("2023-2024"), accepted when the text carries OTP context
    ("expires in 10 minutes", "don't share", ...) and rejected otherwise.
    """
    if len(code) != 4 or not code.isdigit():
        return True
    if not YEAR_MIN <= int(code) <= YEAR_MAX:
        return True

    lowered = content.lower()
    if any(marker in lowered for marker in COPYRIGHT_MARKERS):
        return False
    if f"{code}-" in content or f"-{code}" in content:
        return False
    return OTP_CONTEXT.search(content) is not None
