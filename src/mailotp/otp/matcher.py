"""Runs the pattern cascade over message text."""

from __future__ import annotations

import re
from typing import Iterator, Optional, Sequence, Tuple

from mailotp.otp.disambiguation import is_likely_valid
from mailotp.otp.patterns import PATTERN_RULES, PatternRule

MIN_CODE_LENGTH = 4
MAX_CODE_LENGTH = 8

_SEPARATORS = re.compile(r"[- ]")
_DIGITS_ONLY = re.compile(r"[0-9]+", re.ASCII)


def normalize_candidate(raw: str) -> str:
    """Strip hyphens and spaces out of a captured candidate."""
    return _SEPARATORS.sub("", raw)


def is_valid_shape(code: str) -> bool:
    return bool(_DIGITS_ONLY.fullmatch(code)) and MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH


def candidates(content: str, rules: Sequence[PatternRule] = PATTERN_RULES) -> Iterator[Tuple[str, str]]:
    """Yield ``(rule name, normalized candidate)`` for every rule that matches, in table order."""
    for rule in rules:
        found = rule.matcher.search(content)
        if not found:
            continue
        raw = found.group(rule.group)
        if raw:
            yield rule.name, normalize_candidate(raw)


def match(content: str, rules: Sequence[PatternRule] = PATTERN_RULES) -> Optional[str]:
    """Return the first candidate that passes the shape and year checks."""
    for _, code in candidates(content, rules):
        if is_valid_shape(code) and is_likely_valid(code, content):
            return code
    return None
