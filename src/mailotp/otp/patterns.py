"""Ordered extraction rules for verification codes.

The table is tried top to bottom and the first rule whose capture group
yields a usable candidate wins. Order is priority: provider shorthand
formats, provider-anchored phrases, generic keyword phrases, reversed
phrasing, inline markup, then the loose contextual rule.

Every rule is compiled with ``re.ASCII`` so ``\\d`` only ever matches
``0-9``. Quantifiers between anchors are bounded to keep matching linear on
large bodies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

_FLAGS = re.IGNORECASE | re.ASCII

# Digits glued to a currency sign, a "#" or the word "room" are amounts and
# reference numbers; digits running into a decimal part are amounts too.
NOT_AMOUNT_BEFORE = r"(?<![$€£¥#\d])(?<!#\s)(?<!\broom\s)"
NOT_AMOUNT_AFTER = r"(?![.,]\d)\b"

# Candidate capture: a plain 4-8 digit run, or two 3-4 digit groups joined by
# a single hyphen or space ("123-456", "123 456").
CODE = rf"{NOT_AMOUNT_BEFORE}(\d{{3,4}}[- ]\d{{3,4}}|\d{{4,8}}){NOT_AMOUNT_AFTER}"

# "keyword: code", "keyword is code", "keyword - code", "keyword code".
DELIM = r"\s{0,10}(?:is\s{0,10}:?|[:=\-])?\s{0,10}"

PROVIDERS = (
    r"google|gmail|microsoft|outlook|github|gitlab|amazon|aws|apple|icloud|facebook|instagram|"
    r"whatsapp|twitter|linkedin|slack|discord|telegram|paypal|stripe|dropbox|uber|netflix|"
    r"steam|coinbase|binance|okta|atlassian|zoom|yahoo"
)

KEYWORDS = (
    r"one[-\s]?time[-\s]?(?:password|passcode|code|pin)|otp|"
    r"verification\s+code|security\s+code|auth(?:entication)?\s+code|"
    r"2fa\s+code|two[-\s]?factor\s+(?:authentication\s+)?code|"
    r"sign[-\s]?in\s+code|log[-\s]?in\s+code|access\s+code|"
    r"confirmation\s+code|activation\s+code|reset\s+code|"
    r"pin(?:\s+code)?|passcode"
)

# Looser set for the contextual rule: any of these within the window before a
# digit run is enough.
CONTEXT_KEYWORDS = (
    r"one[-\s]?time|otp|verification|security\s+code|passcode|2fa|"
    r"two[-\s]?factor|login\s+code|sign[-\s]?in\s+code|pin"
)

MARKUP_TAGS = r"span|div|strong|b|p|td|code|h[1-6]|font|em"


@dataclass(frozen=True)
class PatternRule:
    """One entry of the cascade."""

    name: str
    matcher: Pattern[str]
    group: int = 1


def _rule(name: str, pattern: str, group: int = 1) -> PatternRule:
    return PatternRule(name=name, matcher=re.compile(pattern, _FLAGS), group=group)


PATTERN_RULES: Tuple[PatternRule, ...] = (
    # Provider shorthand tokens: "G-123456", "FB-12345".
    _rule("google_prefix", r"\bG-(\d{6})\b"),
    _rule("facebook_prefix", r"\bFB-(\d{5,6})\b"),
    # Provider name near a code keyword: "Your Google 2FA code is 345678".
    _rule(
        "provider",
        rf"\b(?:{PROVIDERS})\b.{{0,30}}?\b(?:code|otp|pin|passcode)\b{DELIM}(?<!\d){CODE}",
    ),
    # Generic keyword then code.
    _rule("keyword", rf"\b(?:{KEYWORDS})(?:\s+code)?\b{DELIM}(?<!\d){CODE}"),
    # Action prompts: "Enter: 987654", "Confirm with: 789456".
    _rule(
        "action",
        rf"\b(?:enter|use|confirm\s+with|code\s+to\s+complete)\s{{0,10}}:\s{{0,10}}{CODE}",
    ),
    # Bare "code": "Your code is 654321", "Code: 123456".
    _rule("code", rf"\bcode\s{{0,10}}(?:is\s{{0,10}}:?|:)\s{{0,10}}{CODE}"),
    # Reversed phrasing: "123456 is your one-time code".
    _rule(
        "reversed",
        rf"(?<![\d-])(\d{{4,8}})\s{{1,10}}is\s{{1,10}}your\s{{1,10}}(?:[a-z]+\s{{1,10}}){{0,3}}?(?:{KEYWORDS}|code)\b",
    ),
    # "Use 654321 as your Microsoft account security code".
    _rule("use_as", r"\buse\s{1,10}(\d{4,8})\s{1,10}as\s{1,10}your\b.{0,40}?\b(?:code|otp|password|pin)\b"),
    # Digits alone inside inline markup: "<strong>987654</strong>".
    _rule("markup", rf"<({MARKUP_TAGS})\b[^<>]{{0,200}}>\s{{0,10}}(\d{{4,8}})\s{{0,10}}</\1\s*>", group=2),
    # Keyword somewhere in the 50 characters before the digits.
    _rule("contextual", rf"\b(?:{CONTEXT_KEYWORDS})\b[^\d]{{0,50}}?{NOT_AMOUNT_BEFORE}(\d{{4,8}}){NOT_AMOUNT_AFTER}"),
)

# Keyword then single-space separated digits: "code: 1 2 3 4 5 6".
SPACED_DIGITS = re.compile(r"\b(?:code|otp|verification)\b[^\d]{0,20}?(?<!\d)(\d(?: \d){3,5})(?! ?\d)", _FLAGS)

# Any standalone 3-8 digit run; only used behind a strong subject.
STANDALONE_CODE = re.compile(r"\b(\d{3,8})\b", _FLAGS)

# Whole-subject announcements that mark a message as an OTP email.
STRONG_SUBJECTS = frozenset(
    {
        "otp",
        "otp code",
        "one-time password",
        "one time password",
        "one-time code",
        "verification code",
        "security code",
        "2fa",
        "2fa code",
        "two-factor",
        "two-factor authentication",
    }
)

# Phrases that make a year-like 4 digit candidate believable as a code. Each
# is matched as whole words; "expires in" and "valid for" need a duration.
OTP_CONTEXT_PHRASES: Tuple[str, ...] = (
    r"otp",
    r"one[-\s]time",
    r"verification\s+code",
    r"security\s+code",
    r"passcode",
    r"2fa",
    r"two[-\s]factor",
    r"log[-\s]?in\s+code",
    r"sign[-\s]?in\s+code",
    r"enter\s+(?:the\s+|this\s+)?code",
    r"use\s+this\s+code",
    r"your\s+code",
    r"code\s+is",
    r"(?:don['’]t|do\s+not|never)\s+share",
    r"(?:expires\s+in|valid\s+for)\s+(?:\d{1,3}|an?|one|two|three|five|ten|fifteen|thirty)\s+(?:seconds?|minutes?|mins?|hours?)",
)

OTP_CONTEXT = re.compile(r"\b(?:" + "|".join(OTP_CONTEXT_PHRASES) + r")\b", _FLAGS)

COPYRIGHT_MARKERS: Tuple[str, ...] = ("©", "copyright", "(c)", "&copy;")
