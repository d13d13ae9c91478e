"""Shared test doubles."""

from __future__ import annotations

import datetime as dt
from typing import List, Sequence

from mailotp.core.models import EmailParticipant, Message


class DummySource:
    """Message source returning canned batches, one per call; the last batch repeats."""

    def __init__(self, *batches: Sequence[Message]) -> None:
        self._batches: List[List[Message]] = [list(batch) for batch in batches] or [[]]
        self.calls: List[int] = []

    async def list_messages(self, limit: int) -> List[Message]:
        self.calls.append(limit)
        index = min(len(self.calls) - 1, len(self._batches) - 1)
        return self._batches[index][:limit]


def make_message(msg_id: str, subject: str = "", body: str = "", sender: str = "no-reply@example.com") -> Message:
    return Message(
        id=msg_id,
        subject=subject,
        body=body,
        from_=[EmailParticipant(email=sender)],
        received_at=dt.datetime(2026, 10, 18, 9, 30, tzinfo=dt.timezone.utc),
    )
