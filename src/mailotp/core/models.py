"""Data models shared across the mailotp package."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailParticipant(BaseModel):
    """A sender or recipient on a message."""

    email: str = ""
    name: Optional[str] = None


class Message(BaseModel):
    """Mail message as returned by a message source."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str = ""
    body: str = ""
    snippet: str = ""
    from_: List[EmailParticipant] = Field(default_factory=list, alias="from")
    received_at: Optional[dt.datetime] = None

    @property
    def sender(self) -> str:
        return self.from_[0].email if self.from_ else ""


class ExtractionInput(BaseModel):
    """Text fields of one message fed to the extractor."""

    model_config = ConfigDict(frozen=True)

    subject: str = ""
    body: str = ""
    snippet: str = ""

    @classmethod
    def from_message(cls, message: Message) -> "ExtractionInput":
        return cls(subject=message.subject, body=message.body, snippet=message.snippet)


class OTPResult(BaseModel):
    """Code found by a scan, plus the metadata of the message it came from."""

    model_config = ConfigDict(frozen=True)

    code: str
    source_email: str = ""
    subject: str = ""
    received_at: Optional[dt.datetime] = None
    message_id: str = ""


class AccountInfo(BaseModel):
    email: str
    is_default: bool = False


class ScannedMessage(BaseModel):
    """A listed message paired with the code found in it, if any."""

    message: Message
    code: str = ""
