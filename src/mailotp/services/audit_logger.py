"""Structured audit logger writing JSON Lines for OTP retrievals."""

from __future__ import annotations

import asyncio
import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, Optional

from mailotp.core.models import OTPResult
from mailotp.utils.env import get_path_env


def mask_code(code: str, *, visible: int = 2) -> str:
    """Keep the first ``visible`` digits of a code and star the rest."""
    if len(code) <= visible:
        return "*" * len(code)
    return code[:visible] + "*" * (len(code) - visible)


class AuditLogger:
    """Persist an audit trail of retrieved codes; codes are stored masked."""

    def __init__(self, path: Optional[Path] = None) -> None:
        target = path or get_path_env("MAILOTP_AUDIT_LOG", default=Path("artifacts/otp_audit.log"))
        target.parent.mkdir(parents=True, exist_ok=True)
        self._path = target
        self._lock = asyncio.Lock()

    async def log(self, *, event: str, account: str, payload: Dict[str, Any]) -> None:
        record = {
            "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
            "event": event,
            "account": account,
            "payload": payload,
        }
        async with self._lock:
            await asyncio.to_thread(self._append_line, record)

    async def log_result(self, *, event: str, account: str, result: OTPResult) -> None:
        await self.log(
            event=event,
            account=account,
            payload={
                "message_id": result.message_id,
                "source_email": result.source_email,
                "code": mask_code(result.code),
            },
        )

    def _append_line(self, record: Dict[str, Any]) -> None:
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=True))
            fh.write("\n")
