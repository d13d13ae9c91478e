"""Settings loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from mailotp.core.errors import ConfigError


class ImapSettings(BaseModel):
    host: str
    port: int = 993
    username: str
    password: str = ""
    password_env: Optional[str] = None  # read the password from this env var when `password` is empty
    folder: str = "INBOX"
    use_ssl: bool = True

    def resolved_password(self) -> str:
        if self.password:
            return self.password
        if self.password_env:
            return os.getenv(self.password_env, "")
        return ""


class AccountSettings(BaseModel):
    email: str
    imap: ImapSettings


class ScannerSettings(BaseModel):
    accounts: List[AccountSettings] = Field(default_factory=list)
    default_account: Optional[str] = None
    message_limit: int = Field(default=10, ge=1)
    watch_interval_seconds: float = Field(default=10.0, gt=0)
    fetch_timeout_seconds: float = Field(default=30.0, gt=0)
    audit_log_path: Path = Field(default=Path("artifacts/otp_audit.log"))

    @model_validator(mode="after")
    def _check_default_account(self) -> "ScannerSettings":
        if self.default_account and self.account(self.default_account) is None:
            raise ValueError(f"default_account {self.default_account!r} is not a configured account")
        return self

    def account(self, email: str) -> Optional[AccountSettings]:
        wanted = email.strip().lower()
        for account in self.accounts:
            if account.email.lower() == wanted:
                return account
        return None

    @classmethod
    def from_file(cls, path: Path) -> "ScannerSettings":
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Unable to parse settings: {exc}") from exc
        try:
            settings = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc
        if not settings.audit_log_path.is_absolute():
            settings.audit_log_path = (path.parent / settings.audit_log_path).resolve()
        return settings
