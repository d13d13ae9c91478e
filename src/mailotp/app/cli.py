"""Command line entrypoint: `mailotp get|messages|watch|list|extract`."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mailotp.core.errors import MailOtpError, OTPNotFoundError
from mailotp.core.models import OTPResult
from mailotp.core.settings import ScannerSettings
from mailotp.otp.extractor import extract_otp
from mailotp.services import AuditLogger, OtpService
from mailotp.utils.env import get_path_env
from mailotp.utils.logging import get_logger


DEFAULT_CONFIG = Path("config/mailotp.yml")

logger = get_logger("mailotp.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mailotp", description="Find one-time passwords in recent email.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (default: $MAILOTP_CONFIG or config/mailotp.yml)",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="Get the latest OTP code")
    get.add_argument("email", nargs="?", help="Account email (default account when omitted)")

    messages = commands.add_parser("messages", help="Show recent messages and their codes")
    messages.add_argument("email", nargs="?", help="Account email (default account when omitted)")
    messages.add_argument("--limit", type=int, default=None, help="Number of messages to list")

    watch = commands.add_parser("watch", help="Watch for new OTP codes")
    watch.add_argument("email", nargs="?", help="Account email (default account when omitted)")
    watch.add_argument("--interval", type=float, default=None, help="Seconds between polls")

    commands.add_parser("list", help="List configured accounts")

    extract = commands.add_parser("extract", help="Extract a code from a subject and body")
    extract.add_argument("--subject", default="", help="Message subject")
    extract.add_argument("--body", default=None, help="Message body (read from stdin when omitted)")
    return parser


def _result_dict(result: OTPResult) -> dict:
    return result.model_dump(mode="json")


def _print_result(console: Console, result: OTPResult, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(_result_dict(result)))
        return
    console.print(f"Code:     [bold]{result.code}[/bold]")
    console.print(f"From:     {escape(result.source_email or '-')}")
    console.print(f"Subject:  {escape(result.subject)}")
    if result.received_at:
        console.print(f"Received: {result.received_at.isoformat()}")


def _load_service(config: Optional[Path]) -> OtpService:
    path = config or get_path_env("MAILOTP_CONFIG", default=DEFAULT_CONFIG)
    settings = ScannerSettings.from_file(path)
    return OtpService(settings, audit_logger=AuditLogger(settings.audit_log_path))


async def _cmd_get(service: OtpService, args: argparse.Namespace, console: Console) -> int:
    email = args.email or service.default_email()
    try:
        result = await service.get_otp(email)
    except OTPNotFoundError:
        if args.json:
            console.print_json(json.dumps({"code": None}))
        else:
            console.print("No OTP found in recent messages.")
        return 0
    _print_result(console, result, args.json)
    return 0


async def _cmd_messages(service: OtpService, args: argparse.Namespace, console: Console) -> int:
    email = args.email or service.default_email()
    scanned = await service.get_messages(email, args.limit)
    if args.json:
        console.print_json(json.dumps([item.model_dump(mode="json", by_alias=True) for item in scanned]))
        return 0
    if not scanned:
        console.print("No messages found.")
        return 0
    table = Table(title=f"Recent messages for {escape(email)}")
    table.add_column("Received")
    table.add_column("From")
    table.add_column("Subject")
    table.add_column("Code")
    for item in scanned:
        received = item.message.received_at.strftime("%Y-%m-%d %H:%M") if item.message.received_at else "-"
        table.add_row(received, escape(item.message.sender or "-"), escape(item.message.subject), item.code or "-")
    console.print(table)
    return 0


async def _cmd_watch(service: OtpService, args: argparse.Namespace, console: Console) -> int:
    email = args.email or service.default_email()
    console.print(f"Watching {escape(email)} for new OTP codes. Press Ctrl+C to stop.")
    async for result in service.watch(email, interval=args.interval):
        _print_result(console, result, args.json)
    return 0


def _cmd_list(service: OtpService, args: argparse.Namespace, console: Console) -> int:
    accounts = service.list_accounts()
    if args.json:
        console.print_json(json.dumps([account.model_dump() for account in accounts]))
        return 0
    table = Table(title="Configured accounts")
    table.add_column("Email")
    table.add_column("Default")
    for account in accounts:
        table.add_row(escape(account.email), "yes" if account.is_default else "")
    console.print(table)
    console.print(f"{len(accounts)} account(s) configured")
    return 0


def _cmd_extract(args: argparse.Namespace, console: Console) -> int:
    body = args.body if args.body is not None else sys.stdin.read()
    code = extract_otp(args.subject, body)
    if args.json:
        console.print_json(json.dumps({"code": code}))
    elif code:
        console.print(code)
    else:
        console.print("No OTP found.")
    return 0


async def main(argv: Optional[List[str]] = None, *, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    if args.command == "extract":
        return _cmd_extract(args, console)

    try:
        service = _load_service(args.config)
        if args.command == "list":
            return _cmd_list(service, args, console)
        if args.command == "get":
            return await _cmd_get(service, args, console)
        if args.command == "messages":
            return await _cmd_messages(service, args, console)
        if args.command == "watch":
            return await _cmd_watch(service, args, console)
    except (MailOtpError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 2


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
