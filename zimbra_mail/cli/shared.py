"""Shared CLI helpers: console, logger, client construction, message tables."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from zimbra_mail.client import ZimbraClient
from zimbra_mail.config import ZIMBRA_HOST, ZIMBRA_PASSWORD, ZIMBRA_USER
from zimbra_mail.errors import AuthError
from zimbra_mail.models import Message
from zimbra_mail.utils.logger import get_logger

console = Console()
logger = get_logger("zimbra_mail.cli")

HostOption = typer.Option(None, "--host", "-H", help="Zimbra URL, e.g. https://zimbra.example.net (default ZIMBRA_HOST)")
UserOption = typer.Option(None, "--user", "-u", help="Account name or e-mail address (default ZIMBRA_USER)")


def connect(host: str | None, user: str | None) -> ZimbraClient:
    """Authenticate with options, falling back to .env; the password is prompted when not configured."""
    host = (host or ZIMBRA_HOST or "").strip()
    user = (user or ZIMBRA_USER or "").strip()
    if not host or not user:
        console.print("[red]Provide --host and --user, or set ZIMBRA_HOST and ZIMBRA_USER in .env[/red]")
        raise typer.Exit(1)
    password = ZIMBRA_PASSWORD or typer.prompt(f"Password for {user}", hide_input=True)
    try:
        return ZimbraClient.authenticate(host, user, password)
    except AuthError as e:
        console.print(f"[red]{e} ({e.reason.value})[/red]")
        logger.warning("cli.authenticate.failed", reason=e.reason.value)
        raise typer.Exit(1) from e


def message_table(messages: list[Message], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Date", style="green")
    table.add_column("From")
    table.add_column("Subject")
    table.add_column("Flags", justify="center")
    table.add_column("Attachments", justify="right")
    for message in messages:
        table.add_row(
            message.id,
            message.timestamp or "",
            ", ".join(message.addresses.get("from", [])),
            message.subject,
            message.flags,
            str(len(message.attachments)),
        )
    return table
