"""Search mode: run a Zimbra search and list the matching messages."""

from typing import List, Optional

import typer

from zimbra_mail.errors import ZimbraError
from zimbra_mail.utils.logger import bind_context, clear_context

from .shared import HostOption, UserOption, connect, console, logger, message_table


def _parse_terms(terms: list[str]) -> list:
    """Split "in=/Inbox" into ("in", "/Inbox"); anything without "=" stays a bare term."""
    parsed = []
    for term in terms:
        name, sep, value = term.partition("=")
        parsed.append((name, value) if sep and name else term)
    return parsed


def search(
    terms: List[str] = typer.Argument(..., help='Search terms: field=value (e.g. in=/Inbox) or bare words'),
    limit: int = typer.Option(50, "--limit", "-n", help="Page size (max 1000)"),
    offset: int = typer.Option(0, "--offset", help="Starting index"),
    host: Optional[str] = HostOption,
    user: Optional[str] = UserOption,
) -> None:
    """Search messages and print them oldest first."""
    bind_context(command="search")
    log = logger.bind(limit=limit, offset=offset)
    log.info("search.start")
    try:
        with connect(host, user) as client:
            messages = client.search(_parse_terms(terms), limit=limit, offset=offset)
    except ZimbraError as e:
        console.print(f"[red]{e}[/red]")
        log.error("search.failed", error=str(e))
        raise typer.Exit(1) from e
    finally:
        clear_context()

    console.print(message_table(messages, title=f"{len(messages)} message(s)"))
    log.info("search.complete", count=len(messages))
