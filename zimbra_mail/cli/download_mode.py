"""Download mode: save the attachments of one message."""

from pathlib import Path
from typing import Optional

import typer

from zimbra_mail.errors import ZimbraError

from .shared import HostOption, UserOption, connect, console, logger


def download(
    message_id: str = typer.Argument(..., help="Message ID"),
    output: Path = typer.Option(Path("."), "--output", "-o", file_okay=False, help="Target directory"),
    extension: Optional[str] = typer.Option(None, "--ext", "-e", help="Only attachments with this extension, e.g. csv"),
    host: Optional[str] = HostOption,
    user: Optional[str] = UserOption,
) -> None:
    """Download the attachments of a message into a directory."""
    log = logger.bind(command="download", message_id=message_id)
    wanted = extension.lower().lstrip(".") if extension else None

    try:
        with connect(host, user) as client:
            message = client.get_message(message_id)
            attachments = client.download(
                message,
                (lambda a: a.extension.lower() == wanted) if wanted else None,
            )
    except ZimbraError as e:
        console.print(f"[red]{e}[/red]")
        log.error("download.failed", error=str(e))
        raise typer.Exit(1) from e

    for attachment in attachments:
        path = attachment.save(output)
        console.print(f"{attachment.part}\t{path}\t{len(attachment.payload)} bytes")
    if not attachments:
        console.print("[dim]No matching attachment.[/dim]")
    log.info("download.complete", count=len(attachments))
