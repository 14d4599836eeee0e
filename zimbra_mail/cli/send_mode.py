"""Send mode: send a message with optional file attachments."""

from pathlib import Path
from typing import List, Optional

import typer

from zimbra_mail.attachments import UploadItem
from zimbra_mail.errors import UploadError, ZimbraError

from .shared import HostOption, UserOption, connect, console, logger


def send(
    to: List[str] = typer.Option(..., "--to", "-t", help="Recipient (repeatable)"),
    subject: str = typer.Option(..., "--subject", "-s"),
    body: str = typer.Option("", "--body", "-b", help="Message text; read from stdin when empty"),
    cc: List[str] = typer.Option([], "--cc", help="Cc recipient (repeatable)"),
    attach: List[Path] = typer.Option([], "--attach", "-a", exists=True, dir_okay=False, help="File to attach (repeatable)"),
    html: bool = typer.Option(False, "--html", help="Send the body as text/html"),
    host: Optional[str] = HostOption,
    user: Optional[str] = UserOption,
) -> None:
    """Send a message; attachments are uploaded first."""
    log = logger.bind(command="send", recipients=len(to) + len(cc), attachments=len(attach))
    text = body or typer.get_text_stream("stdin").read()
    addresses = {"to": to}
    if cc:
        addresses["cc"] = cc

    try:
        with connect(host, user) as client:
            result = client.send(
                addresses,
                subject,
                text,
                attachments=[UploadItem.from_file(path) for path in attach],
                content_type="text/html" if html else None,
            )
    except UploadError as e:
        console.print(f"[red]{e} ({e.reason.value})[/red]")
        log.error("send.upload_failed", reason=e.reason.value, basename=e.basename)
        raise typer.Exit(1) from e
    except ZimbraError as e:
        console.print(f"[red]{e}[/red]")
        log.error("send.failed", error=str(e))
        raise typer.Exit(1) from e

    console.print(f"[green]Message sent[/green] [dim](id {result.message_id or 'n/a'})[/dim]")
    log.info("send.complete", message_id=result.message_id)
