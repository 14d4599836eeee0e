"""CLI commands: one module per mode (search, folders, send, download)."""

from typer import Typer

from zimbra_mail.cli import download_mode, folders_mode, search_mode, send_mode

app = Typer(help="Zimbra mailbox over the JSON-SOAP API")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(search_mode.search)
    app.command()(folders_mode.folders)
    app.command()(send_mode.send)
    app.command()(download_mode.download)


register_commands()
