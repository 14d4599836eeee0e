"""Folders mode: print a folder tree."""

from typing import Optional

import typer
from rich.tree import Tree

from zimbra_mail.errors import ZimbraError
from zimbra_mail.models import Folder

from .shared import HostOption, UserOption, connect, console, logger


def _add_children(node: Tree, folder: Folder) -> None:
    for child in folder.subfolders:
        branch = node.add(f"{child.name} [dim]({child.unread}/{child.count})[/dim]")
        _add_children(branch, child)


def folders(
    path: str = typer.Argument("/", help="Folder path, e.g. /Inbox"),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Levels of sub-folders (all by default)"),
    host: Optional[str] = HostOption,
    user: Optional[str] = UserOption,
) -> None:
    """Show a folder and its sub-folders with unread/total counts."""
    log = logger.bind(command="folders", path=path)
    try:
        with connect(host, user) as client:
            folder = client.get_folder(path, depth=depth)
    except ZimbraError as e:
        console.print(f"[red]{e}[/red]")
        log.error("folders.failed", error=str(e))
        raise typer.Exit(1) from e

    tree = Tree(f"[bold]{folder.path or folder.name}[/bold] [dim]({folder.unread}/{folder.count})[/dim]")
    _add_children(tree, folder)
    console.print(tree)
    log.info("folders.complete", folders=sum(1 for _ in folder.walk()))
