"""CLI smoke tests."""

from typer.testing import CliRunner

from zimbra_mail.cli import app
from zimbra_mail.cli.search_mode import _parse_terms

runner = CliRunner()


def test_parse_terms():
    assert _parse_terms(["in=/Inbox", "report", "date=>=-3days", "=x"]) == [
        ("in", "/Inbox"),
        "report",
        ("date", ">=-3days"),
        "=x",
    ]


def test_commands_registered():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("search", "folders", "send", "download"):
        assert command in result.output
