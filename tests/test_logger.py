"""Tests for the structlog helpers."""

import structlog

from zimbra_mail.utils.logger import get_logger, redact_secrets


def test_secrets_are_masked():
    event = redact_secrets(None, "info", {"event": "x", "token": "0_abc", "password": "pw", "account": "user"})
    assert event == {"event": "x", "token": "***", "password": "***", "account": "user"}


def test_empty_secret_left_as_is():
    assert redact_secrets(None, "info", {"token": None})["token"] is None


def test_get_logger_binds_context():
    logger = get_logger("zimbra_mail.test", account="user@example.net")
    assert structlog.get_context(logger)["account"] == "user@example.net"
