"""Attachment upload through /service/upload.

This endpoint is not SOAP: the body is the raw file, the token travels as a
cookie, and with ``fmt=raw`` the answer is one CSV-ish line quoted with
single quotes::

    200,'null',63f347f0-df57-4c1e-a3f5-0a3b0a6e3b1d:2d5e0a8e-...

``fmt=raw,extended`` would append unescaped JSON to that line, so it is not used.
"""

from __future__ import annotations

import csv
import dataclasses
from typing import Iterable
from urllib.parse import quote

from zimbra_mail.attachments.sources import UploadItem, materialize
from zimbra_mail.auth.session import Session
from zimbra_mail.errors import TransportError, UploadError, UploadFailure
from zimbra_mail.transport import Transport
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.upload")


def upload_headers(session: Session, basename: str) -> dict[str, str]:
    return {
        "Content-Type": "application/octet-stream",
        "Content-Disposition": f'attachment; filename="{quote(basename, safe="")}"',
        "Content-Transfer-Encoding": "binary",
        **session.cookie_headers(),
    }


def parse_upload_response(raw: bytes | str, basename: str | None = None) -> str:
    """Return the attachment id from a ``code,requestId,attachmentId`` line."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        fields = next(csv.reader([text.strip()], delimiter=",", quotechar="'"), [])
    except csv.Error as e:
        raise UploadError(
            UploadFailure.MALFORMED_RESPONSE, f"Unreadable upload response: {text[:80]!r}", basename=basename
        ) from e

    code = fields[0].strip() if fields else ""
    if not code.isdigit():
        raise UploadError(
            UploadFailure.MALFORMED_RESPONSE, f"Unreadable upload response: {text[:80]!r}", basename=basename
        )
    # Error lines stop after the request id: "500,'null'"
    if code != "200":
        raise UploadError(
            UploadFailure.REJECTED,
            f"Upload of file {basename} failed with response code {code}",
            basename=basename,
            status_code=int(code),
        )

    attachment_id = fields[2].strip() if len(fields) >= 3 else ""
    if not attachment_id:
        raise UploadError(
            UploadFailure.MALFORMED_RESPONSE, "Upload response carries no attachment id", basename=basename
        )
    return attachment_id


def upload(session: Session, transport: Transport, item: UploadItem) -> UploadItem:
    """Upload one item; returns a copy carrying the server attachment id."""
    payload = materialize(item)
    log = logger.bind(basename=item.basename, size=len(payload))

    response = transport.send("POST", session.upload_url, upload_headers(session, item.basename), payload)
    try:
        attachment_id = parse_upload_response(response.content, item.basename)
    except UploadError as e:
        if e.reason is UploadFailure.MALFORMED_RESPONSE and not response.ok:
            log.warning("upload.http_error", status_code=response.status_code)
            raise TransportError(
                f"Upload of file {item.basename} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            ) from e
        log.warning("upload.failed", reason=e.reason.value, status_code=e.status_code)
        raise

    log.info("upload.ok", attachment_id=attachment_id)
    return dataclasses.replace(item, attachment_id=attachment_id)


def upload_many(session: Session, transport: Transport, items: Iterable[UploadItem]) -> list[UploadItem]:
    """Upload items one call at a time, stopping at the first failure.

    Items uploaded before the failure are not rolled back.
    """
    return [upload(session, transport, item) for item in items]
