"""Attachment download through /service/content/get."""

from __future__ import annotations

from typing import Callable, Optional

from zimbra_mail.auth.session import Session
from zimbra_mail.errors import DownloadError, DownloadFailure, TransportError
from zimbra_mail.models.message import Attachment, DownloadedAttachment, Message
from zimbra_mail.transport import Transport
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.download")

AttachmentFilter = Callable[[Attachment], bool]


def fetch_part(session: Session, transport: Transport, message_id: str, part: str) -> bytes:
    """Raw bytes of one message part. The content endpoint takes the token as a cookie."""
    try:
        response = transport.send("GET", session.content_url(message_id, part), session.cookie_headers())
    except TransportError as e:
        raise DownloadError(DownloadFailure.TRANSPORT, message_id, part) from e
    if response.status_code == 404:
        raise DownloadError(DownloadFailure.NOT_FOUND, message_id, part, status_code=404)
    if not response.ok:
        raise DownloadError(DownloadFailure.TRANSPORT, message_id, part, status_code=response.status_code)
    return response.content


def download(
    session: Session,
    transport: Transport,
    message: Message,
    attachment_filter: Optional[AttachmentFilter] = None,
) -> list[DownloadedAttachment]:
    """Fetch the message attachments accepted by ``attachment_filter`` (all by default).

    Any failed fetch fails the whole call; there are no partial results.
    """
    downloaded = []
    for attachment in message.attachments:
        if attachment_filter is not None and not attachment_filter(attachment):
            continue
        payload = fetch_part(session, transport, message.id, attachment.part)
        logger.debug("download.part", message_id=message.id, part=attachment.part, size=len(payload))
        downloaded.append(
            DownloadedAttachment(**attachment.model_dump(), message_id=message.id, payload=payload)
        )
    logger.info("download.ok", message_id=message.id, count=len(downloaded))
    return downloaded
