"""Pydantic models for the normalized mail objects."""

from zimbra_mail.models.folder import Folder
from zimbra_mail.models.message import (
    Attachment,
    Body,
    DownloadedAttachment,
    Message,
    SendResult,
)

__all__ = [
    "Attachment",
    "Body",
    "DownloadedAttachment",
    "Folder",
    "Message",
    "SendResult",
]
