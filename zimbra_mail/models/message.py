"""Message, body and attachment models."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from zimbra_mail.soap.tables import MESSAGE_FLAGS


class Body(BaseModel):
    """Primary body part of a message."""

    part: str
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None
    content: Optional[str] = None


class Attachment(BaseModel):
    """Inline or attached part of a message, addressed by its dotted part path (e.g. "2.1")."""

    part: str
    disposition: str  # "inline" | "attachment"
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None
    basename: str = ""
    filename: str = ""  # basename without extension
    extension: str = ""


class DownloadedAttachment(Attachment):
    """Attachment together with the bytes fetched from the content endpoint."""

    message_id: str
    payload: bytes = b""

    def open(self) -> io.BytesIO:
        """Readable stream over the payload, positioned at the start."""
        return io.BytesIO(self.payload)

    def save(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (Path(self.basename).name or f"{self.message_id}-{self.part}")
        path.write_bytes(self.payload)
        return path


class Message(BaseModel):
    """Normalized mail message."""

    id: str
    server_message_id: Optional[str] = None  # Message-ID header without <>, usable as "msgid:..."
    folder_id: Optional[str] = None
    conversation_id: Optional[str] = None
    timestamp: Optional[str] = None  # "YYYY-MM-DD HH:MM:SS", local time
    subject: str = ""
    addresses: dict[str, list[str]] = Field(default_factory=dict)
    fragment: str = ""
    flags: str = ""
    size_bytes: Optional[int] = None
    body: Optional[Body] = None
    attachments: list[Attachment] = Field(default_factory=list)

    def flag_names(self) -> list[str]:
        """Decode the raw flag string, e.g. "ua" -> ["Unread", "Has attachment"]."""
        return [MESSAGE_FLAGS.name(code) for code in self.flags]


class SendResult(BaseModel):
    """Outcome of SendMsgRequest."""

    message_id: Optional[str] = None  # id of the saved copy, when the server returns one
    response: dict = Field(default_factory=dict)
