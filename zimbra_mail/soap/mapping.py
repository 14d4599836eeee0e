"""Map Zimbra wire objects to the normalized Message / Folder models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable
from urllib.parse import unquote

from pydantic import ValidationError

from zimbra_mail.errors import WireFormatError
from zimbra_mail.models.folder import Folder
from zimbra_mail.models.message import Attachment, Body, Message
from zimbra_mail.soap.tables import ADDRESS_ROLES, CodeTable
from zimbra_mail.soap.wire_models import WireAddress, WireFolder, WireMessage, WirePart

ATTACHMENT_DISPOSITIONS = ("inline", "attachment")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _validate(model, data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise WireFormatError(f"Invalid {model.__name__}: {e}") from e


def format_timestamp(date_ms: int | None) -> str | None:
    """Epoch milliseconds to local "YYYY-MM-DD HH:MM:SS"; sub-second precision is dropped."""
    if date_ms is None:
        return None
    return datetime.fromtimestamp(date_ms // 1000).strftime(TIMESTAMP_FORMAT)


def strip_angle_brackets(message_id: str | None) -> str | None:
    if message_id is None:
        return None
    if message_id.startswith("<") and message_id.endswith(">"):
        return message_id[1:-1]
    return message_id


def group_addresses(
    addresses: Iterable[WireAddress],
    roles: CodeTable = ADDRESS_ROLES,
) -> dict[str, list[str]]:
    """Group addresses by role name; every role of the table is present, possibly empty."""
    grouped: dict[str, list[str]] = {name: [] for name in roles.names()}
    for address in addresses:
        grouped[roles.name(address.type)].append(address.address)
    return grouped


def find_body(parts: Iterable[WirePart]) -> Body | None:
    """First part flagged as body, depth-first; children are searched only when the parent is not the body."""
    for part in parts:
        if part.is_body:
            return Body(
                part=part.part,
                mime_type=part.content_type,
                size_bytes=part.size,
                content=part.content,
            )
        if part.parts:
            body = find_body(part.parts)
            if body is not None:
                return body
    return None


def create_attachment(part: WirePart) -> Attachment:
    # TODO: filenames can also come RFC 2231/2047 encoded; only percent-encoding is decoded here
    basename = unquote(part.filename or "")
    stem, dot, extension = basename.rpartition(".")
    if not dot:
        stem, extension = basename, ""
    return Attachment(
        part=part.part,
        disposition=part.disposition or "",
        mime_type=part.content_type,
        size_bytes=part.size,
        basename=basename,
        filename=stem,
        extension=extension,
    )


def find_attachments(parts: Iterable[WirePart]) -> list[Attachment]:
    """Every inline/attachment part in document order, at any depth, containers included."""
    attachments: list[Attachment] = []
    for part in parts:
        if part.disposition in ATTACHMENT_DISPOSITIONS:
            attachments.append(create_attachment(part))
        if part.parts:
            attachments.extend(find_attachments(part.parts))
    return attachments


def normalize_message(wire: WireMessage | dict[str, Any], roles: CodeTable = ADDRESS_ROLES) -> Message:
    """Convert a wire message ``m`` into a Message."""
    if not isinstance(wire, WireMessage):
        wire = _validate(WireMessage, wire)
    return Message(
        id=wire.id,
        server_message_id=strip_angle_brackets(wire.message_id_header),
        folder_id=wire.folder_id,
        conversation_id=wire.conversation_id,
        timestamp=format_timestamp(wire.date_ms),
        subject=wire.subject or "",
        addresses=group_addresses(wire.addresses, roles),
        fragment=wire.fragment or "",
        flags=wire.flags or "",
        size_bytes=wire.size,
        body=find_body(wire.parts),
        attachments=find_attachments(wire.parts),
    )


def normalize_folder(wire: WireFolder | dict[str, Any]) -> Folder:
    """Convert a GetFolderResponse folder (and its children) into a Folder tree."""
    if not isinstance(wire, WireFolder):
        wire = _validate(WireFolder, wire)
    return Folder(
        id=wire.id,
        name=wire.name or "",
        path=wire.path or "",
        parent_id=wire.parent_id,
        view=wire.view,
        unread=wire.unread or 0,
        count=wire.count or 0,
        size_bytes=wire.size or 0,
        subfolders=[normalize_folder(child) for child in wire.folders],
    )
