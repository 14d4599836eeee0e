"""Build and send SendMsgRequest.

https://files.zimbra.com/docs/soap_api/8.8.15/api-reference/zimbraMail/SendMsg.html
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from zimbra_mail.attachments.sources import UploadItem
from zimbra_mail.attachments.upload import upload
from zimbra_mail.auth.session import Session, soap_call
from zimbra_mail.errors import RemoteFault, SendError, TransportError
from zimbra_mail.models.message import SendResult
from zimbra_mail.soap import codec
from zimbra_mail.soap.tables import ADDRESS_ROLES, CodeTable
from zimbra_mail.transport import Transport
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.compose")

DEFAULT_CONTENT_TYPE = "text/plain"

# {"to": "admin@example.net", "cc": ["ml@example.net", "sup@example.net"]}
AddressSpec = Mapping[str, Union[str, Iterable[str]]]
# an attachment id, an uploaded item, or an item still to upload
AttachmentSpec = Union[str, UploadItem]


def prepare_addresses(addresses: AddressSpec, roles: CodeTable = ADDRESS_ROLES) -> list[dict[str, str]]:
    """{"to": ["user@example.net"]} -> [{"t": "t", "a": "user@example.net"}]"""
    prepared = []
    for role, role_addresses in addresses.items():
        code = roles.code(role)
        if isinstance(role_addresses, str):
            role_addresses = [role_addresses]
        prepared.extend({"t": code, "a": address} for address in role_addresses)
    return prepared


def resolve_attachment_ids(
    session: Session,
    transport: Transport,
    attachments: Iterable[AttachmentSpec],
) -> list[str]:
    """Attachment ids in order, uploading the items that have none yet."""
    ids = []
    for attachment in attachments:
        if isinstance(attachment, str):
            ids.append(attachment)
        elif attachment.attachment_id is not None:
            ids.append(attachment.attachment_id)
        else:
            ids.append(upload(session, transport, attachment).attachment_id)
    return ids


def build_send_request(
    addresses: AddressSpec,
    subject: str,
    body: str,
    attachment_ids: Iterable[str] = (),
    content_type: str | None = None,
    roles: CodeTable = ADDRESS_ROLES,
) -> dict[str, Any]:
    message: dict[str, Any] = {
        "e": prepare_addresses(addresses, roles),
        "su": subject,
        "mp": {
            "ct": content_type or DEFAULT_CONTENT_TYPE,
            "content": codec.content(body),
        },
    }
    ids = list(attachment_ids)
    # The server rejects the whole message when given an empty aid
    if ids:
        message["attach"] = {"aid": ",".join(ids)}
    return {
        "SendMsgRequest": codec.request_element(
            codec.NS_MAIL,
            noSave=0,
            fetchSavedMsg=1,
            m=message,
        )
    }


def send(
    session: Session,
    transport: Transport,
    addresses: AddressSpec,
    subject: str,
    body: str,
    attachments: Iterable[AttachmentSpec] = (),
    content_type: str | None = None,
) -> SendResult:
    """Send a message, uploading attachments that were not uploaded before.

    Addresses are checked before anything is uploaded. UploadError from the
    upload step propagates as is; RemoteFault and TransportError from either
    step are raised as SendError.
    """
    recipients = prepare_addresses(addresses)
    log = logger.bind(subject=subject, recipients=len(recipients))
    try:
        attachment_ids = resolve_attachment_ids(session, transport, attachments)
        request = build_send_request(addresses, subject, body, attachment_ids, content_type)
        response = soap_call(session, transport, request)
    except (RemoteFault, TransportError) as e:
        log.warning("compose.send.failed", error=str(e))
        raise SendError(f"Unable to send message {subject!r}", e) from e

    saved = codec.element_list((response.get("SendMsgResponse") or {}).get("m"))
    message_id = saved[0].get("id") if saved else None
    log.info("compose.send.ok", message_id=message_id)
    return SendResult(message_id=message_id, response=response)
