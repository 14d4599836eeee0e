"""Zimbra mailbox client over the JSON-SOAP API."""

from __future__ import annotations

from typing import Iterable, Optional

from zimbra_mail import compose
from zimbra_mail.attachments.download import AttachmentFilter, download
from zimbra_mail.attachments.sources import UploadItem
from zimbra_mail.attachments.upload import upload_many
from zimbra_mail.auth.session import Session, authenticate, soap_call
from zimbra_mail.config import SEARCH_LIMIT, SEARCH_LOCALE
from zimbra_mail.errors import WireFormatError
from zimbra_mail.models import DownloadedAttachment, Folder, Message, SendResult
from zimbra_mail.soap import codec
from zimbra_mail.soap.mapping import normalize_folder, normalize_message
from zimbra_mail.soap.query import SearchSpec, build_query
from zimbra_mail.soap.tables import SORT_ORDERS
from zimbra_mail.transport import HttpxTransport, Transport
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.client")


def _response(body: dict, name: str) -> dict:
    response = body.get(name)
    if not isinstance(response, dict):
        raise WireFormatError(f"No {name} provided")
    return response


class ZimbraClient:
    """Mailbox of one authenticated Zimbra account.

    Build it with ``ZimbraClient.authenticate(host, user, password)``. A client
    owns one session token and is not meant to be shared between threads.
    """

    def __init__(self, session: Session, transport: Transport):
        self.session = session
        self.transport = transport

    @classmethod
    def authenticate(
        cls,
        host: str,
        user: str,
        password: str,
        transport: Optional[Transport] = None,
    ) -> "ZimbraClient":
        """host: e.g. "https://zimbra.example.net", no trailing slash needed; user: e-mail address or name."""
        transport = transport or HttpxTransport()
        return cls(authenticate(host, user, password, transport), transport)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "ZimbraClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def search(
        self,
        spec: SearchSpec,
        limit: int = SEARCH_LIMIT,
        offset: int = 0,
        sort_by: str = "dateDesc",
        oldest_first: bool = True,
        locale: str = SEARCH_LOCALE,
    ) -> list[Message]:
        """Search messages, e.g. ``{"in": "/Inbox/Important", 0: "Really important?"}``.

        Common fields: in, under, has (attachment, phone, url), filename,
        subject, from, to, toccme, cc, content, date (">=-3days" or
        "yyyy-mm-dd"), after, before, is (read, unread, ...).

        ``limit`` is the server page size (default and max 1000), ``offset``
        the starting index. The page is returned oldest first unless
        ``oldest_first`` is False.
        """
        if sort_by not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order {sort_by!r}")
        query = build_query(spec)
        request = {
            "SearchRequest": codec.request_element(
                codec.NS_MAIL,
                types="message",
                sortBy=sort_by,
                fetch="all",
                limit=limit,
                offset=offset,
                query=codec.content(query),
                locale=codec.content(locale),
            )
        }
        body = soap_call(self.session, self.transport, request)
        wire_messages = codec.element_list(_response(body, "SearchResponse").get("m"))
        if oldest_first:
            wire_messages = list(reversed(wire_messages))
        messages = [normalize_message(m) for m in wire_messages]
        logger.info("client.search", query=query, count=len(messages))
        return messages

    def get_message(self, message_id: str) -> Message:
        request = {"GetMsgRequest": codec.request_element(codec.NS_MAIL, m={"id": message_id})}
        body = soap_call(self.session, self.transport, request)
        wire_messages = codec.element_list(_response(body, "GetMsgResponse").get("m"))
        if not wire_messages:
            raise WireFormatError(f"GetMsgResponse for {message_id} carries no message")
        return normalize_message(wire_messages[0])

    def get_folder(self, path: str, depth: Optional[int] = None) -> Folder:
        """Folder at ``path`` (e.g. "/Inbox") with sub-folders down to ``depth`` levels (all when None)."""
        request = {
            "GetFolderRequest": codec.request_element(
                codec.NS_MAIL,
                depth=depth,
                folder={"path": path},
            )
        }
        body = soap_call(self.session, self.transport, request)
        folders = codec.element_list(_response(body, "GetFolderResponse").get("folder"))
        if not folders:
            raise WireFormatError(f"GetFolderResponse for {path} carries no folder")
        folder = normalize_folder(folders[0])
        logger.debug("client.get_folder", path=path, subfolders=len(folder.subfolders))
        return folder

    def upload(self, items: Iterable[UploadItem]) -> list[UploadItem]:
        """Upload items in a row (one call each); returned items carry their attachment id."""
        return upload_many(self.session, self.transport, items)

    def download(
        self,
        message: Message,
        attachment_filter: Optional[AttachmentFilter] = None,
    ) -> list[DownloadedAttachment]:
        return download(self.session, self.transport, message, attachment_filter)

    def send(
        self,
        addresses: compose.AddressSpec,
        subject: str,
        body: str,
        attachments: Iterable[compose.AttachmentSpec] = (),
        content_type: Optional[str] = None,
    ) -> SendResult:
        """Send a message.

        ``addresses`` maps a role to one address or a list of them, e.g.
        ``{"to": "admin@example.net", "cc": ["ml@example.net"]}``.
        ``attachments`` may mix attachment ids, uploaded items and items to upload.
        """
        return compose.send(
            self.session,
            self.transport,
            addresses,
            subject,
            body,
            attachments,
            content_type,
        )
