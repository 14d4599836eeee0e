"""Zimbra mail client: JSON-SOAP session, search, folders, attachments and sending."""

__version__ = "0.1.0"

from zimbra_mail.attachments import UploadItem
from zimbra_mail.auth import Session, authenticate
from zimbra_mail.client import ZimbraClient
from zimbra_mail.errors import (
    AuthError,
    AuthFailure,
    DownloadError,
    DownloadFailure,
    NotAuthenticatedError,
    RemoteFault,
    SendError,
    TransportError,
    UnknownCodeError,
    UploadError,
    UploadFailure,
    WireFormatError,
    ZimbraError,
)
from zimbra_mail.models import Attachment, Body, DownloadedAttachment, Folder, Message, SendResult
from zimbra_mail.soap.query import build_query
from zimbra_mail.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "Attachment",
    "AuthError",
    "AuthFailure",
    "Body",
    "DownloadError",
    "DownloadFailure",
    "DownloadedAttachment",
    "Folder",
    "HttpxTransport",
    "Message",
    "NotAuthenticatedError",
    "RemoteFault",
    "SendError",
    "SendResult",
    "Session",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnknownCodeError",
    "UploadError",
    "UploadFailure",
    "UploadItem",
    "WireFormatError",
    "ZimbraClient",
    "ZimbraError",
    "authenticate",
    "build_query",
]
