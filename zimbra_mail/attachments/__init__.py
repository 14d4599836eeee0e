"""Attachment transfer: uploads to /service/upload, downloads from /service/content/get."""

from zimbra_mail.attachments.download import download, fetch_part
from zimbra_mail.attachments.sources import (
    BufferSource,
    FileSource,
    StreamSource,
    UploadItem,
    materialize,
)
from zimbra_mail.attachments.upload import parse_upload_response, upload, upload_many

__all__ = [
    "BufferSource",
    "FileSource",
    "StreamSource",
    "UploadItem",
    "download",
    "fetch_part",
    "materialize",
    "parse_upload_response",
    "upload",
    "upload_many",
]
