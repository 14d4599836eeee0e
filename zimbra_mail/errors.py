"""Error types raised by the Zimbra client.

Every failure reaches the caller as a subclass of ``ZimbraError``; nothing is
retried and nothing is turned into an empty, success-shaped value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ZimbraError(Exception):
    """Base error for all Zimbra client operations."""


class TransportError(ZimbraError):
    """The HTTP layer failed, or answered non-2xx with no usable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteFault(ZimbraError):
    """The server answered with a structured ``Body.Fault`` object."""

    def __init__(self, payload: dict[str, Any]):
        self.payload = payload
        self.reason = ((payload.get("Reason") or {}).get("Text")) or "unknown fault"
        detail = (payload.get("Detail") or {}).get("Error") or {}
        self.code: str | None = detail.get("Code")
        super().__init__(f"{self.code or 'soap fault'}: {self.reason}")


class WireFormatError(ZimbraError):
    """A decoded response does not have the shape the operation expects."""


class UnknownCodeError(WireFormatError, KeyError):
    """A code or role name is missing from one of the closed code tables."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class AuthFailure(str, Enum):
    TRANSPORT = "transport"
    REJECTED = "rejected"
    MISSING_TOKEN = "missingToken"


class UploadFailure(str, Enum):
    INVALID_SOURCE = "invalidSource"
    REJECTED = "rejected"
    MALFORMED_RESPONSE = "malformedResponse"


class DownloadFailure(str, Enum):
    TRANSPORT = "transport"
    NOT_FOUND = "notFound"


class AuthError(ZimbraError):
    """Authentication did not produce a session token."""

    def __init__(self, reason: AuthFailure, message: str):
        super().__init__(message)
        self.reason = reason


class UploadError(ZimbraError):
    """An attachment could not be uploaded."""

    def __init__(
        self,
        reason: UploadFailure,
        message: str,
        basename: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.basename = basename
        self.status_code = status_code


class DownloadError(ZimbraError):
    """A message part could not be fetched from the content endpoint."""

    def __init__(self, reason: DownloadFailure, message_id: str, part: str, status_code: int | None = None):
        super().__init__(f"Unable to download attachment from message ID {message_id} part {part}")
        self.reason = reason
        self.message_id = message_id
        self.part = part
        self.status_code = status_code


class SendError(ZimbraError):
    """SendMsgRequest failed; ``__cause__`` holds the RemoteFault or TransportError."""

    def __init__(self, message: str, cause: ZimbraError):
        super().__init__(message)
        self.cause = cause


class NotAuthenticatedError(ZimbraError):
    """An authenticated call was attempted on a session without a token."""
