"""Session token lifecycle.

A session is created by ``authenticate`` and carries the auth token every
other call needs. There is no renewal: once the token is invalidated (or
expires server-side) the caller authenticates again.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from zimbra_mail.config import AUTH_COOKIE_NAME, CONTENT_PATH, SOAP_PATH, UPLOAD_PATH
from zimbra_mail.errors import AuthError, AuthFailure, NotAuthenticatedError, RemoteFault, TransportError
from zimbra_mail.soap import codec
from zimbra_mail.transport import Transport
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.session")

# Faults after which the token is no longer usable
SESSION_FAULT_CODES = ("service.AUTH_EXPIRED", "service.AUTH_REQUIRED")


class Session(BaseModel):
    """Authenticated account on one Zimbra host, e.g. "https://zimbra.example.net"."""

    base_url: str
    account: str
    token: Optional[str] = Field(None, repr=False)
    csrf_token: Optional[str] = Field(None, repr=False)

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    @property
    def soap_url(self) -> str:
        return f"{self.base_url}{SOAP_PATH}"

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}{UPLOAD_PATH}"

    def content_url(self, message_id: str, part: str) -> str:
        """Content-fetch URL of one message part, e.g. ``?id=34299&part=2.1``."""
        return f"{self.base_url}{CONTENT_PATH}?{urlencode({'id': message_id, 'part': part})}"

    def cookie_headers(self) -> dict[str, str]:
        """Auth for the non-SOAP endpoints, which take the token as a cookie."""
        if self.token is None:
            raise NotAuthenticatedError(f"Session for {self.account} is not authenticated")
        return {"Cookie": f"{AUTH_COOKIE_NAME}={self.token}"}

    def invalidate(self) -> None:
        self.token = None
        self.csrf_token = None


def build_auth_request(account: str, secret: str) -> dict[str, Any]:
    return {
        "AuthRequest": codec.request_element(
            codec.NS_ACCOUNT,
            account={"by": "name", "_content": account},
            password=codec.content(secret),
        )
    }


def _first_content(value: Any) -> Optional[str]:
    """Text of an element that may come as ``{"_content": ...}`` or a list of those."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("_content")
    return value if isinstance(value, str) and value else None


def authenticate(base_url: str, account: str, secret: str, transport: Transport) -> Session:
    """Run AuthRequest and return an authenticated Session.

    ``account`` is usually an e-mail address or a bare user name.
    """
    session = Session(base_url=base_url.rstrip("/"), account=account)
    log = logger.bind(account=account, base_url=session.base_url)

    try:
        body = codec.call(transport, session.soap_url, build_auth_request(account, secret))
    except RemoteFault as e:
        log.warning("session.authenticate.rejected", code=e.code)
        raise AuthError(AuthFailure.REJECTED, "Authentication failed") from e
    except TransportError as e:
        log.warning("session.authenticate.transport_error", error=str(e))
        raise AuthError(AuthFailure.TRANSPORT, "Unable to authenticate") from e

    auth_response = body.get("AuthResponse") or {}
    token = _first_content(auth_response.get("authToken"))
    if token is None:
        log.warning("session.authenticate.missing_token")
        raise AuthError(AuthFailure.MISSING_TOKEN, "No authentication token retrieved")

    session.token = token
    session.csrf_token = _first_content(auth_response.get("csrfToken"))
    log.info("session.authenticate.ok")
    return session


def soap_call(session: Session, transport: Transport, body: dict[str, Any]) -> dict[str, Any]:
    """Authenticated SOAP call; a session-fatal fault invalidates the session before propagating."""
    if session.token is None:
        raise NotAuthenticatedError(f"Session for {session.account} is not authenticated")
    try:
        return codec.call(transport, session.soap_url, body, session.token)
    except RemoteFault as e:
        if e.code in SESSION_FAULT_CODES:
            logger.warning("session.invalidated", account=session.account, code=e.code)
            session.invalidate()
        raise
