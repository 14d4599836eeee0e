"""Authentication and session token handling for the SOAP API."""

from zimbra_mail.auth.session import (
    SESSION_FAULT_CODES,
    Session,
    authenticate,
    soap_call,
)

__all__ = [
    "SESSION_FAULT_CODES",
    "Session",
    "authenticate",
    "soap_call",
]
