"""JSON representation of Zimbra SOAP envelopes.

The server accepts SOAP written as JSON (https://wiki.zimbra.com/wiki/Json_format_to_represent_soap):

- the request is UTF-8 and starts with ``{``; there is no ``Envelope`` object
- elements are ``"name": {...}``, attributes are ``"name": "value"``
- the namespace of an element is its ``"_jsns"`` attribute
- element text content is ``"_content": "..."``
- element lists are ``"name": [...]``

Responses come back in the same shape, with the payload under ``Body`` and
failures under ``Body.Fault``.
"""

from __future__ import annotations

import json
from typing import Any

from zimbra_mail.errors import RemoteFault, TransportError
from zimbra_mail.transport import Transport, TransportResponse
from zimbra_mail.utils.logger import get_logger

logger = get_logger("zimbra_mail.soap")

NS_ZIMBRA = "urn:zimbra"
NS_ACCOUNT = "urn:zimbraAccount"
NS_MAIL = "urn:zimbraMail"

JSON_HEADERS = {"Content-Type": "application/json"}


def content(value: Any) -> dict[str, Any]:
    """Wrap a leaf text value as an element with text content."""
    return {"_content": value}


def element_list(value: Any) -> list[Any]:
    """Repeated element as a list; a lone element may come back as a bare object."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return list(value)


def request_element(namespace: str, **fields: Any) -> dict[str, Any]:
    """Build a request element tagged with its namespace; ``None`` fields are left out."""
    element: dict[str, Any] = {"_jsns": namespace}
    element.update({name: value for name, value in fields.items() if value is not None})
    return element


def build_envelope(body: dict[str, Any], token: str | None = None) -> dict[str, Any]:
    """Wrap a ``{"<Name>Request": {...}}`` payload; the context header is added only with a token."""
    envelope: dict[str, Any] = {"Body": body}
    if token is not None:
        envelope["Header"] = {
            "context": {
                "_jsns": NS_ZIMBRA,
                "authToken": content(token),
            }
        }
    return envelope


def encode_request(body: dict[str, Any], token: str | None = None) -> bytes:
    return json.dumps(build_envelope(body, token), ensure_ascii=False).encode("utf-8")


def decode_response(response: TransportResponse) -> dict[str, Any]:
    """Decode a SOAP answer into its ``Body`` object.

    Faults are reported even on non-2xx answers, since the server sends them
    with HTTP 500. Anything that is not a JSON envelope is a TransportError.
    """
    try:
        decoded = json.loads(response.content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TransportError(
            f"Malformed SOAP response (HTTP {response.status_code})",
            status_code=response.status_code,
        ) from e

    body = decoded.get("Body") if isinstance(decoded, dict) else None
    if not isinstance(body, dict):
        raise TransportError(
            f"SOAP response without Body (HTTP {response.status_code})",
            status_code=response.status_code,
        )

    fault = body.get("Fault")
    if fault is not None:
        raise RemoteFault(fault if isinstance(fault, dict) else {"Reason": {"Text": str(fault)}})

    if not response.ok:
        raise TransportError(
            f"SOAP request failed with HTTP {response.status_code}",
            status_code=response.status_code,
        )
    return body


def call(
    transport: Transport,
    url: str,
    body: dict[str, Any],
    token: str | None = None,
) -> dict[str, Any]:
    """POST one SOAP request and return the decoded ``Body``. Single attempt, no retry."""
    request_name = next(iter(body), "?")
    logger.debug("soap.call", request=request_name, authenticated=token is not None)
    response = transport.send("POST", url, JSON_HEADERS, encode_request(body, token))
    try:
        return decode_response(response)
    except RemoteFault as e:
        logger.info("soap.fault", request=request_name, code=e.code, reason=e.reason)
        raise
