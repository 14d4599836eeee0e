"""In-memory Zimbra server for tests, plugged in through httpx.MockTransport."""

import json
from typing import Any, Callable, Union

import httpx

from zimbra_mail.auth.session import Session
from zimbra_mail.transport import HttpxTransport

BASE_URL = "https://zimbra.example.net"
TOKEN = "0_tok3n"

SoapAnswer = Union[dict, tuple, Callable[[dict], Any]]


def make_session(token: str | None = TOKEN) -> Session:
    return Session(base_url=BASE_URL, account="user@example.net", token=token)


def fault(code: str, reason: str = "fault") -> dict:
    return {
        "Body": {
            "Fault": {
                "Code": {"Value": "soap:Sender"},
                "Reason": {"Text": reason},
                "Detail": {"Error": {"Code": code, "Trace": "qtp-1", "_jsns": "urn:zimbra"}},
            }
        },
        "_jsns": "urn:zimbraSoap",
    }


class FakeZimbra:
    """Routes SOAP, upload and content requests to canned answers and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.soap: dict[str, SoapAnswer] = {}  # "SearchRequest" -> envelope, (status, envelope) or callable
        self.uploads: list[tuple[int, str]] = []  # answered in order
        self.content: dict[tuple[str, str], bytes] = {}
        self.content_status: dict[tuple[str, str], int] = {}

    def transport(self) -> HttpxTransport:
        return HttpxTransport(httpx.Client(transport=httpx.MockTransport(self.handler)))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/service/soap"):
            return self._soap(request)
        if path.startswith("/service/upload"):
            status, text = self.uploads.pop(0)
            return httpx.Response(status, text=text)
        if path.startswith("/service/content/get"):
            key = (request.url.params["id"], request.url.params["part"])
            if key in self.content_status:
                return httpx.Response(self.content_status[key], text="error")
            if key not in self.content:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, content=self.content[key])
        return httpx.Response(404)

    def _soap(self, request: httpx.Request) -> httpx.Response:
        envelope = json.loads(request.content)
        name = next(iter(envelope["Body"]))
        answer = self.soap[name]
        if callable(answer):
            answer = answer(envelope)
        status = 200
        if isinstance(answer, tuple):
            status, answer = answer
        if isinstance(answer, (bytes, str)):
            return httpx.Response(status, content=answer)
        if status == 200 and "Fault" in answer.get("Body", {}):
            status = 500
        return httpx.Response(status, json=answer)

    def soap_envelopes(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path.startswith("/service/soap")]

    def upload_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/service/upload")]
