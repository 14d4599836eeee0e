"""Tests for authentication and the session token lifecycle."""

import sys
import unittest
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zimbra_mail.auth.session import Session, authenticate, soap_call
from zimbra_mail.errors import AuthError, AuthFailure, NotAuthenticatedError, RemoteFault
from zimbra_mail.transport import HttpxTransport

from fake_server import BASE_URL, FakeZimbra, fault, make_session

AUTH_OK = {
    "Body": {
        "AuthResponse": {
            "authToken": [{"_content": "0_abc123"}],
            "lifetime": 172800000,
            "csrfToken": {"_content": "0_csrf"},
            "_jsns": "urn:zimbraAccount",
        }
    }
}


class TestAuthenticate(unittest.TestCase):
    """AuthRequest outcomes."""

    def setUp(self):
        self.server = FakeZimbra()

    def test_success(self):
        self.server.soap["AuthRequest"] = AUTH_OK
        session = authenticate(BASE_URL + "/", "user@example.net", "secret", self.server.transport())
        self.assertEqual(session.token, "0_abc123")
        self.assertEqual(session.csrf_token, "0_csrf")
        self.assertEqual(session.base_url, BASE_URL)
        self.assertTrue(session.authenticated)

    def test_request_is_unauthenticated(self):
        self.server.soap["AuthRequest"] = AUTH_OK
        authenticate(BASE_URL, "user@example.net", "secret", self.server.transport())
        (envelope,) = self.server.soap_envelopes()
        self.assertNotIn("Header", envelope)
        self.assertEqual(
            envelope["Body"]["AuthRequest"],
            {
                "_jsns": "urn:zimbraAccount",
                "account": {"by": "name", "_content": "user@example.net"},
                "password": {"_content": "secret"},
            },
        )
        self.assertEqual(str(self.server.requests[0].url), BASE_URL + "/service/soap/")

    def test_fault_is_rejected(self):
        self.server.soap["AuthRequest"] = fault("account.AUTH_FAILED", "authentication failed for [user]")
        with self.assertRaises(AuthError) as ctx:
            authenticate(BASE_URL, "user@example.net", "wrong", self.server.transport())
        self.assertEqual(ctx.exception.reason, AuthFailure.REJECTED)
        self.assertIsInstance(ctx.exception.__cause__, RemoteFault)

    def test_missing_token(self):
        self.server.soap["AuthRequest"] = {"Body": {"AuthResponse": {"lifetime": 1}}}
        with self.assertRaises(AuthError) as ctx:
            authenticate(BASE_URL, "user@example.net", "secret", self.server.transport())
        self.assertEqual(ctx.exception.reason, AuthFailure.MISSING_TOKEN)

    def test_transport_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(httpx.Client(transport=httpx.MockTransport(refuse)))
        with self.assertRaises(AuthError) as ctx:
            authenticate(BASE_URL, "user@example.net", "secret", transport)
        self.assertEqual(ctx.exception.reason, AuthFailure.TRANSPORT)

    def test_malformed_response_is_transport(self):
        self.server.soap["AuthRequest"] = (502, "<html>proxy error</html>")
        with self.assertRaises(AuthError) as ctx:
            authenticate(BASE_URL, "user@example.net", "secret", self.server.transport())
        self.assertEqual(ctx.exception.reason, AuthFailure.TRANSPORT)


class TestSessionCalls(unittest.TestCase):
    """Authenticated calls through soap_call."""

    def setUp(self):
        self.server = FakeZimbra()

    def test_token_in_header(self):
        self.server.soap["NoOpRequest"] = {"Body": {"NoOpResponse": {}}}
        session = make_session()
        soap_call(session, self.server.transport(), {"NoOpRequest": {"_jsns": "urn:zimbraMail"}})
        (envelope,) = self.server.soap_envelopes()
        self.assertEqual(envelope["Header"]["context"]["authToken"]["_content"], session.token)

    def test_expired_token_invalidates_session(self):
        self.server.soap["NoOpRequest"] = fault("service.AUTH_EXPIRED", "auth credentials have expired")
        session = make_session()
        with self.assertRaises(RemoteFault):
            soap_call(session, self.server.transport(), {"NoOpRequest": {}})
        self.assertIsNone(session.token)
        self.assertFalse(session.authenticated)

    def test_other_fault_keeps_session(self):
        self.server.soap["NoOpRequest"] = fault("mail.NO_SUCH_MSG")
        session = make_session()
        with self.assertRaises(RemoteFault):
            soap_call(session, self.server.transport(), {"NoOpRequest": {}})
        self.assertIsNotNone(session.token)

    def test_unauthenticated_session_refused(self):
        with self.assertRaises(NotAuthenticatedError):
            soap_call(make_session(token=None), self.server.transport(), {"NoOpRequest": {}})
        self.assertEqual(self.server.requests, [])

    def test_repr_hides_token(self):
        session = Session(base_url=BASE_URL, account="user@example.net", token="sekrit")
        self.assertNotIn("sekrit", repr(session))

    def test_content_url(self):
        url = make_session().content_url("34299", "2.1")
        self.assertEqual(url, BASE_URL + "/service/content/get?id=34299&part=2.1")
