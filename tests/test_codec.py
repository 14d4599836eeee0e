"""Tests for the JSON-SOAP envelope codec."""

import json
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zimbra_mail.errors import RemoteFault, TransportError
from zimbra_mail.soap import codec
from zimbra_mail.transport import TransportResponse

from fake_server import fault


def _response(payload, status_code=200) -> TransportResponse:
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return TransportResponse(status_code=status_code, content=raw)


class TestEncodeRequest(unittest.TestCase):
    """Request envelopes."""

    def test_without_token_has_no_header(self):
        body = {"AuthRequest": codec.request_element(codec.NS_ACCOUNT, password=codec.content("pw"))}
        envelope = json.loads(codec.encode_request(body))
        self.assertEqual(set(envelope), {"Body"})
        self.assertEqual(envelope["Body"]["AuthRequest"]["_jsns"], "urn:zimbraAccount")
        self.assertEqual(envelope["Body"]["AuthRequest"]["password"], {"_content": "pw"})

    def test_with_token_adds_context_header(self):
        envelope = json.loads(codec.encode_request({"NoOpRequest": {"_jsns": codec.NS_MAIL}}, token="abc"))
        self.assertEqual(
            envelope["Header"],
            {"context": {"_jsns": "urn:zimbra", "authToken": {"_content": "abc"}}},
        )

    def test_request_element_drops_none_fields(self):
        element = codec.request_element(codec.NS_MAIL, depth=None, folder={"path": "/Inbox"})
        self.assertEqual(element, {"_jsns": "urn:zimbraMail", "folder": {"path": "/Inbox"}})

    def test_element_list_accepts_lone_element(self):
        self.assertEqual(codec.element_list({"id": "1"}), [{"id": "1"}])
        self.assertEqual(codec.element_list([{"id": "1"}, {"id": "2"}]), [{"id": "1"}, {"id": "2"}])
        self.assertEqual(codec.element_list(None), [])

    def test_encoded_as_utf8(self):
        raw = codec.encode_request({"SearchRequest": {"query": codec.content("sujet:été")}})
        self.assertIn("été".encode("utf-8"), raw)
        self.assertTrue(raw.startswith(b"{"))


class TestDecodeResponse(unittest.TestCase):
    """Response envelopes."""

    def test_returns_body(self):
        body = codec.decode_response(_response({"Body": {"NoOpResponse": {"_jsns": "urn:zimbraMail"}}}))
        self.assertIn("NoOpResponse", body)

    def test_fault_raises_remote_fault_even_on_http_500(self):
        with self.assertRaises(RemoteFault) as ctx:
            codec.decode_response(_response(fault("mail.NO_SUCH_FOLDER", "no such folder"), status_code=500))
        self.assertEqual(ctx.exception.code, "mail.NO_SUCH_FOLDER")
        self.assertEqual(ctx.exception.reason, "no such folder")
        self.assertIn("Detail", ctx.exception.payload)

    def test_malformed_json_is_transport_error(self):
        with self.assertRaises(TransportError) as ctx:
            codec.decode_response(_response(b"<html>Bad gateway</html>", status_code=502))
        self.assertEqual(ctx.exception.status_code, 502)

    def test_missing_body_is_transport_error(self):
        with self.assertRaises(TransportError):
            codec.decode_response(_response({"Header": {}}))

    def test_non_2xx_without_fault_is_transport_error(self):
        with self.assertRaises(TransportError) as ctx:
            codec.decode_response(_response({"Body": {}}, status_code=503))
        self.assertEqual(ctx.exception.status_code, 503)
