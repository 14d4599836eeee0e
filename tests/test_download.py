"""Tests for attachment downloads."""

import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zimbra_mail.attachments import download, fetch_part
from zimbra_mail.errors import DownloadError, DownloadFailure, NotAuthenticatedError
from zimbra_mail.models import Attachment, Message

from fake_server import TOKEN, FakeZimbra, make_session


def _message() -> Message:
    return Message(
        id="34299",
        attachments=[
            Attachment(part="2", disposition="attachment", mime_type="text/csv",
                       basename="extract.csv", filename="extract", extension="csv"),
            Attachment(part="3", disposition="inline", mime_type="image/png",
                       basename="logo.png", filename="logo", extension="png"),
        ],
    )


class TestDownload(unittest.TestCase):

    def setUp(self):
        self.server = FakeZimbra()
        self.server.content[("34299", "2")] = b"a;b\n1;2\n"
        self.server.content[("34299", "3")] = b"\x89PNG"
        self.session = make_session()

    def test_all_attachments(self):
        downloaded = download(self.session, self.server.transport(), _message())
        self.assertEqual([d.part for d in downloaded], ["2", "3"])
        self.assertEqual(downloaded[0].payload, b"a;b\n1;2\n")
        self.assertEqual(downloaded[0].basename, "extract.csv")
        self.assertEqual(downloaded[0].message_id, "34299")
        self.assertEqual(downloaded[1].open().read(), b"\x89PNG")

        request = self.server.requests[0]
        self.assertEqual(request.url.path, "/service/content/get")
        self.assertEqual(request.headers["Cookie"], f"ZM_AUTH_TOKEN={TOKEN}")

    def test_filter(self):
        downloaded = download(
            self.session, self.server.transport(), _message(), lambda a: a.extension == "csv"
        )
        self.assertEqual([d.basename for d in downloaded], ["extract.csv"])
        self.assertEqual(len(self.server.requests), 1)

    def test_no_attachments_no_requests(self):
        self.assertEqual(download(self.session, self.server.transport(), Message(id="1")), [])
        self.assertEqual(self.server.requests, [])

    def test_missing_part_fails_whole_call(self):
        del self.server.content[("34299", "3")]
        with self.assertRaises(DownloadError) as ctx:
            download(self.session, self.server.transport(), _message())
        self.assertEqual(ctx.exception.reason, DownloadFailure.NOT_FOUND)
        self.assertEqual((ctx.exception.message_id, ctx.exception.part), ("34299", "3"))

    def test_server_error(self):
        self.server.content_status[("34299", "2")] = 500
        with self.assertRaises(DownloadError) as ctx:
            fetch_part(self.session, self.server.transport(), "34299", "2")
        self.assertEqual(ctx.exception.reason, DownloadFailure.TRANSPORT)
        self.assertEqual(ctx.exception.status_code, 500)

    def test_unauthenticated(self):
        with self.assertRaises(NotAuthenticatedError):
            fetch_part(make_session(token=None), self.server.transport(), "34299", "2")

    def test_save(self):
        (attachment, _) = download(self.session, self.server.transport(), _message())
        with tempfile.TemporaryDirectory() as tmp:
            path = attachment.save(Path(tmp) / "out")
            self.assertEqual(path.name, "extract.csv")
            self.assertEqual(path.read_bytes(), b"a;b\n1;2\n")
