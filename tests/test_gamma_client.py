import unittest

import requests

from fakes import PPTX_MIME, FakeResponse, FakeSession
from studio.presentation.errors import ServiceError
from studio.presentation.gamma_client import (
    EXPORT_TIMEOUT_SEC,
    SUBMIT_TIMEOUT_SEC,
    build_generation_payload,
    download_deck_export,
    download_export,
    submit_generation,
)

BASE = "https://gamma.test"


class BuildPayloadTests(unittest.TestCase):
    def test_payload_shape(self):
        payload = build_generation_payload("text", "he", 7)
        self.assertEqual(payload["prompt"], "text")
        self.assertEqual(payload["options"]["language"], "he")
        self.assertEqual(payload["options"]["numCards"], 7)
        self.assertEqual(payload["options"]["exportAs"], "pptx")
        self.assertNotIn("themeId", payload["options"])

    def test_theme_id(self):
        payload = build_generation_payload("text", "en", 3, theme_id="  oasis ")
        self.assertEqual(payload["options"]["themeId"], "oasis")
        payload = build_generation_payload("text", "en", 3, theme_id="   ")
        self.assertNotIn("themeId", payload["options"])


class SubmitGenerationTests(unittest.TestCase):
    def test_headers_and_timeout(self):
        session = FakeSession(post=[FakeResponse(json_data={"generationId": "g1"})])
        ctype, body = submit_generation(session, BASE, "secret", {"prompt": "x", "options": {}})

        method, url, kwargs = session.calls[0]
        self.assertEqual(url, f"{BASE}/v2/generate")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer secret")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertEqual(kwargs["timeout"], SUBMIT_TIMEOUT_SEC)
        self.assertIn("application/json", ctype)
        self.assertEqual(body, b'{"generationId": "g1"}')

    def test_non_ascii_prompt_is_sent_as_utf8(self):
        session = FakeSession(post=[FakeResponse(json_data={"url": "https://g/x"})])
        submit_generation(session, BASE, "k", {"prompt": "שלום", "options": {}})
        self.assertEqual(session.sent_payload()["prompt"], "שלום")

    def test_error_status(self):
        session = FakeSession(post=[FakeResponse(status_code=429, body=b"x" * 900)])
        with self.assertRaises(ServiceError) as ctx:
            submit_generation(session, BASE, "k", {})
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(len(ctx.exception.body_excerpt), 500)
        self.assertIn("429", str(ctx.exception))

    def test_transport_error(self):
        session = FakeSession(post=[requests.Timeout("slow")])
        with self.assertRaises(ServiceError) as ctx:
            submit_generation(session, BASE, "k", {})
        self.assertIsNone(ctx.exception.status_code)


class DownloadTests(unittest.TestCase):
    def test_deck_export(self):
        session = FakeSession(get=[FakeResponse(body=b"%PDF-1.7", headers={"Content-Type": "application/pdf"})])
        data, ctype = download_deck_export(session, BASE, "k", "deck-1")
        self.assertEqual(data, b"%PDF-1.7")
        self.assertEqual(ctype, "application/pdf")
        method, url, kwargs = session.calls[0]
        self.assertEqual(url, f"{BASE}/v1/decks/deck-1/export")
        self.assertEqual(kwargs["timeout"], EXPORT_TIMEOUT_SEC)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer k")

    def test_failure_is_not_raised(self):
        session = FakeSession(get=[FakeResponse(status_code=500)])
        with self.assertLogs("studio.presentation.gamma_client", level="WARNING"):
            self.assertIsNone(download_export(session, "https://x/e.pptx"))

        session = FakeSession(get=[requests.ConnectionError("down")])
        with self.assertLogs("studio.presentation.gamma_client", level="WARNING"):
            self.assertIsNone(download_export(session, "https://x/e.pptx"))

    def test_content_type_sniffing(self):
        session = FakeSession(get=[FakeResponse(body=b"PK\x03\x04rest", headers={"Content-Type": "binary/x"})])
        self.assertEqual(download_export(session, "https://x/e")[1], PPTX_MIME)

        session = FakeSession(get=[FakeResponse(body=b"%PDF-1.4", headers={})])
        self.assertEqual(download_export(session, "https://x/e")[1], "application/pdf")

        session = FakeSession(get=[FakeResponse(body=b"<html>expired</html>", headers={"Content-Type": "text/html"})])
        with self.assertLogs("studio.presentation.gamma_client", level="WARNING"):
            self.assertIsNone(download_export(session, "https://x/e"))


if __name__ == "__main__":
    unittest.main()
