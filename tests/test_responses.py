import json
import unittest

from studio.presentation.responses import (
    DeckExport,
    DirectUrl,
    FileBytes,
    JobPending,
    Unrecognized,
    choose_deck_id,
    choose_export_url,
    choose_view_url,
    classify_response,
    find_export_urls,
)

PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def _json(data):
    return json.dumps(data).encode("utf-8")


class ClassifyResponseTests(unittest.TestCase):
    def test_direct_url_variants(self):
        for key in ["url", "presentationUrl", "viewUrl"]:
            shape = classify_response("application/json", _json({key: "https://gamma.app/docs/abc"}))
            self.assertIsInstance(shape, DirectUrl, key)
            self.assertEqual(shape.url, "https://gamma.app/docs/abc")

    def test_url_wins_over_ids(self):
        shape = classify_response(
            "application/json",
            _json({"generationId": "g1", "presentationUrl": "https://gamma.app/docs/abc"}),
        )
        self.assertIsInstance(shape, DirectUrl)

    def test_job_id(self):
        shape = classify_response("application/json", _json({"generationId": "g1"}))
        self.assertIsInstance(shape, JobPending)
        self.assertEqual(shape.generation_id, "g1")

    def test_deck_id(self):
        shape = classify_response("application/json", _json({"id": "deck-9", "status": "ok"}))
        self.assertIsInstance(shape, DeckExport)
        self.assertEqual(shape.deck_id, "deck-9")

    def test_office_content_type(self):
        shape = classify_response(PPTX_MIME, b"PK\x03\x04binary")
        self.assertIsInstance(shape, FileBytes)
        self.assertEqual(shape.describe(), {"type": "file", "contentType": PPTX_MIME, "size": 10})

    def test_pdf_content_type(self):
        shape = classify_response("application/pdf", b"%PDF-1.7")
        self.assertIsInstance(shape, FileBytes)
        self.assertEqual(shape.content_type, "application/pdf")

    def test_empty_file_body_is_unrecognized(self):
        shape = classify_response("application/pdf", b"")
        self.assertIsInstance(shape, Unrecognized)
        self.assertEqual(shape.payload, {"contentType": "application/pdf", "size": 0})

    def test_json_parse_failure_is_file(self):
        shape = classify_response("", b"\x00\x01not json")
        self.assertIsInstance(shape, FileBytes)

    def test_unexpected_json_does_not_raise(self):
        self.assertIsInstance(classify_response("application/json", _json({"status": "ok"})), Unrecognized)
        self.assertIsInstance(classify_response("application/json", _json([1, 2])), Unrecognized)
        self.assertIsInstance(classify_response("application/json", b""), Unrecognized)

    def test_non_http_url_is_ignored(self):
        shape = classify_response("application/json", _json({"url": "ftp://x", "deckId": "d1"}))
        self.assertIsInstance(shape, DeckExport)


class ExportUrlTests(unittest.TestCase):
    def test_find_export_urls_nested(self):
        data = {
            "files": [
                {"type": "pptx", "url": "https://example.com/a.pptx"},
                {"type": "pdf", "url": "https://example.com/a.pdf"},
            ],
            "other": {"url": "https://example.com/slide?p=pptx"},
        }
        urls = find_export_urls(data)
        self.assertEqual(urls[0], "https://example.com/a.pptx")
        self.assertIn("https://example.com/slide?p=pptx", urls)
        self.assertNotIn("https://example.com/a.pdf", urls)

    def test_choose_export_url_priority(self):
        self.assertEqual(
            choose_export_url({"exportUrl": "https://x/e1", "export": {"pptx": "https://x/e2"}}),
            "https://x/e1",
        )
        self.assertEqual(choose_export_url({"export": {"pptx": "https://x/e2"}}), "https://x/e2")
        self.assertEqual(choose_export_url({"export": {"pdf": "https://x/e3.pdf"}}), "https://x/e3.pdf")
        self.assertEqual(
            choose_export_url({"files": ["https://cdn.example.com/deck.pptx?sig=1"]}),
            "https://cdn.example.com/deck.pptx?sig=1",
        )
        self.assertIsNone(choose_export_url({"gammaUrl": "https://gamma.app/docs/abc"}))

    def test_view_url_and_deck_id(self):
        result = {"gammaUrl": "https://gamma.app/docs/abc", "gammaId": "abc"}
        self.assertEqual(choose_view_url(result), "https://gamma.app/docs/abc")
        self.assertEqual(choose_deck_id(result), "abc")
        self.assertIsNone(choose_view_url({}))
        self.assertIsNone(choose_deck_id({}))


if __name__ == "__main__":
    unittest.main()
