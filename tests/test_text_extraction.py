import unittest
from io import BytesIO
from unittest.mock import MagicMock, patch

from docx import Document as DocxDocument

from infrastructure.text_extraction.docx_extractor import DocxExtractor, LegacyDocExtractor
from infrastructure.text_extraction.drawio_extractor import DrawioExtractor
from infrastructure.text_extraction.html_extractor import HtmlExtractor
from infrastructure.text_extraction.image_extractor import IMAGE_KEYWORDS, ImageExtractor
from infrastructure.text_extraction.pdf_extractor import PdfExtractor, clean_page_text
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor


class TestPlainTextExtractor(unittest.TestCase):
    def test_returns_text_unmodified(self):
        raw = "Line one\n\n  indented line\t\n"
        result = PlainTextExtractor().extract(raw.encode("utf-8"))
        self.assertFalse(result.failed)
        self.assertEqual(result.text, raw)


class TestDrawioExtractor(unittest.TestCase):
    def test_extracts_labels_and_decodes_entities(self):
        xml = (
            '<mxCell id="2" value="Check power supply" style="rounded=1"/>\n'
            '<mxCell id="3" value="OK" />\n'
            '<mxCell id="4" value="Restart &amp; verify&#xa;link" />\n'
            '<mxCell id="5" value="&lt;b&gt;Call &quot;support&quot;" />\n'
        )
        result = DrawioExtractor().extract(xml)
        self.assertEqual(
            result.text,
            'Check power supply\nRestart & verify\nlink\n<b>Call "support"\n',
        )

    def test_discards_labels_shorter_than_six_characters(self):
        result = DrawioExtractor().extract('<a value="  abcde  "/><b value="abcdef"/>')
        self.assertEqual(result.text, "abcdef\n")


class TestHtmlExtractor(unittest.TestCase):
    PAGE = "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            "<title>Cycler Guide</title>",
            '<meta charset="utf-8">',
            '<script>var error = "not content";</script>',
            "<p>If you see an error, restart the &quot;cycler&quot; service</p>",
            "<p>error</p>",
            "<p>Welcome to the lab portal and its many features</p>",
        ]
    )

    def test_keeps_title_and_keyword_lines(self):
        result = HtmlExtractor().extract(self.PAGE.encode("utf-8"))
        self.assertEqual(
            result.text,
            'Title: Cycler Guide\nIf you see an error, restart the "cycler" service\n',
        )

    def test_drops_overlong_lines(self):
        line = "<p>step " + "x" * 600 + "</p>"
        self.assertEqual(HtmlExtractor().extract(line).text, "")


class TestPdfExtractor(unittest.TestCase):
    def test_corrupt_pdf_is_a_failure_not_an_exception(self):
        result = PdfExtractor().extract(b"definitely not a pdf")
        self.assertTrue(result.failed)

    def test_cleans_pages_and_skips_short_or_broken_ones(self):
        broken = MagicMock()
        broken.extract_text.side_effect = RuntimeError("bad font")
        pages = [
            MagicMock(**{"extract_text.return_value": "  Voltage  drift ♥ detected on channel 4  "}),
            MagicMock(**{"extract_text.return_value": "short"}),
            broken,
            MagicMock(**{"extract_text.return_value": "Line one\n\n\n\nLine two here"}),
        ]
        with patch("infrastructure.text_extraction.pdf_extractor.PdfReader") as reader_cls:
            reader_cls.return_value.pages = pages
            result = PdfExtractor().extract(b"%PDF-1.4")
        self.assertFalse(result.failed)
        self.assertEqual(result.text, "Voltage drift detected on channel 4\nLine one\n\nLine two here\n")

    def test_pdf_without_text_is_a_failure(self):
        with patch("infrastructure.text_extraction.pdf_extractor.PdfReader") as reader_cls:
            reader_cls.return_value.pages = [MagicMock(**{"extract_text.return_value": ""})]
            result = PdfExtractor().extract(b"%PDF-1.4")
        self.assertTrue(result.failed)

    def test_clean_page_text_replaces_mojibake(self):
        self.assertEqual(clean_page_text("a◄b↔c�d"), "a b c d")


class TestDocxExtractor(unittest.TestCase):
    def test_extracts_paragraphs_and_drops_short_lines(self):
        doc = DocxDocument()
        doc.add_paragraph("Check    the   cable harness")
        doc.add_paragraph("ok")
        table = doc.add_table(rows=1, cols=1)
        table.rows[0].cells[0].text = "Replace relay board"
        buffer = BytesIO()
        doc.save(buffer)

        result = DocxExtractor().extract(buffer.getvalue())
        self.assertFalse(result.failed)
        self.assertEqual(result.text, "Check the cable harness\nReplace relay board\n")

    def test_unreadable_document_is_a_failure(self):
        result = DocxExtractor().extract(b"not a zip archive")
        self.assertTrue(result.failed)
        self.assertIn("Error reading Word document", result.text)

    def test_empty_document_reports_no_readable_text(self):
        buffer = BytesIO()
        DocxDocument().save(buffer)
        result = DocxExtractor().extract(buffer.getvalue())
        self.assertTrue(result.failed)
        self.assertIn("no readable text", result.text)


class TestPlaceholderExtractors(unittest.TestCase):
    def test_legacy_doc_is_not_supported(self):
        result = LegacyDocExtractor().extract(b"\xd0\xcf\x11\xe0")
        self.assertTrue(result.failed)
        self.assertIn("convert to .docx", result.text)

    def test_image_placeholder_contains_size_and_keywords(self):
        result = ImageExtractor().extract(b"\x89PNG" + b"\x00" * 96)
        self.assertFalse(result.failed)
        self.assertIn("File size: 100 bytes", result.text)
        self.assertIn(IMAGE_KEYWORDS, result.text)

    def test_empty_image_is_a_failure(self):
        self.assertTrue(ImageExtractor().extract(b"").failed)


if __name__ == "__main__":
    unittest.main()
