"""
PDF Extraction Tests
"""
import pytest

from modules.errors import ExtractionError, InputRejected
from modules.pdf_extractor import extract_pages, extract_text, is_pdf, validate_upload


class TestValidateUpload:
    """Uploads are rejected before any processing"""

    def test_accepts_pdf(self, sample_pdf):
        assert validate_upload(sample_pdf, "notes.PDF") < 1

    def test_empty(self):
        with pytest.raises(InputRejected):
            validate_upload(b"", "notes.pdf")

    def test_wrong_extension(self, sample_pdf):
        with pytest.raises(InputRejected, match="PDF"):
            validate_upload(sample_pdf, "notes.docx")

    def test_missing_header(self):
        with pytest.raises(InputRejected):
            validate_upload(b"just some text", "notes.pdf")

    def test_too_large(self, sample_pdf):
        with pytest.raises(InputRejected, match="maximum"):
            validate_upload(sample_pdf, "notes.pdf", max_size_mb=0.0001)

    def test_is_pdf(self):
        assert is_pdf(b"%PDF-1.7\n...")
        assert not is_pdf(b"PK\x03\x04")


class TestExtraction:
    """Per-page text extraction via pdfplumber"""

    def test_pages_in_order(self, sample_pdf):
        pages = extract_pages(sample_pdf)
        assert len(pages) == 2
        assert "reference model" in pages[0]
        assert "conclude" in pages[1]

    def test_text_is_normalized(self, sample_pdf):
        text, pages = extract_text(sample_pdf)
        assert text.count("OSI Model") == 3
        assert "Page 1 of 2" not in text
        assert "Page 2 of 2" not in text
        assert text == text.strip()

    def test_corrupt_pdf(self):
        with pytest.raises(ExtractionError):
            extract_pages(b"%PDF-1.4\nthis is not really a pdf")

    def test_no_readable_text(self, blank_pdf):
        with pytest.raises(ExtractionError, match="No readable text"):
            extract_pages(blank_pdf)
