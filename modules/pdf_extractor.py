"""
PDF text extraction module.

Uses pdfplumber to pull plain text from every page of an uploaded PDF and
hands the concatenation to the normalizer.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Union

import pdfplumber
from loguru import logger

from config import MAX_PDF_SIZE_MB
from modules.errors import ExtractionError, InputRejected
from modules.normalizer import normalize

PAGE_SEPARATOR = "\n\n"
_PDF_MAGIC = b"%PDF-"

PdfSource = Union[bytes, BinaryIO]


def is_pdf(data: bytes) -> bool:
    """True if *data* carries a PDF header within its first kilobyte."""
    return _PDF_MAGIC in data[:1024]


def validate_upload(
    data: bytes,
    filename: str | None = None,
    max_size_mb: float = MAX_PDF_SIZE_MB,
) -> float:
    """
    Reject anything that is not a usable PDF before the pipeline starts.

    Returns the upload size in MB.

    Raises
    ------
    InputRejected
        Empty file, wrong extension, missing PDF header, or too large.
    """
    if not data:
        raise InputRejected("The uploaded file is empty.")
    if filename and not filename.lower().endswith(".pdf"):
        raise InputRejected("Please upload a PDF file.")
    if not is_pdf(data):
        raise InputRejected("Please upload a PDF file.")
    size_mb = len(data) / (1024 * 1024)
    if size_mb > max_size_mb:
        raise InputRejected(
            f"File is {size_mb:.1f} MB; the maximum allowed is {max_size_mb} MB."
        )
    return size_mb


def extract_pages(pdf_file: PdfSource) -> list[str]:
    """
    Return the plain text of every page, in order.

    Raises
    ------
    ExtractionError
        The file cannot be parsed, has no pages, or has no readable text.
    """
    stream = io.BytesIO(pdf_file) if isinstance(pdf_file, bytes) else pdf_file
    try:
        with pdfplumber.open(stream) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:
        logger.warning(f"pdfplumber could not read the document: {exc!r}")
        raise ExtractionError() from exc

    if not pages:
        raise ExtractionError("The PDF has no pages.")
    if not any(p.strip() for p in pages):
        raise ExtractionError("No readable text was found in the PDF.")
    logger.debug(f"Extracted {len(pages)} pages")
    return pages


def extract_text(pdf_file: PdfSource) -> tuple[str, list[str]]:
    """
    Extract and normalize the text of an uploaded PDF.

    Returns
    -------
    full_text : str
        Normalized document text.
    pages : list[str]
        Raw per-page text.
    """
    pages = extract_pages(pdf_file)
    full_text = normalize(PAGE_SEPARATOR.join(pages))
    logger.info(f"Extracted {len(full_text)} chars from {len(pages)} pages")
    return full_text, pages
