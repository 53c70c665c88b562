"""
Tests for the document text extraction module.
"""

from unittest.mock import MagicMock, patch

import pytest

from bailx.config import Config
from bailx.model import ParseError
from bailx.pdfio import (
    extract_pages_with_pdfplumber,
    extract_pdf_text,
    extract_text,
    html_to_text,
)


def _mock_pdf(mock_pdfplumber, texts):
    pages = []
    for text in texts:
        page = MagicMock()
        page.extract_text.return_value = text
        pages.append(page)
    mock_pdf = MagicMock()
    mock_pdf.pages = pages
    mock_pdfplumber.open.return_value.__enter__.return_value = mock_pdf
    return pages


def test_extract_text_plain():
    """Test decoding a text bulletin."""
    assert extract_text(b"KEALOHA JOHN K\nTHEFT\n", "arrests.txt", Config()) == "KEALOHA JOHN K\nTHEFT\n"


def test_extract_text_html():
    """Test flattening an HTML bulletin."""
    html = b"<html><head><style>p {}</style></head><body><p>KEALOHA JOHN K</p><p>THEFT</p></body></html>"

    text = extract_text(html, "arrests.html", Config())
    lines = [line for line in text.splitlines() if line.strip()]

    assert lines == ["KEALOHA JOHN K", "THEFT"]


def test_html_to_text_drops_scripts():
    """Test that script content is removed."""
    assert "alert" not in html_to_text("<script>alert(1)</script><p>LEE SUSAN</p>")


@patch("bailx.pdfio.extract_pdf_text", return_value="pdf text")
def test_extract_text_detects_pdf_magic(mock_extract_pdf_text):
    """Test that PDF bytes are recognised without a .pdf name."""
    assert extract_text(b"%PDF-1.4 ...", "download", Config()) == "pdf text"


def test_extract_text_unsupported():
    """Test an unsupported document type."""
    with pytest.raises(ParseError, match="Unsupported bulletin format"):
        extract_text(b"PK\x03\x04", "arrests.docx", Config())


@patch("bailx.pdfio.pdfplumber")
def test_extract_pdf_text_pdfplumber(mock_pdfplumber):
    """Test extracting text with pdfplumber."""
    _mock_pdf(mock_pdfplumber, ["Page 1 text", "Page 2 text"])

    assert extract_pdf_text(b"%PDF-1.4", Config()) == "Page 1 text\nPage 2 text"


@patch("bailx.pdfio.PdfReader")
@patch("bailx.pdfio.pdfplumber")
def test_extract_pdf_text_falls_back_to_pypdf(mock_pdfplumber, mock_reader):
    """Test the pypdf fallback."""
    mock_pdfplumber.open.side_effect = Exception("broken xref")
    page = MagicMock()
    page.extract_text.return_value = "pypdf text"
    mock_reader.return_value.pages = [page]

    assert extract_pdf_text(b"%PDF-1.4", Config()) == "pypdf text"


@patch("bailx.pdfio.PdfReader")
@patch("bailx.pdfio.pdfplumber")
def test_extract_pdf_text_unreadable(mock_pdfplumber, mock_reader):
    """Test a PDF neither library can read."""
    mock_pdfplumber.open.side_effect = Exception("broken xref")
    mock_reader.side_effect = Exception("EOF marker not found")

    with pytest.raises(ParseError, match="Error extracting text from PDF"):
        extract_pdf_text(b"not a pdf", Config())


@patch("bailx.pdfio.ocr_page", return_value="OCR text")
@patch("bailx.pdfio.pdfplumber")
def test_ocr_fallback_for_empty_pages(mock_pdfplumber, mock_ocr_page):
    """Test that empty pages are OCRed when enabled."""
    pages = _mock_pdf(mock_pdfplumber, ["Page 1 text", ""])
    cfg = Config()
    cfg.bulletin.ocr_fallback = True

    assert extract_pages_with_pdfplumber(b"%PDF-1.4", cfg) == ["Page 1 text", "OCR text"]
    mock_ocr_page.assert_called_once_with(pages[1], "eng")


@patch("bailx.pdfio.ocr_page")
@patch("bailx.pdfio.pdfplumber")
def test_no_ocr_by_default(mock_pdfplumber, mock_ocr_page):
    """Test that OCR stays off unless configured."""
    _mock_pdf(mock_pdfplumber, [None])

    assert extract_pages_with_pdfplumber(b"%PDF-1.4", Config()) == [""]
    mock_ocr_page.assert_not_called()
