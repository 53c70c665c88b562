"""
Document text extraction for bulletins.
"""

import io
from typing import List, Optional

import pdfplumber
from bs4 import BeautifulSoup
from pypdf import PdfReader

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import ParseError
from bailx.ocr import ocr_page

logger = get_logger(__name__)

TEXT_EXTENSIONS = (".txt", ".csv")
HTML_EXTENSIONS = (".html", ".htm")


def extract_text(content: bytes, filename: str, cfg: Optional[Config] = None) -> str:
    """
    Turn a downloaded bulletin into plain text.

    Args:
        content: Raw document bytes
        filename: Document filename, used to pick the decoder
        cfg: Configuration

    Returns:
        Plain text, one bulletin line per text line

    Raises:
        ParseError: If the document cannot be decoded
    """
    cfg = cfg or Config()
    name = (filename or "").lower()

    if name.endswith(TEXT_EXTENSIONS):
        return content.decode("utf-8", errors="replace")

    if name.endswith(HTML_EXTENSIONS):
        return html_to_text(content.decode("utf-8", errors="replace"))

    if content.lstrip()[:5] == b"%PDF-" or name.endswith(".pdf"):
        return extract_pdf_text(content, cfg)

    raise ParseError(f"Unsupported bulletin format: {filename}")


def html_to_text(html: str) -> str:
    """Flatten markup to newline-separated text."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text("\n")


def extract_pdf_text(content: bytes, cfg: Config) -> str:
    """
    Extract text from PDF bytes.

    pdfplumber is tried first; pypdf is used when pdfplumber cannot open
    the document. Pages without a text layer are OCRed when enabled.

    Args:
        content: PDF bytes
        cfg: Configuration

    Returns:
        Text of all pages

    Raises:
        ParseError: If neither library can read the document
    """
    try:
        return "\n".join(extract_pages_with_pdfplumber(content, cfg))
    except Exception as e:
        logger.warning(f"pdfplumber extraction failed: {e}, trying pypdf")

    try:
        return "\n".join(extract_pages_with_pypdf(content))
    except Exception as e:
        logger.error(f"pypdf extraction failed: {e}")
        raise ParseError(f"Error extracting text from PDF: {e}")


def extract_pages_with_pdfplumber(content: bytes, cfg: Config) -> List[str]:
    """
    Extract per-page text with pdfplumber.

    Args:
        content: PDF bytes
        cfg: Configuration

    Returns:
        Text of each page
    """
    pages = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page_num, page in enumerate(pdf.pages, 1):
            text = page.extract_text() or ""

            if not text.strip() and cfg.bulletin.ocr_fallback:
                logger.info(f"No text found on page {page_num}, using OCR fallback")
                text = ocr_page(page, cfg.bulletin.ocr_lang)

            logger.debug(f"Page {page_num}: {len(text)} characters")
            pages.append(text)
    return pages


def extract_pages_with_pypdf(content: bytes) -> List[str]:
    """Extract per-page text with pypdf."""
    reader = PdfReader(io.BytesIO(content))
    return [page.extract_text() or "" for page in reader.pages]
