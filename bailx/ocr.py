"""
OCR utilities for scanned bulletins.
"""

from bailx.log import get_logger

logger = get_logger(__name__)


def check_ocr_dependencies() -> bool:
    """
    Check if the Tesseract binary is reachable.

    Returns:
        True if OCR can run, False otherwise
    """
    import pytesseract

    try:
        pytesseract.get_tesseract_version()
        return True
    except pytesseract.TesseractNotFoundError:
        logger.error("Tesseract not installed or not on PATH; OCR fallback unavailable")
        return False


def apply_ocr_to_image(image, lang: str = "eng") -> str:
    """
    Apply OCR to an image.

    Args:
        image: PIL image
        lang: OCR language

    Returns:
        Extracted text as a string
    """
    import pytesseract

    try:
        return pytesseract.image_to_string(image, lang=lang)
    except Exception as e:
        logger.error(f"Error applying OCR: {e}")
        return ""


def ocr_page(page, lang: str = "eng", resolution: int = 300) -> str:
    """
    Apply OCR to a pdfplumber page.

    Args:
        page: pdfplumber page object
        lang: OCR language
        resolution: Render resolution in DPI

    Returns:
        Extracted text, empty when OCR is unavailable
    """
    if not check_ocr_dependencies():
        return ""

    try:
        image = page.to_image(resolution=resolution).original
    except Exception as e:
        logger.error(f"Error rendering page for OCR: {e}")
        return ""

    return apply_ocr_to_image(image, lang)
