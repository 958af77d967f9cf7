import fitz  # PyMuPDF
import logging

from errors import ExtractionError

logger = logging.getLogger(__name__)


def pdf_to_text(buffer: bytes) -> str:
    """
    Extract text from an in-memory PDF.
    The library's own error is logged; callers only see a generic ExtractionError.
    """

    try:
        doc = fitz.open(stream=buffer, filetype="pdf")
        try:
            text = "\n".join(page.get_text("text") for page in doc)
        finally:
            doc.close()
        return text

    except Exception as e:
        logger.error("Error extracting text from PDF: %s", e)
        raise ExtractionError("Failed to extract text from PDF") from None
