"""
Document text extraction using pypdf.

PDF uploads are parsed page by page; every other file type is decoded
as UTF-8 text.
"""

import io
import logging
from pathlib import PurePath

from pypdf import PdfReader

from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def is_pdf(filename: str | None) -> bool:
    """Return True when the filename has a PDF extension (any case)."""
    if not filename:
        return False
    return PurePath(filename).suffix.lower() == PDF_EXTENSION


class DocumentService:
    """
    Service for turning uploaded contract files into plain text.

    No size limit is applied; the full text is returned.
    """

    def __init__(self, page_separator: str = "\n\n"):
        """
        Initialize the document service.

        Args:
            page_separator: Text inserted between the text of consecutive PDF pages.
        """
        self.page_separator = page_separator

    def extract_text(self, file_bytes: bytes, filename: str | None) -> str:
        """
        Extract the text content of an uploaded file.

        Args:
            file_bytes: Raw file contents.
            filename: Original filename; only its extension is used.

        Returns:
            The extracted text.

        Raises:
            ExtractionError: If the file is a PDF that cannot be parsed.
        """
        if is_pdf(filename):
            return self.extract_pdf_text(file_bytes)

        # Anything else is treated as UTF-8 text, undecodable bytes replaced
        return file_bytes.decode("utf-8", errors="replace")

    def extract_pdf_text(self, file_bytes: bytes) -> str:
        """
        Extract and concatenate the text of every page in a PDF.

        Raises:
            ExtractionError: If the bytes are not a readable PDF.
        """
        if not file_bytes:
            raise ExtractionError("Failed to read uploaded file.", details="Empty PDF file")

        try:
            reader = PdfReader(io.BytesIO(file_bytes))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            # pypdf raises more than PdfReadError on malformed input
            logger.exception("Invalid or corrupted PDF file")
            raise ExtractionError("Failed to read uploaded file.") from e

        logger.info("Extracted text from %d PDF page(s)", len(pages))
        return self.page_separator.join(pages)


# Singleton instance for convenience
_document_service: DocumentService | None = None


def get_document_service() -> DocumentService:
    """Get or create the document service singleton."""
    global _document_service
    if _document_service is None:
        _document_service = DocumentService()
    return _document_service
