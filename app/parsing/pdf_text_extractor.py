"""
app/parsing/pdf_text_extractor.py

Pull raw text and page count out of a PDF buffer. No OCR.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from app.domain.errors import ParseFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentText:
    text: str
    page_count: int

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


class PDFTextExtractor:
    """
    Extracts the embedded text layer of a PDF.
    """

    def extract_text(self, content: bytes) -> DocumentText:
        """
        Read every page's text.

        Raises:
            ParseFailureError: when the document cannot be parsed or is encrypted.
        """

        try:
            reader = PdfReader(io.BytesIO(content))
            if reader.is_encrypted:
                raise ParseFailureError("PDF parsing failed: document is encrypted.")
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError, KeyError, TypeError) as exc:
            raise ParseFailureError(f"PDF parsing failed: {exc}") from exc

        text = "\n".join(pages)
        logger.info("PDF text extracted pages=%d chars=%d", len(pages), len(text))
        return DocumentText(text=text, page_count=len(pages) or 1)
