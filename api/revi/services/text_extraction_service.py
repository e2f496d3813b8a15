"""
Plain-text extraction from uploaded documents.
"""
import io
import logging
import zipfile

import docx
from docx.opc.exceptions import PackageNotFoundError
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from revi.core.exceptions import UnsupportedFileTypeError, ValidationError

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE)


def extract_text_from_pdf(content: bytes) -> str:
    """Concatenate the text of every page of a PDF."""
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, KeyError) as e:
        logger.error(f"PDF parsing error: {str(e)}")
        raise ValidationError("Failed to extract text from PDF") from e
    return "\n".join(pages)


def extract_text_from_docx(content: bytes) -> str:
    """Concatenate the non-empty paragraphs of a Word document."""
    try:
        document = docx.Document(io.BytesIO(content))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        logger.error(f"DOCX parsing error: {str(e)}")
        raise ValidationError("Failed to extract text from Word document") from e
    return "\n".join(p.text for p in document.paragraphs if p.text.strip())


def extract_text(content: bytes, media_type: str) -> str:
    """
    Extract plain text from a document.

    Args:
        content: Raw file bytes
        media_type: Declared media type of the upload

    Returns:
        Extracted text (may be empty)

    Raises:
        UnsupportedFileTypeError: If the media type is neither PDF nor DOCX
        ValidationError: If the document cannot be read
    """
    if media_type == PDF_MEDIA_TYPE:
        return extract_text_from_pdf(content)
    if media_type == DOCX_MEDIA_TYPE:
        return extract_text_from_docx(content)
    raise UnsupportedFileTypeError("Only PDF and DOCX files are supported")
