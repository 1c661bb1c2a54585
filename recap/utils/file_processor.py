"""
Text extraction from uploaded transcript files.

Supported formats:
- .txt  read as UTF-8
- .pdf  text layer via pypdf
- .docx paragraphs via python-docx
"""
import os
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from recap.config import ALLOWED_EXTENSIONS
from recap.errors import ExtractionFailed, ValidationFailed
from recap.utils.logger import get_logger

logger = get_logger(__name__)


def is_supported_file_type(filename: str, allowed_extensions=None) -> bool:
    """Check the file extension against the allowed upload types."""
    allowed = allowed_extensions or ALLOWED_EXTENSIONS
    return Path(filename or "").suffix.lower() in allowed


def _extract_txt(file_path: Path) -> str:
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def _extract_pdf(file_path: Path) -> str:
    reader = PdfReader(str(file_path))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


def _extract_docx(file_path: Path) -> str:
    doc = Document(str(file_path))
    return "\n".join(p.text for p in doc.paragraphs)


EXTRACTORS = {
    ".txt": _extract_txt,
    ".pdf": _extract_pdf,
    ".docx": _extract_docx,
}


def process_file(file_path, extension: str = None) -> str:
    """
    Extract plain text from an uploaded file and delete the file afterwards.

    Args:
        file_path: Path of the temporary upload
        extension: Extension of the original filename, defaults to the path's own

    Returns:
        Extracted text, stripped

    Raises:
        ValidationFailed: unsupported file type
        ExtractionFailed: the file could not be read or contained no text
    """
    file_path = Path(file_path)
    extension = (extension or file_path.suffix).lower()

    try:
        extractor = EXTRACTORS.get(extension)
        if extractor is None:
            raise ValidationFailed(f"Unsupported file type: {extension or 'unknown'}")

        if not file_path.exists():
            raise ExtractionFailed("File processing failed: File not found")

        try:
            text = extractor(file_path)
        except Exception as e:
            logger.error(f"Error extracting text from {file_path.name}: {e}")
            raise ExtractionFailed(f"Failed to process file: {extension.lstrip('.').upper()} processing failed: {e}")

        if not text or not text.strip():
            raise ExtractionFailed("Failed to process file: No text content extracted from file")

        logger.info(f"Extracted {len(text)} characters from {file_path.name}")
        return text.strip()

    finally:
        # Clean up uploaded file
        try:
            if file_path.exists():
                os.remove(file_path)
        except OSError as e:
            logger.error(f"Failed to clean up uploaded file {file_path}: {e}")
