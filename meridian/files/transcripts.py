"""
Reading uploaded meeting transcripts.

``.docx`` files are read with python-docx; anything else is decoded as UTF-8
text. Empty uploads and uploads over the size limit are rejected.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from docx import Document

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024


class TranscriptFileError(ValueError):
    """The uploaded transcript cannot be used."""


def validate_file_size(size: int, max_size: int = MAX_FILE_SIZE) -> None:
    if size > max_size:
        raise TranscriptFileError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")
    if size == 0:
        raise TranscriptFileError("File is empty.")


def read_docx(content: bytes) -> str:
    """Paragraph text of a .docx document, one paragraph per line."""
    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        logger.error(f"DOCX parsing error: {e}", exc_info=True)
        raise TranscriptFileError(f"Failed to read DOCX: {e}") from e
    return "\n".join(paragraph.text for paragraph in doc.paragraphs)


def read_transcript(filename: Optional[str], content: bytes, max_size: int = MAX_FILE_SIZE) -> str:
    """
    Extract transcript text from an uploaded file.

    Args:
        filename: Original file name; ``.docx`` selects the Word reader
        content: Raw file bytes
        max_size: Upper size limit in bytes

    Returns:
        The transcript text

    Raises:
        TranscriptFileError: Empty, too large, or unreadable file
    """
    validate_file_size(len(content), max_size)
    if (filename or "").lower().endswith(".docx"):
        text = read_docx(content)
    else:
        text = content.decode("utf-8", errors="replace")
    logger.info(f"Read {len(text)} characters from transcript {filename!r}")
    return text
