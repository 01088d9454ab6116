import io

import pytest
from docx import Document

from meridian.files.transcripts import TranscriptFileError, read_transcript, validate_file_size


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestReadTranscript:
    def test_plain_text(self):
        assert read_transcript("notes.txt", "Alice: hello\nBob: hi".encode("utf-8")) == "Alice: hello\nBob: hi"

    def test_docx_paragraphs_joined_by_newline(self):
        content = _docx_bytes("Alice: kickoff", "Bob: agreed")
        assert read_transcript("Meeting.DOCX", content) == "Alice: kickoff\nBob: agreed"

    def test_invalid_docx(self):
        with pytest.raises(TranscriptFileError, match="Failed to read DOCX"):
            read_transcript("broken.docx", b"not a zip archive")

    def test_empty_file(self):
        with pytest.raises(TranscriptFileError, match="File is empty."):
            read_transcript("empty.txt", b"")

    def test_too_large(self):
        with pytest.raises(TranscriptFileError, match="File too large. Maximum size is 1MB."):
            read_transcript("big.txt", b"x" * (1024 * 1024 + 1), max_size=1024 * 1024)


def test_size_at_limit_is_accepted():
    validate_file_size(10, max_size=10)
