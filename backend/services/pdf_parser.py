import io
import logging
from pathlib import PurePath

import pdfplumber
from docx import Document

from services.errors import UnsupportedFileTypeError

logger = logging.getLogger(__name__)

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●")

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_resume_text(content: bytes, filename: str) -> str:
    """Decode an uploaded resume into plain text based on its extension."""
    suffix = PurePath(filename or "").suffix.lower()
    if suffix == ".pdf":
        return extract_text(content)
    if suffix == ".docx":
        return extract_text_docx(content)
    if suffix == ".txt":
        return content.decode("utf-8", errors="replace").strip()
    logger.info("Rejected upload with extension %r", suffix)
    raise UnsupportedFileTypeError(
        f"Invalid file type. Only {', '.join(SUPPORTED_EXTENSIONS)} files are allowed."
    )


def is_bullet(line: str) -> bool:
    stripped = line.lstrip()
    return bool(stripped) and stripped[0] in BULLET_MARKERS


def strip_bullet(line: str) -> str:
    """Remove leading bullet markers and surrounding whitespace."""
    return line.strip().lstrip("".join(BULLET_MARKERS) + " \t").strip()
