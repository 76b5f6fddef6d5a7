"""Resume parser for PDF, DOCX, and TXT uploads."""
import re
from io import BytesIO
import pypdf
from docx import Document
from config import RESUME_ALLOWED_EXTENSIONS
from utils.logging_utils import get_logger

logger = get_logger(__name__)


def get_extension(filename: str) -> str:
    return filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''


def parse_resume(file_content: bytes, filename: str) -> str:
    """
    Extract plain text from an uploaded resume.

    Args:
        file_content: File content as bytes
        filename: Original filename (its extension selects the parser)

    Returns:
        Extracted, whitespace-normalized text

    Raises:
        ValueError: For unsupported extensions or unreadable documents
    """
    file_ext = get_extension(filename)

    if file_ext == 'txt':
        return parse_txt(file_content)
    elif file_ext == 'pdf':
        return parse_pdf(file_content)
    elif file_ext == 'docx':
        return parse_docx(file_content)
    else:
        supported = ", ".join(RESUME_ALLOWED_EXTENSIONS)
        raise ValueError(f"Unsupported file type: {file_ext or 'none'}. Supported: {supported}")


def parse_txt(file_content: bytes) -> str:
    """Parse plain text file."""
    try:
        text = file_content.decode('utf-8')
    except UnicodeDecodeError:
        text = file_content.decode('latin-1')
    return normalize_text(text)


def parse_pdf(file_content: bytes) -> str:
    """Parse PDF file."""
    try:
        pdf_reader = pypdf.PdfReader(BytesIO(file_content))
        text = "\n".join(page.extract_text() or "" for page in pdf_reader.pages)
    except Exception as e:
        logger.error(f"PDF parsing error: {str(e)}")
        raise ValueError(f"Failed to parse PDF: {str(e)}") from e
    return normalize_text(text)


def parse_docx(file_content: bytes) -> str:
    """Parse DOCX file."""
    try:
        doc = Document(BytesIO(file_content))
        text = "\n".join(paragraph.text for paragraph in doc.paragraphs)
    except Exception as e:
        logger.error(f"DOCX parsing error: {str(e)}")
        raise ValueError(f"Failed to parse DOCX: {str(e)}") from e
    return normalize_text(text)


def normalize_text(text: str) -> str:
    """Collapse blank-line runs and horizontal whitespace, keeping line breaks."""
    text = re.sub(r'[ \t\r\f\v]+', ' ', text)
    text = re.sub(r'\n\s*\n+', '\n\n', text)
    return text.strip()
