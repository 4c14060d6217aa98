"""
PDF merging

Combines single-page PDFs into the final deck with pypdf.
"""

import logging
from io import BytesIO
from typing import Sequence, Tuple

from pypdf import PdfReader, PdfWriter

logger = logging.getLogger(__name__)


def merge_pdf_pages(documents: Sequence[Tuple[str, bytes]]) -> bytes:
    """
    Merge rendered pages in order, one PDF page per document.

    Content overflowing onto a second page is dropped with a warning, so
    the merged deck has exactly one page per input document.

    Args:
        documents: (page name, PDF bytes) pairs in deck order

    Returns:
        Merged PDF bytes

    Raises:
        ValueError: If a rendered document has no pages
    """
    writer = PdfWriter()
    for name, data in documents:
        reader = PdfReader(BytesIO(data))
        if not reader.pages:
            raise ValueError(f"Rendered page '{name}' is empty")
        if len(reader.pages) > 1:
            logger.warning("Page '%s' overflowed to %d pages; keeping the first",
                           name, len(reader.pages))
        writer.add_page(reader.pages[0])

    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def count_pdf_pages(data: bytes) -> int:
    return len(PdfReader(BytesIO(data)).pages)
