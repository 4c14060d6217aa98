"""
Document Assembler

Renders deck pages in order and writes the merged PDF.
Nothing is written unless every page rendered.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .merger import count_pdf_pages, merge_pdf_pages
from .pages import DocumentPage
from .renderer import PageRenderer

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Turns filled pages into one PDF file."""

    def __init__(
        self,
        renderer: PageRenderer,
        html_dump_dir: Optional[str] = None,
        expected_pages: Optional[int] = None,
    ):
        """
        Args:
            renderer: Shared page renderer
            html_dump_dir: If set, each filled page's HTML is written here
            expected_pages: If set, a merged PDF with a different page count
                            is rejected before anything is written
        """
        self.renderer = renderer
        self.expected_pages = expected_pages
        self.html_dump_dir = Path(html_dump_dir) if html_dump_dir else None

    def render_pages(self, pages: Sequence[DocumentPage]) -> List[bytes]:
        rendered = []
        for page in pages:
            logger.info("   -> Generating %s page...", page.name)
            if self.html_dump_dir is not None:
                self._dump_html(page)
            rendered.append(self.renderer.render(page.html, page.print_options))
        return rendered

    def assemble(self, pages: Sequence[DocumentPage], output_path: Path) -> Path:
        """
        Render, merge and save.

        Args:
            pages: Filled pages in deck order
            output_path: Destination PDF

        Returns:
            output_path

        Raises:
            ValueError: If the merged page count differs from expected_pages
        """
        logger.info("Starting PDF generation process...")
        rendered = self.render_pages(pages)
        merged = merge_pdf_pages([(page.name, data) for page, data in zip(pages, rendered)])
        if self.expected_pages is not None:
            page_count = count_pdf_pages(merged)
            if page_count != self.expected_pages:
                raise ValueError(f"Merged deck has {page_count} pages, expected {self.expected_pages}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(merged)
        logger.info("Final PDF saved as %s", output_path)
        return output_path

    def _dump_html(self, page: DocumentPage) -> None:
        self.html_dump_dir.mkdir(parents=True, exist_ok=True)
        (self.html_dump_dir / f"{page.name}.html").write_text(page.html, encoding='utf-8')
