"""
Deck assembly.

Modules:
    templates - PageTemplate with placeholder schemas, one per HTML file
    pages     - Fill templates into DocumentPages in deck order
    renderer  - PlaywrightPageRenderer (HTML -> PDF)
    merger    - Merge rendered pages with pypdf
    assembler - DocumentAssembler (render, merge, save)
"""

from .assembler import DocumentAssembler
from .merger import count_pdf_pages, merge_pdf_pages
from .pages import (
    DECK_PAGE_COUNT,
    USE_CASES,
    DocumentPage,
    UseCase,
    build_document_pages,
    render_product_grid,
)
from .renderer import PageRenderer, PlaywrightPageRenderer
from .templates import TEMPLATES, PageTemplate, load_templates

__all__ = [
    'DECK_PAGE_COUNT',
    'DocumentAssembler',
    'DocumentPage',
    'PageRenderer',
    'PageTemplate',
    'PlaywrightPageRenderer',
    'TEMPLATES',
    'USE_CASES',
    'UseCase',
    'build_document_pages',
    'count_pdf_pages',
    'load_templates',
    'merge_pdf_pages',
    'render_product_grid',
]
