"""
Page Templates

HTML page templates with an explicit placeholder schema.

Templates use ``{{name}}`` tokens for single values and
``{{#block}}...{{/block}}`` markers for repeated sections. Each template
declares the names it expects; the file is checked against that schema on
first load, and every render must supply exactly those names.
"""

import html
import re
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from ..common.errors import TemplateSchemaError

TEMPLATES_DIR = Path(__file__).parent / "templates"

TOKEN_RE = re.compile(r'\{\{\s*([A-Za-z_]\w*)\s*\}\}')
BLOCK_RE = re.compile(r'\{\{#(\w+)\}\}.*?\{\{/\1\}\}', re.DOTALL)


def find_tokens(source: str) -> set:
    """Names of ``{{name}}`` tokens outside repeated blocks."""
    return set(TOKEN_RE.findall(BLOCK_RE.sub('', source)))


def find_blocks(source: str) -> set:
    """Names of ``{{#name}}...{{/name}}`` blocks."""
    return {match.group(1) for match in BLOCK_RE.finditer(source)}


class PageTemplate:
    """
    One HTML page template bound to its placeholder schema.

    Usage:
        template = PageTemplate('closing', 'extro.html', {'extro_headline', ...})
        html = template.render({'extro_headline': 'Thanks!', ...})
    """

    def __init__(
        self,
        name: str,
        filename: str,
        placeholders: Iterable[str],
        blocks: Iterable[str] = (),
        templates_dir: Path = TEMPLATES_DIR,
    ):
        self.name = name
        self.filename = filename
        self.placeholders = frozenset(placeholders)
        self.blocks = frozenset(blocks)
        self.templates_dir = Path(templates_dir)
        self._source: Optional[str] = None

    @property
    def source(self) -> str:
        """Template HTML, read and schema-checked on first access."""
        if self._source is None:
            path = self.templates_dir / self.filename
            source = path.read_text(encoding='utf-8')
            self._check_schema(source)
            self._source = source
        return self._source

    def _check_schema(self, source: str) -> None:
        tokens = find_tokens(source)
        blocks = find_blocks(source)
        problems = []
        if tokens - self.placeholders:
            problems.append(f"undeclared placeholders {sorted(tokens - self.placeholders)}")
        if self.placeholders - tokens:
            problems.append(f"placeholders missing from file {sorted(self.placeholders - tokens)}")
        if blocks != self.blocks:
            problems.append(f"blocks {sorted(blocks)} != declared {sorted(self.blocks)}")
        if problems:
            raise TemplateSchemaError(f"{self.filename}: " + "; ".join(problems))

    def render(self, values: Mapping[str, object], blocks: Optional[Mapping[str, str]] = None) -> str:
        """
        Fill the template.

        Args:
            values: Exactly one value per declared placeholder; values are
                    HTML-escaped
            blocks: Exactly one pre-rendered HTML fragment per declared block

        Returns:
            Filled HTML

        Raises:
            TemplateSchemaError: On missing or unexpected names
        """
        blocks = blocks or {}
        self._check_names("placeholder", self.placeholders, values.keys())
        self._check_names("block", self.blocks, blocks.keys())

        escaped: Dict[str, str] = {key: html.escape(str(value)) for key, value in values.items()}
        # Tokens inside block bodies are sample markup, replaced with the block below
        filled = TOKEN_RE.sub(lambda m: escaped.get(m.group(1), m.group(0)), self.source)
        return BLOCK_RE.sub(lambda m: blocks[m.group(1)], filled)

    def _check_names(self, kind: str, declared: frozenset, given: Iterable[str]) -> None:
        given = set(given)
        missing = declared - given
        extra = given - declared
        if missing:
            raise TemplateSchemaError(f"{self.name}: missing {kind} values {sorted(missing)}")
        if extra:
            raise TemplateSchemaError(f"{self.name}: unexpected {kind} values {sorted(extra)}")


EMAIL_FIELDS = ('to_email', 'from_email')
PRODUCT_FIELDS = ('product_name', 'product_price', 'product_image', 'product_link')


def _prefixed(prefix: str, keys: Iterable[str]) -> set:
    return {f"{prefix}_{key}" for key in keys}


INTRO = PageTemplate(
    'intro',
    'intro-page.html',
    {'domain'} | _prefixed('intro', (
        'headline', 'greeting', 'p1', 'p2', 'li1', 'li2', 'li3', 'p3', 'p4', 'p5', 'footer',
    )),
)

PRICE_DROP = PageTemplate(
    'price_drop',
    'price-drop-template.html',
    {'headline', 'product_message', 'new_price', *EMAIL_FIELDS, *PRODUCT_FIELDS} | _prefixed('priceDrop', (
        'greeting', 'originalPriceLabel', 'newPriceLabel', 'buyNowButton', 'replyButton', 'forwardButton',
    )),
)

LOW_STOCK = PageTemplate(
    'low_stock',
    'low-stock.html',
    {*EMAIL_FIELDS, *PRODUCT_FIELDS} | _prefixed('lowStock', (
        'headline', 'metaPrefix', 'metaPrice', 'warning', 'description',
        'buyNowButton', 'replyButton', 'forwardButton',
    )),
)

BACK_IN_STOCK = PageTemplate(
    'back_in_stock',
    'back-in-stock-template.html',
    {*EMAIL_FIELDS, *PRODUCT_FIELDS} | _prefixed('backInStock', (
        'headline', 'metaPrefix', 'metaPrice', 'description',
        'buyNowButton', 'replyButton', 'forwardButton',
    )),
)

POS = PageTemplate(
    'pos',
    'pos.html',
    {'app_name', 'edit_preferences_url', 'wishlist_view_all_url', 'bis_view_all_url', 'cart_view_all_url'}
    | _prefixed('pos', ('pageTitle', 'editPreferences', 'wishlistHeader', 'backInStockHeader', 'viewAll')),
    blocks={'wishlists', 'back_in_stock'},
)

CLOSING = PageTemplate(
    'closing',
    'extro.html',
    {'domain'} | _prefixed('extro', ('headline', 'p1', 'p2', 'p3', 'p4', 'p5', 'ctaButton', 'footer')),
)

TEMPLATES = {
    template.name: template
    for template in (INTRO, PRICE_DROP, LOW_STOCK, BACK_IN_STOCK, POS, CLOSING)
}


def load_templates() -> Dict[str, PageTemplate]:
    """
    Read and schema-check every deck template.

    Raises:
        TemplateSchemaError: If any template file disagrees with its schema
    """
    for template in TEMPLATES.values():
        template.source
    return TEMPLATES
