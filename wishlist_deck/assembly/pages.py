"""
Deck page building

Fills the page templates with localized copy and product records.
The deck is always: intro, five use-case pages, the POS grid, closing.
"""

import html
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from ..common.errors import InsufficientProductsError
from ..localization import ContentBundle
from ..models import ProductRecord, StoreTarget
from .templates import (
    BACK_IN_STOCK,
    CLOSING,
    INTRO,
    LOW_STOCK,
    POS,
    PRICE_DROP,
    PageTemplate,
)

DECK_PAGE_COUNT = 8


@dataclass(frozen=True)
class DocumentPage:
    """A filled page waiting to be rendered."""
    name: str
    html: str
    print_options: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UseCase:
    name: str           # Page name, e.g. "price-drop"
    content_key: str    # Key under content['useCases']
    template: PageTemplate


# Use case i is paired with products[i]
USE_CASES = (
    UseCase('price-drop', 'priceDrop', PRICE_DROP),
    UseCase('low-stock', 'lowStock', LOW_STOCK),
    UseCase('back-in-stock', 'backInStock', BACK_IN_STOCK),
    UseCase('wishlist-reminder', 'wishlistReminder', PRICE_DROP),
    UseCase('wishlist-incentive', 'wishlistIncentive', PRICE_DROP),
)

# Template-specific copy groups in the content bundle
_TEMPLATE_CONTENT = {
    PRICE_DROP.name: ('priceDropTemplate', 'priceDrop'),
    LOW_STOCK.name: ('lowStockTemplate', 'lowStock'),
    BACK_IN_STOCK.name: ('backInStockTemplate', 'backInStock'),
}

WISHLIST_SLICE = slice(0, 4)
BACK_IN_STOCK_SLICE = slice(1, 4)


def _prefixed_copy(content: Mapping[str, Any], group: str, prefix: str) -> Dict[str, str]:
    return {f"{prefix}_{key}": value for key, value in content[group].items()}


def build_intro_page(content: ContentBundle, store: StoreTarget, print_options=None) -> DocumentPage:
    values = {'domain': store.readable_domain, **_prefixed_copy(content, 'intro', 'intro')}
    return DocumentPage('intro-page', INTRO.render(values), dict(print_options or {}))


def build_use_case_page(
    use_case: UseCase,
    product: ProductRecord,
    content: ContentBundle,
    store: StoreTarget,
    to_email: str,
    print_options=None,
) -> DocumentPage:
    """Fill one use-case template with its product and copy."""
    template = use_case.template
    group, prefix = _TEMPLATE_CONTENT[template.name]

    values = {
        'to_email': to_email,
        'from_email': store.from_email,
        'product_name': product.title,
        'product_price': product.price_display,
        'product_image': product.image_main,
        'product_link': product.link,
        **_prefixed_copy(content, group, prefix),
    }
    if template is PRICE_DROP:
        use_case_copy = content['useCases'][use_case.content_key]
        values.update({
            'headline': use_case_copy['headline'],
            'product_message': use_case_copy['message'],
            'new_price': product.new_price,
        })

    return DocumentPage(use_case.name, template.render(values), dict(print_options or {}))


def render_product_grid(products: Sequence[ProductRecord]) -> str:
    """Minimal product cards (thumbnail + title) for the POS grid."""
    cards = []
    for product in products:
        title = html.escape(product.title)
        cards.append(
            '<div class="product-card">\n'
            f'  <img src="{html.escape(product.image_thumb)}" alt="{title}" class="product-image" />\n'
            f'  <p class="product-name">{title}</p>\n'
            '</div>'
        )
    return "\n".join(cards)


def build_pos_page(
    products: Sequence[ProductRecord],
    content: ContentBundle,
    app_name: str,
    print_options=None,
) -> DocumentPage:
    values = {
        'app_name': app_name,
        'edit_preferences_url': '#',
        'wishlist_view_all_url': '#',
        'bis_view_all_url': '#',
        'cart_view_all_url': '#',
        **_prefixed_copy(content, 'pos', 'pos'),
    }
    blocks = {
        'wishlists': render_product_grid(products[WISHLIST_SLICE]),
        'back_in_stock': render_product_grid(products[BACK_IN_STOCK_SLICE]),
    }
    return DocumentPage('pos-page', POS.render(values, blocks), dict(print_options or {}))


def build_closing_page(content: ContentBundle, store: StoreTarget, print_options=None) -> DocumentPage:
    values = {'domain': store.readable_domain, **_prefixed_copy(content, 'extro', 'extro')}
    return DocumentPage('closing-page', CLOSING.render(values), dict(print_options or {}))


def build_document_pages(
    products: Sequence[ProductRecord],
    content: ContentBundle,
    store: StoreTarget,
    to_email: str,
    app_name: str = "Wishlist Plus",
    print_options: Mapping[str, Mapping[str, Any]] = None,
) -> List[DocumentPage]:
    """
    Build every deck page in merge order.

    Args:
        products: At least one product per use case
        content: English or translated content bundle
        store: Target store
        to_email: Recipient shown on use-case pages
        app_name: App name shown on the POS page
        print_options: Per page type ('intro', 'use_case', 'pos', 'closing')

    Raises:
        InsufficientProductsError: If there are fewer products than use cases
    """
    if len(products) < len(USE_CASES):
        raise InsufficientProductsError(len(products), len(USE_CASES))

    print_options = print_options or {}

    pages = [build_intro_page(content, store, print_options.get('intro'))]
    for use_case, product in zip(USE_CASES, products):
        pages.append(build_use_case_page(
            use_case, product, content, store, to_email, print_options.get('use_case'),
        ))
    pages.append(build_pos_page(products, content, app_name, print_options.get('pos')))
    pages.append(build_closing_page(content, store, print_options.get('closing')))
    return pages
