"""
Product data models.

Pure data classes for discovered links and validated product records.
No business logic - only data structure definitions.
"""

import base64
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

LANGUAGE_NOT_FOUND = "Not found"


@dataclass(frozen=True)
class ProductLink:
    """Product page URL found on a collection page."""
    url: str
    excluded: bool = False


@dataclass
class DiscoveryResult:
    """Outcome of crawling the candidate collection pages."""
    links: List[ProductLink] = field(default_factory=list)
    excluded: List[ProductLink] = field(default_factory=list)
    language: str = LANGUAGE_NOT_FOUND
    pages_visited: List[str] = field(default_factory=list)

    @property
    def urls(self) -> List[str]:
        return [link.url for link in self.links]

    @property
    def language_found(self) -> bool:
        return self.language != LANGUAGE_NOT_FOUND


def to_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass(frozen=True)
class ImageVariants:
    """Re-encoded JPEG buffers derived from one source image."""
    main: bytes
    thumb: bytes

    @property
    def main_data_uri(self) -> str:
        return to_data_uri(self.main)

    @property
    def thumb_data_uri(self) -> str:
        return to_data_uri(self.thumb)


@dataclass(frozen=True)
class ProductRecord:
    """
    Validated product, ready to be placed on a deck page.

    Images are embedded as data URIs so rendered pages need no file access.
    """

    title: str
    price: Decimal
    new_price: str          # Discounted price, 2 decimals (e.g., "80.00")
    image_main: str         # data:image/jpeg;base64,...
    image_thumb: str        # data:image/jpeg;base64,... (grid size)
    link: str

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.title:
            raise ValueError("Product title is required")
        if self.price <= 0:
            raise ValueError(f"Product price must be > 0 (got {self.price})")
        if not self.image_main or not self.image_thumb:
            raise ValueError("Product images are required")

    @property
    def price_display(self) -> str:
        return f"{self.price:.2f}"
