"""
Product image processing

Downloads a product's primary image and derives two JPEG variants:
a full-size hero image and a narrow thumbnail for grid layouts.
Variants are kept in memory; they are written to disk only when a
cache directory is configured.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

import requests
from PIL import Image

from ..common.errors import ImageProcessingError
from ..common.text_utils import safe_filename
from ..models import ImageVariants

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Downloads product images and re-encodes them for embedding."""

    def __init__(
        self,
        session: requests.Session,
        main_quality: int = 70,
        thumb_width: int = 400,
        thumb_quality: int = 50,
        timeout: float = 20.0,
        cache_dir: Optional[str] = None,
    ):
        """
        Args:
            session: Shared HTTP session
            main_quality: JPEG quality of the full-size variant
            thumb_width: Pixel width of the thumbnail variant
            thumb_quality: JPEG quality of the thumbnail variant
            timeout: Download timeout in seconds
            cache_dir: If set, derived JPEGs are also saved here
        """
        self.session = session
        self.main_quality = main_quality
        self.thumb_width = thumb_width
        self.thumb_quality = thumb_quality
        self.timeout = timeout
        self.cache_dir = Path(cache_dir) if cache_dir else None

    def process(self, image_url: str, title: str) -> ImageVariants:
        """
        Download an image and derive its variants.

        Args:
            image_url: Source image URL
            title: Product title (only used for cache file names)

        Raises:
            ImageProcessingError: On download, decode or encode failure
        """
        data = self.download(image_url)
        variants = self.derive_variants(data)

        if self.cache_dir is not None:
            self._save_to_cache(variants, title)

        return variants

    def download(self, image_url: str) -> bytes:
        """Fetch raw image bytes."""
        try:
            response = self.session.get(image_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageProcessingError(f"Could not download image {image_url}: {e}") from e

        if not response.content:
            raise ImageProcessingError(f"Empty image body from {image_url}")
        return response.content

    def derive_variants(self, data: bytes) -> ImageVariants:
        """
        Re-encode source bytes into a full-size and a thumbnail JPEG.

        The full-size variant keeps the original dimensions; the thumbnail is
        scaled to thumb_width, keeping the aspect ratio.
        """
        try:
            img = Image.open(BytesIO(data))
            img.load()
            img = _to_rgb(img)

            main = _encode_jpeg(img, self.main_quality)

            width, height = img.size
            thumb_height = max(1, round(height * self.thumb_width / width))
            thumb_img = img.resize((self.thumb_width, thumb_height), Image.Resampling.LANCZOS)
            thumb = _encode_jpeg(thumb_img, self.thumb_quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageProcessingError(f"Could not re-encode image: {e}") from e

        return ImageVariants(main=main, thumb=thumb)

    def _save_to_cache(self, variants: ImageVariants, title: str) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        base_name = safe_filename(title) or "product"
        (self.cache_dir / f"{base_name}.jpg").write_bytes(variants.main)
        (self.cache_dir / f"{base_name}_thumb.jpg").write_bytes(variants.thumb)
        logger.debug("Cached images for %s in %s", title, self.cache_dir)


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convert to RGB, flattening transparency onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background.convert("RGB")
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _encode_jpeg(img: Image.Image, quality: int) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
