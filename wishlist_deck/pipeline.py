"""
Deck Pipeline

End-to-end generation of a wishlist marketing deck for one store:

    candidate URLs -> product links + language -> localized copy
    -> product records -> rendered, merged PDF

Stages run strictly in sequence. Soft failures (unreachable pages, bad
product JSON, translation errors) are absorbed by the stage that hits them;
anything else aborts the run before the output file is written.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import requests

from .assembly import (
    DECK_PAGE_COUNT,
    DocumentAssembler,
    PageRenderer,
    PlaywrightPageRenderer,
    build_document_pages,
    load_templates,
)
from .common.config_loader import DeckSettings, load_content_bundle
from .common.errors import InsufficientProductsError
from .common.http_client import create_session
from .discovery import BrandSampler, StorefrontDiscoverer, generate_candidate_urls
from .extraction import ImageProcessor, ProductDetailFetcher
from .localization import ContentBundle, GeminiLocalizer, Localizer, localize_or_fallback
from .models import DiscoveryResult, ProductRecord, StoreTarget

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    INIT = "init"
    CANDIDATES_GENERATED = "candidates_generated"
    LINKS_DISCOVERED = "links_discovered"
    LOCALIZATION_REQUESTED = "localization_requested"
    DETAILS_FETCHING = "details_fetching"
    PRODUCTS_VALIDATED = "products_validated"
    PAGES_ASSEMBLED = "pages_assembled"
    SUCCESS = "success"
    FAILURE = "failure"


def build_localizer(settings: DeckSettings, session: requests.Session) -> Optional[GeminiLocalizer]:
    """Return a Gemini client, or None when localization is off or unconfigured."""
    if not settings.localization_enabled:
        return None
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; deck copy will stay in English.")
        return None
    return GeminiLocalizer(
        api_key=settings.gemini_api_key,
        session=session,
        model=settings.localization_model,
    )


class DeckPipeline:
    """
    Generates one deck per run() call.

    Usage:
        settings = load_settings()
        with DeckPipeline(settings) as pipeline:
            path = pipeline.run("shop.com", "owner@shop.com")
    """

    def __init__(
        self,
        settings: DeckSettings,
        session: Optional[requests.Session] = None,
        localizer: Optional[Localizer] = None,
        renderer: Optional[PageRenderer] = None,
        content: Optional[ContentBundle] = None,
        html_dump_dir: Optional[str] = None,
    ):
        """
        Args:
            settings: Run configuration
            session: Shared HTTP session (created from settings if omitted)
            localizer: Translation service; None keeps the English copy
            renderer: Page renderer (a Playwright session is opened per run if omitted)
            content: English content bundle (loaded from config if omitted)
            html_dump_dir: Write each filled page's HTML here for debugging
        """
        # Template drift fails here, before any crawling
        load_templates()

        self.settings = settings
        self._owns_session = session is None
        self.session = session or create_session(settings.http)
        self.localizer = localizer
        self.renderer = renderer
        self.content = content if content is not None else load_content_bundle()
        self.html_dump_dir = html_dump_dir

        timeout = settings.http.timeout
        self.discoverer = StorefrontDiscoverer(
            self.session,
            link_ceiling=settings.link_ceiling,
            exclusion_keywords=settings.exclusion_keywords,
            product_card_classes=settings.product_card_classes,
            candidate_paths=settings.candidate_paths,
            platform_suffixes=settings.platform_suffixes,
            timeout=timeout,
        )
        self.brand_sampler = BrandSampler(self.session, settings.about_paths, timeout=timeout)
        self.image_processor = ImageProcessor(
            self.session,
            main_quality=settings.images.main_quality,
            thumb_width=settings.images.thumb_width,
            thumb_quality=settings.images.thumb_quality,
            timeout=timeout,
            cache_dir=settings.images.cache_dir,
        )
        self.fetcher = ProductDetailFetcher(
            self.session,
            self.image_processor,
            discount_rate=settings.discount_rate,
            timeout=timeout,
            skip_failed_images=settings.images.skip_failed,
        )

        self.stage = PipelineStage.INIT
        self.discovery: Optional[DiscoveryResult] = None
        self.products: List[ProductRecord] = []

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    def _advance(self, stage: PipelineStage) -> None:
        logger.debug("Stage: %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def run(self, store_input: str, to_email: str, output_dir: str | Path = ".") -> Path:
        """
        Generate the deck PDF.

        Args:
            store_input: Store URL or domain
            to_email: Recipient shown on use-case pages
            output_dir: Directory for <safe-domain>.pdf

        Returns:
            Path of the written PDF

        Raises:
            InsufficientProductsError: Fewer valid products than target count
            ImageProcessingError: Image failure (unless skip_failed is configured)
        """
        self.stage = PipelineStage.INIT
        try:
            return self._run(store_input, to_email, Path(output_dir))
        except Exception:
            self._advance(PipelineStage.FAILURE)
            raise

    def _run(self, store_input: str, to_email: str, output_dir: Path) -> Path:
        settings = self.settings
        store = StoreTarget.from_input(store_input)

        candidates = generate_candidate_urls(
            store.base_url, settings.candidate_paths, settings.platform_suffixes,
        )
        self._advance(PipelineStage.CANDIDATES_GENERATED)

        self.discovery = self.discoverer.discover(store.base_url, candidates)
        self._advance(PipelineStage.LINKS_DISCOVERED)
        logger.info("Store Language: %s", self.discovery.language)

        self._advance(PipelineStage.LOCALIZATION_REQUESTED)
        content = self.localize(store)

        self._advance(PipelineStage.DETAILS_FETCHING)
        target = settings.target_product_count
        self.products = self.fetcher.fetch_products(self.discovery.links, target)

        if len(self.products) < target:
            raise InsufficientProductsError(len(self.products), target)
        self._advance(PipelineStage.PRODUCTS_VALIDATED)
        logger.info("Final valid products: %d", len(self.products))

        pages = build_document_pages(
            self.products,
            content,
            store,
            to_email,
            app_name=settings.app_name,
            print_options=settings.print_options,
        )
        output_path = output_dir / f"{store.safe_name}.pdf"
        self._assemble(pages, output_path)
        self._advance(PipelineStage.PAGES_ASSEMBLED)

        self._advance(PipelineStage.SUCCESS)
        return output_path

    def localize(self, store: StoreTarget) -> ContentBundle:
        """Localized copy for the store, or the English source on failure."""
        tone_sample = ""
        if self.localizer is not None and self.discovery.language_found:
            tone_sample = self.brand_sampler.sample(store.base_url)
            logger.info("Brand Language Sample: %s", tone_sample)
        return localize_or_fallback(self.localizer, self.content, self.discovery.language, tone_sample)

    def _assemble(self, pages, output_path: Path) -> Path:
        if self.renderer is not None:
            return self._assembler(self.renderer).assemble(pages, output_path)

        with PlaywrightPageRenderer() as renderer:
            return self._assembler(renderer).assemble(pages, output_path)

    def _assembler(self, renderer: PageRenderer) -> DocumentAssembler:
        return DocumentAssembler(renderer, self.html_dump_dir, expected_pages=DECK_PAGE_COUNT)
