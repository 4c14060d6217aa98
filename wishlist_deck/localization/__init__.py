"""
Localization of the deck copy.

Modules:
    bundle           - Content bundle structure checks
    gemini_localizer - GeminiLocalizer (translation via Gemini REST API)
"""

import copy
import logging
from typing import Optional, Protocol

from ..common.config_loader import load_content_bundle
from ..common.errors import LocalizationError
from ..models import LANGUAGE_NOT_FOUND
from .bundle import ContentBundle, bundle_structure, validate_bundle_structure
from .gemini_localizer import GeminiLocalizer

logger = logging.getLogger(__name__)


class Localizer(Protocol):
    """Translation service; raises LocalizationError on failure."""

    def localize(self, bundle: ContentBundle, language: str, tone_sample: str) -> ContentBundle:
        ...


def localize_or_fallback(
    localizer: Optional[Localizer],
    bundle: ContentBundle,
    language: str,
    tone_sample: str,
) -> ContentBundle:
    """
    Translate the bundle, or return a copy of the source on any failure.

    The fallback is the untouched source bundle, never a partial merge.
    Translation is skipped when no localizer is configured or the store
    language is unknown.
    """
    if localizer is None:
        logger.info("Localization disabled, using English content.")
        return copy.deepcopy(bundle)

    if not language or language == LANGUAGE_NOT_FOUND:
        logger.info("Store language unknown, using English content.")
        return copy.deepcopy(bundle)

    try:
        translated = localizer.localize(copy.deepcopy(bundle), language, tone_sample)
        return validate_bundle_structure(bundle, translated)
    except LocalizationError as e:
        logger.error("Localization failed: %s", e)
        logger.warning("Falling back to default English content.")
        return copy.deepcopy(bundle)


__all__ = [
    'ContentBundle',
    'GeminiLocalizer',
    'Localizer',
    'bundle_structure',
    'load_content_bundle',
    'localize_or_fallback',
    'validate_bundle_structure',
]
