"""
Gemini Localizer

Translates the English content bundle into the store's language through
the Gemini generateContent REST endpoint, matching the tone of a sample
of the brand's own copy.
"""

import json
import logging
import re

import requests

from ..common.errors import LocalizationError
from .bundle import ContentBundle, validate_bundle_structure

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

_CODE_FENCE_RE = re.compile(r'^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$', re.DOTALL)

PROMPT_TEMPLATE = """\
You are an expert marketing copywriter and localization specialist for e-commerce brands.
Your task is to translate a JSON object of English text strings into a target language, \
perfectly matching a given brand's tonality.

**Brand Tonality Context:**
Here is a sample of the brand's language to understand their tone. It could be playful, \
formal, minimalist, etc. Adapt your translation to this style.
---
{tone_sample}
---

**Instructions:**
1. The target language is: "{language}".
2. Translate the **values** of the following JSON object.
3. Do NOT translate the JSON keys.
4. Preserve the exact original JSON structure.
5. Ensure the translated text flows naturally for a native speaker and matches the brand's tone.

**JSON to Translate:**
```json
{bundle_json}
```

**Your Response:**
You MUST respond with ONLY the translated JSON object. Do not add any other text, \
explanation, or commentary before or after the JSON.
"""


def build_prompt(bundle: ContentBundle, language: str, tone_sample: str) -> str:
    return PROMPT_TEMPLATE.format(
        tone_sample=tone_sample,
        language=language,
        bundle_json=json.dumps(bundle, indent=2, ensure_ascii=False),
    )


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    match = _CODE_FENCE_RE.match(text)
    return match.group(1) if match else text.strip()


class GeminiLocalizer:
    """
    Client for the Gemini translation call.

    Usage:
        localizer = GeminiLocalizer(api_key="...", session=session)
        translated = localizer.localize(bundle, "de", "We make sustainable shoes...")
    """

    def __init__(
        self,
        api_key: str,
        session: requests.Session,
        model: str = "gemini-2.0-flash",
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ValueError("Gemini API key is required")
        self.api_key = api_key
        self.session = session
        self.model = model
        self.timeout = timeout

    def localize(self, bundle: ContentBundle, language: str, tone_sample: str) -> ContentBundle:
        """
        Translate bundle values into language.

        Returns:
            Bundle with the same key structure and translated strings

        Raises:
            LocalizationError: On request failure or an unusable response
        """
        logger.info("Calling Gemini API for translation to [%s]...", language)

        body = {
            "contents": [{"parts": [{"text": build_prompt(bundle, language, tone_sample)}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

        try:
            response = self.session.post(
                GEMINI_API_URL.format(model=self.model),
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise LocalizationError(f"Gemini request failed: {e}") from e

        if not response.ok:
            raise LocalizationError(
                f"Gemini API request failed with status {response.status_code}: {response.text[:200]}"
            )

        try:
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
            translated = json.loads(strip_code_fence(text))
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LocalizationError(f"Unusable Gemini response: {e}") from e

        validate_bundle_structure(bundle, translated)
        logger.info("Gemini translation received.")
        return translated
