"""Exception types shared across the pipeline."""


class DeckError(Exception):
    """Base class for deck generation errors."""


class ConfigError(DeckError):
    """Configuration file is missing required keys or has invalid values."""


class ImageProcessingError(DeckError):
    """A product image could not be downloaded, decoded or re-encoded."""


class LocalizationError(DeckError):
    """The translation service failed or returned an unusable bundle."""


class TemplateSchemaError(DeckError):
    """A page template and the values given to it disagree on placeholders."""


class InsufficientProductsError(DeckError):
    """Fewer valid products were found than the deck needs."""

    def __init__(self, found: int, required: int):
        self.found = found
        self.required = required
        super().__init__(f"Not enough valid products found: {found} of {required}")
