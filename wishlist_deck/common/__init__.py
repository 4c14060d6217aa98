# Common utilities
from .config_loader import (
    DeckSettings,
    load_config,
    load_content_bundle,
    load_settings,
)
from .errors import (
    ConfigError,
    DeckError,
    ImageProcessingError,
    InsufficientProductsError,
    LocalizationError,
    TemplateSchemaError,
)
from .http_client import create_session, fetch_html
from .log_config import setup_logging
from .text_utils import collapse_whitespace, safe_filename, strip_domain
