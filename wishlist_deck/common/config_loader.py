"""
Configuration Loader

Loads YAML configuration files for deck policy (product count, discount,
exclusion keywords, crawl paths, image and print settings) and the English
content bundle. Secrets are read from the environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError

SETTINGS_FILE = 'deck.yaml'
CONTENT_FILE = 'content_en.yaml'

PAGE_TYPES = ('intro', 'use_case', 'pos', 'closing')


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'deck.yaml'), or a path

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(filename)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_content_bundle() -> Dict[str, Dict[str, Any]]:
    """
    Load the English marketing copy used to fill every page template.

    Returns:
        Nested dictionary of copy strings

    Example:
        {
            'intro': {'headline': 'Turn Wishlist Intent into Revenue Growth', ...},
            'useCases': {'priceDrop': {'headline': 'Price Drop Alert!', ...}, ...},
            ...
        }
    """
    config = load_config(CONTENT_FILE)
    return config.get('content', {})


@dataclass(frozen=True)
class HttpSettings:
    timeout: float = 20.0
    user_agent: str = "Mozilla/5.0"
    accept_language: str = "en-US,en;q=0.9"


@dataclass(frozen=True)
class ImageSettings:
    main_quality: int = 70
    thumb_width: int = 400
    thumb_quality: int = 50
    cache_dir: Optional[str] = None
    skip_failed: bool = False


@dataclass(frozen=True)
class DeckSettings:
    """
    Run configuration, loaded once at startup and passed to each collaborator.

    Policy values that used to be literals (discount, exclusion keywords,
    crawl paths) live here so they can be changed per deployment.
    """

    target_product_count: int
    discount_rate: float
    app_name: str
    candidate_paths: List[str]
    platform_suffixes: List[str]
    exclusion_keywords: List[str]
    product_card_classes: List[str]
    link_ceiling_multiplier: int
    about_paths: List[str]
    http: HttpSettings = field(default_factory=HttpSettings)
    images: ImageSettings = field(default_factory=ImageSettings)
    localization_enabled: bool = True
    localization_model: str = "gemini-2.0-flash"
    gemini_api_key: Optional[str] = None
    print_options: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def link_ceiling(self) -> int:
        """Number of discovered links after which crawling stops."""
        return self.target_product_count * self.link_ceiling_multiplier


def _require(section: Mapping[str, Any], key: str, section_name: str) -> Any:
    if key not in section or section[key] is None:
        raise ConfigError(f"Missing required setting '{section_name}.{key}'")
    return section[key]


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DeckSettings:
    """
    Load and validate deck settings.

    Args:
        path: Settings file (default: config/deck.yaml)
        environ: Environment mapping for secrets (default: os.environ)

    Returns:
        DeckSettings instance

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        ConfigError: If a required setting is missing or out of range
    """
    config = load_config(path or SETTINGS_FILE)
    environ = os.environ if environ is None else environ

    deck = config.get('deck', {})
    discovery = config.get('discovery', {})
    http = config.get('http', {})
    images = config.get('images', {})
    localization = config.get('localization', {})
    print_options = config.get('print_options', {})

    target_count = int(_require(deck, 'target_product_count', 'deck'))
    if target_count < 5:
        # The deck has five use-case pages, one product each
        raise ConfigError(f"deck.target_product_count must be at least 5 (got {target_count})")

    discount_rate = float(_require(deck, 'discount_rate', 'deck'))
    if not 0 <= discount_rate < 1:
        raise ConfigError(f"deck.discount_rate must be in [0, 1) (got {discount_rate})")

    missing_pages = [name for name in PAGE_TYPES if name not in print_options]
    if missing_pages:
        raise ConfigError(f"Missing print_options for: {', '.join(missing_pages)}")

    api_key_env = localization.get('api_key_env', 'GEMINI_API_KEY')

    return DeckSettings(
        target_product_count=target_count,
        discount_rate=discount_rate,
        app_name=deck.get('app_name', 'Wishlist Plus'),
        candidate_paths=list(_require(discovery, 'candidate_paths', 'discovery')),
        platform_suffixes=list(discovery.get('platform_suffixes', [])),
        exclusion_keywords=[k.lower() for k in discovery.get('exclusion_keywords', [])],
        product_card_classes=list(discovery.get('product_card_classes', [])),
        link_ceiling_multiplier=int(discovery.get('link_ceiling_multiplier', 5)),
        about_paths=list(discovery.get('about_paths', [])),
        http=HttpSettings(
            timeout=float(http.get('timeout', HttpSettings.timeout)),
            user_agent=http.get('user_agent', HttpSettings.user_agent),
            accept_language=http.get('accept_language', HttpSettings.accept_language),
        ),
        images=ImageSettings(
            main_quality=int(images.get('main_quality', ImageSettings.main_quality)),
            thumb_width=int(images.get('thumb_width', ImageSettings.thumb_width)),
            thumb_quality=int(images.get('thumb_quality', ImageSettings.thumb_quality)),
            cache_dir=images.get('cache_dir'),
            skip_failed=bool(images.get('skip_failed', False)),
        ),
        localization_enabled=bool(localization.get('enabled', True)),
        localization_model=localization.get('model', 'gemini-2.0-flash'),
        gemini_api_key=environ.get(api_key_env) or None,
        print_options={name: dict(print_options[name]) for name in PAGE_TYPES},
    )
