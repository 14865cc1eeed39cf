"""
Configuration Loader

Loads YAML configuration for crawler defaults, Storefront API settings
and post-processing price buckets.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .constants import DEFAULT_USER_AGENT

DEFAULT_CRAWLER_SETTINGS: Dict[str, Any] = {
    "timeout": 90,
    "retries": 3,
    "delay": 1.0,
    "wait_time": 0,
    "save_interval": 20,
    "max_pagination_probe": 10,
    "user_agent": DEFAULT_USER_AGENT,
}

DEFAULT_STOREFRONT_SETTINGS: Dict[str, Any] = {
    "api_version": "2023-10",
    "page_size": 50,
    "request_delay": 0.5,
}

DEFAULT_PRICE_RANGES: List[Dict[str, Any]] = [
    {"label": "Under $10", "min": 0, "max": 10},
    {"label": "$10-$20", "min": 10, "max": 20},
    {"label": "$20-$50", "min": 20, "max": 50},
    {"label": "$50-$100", "min": 50, "max": 100},
    {"label": "Over $100", "min": 100, "max": None},
]


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
        filename: Name of the config file (e.g., 'crawler.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _load_section(section: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay one section of crawler.yaml on top of built-in defaults."""
    settings = dict(defaults)
    try:
        config = load_config('crawler.yaml')
    except FileNotFoundError:
        return settings

    overrides = config.get(section) or {}
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return settings


def load_crawler_settings() -> Dict[str, Any]:
    """
    Load page crawler defaults.

    Returns:
        Dictionary with timeout, retries, delay, wait_time, save_interval,
        max_pagination_probe and user_agent
    """
    return _load_section('crawler', DEFAULT_CRAWLER_SETTINGS)


def load_storefront_settings() -> Dict[str, Any]:
    """
    Load Storefront API defaults.

    Returns:
        Dictionary with api_version, page_size and request_delay
    """
    return _load_section('storefront', DEFAULT_STOREFRONT_SETTINGS)


def load_price_ranges() -> List[Dict[str, Any]]:
    """
    Load ordered price buckets for post-processing.

    Returns:
        List of {"label", "min", "max"} dicts; "max" of None means unbounded

    Example:
        [{'label': 'Under $10', 'min': 0, 'max': 10}, ...]
    """
    try:
        config = load_config('crawler.yaml')
    except FileNotFoundError:
        return [dict(r) for r in DEFAULT_PRICE_RANGES]

    ranges = config.get('price_ranges')
    if not ranges:
        return [dict(r) for r in DEFAULT_PRICE_RANGES]
    return ranges
