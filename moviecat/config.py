#!/usr/bin/env python3
"""YAML configuration with defaults"""

from pathlib import Path

import yaml

from moviecat.omdb import DEFAULT_BASE_URL
from moviecat.manager import DEFAULT_SEARCH_TERM, DEFAULT_ENRICH_LIMIT

DEFAULTS = {
    'catalog_path': 'movies.json',
    'omdb_api_key': '',
    'omdb_base_url': DEFAULT_BASE_URL,
    'enrich_search_term': DEFAULT_SEARCH_TERM,
    'enrich_limit': DEFAULT_ENRICH_LIMIT,
    'request_timeout': 10,
}


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file, overlaid on DEFAULTS"""
    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    config = dict(DEFAULTS)
    # Keys present but left empty in the file keep their defaults
    config.update({k: v for k, v in loaded.items() if v is not None})
    return config
