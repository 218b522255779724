#!/usr/bin/env python3
"""
Configuration loading for the movie finder

Settings come from a YAML file (config.yaml). The OMDb API key may instead be
supplied through the OMDB_API_KEY environment variable. The resulting
FinderConfig is passed explicitly to the OMDb client and the finder; nothing
here is stored at module level.

Example config.yaml:
  omdb_api_key: "abcd1234"
  timeout: 10
  max_workers: 8
  max_pages: 1
  category_limit: 15
  related_limit: 5
"""

import os
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, List

import yaml

from finder.constants import (
    OMDB_BASE_URL, SEARCH_SEEDS,
    DEFAULT_CATEGORY_LIMIT, DEFAULT_RELATED_LIMIT,
    DEFAULT_TIMEOUT, DEFAULT_MAX_WORKERS, DEFAULT_MAX_PAGES,
)
from finder.errors import ConfigError

logger = logging.getLogger(__name__)

API_KEY_ENV = 'OMDB_API_KEY'

_POSITIVE_INTS = ('max_workers', 'max_pages', 'category_limit', 'related_limit')


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


@dataclass
class FinderConfig:
    """Explicit settings for one OMDb client / finder pair"""
    omdb_api_key: str
    base_url: str = OMDB_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    max_pages: int = DEFAULT_MAX_PAGES
    category_limit: int = DEFAULT_CATEGORY_LIMIT
    related_limit: int = DEFAULT_RELATED_LIMIT
    category_early_exit: bool = False
    related_early_exit: bool = True
    search_seeds: List[str] = field(default_factory=lambda: list(SEARCH_SEEDS))

    def __post_init__(self):
        if not self.omdb_api_key:
            raise ConfigError(
                f"No OMDb API key: set omdb_api_key in config or {API_KEY_ENV} in the environment"
            )

        for name in _POSITIVE_INTS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigError(f"timeout must be a positive number, got {self.timeout!r}")

        if (not isinstance(self.search_seeds, list) or not self.search_seeds
                or not all(isinstance(s, str) and s.strip() for s in self.search_seeds)):
            raise ConfigError("search_seeds must be a non-empty list of strings")

    @classmethod
    def from_dict(cls, data: Dict, environ: Optional[Dict[str, str]] = None) -> 'FinderConfig':
        """
        Build a config from a plain mapping

        Unknown keys are ignored with a warning. A key in the mapping wins over
        the environment variable.
        """
        environ = os.environ if environ is None else environ
        known = {f.name for f in fields(cls)}

        kwargs = {}
        for key, value in data.items():
            if key in known:
                kwargs[key] = value
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        if not kwargs.get('omdb_api_key'):
            kwargs['omdb_api_key'] = environ.get(API_KEY_ENV, '')

        return cls(**kwargs)

    @classmethod
    def from_file(cls, config_path: Path, environ: Optional[Dict[str, str]] = None) -> 'FinderConfig':
        """Load config.yaml; a missing file falls back to environment-only settings"""
        if config_path.exists():
            data = load_config(config_path)
        else:
            logger.info(f"Config file {config_path} not found, using defaults and environment")
            data = {}
        return cls.from_dict(data, environ=environ)
