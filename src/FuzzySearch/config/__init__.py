from __future__ import annotations

"""Public configuration API for FuzzySearch."""

from FuzzySearch.config.app import (
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from FuzzySearch.config.output import OutputConfig
from FuzzySearch.config.pages import PagesConfig
from FuzzySearch.config.runtime import RuntimeConfig
from FuzzySearch.config.search import SearchConfig
from FuzzySearch.config.storage import StorageConfig

__all__ = [
    "RuntimeConfig",
    "SearchConfig",
    "PagesConfig",
    "StorageConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
    "check_cross_domain",
]
