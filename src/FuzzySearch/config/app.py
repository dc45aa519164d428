from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from FuzzySearch.config.output import OutputConfig, check_output, load_output
from FuzzySearch.config.pages import PagesConfig, check_pages, load_pages
from FuzzySearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from FuzzySearch.config.search import SearchConfig, check_search, load_search
from FuzzySearch.config.storage import StorageConfig, check_storage, load_storage


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    search: SearchConfig
    pages: PagesConfig
    storage: StorageConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    search = load_search(raw)
    pages = load_pages(raw)
    storage = load_storage(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_search(search)
    check_pages(pages)
    check_storage(storage)
    check_output(output)

    config = AppConfig(
        runtime=runtime,
        search=search,
        pages=pages,
        storage=storage,
        output=output,
    )
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(
    config_path: Path, default_path: Path = Path("config/default.yml")
) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    merged = merge_config_dicts(base, override)
    return parse_config_dict(merged)


def check_cross_domain(config: AppConfig) -> None:
    """Validate cross-domain constraints."""
    if "json" in config.output.formats and not config.output.base_dir.strip():
        raise ValueError("output.formats includes json but output.base_dir is empty")
    unknown_types = [
        t for types in config.pages.slugs.values() for t in types
        if config.search.target_types and t not in config.search.target_types
    ]
    if unknown_types:
        raise ValueError(f"pages.slugs uses types outside search.target_types: {sorted(set(unknown_types))}")


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
