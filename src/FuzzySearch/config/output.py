"""Output domain configuration for search result writers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from FuzzySearch.config.common import (
    expect_bool,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_required_value,
    get_section,
)

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        base_dir: Directory for file outputs.
        formats: Enabled writers (console/json).
        show_sql: Whether ``compile`` prints the generated SQL.
    """

    base_dir: str
    formats: tuple[str, ...]
    show_sql: bool = True


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "output", required=True)
    formats = tuple(
        item.strip().lower()
        for item in expect_str_list(get_required_value(section, "formats", "output.formats"), "output.formats")
    )
    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", "output"), "output.base_dir"),
        formats=formats,
        show_sql=expect_bool(get_optional_value(section, "show_sql", True), "output.show_sql"),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If values violate output constraints.
    """
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
