"""Output renderers for command results.

Provides the OutputWriter abstraction, console and JSON implementations,
and a factory that instantiates writers from configuration.
"""

from __future__ import annotations

from FuzzySearch.config import AppConfig
from FuzzySearch.renderers.base import MultiOutputWriter, OutputWriter
from FuzzySearch.renderers.console import ConsoleOutputWriter, render_predicate, render_text
from FuzzySearch.renderers.json import JsonFileWriter, plan_to_dict, predicate_to_dict, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no writer is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "create_output_writer",
    "plan_to_dict",
    "predicate_to_dict",
    "render_json",
    "render_predicate",
    "render_text",
]
