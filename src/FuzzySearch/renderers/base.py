"""Base classes for output writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from FuzzySearch.core.models import SearchHit


class OutputWriter(ABC):
    """Abstract base class for search output writers."""

    @abstractmethod
    def write_results(self, hits: Sequence[SearchHit], tokens: Sequence[str]) -> None:
        """Write the hits of one search.

        Args:
            hits: Ordered search hits.
            tokens: Query tokens that produced them.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g. flush accumulated results to a file).

        Args:
            action: The CLI command name (e.g. 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_results(self, hits: Sequence[SearchHit], tokens: Sequence[str]) -> None:
        for writer in self.writers:
            writer.write_results(hits, tokens)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
