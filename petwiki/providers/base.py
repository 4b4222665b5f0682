"""Common interface of the breed data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from petwiki.data.schemas import BreedSummary, FilterState, PageInfo, Pet


@dataclass
class FetchResult:
    """Raw upstream records plus pagination, if the source has any."""

    records: list[Pet | BreedSummary] = field(default_factory=list)
    page_info: PageInfo | None = None


class BreedDataProvider(ABC):
    """Source of breed listings for the dictionary page.

    Implementations perform exactly one upstream request per call and raise
    :class:`~petwiki.providers.errors.FetchError` subclasses on failure.
    """

    name: str = "provider"

    @abstractmethod
    def fetch_breeds(self, state: FilterState) -> FetchResult:
        """Fetch the records for *state*."""
