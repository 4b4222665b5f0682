"""Deterministic in-memory pets for exercising pagination."""

from __future__ import annotations

from petwiki.data.schemas import FilterState, Pet, PetGroup, PetImage
from petwiki.listing.pagination import build_page_info
from petwiki.providers.base import BreedDataProvider, FetchResult

MOCK_TOTAL = 50


def _mock_pet(index: int) -> Pet:
    number = index + 1
    kind = "dog" if index % 2 == 0 else "cat"
    return Pet(
        id=number,
        name=f"Mock Pet {number}",
        description=f"This is a mock description for pet {number}",
        height="10-12 inches",
        weight="15-20 pounds",
        groups=[PetGroup(id=1 if kind == "dog" else 2, name=kind.title(), slug=kind)],
        featured_image=PetImage(
            id=number, url=f"https://picsum.photos/seed/pet{index}/400/300"
        ),
        slug=f"mock-pet-{number}",
    )


class MockBreedProvider(BreedDataProvider):
    """Paginates a fixed list of mock pets; ignores query and type."""

    name = "mock"

    def __init__(self, total: int = MOCK_TOTAL) -> None:
        self.pets = [_mock_pet(i) for i in range(total)]

    def fetch_breeds(self, state: FilterState) -> FetchResult:
        info = build_page_info(len(self.pets), state.page, state.per_page)
        start = (info.current_page - 1) * info.per_page
        return FetchResult(
            records=list(self.pets[start : start + info.per_page]),
            page_info=info,
        )
