"""Tests for petwiki/data/schemas.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from petwiki.data.schemas import (
    FilterState,
    PageInfo,
    PageLink,
    Pet,
    PetListResponse,
    PetType,
)


class TestFilterState:
    """Tests for FilterState model."""

    def test_defaults(self) -> None:
        """Should default to page 1 of 12 with no filters."""
        state = FilterState()
        assert state.query is None
        assert state.type_filter is None
        assert state.page == 1
        assert state.per_page == 12

    def test_effective_type_defaults_to_dog(self) -> None:
        """No query and no type should mean dogs."""
        assert FilterState().effective_type == PetType.DOG

    def test_effective_type_none_with_query(self) -> None:
        """A text query should suppress the type."""
        state = FilterState(query="fluffy", type_filter=PetType.CAT)
        assert state.effective_type is None

    def test_rejects_non_positive_page(self) -> None:
        """Page must be at least 1."""
        with pytest.raises(ValidationError):
            FilterState(page=0)

    def test_frozen(self) -> None:
        """FilterState should be immutable."""
        state = FilterState()
        with pytest.raises(ValidationError):
            state.page = 3  # type: ignore[misc]


class TestPetListResponse:
    """Tests for the REST list envelope."""

    def test_string_pagination_fields_coerced(self) -> None:
        """current_page and per_page may arrive as strings."""
        envelope = PetListResponse.model_validate(
            {
                "success": True,
                "data": [],
                "pagination": {
                    "total": 50,
                    "total_pages": 5,
                    "current_page": "2",
                    "per_page": "12",
                    "from": 13,
                    "to": 24,
                    "has_more": True,
                    "next_page": 3,
                    "prev_page": 1,
                },
            }
        )
        assert envelope.pagination is not None
        assert envelope.pagination.current_page == 2
        assert envelope.pagination.per_page == 12
        assert envelope.pagination.from_ == 13

    def test_pagination_optional(self) -> None:
        """The pagination envelope may be missing."""
        envelope = PetListResponse.model_validate({"success": True, "data": []})
        assert envelope.pagination is None

    def test_pet_optional_fields(self) -> None:
        """A pet with only id and name should validate."""
        pet = Pet.model_validate({"id": 1, "name": "Beagle"})
        assert pet.groups == []
        assert pet.featured_image is None


class TestPageInfo:
    """Tests for PageInfo serialization."""

    def test_from_serialized_by_alias(self) -> None:
        """from_ should serialize as 'from'."""
        info = PageInfo(total=5, total_pages=1, from_=1, to=5)
        dumped = info.model_dump(by_alias=True)
        assert dumped["from"] == 1
        assert "from_" not in dumped


class TestPageLink:
    """Tests for PageLink."""

    def test_ellipsis(self) -> None:
        assert PageLink().is_ellipsis
        assert not PageLink(number=2, url="/dictionary?page=2").is_ellipsis
