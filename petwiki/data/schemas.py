"""Pydantic models for data validation and serialization."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PetType(str, Enum):
    """Pet kinds the dictionary can be filtered by."""

    DOG = "dog"
    CAT = "cat"


class FilterState(BaseModel):
    """Listing request derived from the URL query string.

    ``query`` and ``type_filter`` are mutually exclusive in the normal UI
    flow; when both arrive the query wins. A ``None`` type with no query
    means the default (dog) listing.
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    type_filter: PetType | None = None
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=12, ge=1)

    @property
    def effective_type(self) -> PetType | None:
        """Pet type to fetch, or None when a text query is active."""
        if self.query:
            return None
        return self.type_filter or PetType.DOG


# ---------------------------------------------------------------------------
# Curated REST API shapes
# ---------------------------------------------------------------------------


class PetImage(BaseModel):
    """Image attachment as returned by the pet-management API."""

    id: int = 0
    url: str = ""
    width: int = 0
    height: int = 0
    thumbnail: str = ""
    medium: str = ""
    alt: str = ""


class PetGroup(BaseModel):
    """Taxonomy term attached to a pet (``dog``, ``cat``, ``working``...)."""

    id: int = 0
    name: str = ""
    slug: str = ""


class Pet(BaseModel):
    """Curated pet record from the REST API."""

    id: int
    name: str
    description: str = ""
    excerpt: str = ""
    height: str = ""
    weight: str = ""
    lifespan: str = ""
    story: str = ""
    gallery: list[PetImage] = Field(default_factory=list)
    groups: list[PetGroup] = Field(default_factory=list)
    featured_image: PetImage | None = None
    date_created: str = ""
    date_modified: str = ""
    slug: str = ""


class PaginationEnvelope(BaseModel):
    """Upstream pagination metadata.

    ``current_page`` and ``per_page`` arrive either as numbers or as
    numeric strings; lax validation coerces both.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    total_pages: int = 0
    current_page: int = 1
    per_page: int = 12
    from_: int = Field(default=0, alias="from")
    to: int = 0
    has_more: bool = False
    next_page: int | None = None
    prev_page: int | None = None


class PetListResponse(BaseModel):
    """Envelope of ``GET /pets``."""

    success: bool
    data: list[Pet] = Field(default_factory=list)
    pagination: PaginationEnvelope | None = None


class PetDetailResponse(BaseModel):
    """Envelope of ``GET /pets/{id}`` and ``GET /pets/slug/{slug}``."""

    success: bool
    data: Pet | None = None


# ---------------------------------------------------------------------------
# Generative API shapes
# ---------------------------------------------------------------------------


class BreedSummary(BaseModel):
    """Minimal breed record produced by the generative source."""

    name: str
    type: PetType
    short_description: str = ""
    size: str = ""


class BreedDetail(BreedSummary):
    """Full breed record for a generative detail page."""

    scientific_name: str = ""
    height: str = ""
    weight: str = ""
    lifespan: str = ""
    origin: str = ""
    history: str = ""
    story: str = ""
    characteristics: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Display models
# ---------------------------------------------------------------------------


class BreedSummaryRecord(BaseModel):
    """Normalized card shown in the dictionary grid, whatever the source."""

    id: int | None = None
    name: str
    type: str = Field(description="'dog', 'cat' or 'unknown'")
    short_description: str = ""
    size_label: str = ""
    image_url: str = ""
    slug: str


class PageInfo(BaseModel):
    """Pagination state of the current listing page.

    ``from_``/``to`` are the 1-indexed inclusive record range shown, both
    zero for an empty result.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    current_page: int = 1
    per_page: int = 12
    total_pages: int = 0
    from_: int = Field(default=0, alias="from")
    to: int = 0
    has_more: bool = False
    next_page: int | None = None
    prev_page: int | None = None


class PageLink(BaseModel):
    """One entry of the rendered page-number sequence.

    ``number`` is ``None`` for an ellipsis marker.
    """

    number: int | None = None
    url: str | None = None
    current: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.number is None


class ListingView(BaseModel):
    """Everything the dictionary page needs, tagged with its filter state."""

    filter: FilterState
    records: list[BreedSummaryRecord] = Field(default_factory=list)
    page_info: PageInfo | None = None
    page_links: list[PageLink] = Field(default_factory=list)
    prev_url: str | None = None
    next_url: str | None = None
    heading: str = "Breed Dictionary"
    error: str | None = None


class GalleryItem(BaseModel):
    """Image or video shown in the gallery grid."""

    id: str
    url: str
    title: str
    type: Literal["image", "video"] = "image"
    prompt: str | None = None


class VideoJobStatus(BaseModel):
    """Serializable snapshot of a background video generation."""

    id: str
    prompt: str
    status: str
    url: str | None = None
    error: str | None = None
