"""Shared test fixtures for the PetWiki test suite."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from petwiki.data.schemas import BreedSummary, Pet, PetGroup, PetImage, PetType
from petwiki.providers.gemini_client import LazyGenaiClient


@pytest.fixture
def sample_pet() -> Pet:
    """Create a sample curated Pet for testing."""
    return Pet(
        id=42,
        name="Shiba Inu",
        description="An alert and agile dog.\nOriginally bred for hunting.",
        excerpt="Spirited Japanese hunting dog",
        height="13-17 inches",
        weight="17-23 pounds",
        lifespan="13-16 years",
        story="English name: Shiba Inu\nMore info: https://example.org/shiba",
        groups=[
            PetGroup(id=1, name="Dog", slug="dog"),
            PetGroup(id=7, name="Hunting", slug="hunting"),
        ],
        featured_image=PetImage(
            id=9,
            url="https://cdn.example.org/shiba.jpg",
            medium="https://cdn.example.org/shiba-300x300.jpg",
            thumbnail="https://cdn.example.org/shiba-150x150.jpg",
        ),
        date_created="2024-05-01T10:00:00",
        slug="shiba-inu",
    )


@pytest.fixture
def sample_pet_payload(sample_pet: Pet) -> dict:
    """JSON form of the sample pet as the REST API sends it."""
    return sample_pet.model_dump()


@pytest.fixture
def sample_breed_summary() -> BreedSummary:
    """Create a sample generative BreedSummary for testing."""
    return BreedSummary(
        name="Siamese",
        type=PetType.CAT,
        short_description="Vocal and affectionate",
        size="Medium",
    )


@pytest.fixture
def mock_genai() -> MagicMock:
    """Create a mock google-genai client."""
    return MagicMock()


@pytest.fixture
def lazy_client(mock_genai: MagicMock) -> LazyGenaiClient:
    """LazyGenaiClient wrapping the mock client."""
    return LazyGenaiClient("test-key", client=mock_genai)


@pytest.fixture
def json_response():
    """Build a fake generate_content response carrying JSON text."""

    def _build(payload: object) -> MagicMock:
        return MagicMock(text=json.dumps(payload))

    return _build


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color="orange").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def tmp_media_dir(tmp_path: Path) -> Path:
    """Create a temporary media directory."""
    media_dir = tmp_path / "media"
    media_dir.mkdir()
    return media_dir
