"""Breed data generated by Gemini with schema-constrained output."""

from __future__ import annotations

import logging
from typing import Any

from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, TypeAdapter, ValidationError

from petwiki.data.schemas import BreedDetail, BreedSummary, FilterState, PetType
from petwiki.listing.pagination import single_page_info
from petwiki.providers.base import BreedDataProvider, FetchResult
from petwiki.providers.errors import MalformedResponse, UpstreamRejected
from petwiki.providers.gemini_client import LazyGenaiClient

logger = logging.getLogger(__name__)


# Response schemas. Every field is required: the API rejects defaults.


class _GeneratedBreed(BaseModel):
    name: str
    short_description: str
    size: str


class _GeneratedSearchHit(BaseModel):
    name: str
    type: PetType
    short_description: str
    size: str


class _GeneratedBreedDetail(BaseModel):
    name: str
    scientific_name: str
    short_description: str
    size: str
    height: str
    weight: str
    lifespan: str
    origin: str
    history: str
    story: str
    characteristics: list[str]


class GenerativeBreedProvider(BreedDataProvider):
    """Breed listings and details from a language model.

    The upstream has no pagination, so every listing is a single page.

    Args:
        client: Lazily built Gemini client.
        model: Text model name.
        list_size: Number of breeds asked for in a type listing.
        search_limit: Maximum number of search results asked for.
    """

    name = "generative"

    def __init__(
        self,
        client: LazyGenaiClient,
        model: str = "gemini-3-flash-preview",
        list_size: int = 12,
        search_limit: int = 10,
    ) -> None:
        self.client = client
        self.model = model
        self.list_size = list_size
        self.search_limit = search_limit

    def fetch_breeds(self, state: FilterState) -> FetchResult:
        if state.query:
            records: list[BreedSummary] = self.search_breeds(state.query)
        else:
            records = self.get_breed_list(state.effective_type or PetType.DOG)
        return FetchResult(
            records=list(records),
            page_info=single_page_info(len(records), state.per_page),
        )

    def get_breed_list(self, pet_type: PetType) -> list[BreedSummary]:
        """Most popular breeds of *pet_type*."""
        prompt = f"Provide a list of {self.list_size} most popular {pet_type.value} breeds."
        items = self._generate(prompt, list[_GeneratedBreed])
        return [BreedSummary(type=pet_type, **item.model_dump()) for item in items]

    def search_breeds(self, query: str) -> list[BreedSummary]:
        """Dog or cat breeds matching free text *query*."""
        prompt = (
            f'Search for dog or cat breeds matching: "{query}". '
            f"Return at most {self.search_limit} results."
        )
        items = self._generate(prompt, list[_GeneratedSearchHit])
        return [BreedSummary(**item.model_dump()) for item in items]

    def get_breed_detail(self, name: str, pet_type: PetType) -> BreedDetail:
        """In-depth description of one breed."""
        prompt = (
            f"Provide deep detail about the {name} {pet_type.value} breed. "
            "Include height, weight, lifespan, origin, detailed history, "
            "and a heartwarming short story about this breed."
        )
        detail = self._generate(prompt, _GeneratedBreedDetail)
        return BreedDetail(type=pet_type, **detail.model_dump())

    def _generate(self, prompt: str, schema: Any) -> Any:
        """Run one structured generation and validate it against *schema*.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamRejected: If the API call fails.
            MalformedResponse: If the output is empty or does not match.
        """
        client = self.client.get()
        logger.info("Generating with %s: %s", self.model, prompt)
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
        except genai_errors.APIError as err:
            logger.error("Gemini request failed: %s", err)
            raise UpstreamRejected(f"Generation failed: {err}") from err

        text = (response.text or "").strip()
        if not text:
            raise MalformedResponse("Model returned no content")
        try:
            return TypeAdapter(schema).validate_json(text)
        except ValidationError as err:
            logger.error("Model output did not match schema: %s", err)
            raise MalformedResponse("Model output did not match schema") from err
