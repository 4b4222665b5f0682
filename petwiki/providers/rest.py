"""Client for the WordPress pet-management REST API."""

from __future__ import annotations

import logging
from typing import TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from petwiki.data.schemas import (
    FilterState,
    PageInfo,
    PaginationEnvelope,
    Pet,
    PetDetailResponse,
    PetListResponse,
)
from petwiki.listing.pagination import (
    build_page_info,
    past_end_page_info,
    single_page_info,
)
from petwiki.providers.base import BreedDataProvider, FetchResult
from petwiki.providers.errors import MalformedResponse, UpstreamRejected

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class RestPetProvider(BreedDataProvider):
    """Curated pet data served by the pet-management plugin.

    Args:
        base_url: API root, e.g. ``http://host/wp-json/pet-management/v1``.
        timeout: Per-request timeout in seconds.
        session: Optional requests session (injected in tests).
    """

    name = "rest"

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_breeds(self, state: FilterState) -> FetchResult:
        """Fetch one page of pets for *state*.

        Args:
            state: Filter and pagination request.

        Returns:
            FetchResult with Pet records and a PageInfo rebuilt from the
            upstream envelope.

        Raises:
            UpstreamRejected: On transport errors, non-2xx or ``success: false``.
            MalformedResponse: If the body is not a valid pet list envelope.
        """
        params: dict[str, str | int] = {"page": state.page, "per_page": state.per_page}
        if state.query:
            params["q"] = state.query
        elif state.effective_type is not None:
            params["type"] = state.effective_type.value

        result = self._get("/pets", PetListResponse, params=params)
        return FetchResult(
            records=list(result.data),
            page_info=_page_info_from_envelope(result.pagination, state, len(result.data)),
        )

    def fetch_pet_by_slug(self, slug: str) -> Pet:
        """Fetch a single pet by its slug."""
        result = self._get(f"/pets/slug/{quote(slug, safe='')}", PetDetailResponse)
        if result.data is None:
            raise MalformedResponse(f"Pet '{slug}' response carried no data")
        return result.data

    def fetch_pet_by_id(self, pet_id: int) -> Pet:
        """Fetch a single pet by its numeric ID."""
        result = self._get(f"/pets/{pet_id}", PetDetailResponse)
        if result.data is None:
            raise MalformedResponse(f"Pet {pet_id} response carried no data")
        return result.data

    def ping(self) -> bool:
        """Return True if the API answers a minimal listing request."""
        try:
            response = self.session.get(
                f"{self.base_url}/pets", params={"per_page": 1}, timeout=self.timeout
            )
        except requests.RequestException:
            return False
        return response.ok

    def _get(self, path: str, model: type[_M], params: dict | None = None) -> _M:
        url = f"{self.base_url}{path}"
        logger.info("Fetching %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as err:
            logger.error("Pet API request to %s failed: %s", url, err)
            raise UpstreamRejected(f"Failed to fetch {url}: {err}") from err

        try:
            result = model.model_validate(response.json())
        except (ValueError, ValidationError) as err:
            logger.error("Pet API returned an unreadable body from %s: %s", url, err)
            raise MalformedResponse(f"Unreadable response from {url}") from err

        if not result.success:
            logger.warning("Pet API returned unsuccessful response for %s", url)
            raise UpstreamRejected("API returned unsuccessful response")
        return result


def _page_info_from_envelope(
    envelope: PaginationEnvelope | None, state: FilterState, count: int
) -> PageInfo:
    """Rebuild PageInfo from upstream totals so its invariants hold."""
    if envelope is None:
        return single_page_info(count, state.per_page)

    requested = envelope.current_page or state.page
    per_page = envelope.per_page or state.per_page
    info = build_page_info(envelope.total, requested, per_page)
    if count == 0 and info.total_pages and requested > info.total_pages:
        logger.info(
            "Page %d is past the last page %d", requested, info.total_pages
        )
        return past_end_page_info(envelope.total, requested, per_page)
    if envelope.total_pages and envelope.total_pages != info.total_pages:
        logger.debug(
            "Upstream reported %d pages, recomputed %d",
            envelope.total_pages,
            info.total_pages,
        )
    return info
