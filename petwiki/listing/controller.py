"""Turn URL query state into a rendered breed listing."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from petwiki.data.schemas import BreedSummaryRecord, ListingView
from petwiki.listing.mapper import map_records, placeholder_image_url
from petwiki.listing.pagination import PaginationController
from petwiki.listing.query_state import DEFAULT_PER_PAGE, parse_filter_state
from petwiki.providers.base import BreedDataProvider
from petwiki.providers.errors import FetchError

logger = logging.getLogger(__name__)


class BreedListingController:
    """Loads one dictionary view per navigation.

    The URL is the only state: each call to :meth:`load` parses it, issues a
    single provider fetch and returns a view tagged with the filter it was
    fetched for.

    Args:
        provider: Source of breed records.
        base_path: Path of the listing page, used in generated links.
        default_per_page: Page size when the URL does not carry one.
    """

    def __init__(
        self,
        provider: BreedDataProvider,
        base_path: str = "/dictionary",
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self.provider = provider
        self.base_path = base_path
        self.default_per_page = default_per_page

    def pagination_for(self, params: Mapping[str, str]) -> PaginationController:
        """Pagination controller for the state in *params*, before any fetch."""
        state = parse_filter_state(params, default_per_page=self.default_per_page)
        return PaginationController(
            state, base_path=self.base_path, default_per_page=self.default_per_page
        )

    def load(self, params: Mapping[str, str]) -> ListingView:
        """Fetch and map the listing described by *params*.

        Any provider error aborts the whole view: the result then has no
        records and carries the error's user message.
        """
        state = parse_filter_state(params, default_per_page=self.default_per_page)
        heading = f'Search Results for "{state.query}"' if state.query else "Breed Dictionary"

        try:
            result = self.provider.fetch_breeds(state)
        except FetchError as err:
            logger.warning("Listing fetch via %s failed: %s", self.provider.name, err)
            return ListingView(filter=state, heading=heading, error=err.user_message)

        records = [_with_image(record) for record in map_records(result.records)]
        pager = PaginationController(
            state,
            result.page_info,
            base_path=self.base_path,
            default_per_page=self.default_per_page,
        )
        logger.info(
            "Loaded %d records via %s for %s",
            len(records),
            self.provider.name,
            state.model_dump(),
        )
        return ListingView(
            filter=state,
            records=records,
            page_info=result.page_info,
            page_links=pager.page_links(),
            prev_url=pager.prev_url,
            next_url=pager.next_url,
            heading=heading,
        )

    def is_current(self, view: ListingView, params: Mapping[str, str]) -> bool:
        """Whether *view* still matches the URL state in *params*.

        A response that completes after a newer navigation fails this check
        and should be discarded.
        """
        return view.filter == parse_filter_state(
            params, default_per_page=self.default_per_page
        )


def _with_image(record: BreedSummaryRecord) -> BreedSummaryRecord:
    if record.image_url:
        return record
    return record.model_copy(
        update={"image_url": placeholder_image_url(record.name, record.type)}
    )
