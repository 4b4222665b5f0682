"""Page arithmetic, page-number windows and URL-preserving transitions."""

from __future__ import annotations

import math
from urllib.parse import urlencode

from petwiki.data.schemas import FilterState, PageInfo, PageLink, PetType
from petwiki.listing.query_state import DEFAULT_PER_PAGE, to_query_params


def build_page_info(total: int, page: int, per_page: int) -> PageInfo:
    """Compute a consistent PageInfo for *total* records.

    The requested page is clamped into ``[1, total_pages]``. An empty result
    has zero pages and a ``0..0`` range.

    Args:
        total: Total number of records across all pages.
        page: Requested 1-indexed page.
        per_page: Records per page.

    Returns:
        PageInfo satisfying the range and next/prev invariants.
    """
    total = max(total, 0)
    per_page = max(per_page, 1)
    total_pages = math.ceil(total / per_page)

    if total_pages == 0:
        return PageInfo(total=0, current_page=1, per_page=per_page, total_pages=0)

    current = min(max(page, 1), total_pages)
    first = (current - 1) * per_page + 1
    last = min(current * per_page, total)
    next_page = current + 1 if current < total_pages else None
    prev_page = current - 1 if current > 1 else None

    return PageInfo(
        total=total,
        current_page=current,
        per_page=per_page,
        total_pages=total_pages,
        from_=first,
        to=last,
        has_more=next_page is not None,
        next_page=next_page,
        prev_page=prev_page,
    )


def past_end_page_info(total: int, page: int, per_page: int) -> PageInfo:
    """PageInfo for a requested page beyond the last one.

    No records are shown, so the range is ``0..0``; ``current_page`` stays
    the requested page and ``prev_page`` points back at the last real page.
    """
    info = build_page_info(total, page, per_page)
    return info.model_copy(
        update={
            "current_page": page,
            "from_": 0,
            "to": 0,
            "has_more": False,
            "next_page": None,
            "prev_page": info.total_pages or None,
        }
    )


def single_page_info(count: int, per_page: int = DEFAULT_PER_PAGE) -> PageInfo:
    """PageInfo for a source without upstream pagination.

    Always exactly one page, even when *count* is zero or exceeds
    *per_page*.
    """
    return PageInfo(
        total=count,
        current_page=1,
        per_page=per_page,
        total_pages=1,
        from_=1 if count else 0,
        to=count,
        has_more=False,
    )


def page_window(total_pages: int, current_page: int) -> list[int | None]:
    """Clickable page numbers with ``None`` marking a collapsed run.

    Page 1, the last page and every page within one of *current_page* are
    kept; each gap between kept pages becomes a single ``None``.
    """
    visible = []
    for page in range(1, total_pages + 1):
        if page in (1, total_pages) or abs(page - current_page) <= 1:
            visible.append(page)

    window: list[int | None] = []
    previous = 0
    for page in visible:
        if page - previous > 1:
            window.append(None)
        window.append(page)
        previous = page
    return window


class PaginationController:
    """Filter and page transitions over the URL-held listing state.

    Every transition returns a new FilterState; the URL for it comes from
    :meth:`url_for`. Nothing is mutated in place.

    Args:
        state: Filter state parsed from the current URL.
        page_info: Page info of the current result, if a fetch completed.
        base_path: Path of the listing page.
        default_per_page: Page size omitted from generated URLs.
    """

    def __init__(
        self,
        state: FilterState,
        page_info: PageInfo | None = None,
        base_path: str = "/dictionary",
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self.state = state
        self.page_info = page_info
        self.base_path = base_path
        self.default_per_page = default_per_page

    @property
    def total_pages(self) -> int:
        return self.page_info.total_pages if self.page_info else 0

    @property
    def current_page(self) -> int:
        return self.page_info.current_page if self.page_info else self.state.page

    def go_to_page(self, page: int) -> FilterState:
        """Move to *page*, keeping the active query or type.

        Out-of-range pages leave the state untouched.
        """
        if not 1 <= page <= self.total_pages:
            return self.state
        return self.state.model_copy(update={"page": page})

    def change_type_filter(self, pet_type: PetType | str) -> FilterState:
        return self.state.model_copy(
            update={"query": None, "type_filter": PetType(pet_type), "page": 1}
        )

    def submit_search(self, text: str) -> FilterState:
        query = text.strip()
        if not query:
            return self.state
        return self.state.model_copy(
            update={"query": query, "type_filter": None, "page": 1}
        )

    def clear_search(self) -> FilterState:
        return self.state.model_copy(
            update={"query": None, "type_filter": None, "page": 1}
        )

    def url_for(self, state: FilterState) -> str:
        """Listing URL reproducing *state*."""
        params = to_query_params(state, default_per_page=self.default_per_page)
        return f"{self.base_path}?{urlencode(params)}"

    def page_links(self) -> list[PageLink]:
        """Page window for the current result, with a URL per page."""
        links = []
        for page in page_window(self.total_pages, self.current_page):
            if page is None:
                links.append(PageLink())
            else:
                links.append(
                    PageLink(
                        number=page,
                        url=self.url_for(self.go_to_page(page)),
                        current=page == self.current_page,
                    )
                )
        return links

    @property
    def prev_url(self) -> str | None:
        if self.page_info is None or self.page_info.prev_page is None:
            return None
        return self.url_for(self.go_to_page(self.page_info.prev_page))

    @property
    def next_url(self) -> str | None:
        if self.page_info is None or self.page_info.next_page is None:
            return None
        return self.url_for(self.go_to_page(self.page_info.next_page))
