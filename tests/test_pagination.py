"""Tests for petwiki/listing/pagination.py."""

from __future__ import annotations

import pytest

from petwiki.data.schemas import FilterState, PetType
from petwiki.listing.pagination import (
    PaginationController,
    build_page_info,
    page_window,
    past_end_page_info,
    single_page_info,
)


class TestBuildPageInfo:
    """Tests for PageInfo arithmetic."""

    def test_middle_page(self) -> None:
        """total=50, page 2 of 12 should be records 13..24 of 5 pages."""
        info = build_page_info(50, 2, 12)
        assert info.total_pages == 5
        assert info.current_page == 2
        assert info.has_more is True
        assert info.next_page == 3
        assert info.prev_page == 1
        assert (info.from_, info.to) == (13, 24)

    def test_last_page_partial(self) -> None:
        info = build_page_info(50, 5, 12)
        assert (info.from_, info.to) == (49, 50)
        assert info.has_more is False
        assert info.next_page is None

    def test_page_clamped(self) -> None:
        """Pages beyond the end should clamp to the last page."""
        assert build_page_info(50, 99, 12).current_page == 5

    def test_empty_result(self) -> None:
        info = build_page_info(0, 3, 12)
        assert info.total_pages == 0
        assert (info.from_, info.to) == (0, 0)
        assert info.has_more is False
        assert info.prev_page is None

    @pytest.mark.parametrize("total", [1, 11, 12, 13, 37, 100])
    def test_invariants(self, total: int) -> None:
        """has_more matches next_page and from <= to on every page."""
        pages = build_page_info(total, 1, 12).total_pages
        for page in range(1, pages + 1):
            info = build_page_info(total, page, 12)
            assert 1 <= info.current_page <= info.total_pages
            assert info.has_more == (info.next_page is not None)
            assert 1 <= info.from_ <= info.to <= total

    def test_single_page(self) -> None:
        info = single_page_info(7)
        assert info.total_pages == 1
        assert info.per_page == 12
        assert info.has_more is False
        assert (info.from_, info.to) == (1, 7)

    def test_single_page_empty(self) -> None:
        """An empty unpaginated result is one page with an empty range."""
        info = single_page_info(0, per_page=24)
        assert info.total_pages == 1
        assert info.current_page == 1
        assert info.per_page == 24
        assert (info.from_, info.to) == (0, 0)
        assert info.next_page is None

    def test_single_page_larger_than_page_size(self) -> None:
        info = single_page_info(20, per_page=12)
        assert info.total_pages == 1
        assert (info.from_, info.to) == (1, 20)

    def test_past_end(self) -> None:
        """A page beyond the end keeps the requested page with no range."""
        info = past_end_page_info(50, 9, 12)
        assert info.total_pages == 5
        assert info.current_page == 9
        assert (info.from_, info.to) == (0, 0)
        assert info.has_more is False
        assert info.next_page is None
        assert info.prev_page == 5


class TestPageWindow:
    """Tests for the page-number window."""

    def test_single_page(self) -> None:
        assert page_window(1, 1) == [1]

    def test_no_pages(self) -> None:
        assert page_window(0, 1) == []

    def test_small_total_has_no_ellipsis(self) -> None:
        assert page_window(3, 2) == [1, 2, 3]

    def test_ellipsis_both_sides(self) -> None:
        assert page_window(10, 5) == [1, None, 4, 5, 6, None, 10]

    def test_ellipsis_right_only(self) -> None:
        assert page_window(10, 1) == [1, 2, None, 10]

    def test_ellipsis_left_only(self) -> None:
        assert page_window(10, 10) == [1, None, 9, 10]

    def test_single_hidden_page_collapsed(self) -> None:
        assert page_window(5, 4) == [1, None, 3, 4, 5]

    def test_required_pages_always_present(self) -> None:
        """1, last and current are always shown with at most two ellipses."""
        for total in range(1, 30):
            for current in range(1, total + 1):
                window = page_window(total, current)
                assert {1, total, current} <= set(window)
                assert window.count(None) <= 2
                numbers = [p for p in window if p is not None]
                assert numbers == sorted(numbers)


@pytest.fixture
def cat_page_two() -> PaginationController:
    """Controller on page 2 of a 5-page cat listing."""
    state = FilterState(type_filter=PetType.CAT, page=2, per_page=12)
    return PaginationController(state, build_page_info(50, 2, 12))


class TestPaginationController:
    """Tests for URL-preserving transitions."""

    def test_go_to_page(self, cat_page_two: PaginationController) -> None:
        state = cat_page_two.go_to_page(4)
        assert state.page == 4
        assert state.type_filter == PetType.CAT

    @pytest.mark.parametrize("page", [0, -1, 6, 100])
    def test_go_to_page_out_of_range_is_noop(
        self, cat_page_two: PaginationController, page: int
    ) -> None:
        assert cat_page_two.go_to_page(page) == cat_page_two.state

    def test_go_to_page_without_result_is_noop(self) -> None:
        pager = PaginationController(FilterState(page=1))
        assert pager.go_to_page(2).page == 1

    def test_go_to_page_preserves_query(self) -> None:
        state = FilterState(query="terrier", page=1)
        pager = PaginationController(state, build_page_info(30, 1, 12))
        assert pager.go_to_page(2) == FilterState(query="terrier", page=2)

    def test_change_type_filter(self) -> None:
        """Switching type clears the query and resets to page 1."""
        pager = PaginationController(FilterState(query="fluffy", page=3))
        state = pager.change_type_filter("cat")
        assert state.type_filter == PetType.CAT
        assert state.query is None
        assert state.page == 1

    def test_submit_search(self, cat_page_two: PaginationController) -> None:
        state = cat_page_two.submit_search("  maine coon ")
        assert state.query == "maine coon"
        assert state.type_filter is None
        assert state.page == 1

    def test_submit_blank_search_is_noop(self, cat_page_two: PaginationController) -> None:
        assert cat_page_two.submit_search("   ") == cat_page_two.state

    def test_clear_search(self) -> None:
        pager = PaginationController(FilterState(query="lab", page=4, per_page=24))
        state = pager.clear_search()
        assert state == FilterState(query=None, type_filter=None, page=1, per_page=24)

    def test_url_always_has_page(self, cat_page_two: PaginationController) -> None:
        assert cat_page_two.url_for(cat_page_two.go_to_page(3)) == "/dictionary?type=cat&page=3"

    def test_url_keeps_custom_per_page(self) -> None:
        state = FilterState(type_filter=PetType.DOG, page=1, per_page=6)
        pager = PaginationController(state, build_page_info(30, 1, 6))
        assert pager.url_for(pager.go_to_page(2)) == "/dictionary?type=dog&page=2&per_page=6"

    def test_url_encodes_query(self) -> None:
        pager = PaginationController(FilterState(query="shih tzu"))
        assert pager.url_for(pager.state) == "/dictionary?q=shih+tzu&page=1"

    def test_page_links(self, cat_page_two: PaginationController) -> None:
        links = cat_page_two.page_links()
        assert [link.number for link in links] == [1, 2, 3, None, 5]
        assert [link.current for link in links] == [False, True, False, False, False]
        assert links[3].is_ellipsis
        assert links[4].url == "/dictionary?type=cat&page=5"

    def test_prev_next_urls(self, cat_page_two: PaginationController) -> None:
        assert cat_page_two.prev_url == "/dictionary?type=cat&page=1"
        assert cat_page_two.next_url == "/dictionary?type=cat&page=3"

    def test_no_prev_on_first_page(self) -> None:
        state = FilterState(type_filter=PetType.DOG, page=1)
        pager = PaginationController(state, build_page_info(50, 1, 12))
        assert pager.prev_url is None
