"""Parse URL query parameters into a FilterState and back."""

from __future__ import annotations

from collections.abc import Mapping

from petwiki.data.schemas import FilterState, PetType

DEFAULT_PER_PAGE = 12


def _positive_int(raw: str | None, default: int) -> int:
    """Parse *raw* as a positive integer, falling back to *default*."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def _pet_type(raw: str | None) -> PetType | None:
    if not raw:
        return None
    try:
        return PetType(raw.strip().lower())
    except ValueError:
        return None


def parse_filter_state(
    params: Mapping[str, str],
    default_per_page: int = DEFAULT_PER_PAGE,
) -> FilterState:
    """Build a FilterState from raw query parameters.

    Total over arbitrary input: malformed integers and unknown types fall
    back to defaults. A non-blank ``q`` wins over ``type``; with neither,
    the listing defaults to dogs.

    Args:
        params: Query parameter names mapped to their string values.
        default_per_page: Page size used when ``per_page`` is absent or bad.

    Returns:
        The parsed FilterState.
    """
    page = _positive_int(params.get("page"), 1)
    per_page = _positive_int(params.get("per_page"), default_per_page)

    query = (params.get("q") or "").strip() or None
    if query:
        return FilterState(query=query, type_filter=None, page=page, per_page=per_page)

    type_filter = _pet_type(params.get("type")) or PetType.DOG
    return FilterState(query=None, type_filter=type_filter, page=page, per_page=per_page)


def to_query_params(
    state: FilterState,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> dict[str, str]:
    """Serialize *state* back into query parameters.

    The page is always written; ``per_page`` only when it differs from the
    default.
    """
    params: dict[str, str] = {}
    if state.query:
        params["q"] = state.query
    elif state.type_filter is not None:
        params["type"] = state.type_filter.value
    params["page"] = str(state.page)
    if state.per_page != default_per_page:
        params["per_page"] = str(state.per_page)
    return params
