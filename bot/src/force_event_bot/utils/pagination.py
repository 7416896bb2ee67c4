from typing import Any, Dict, List, Sequence


# Event buttons per keyboard row and the name-length budget that keeps rows aligned.
EVENT_PAGE_ITEMS: int = 2
EVENT_PAGE_MAXCHARS: int = 48
# Category tabs per keyboard row.
CATEGORY_PAGE_ITEMS: int = 4
# Event rows shown per message; Telegram rejects oversized keyboards.
EVENT_ROWS_PER_SCREEN: int = 8


class PaginationConfigError(ValueError):
    """Raised when a page limit is not a positive integer."""


def _require_positive(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise PaginationConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def _name_length(item: Dict[str, Any]) -> int | None:
    name = item.get("name") if isinstance(item, dict) else None
    return len(name) if isinstance(name, str) and name else None


def paginate_by_chars(
    items: Sequence[Dict[str, Any]],
    max_per_page: int,
    max_chars: int,
) -> List[List[Dict[str, Any]]]:
    """Split items into pages bounded by item count and by summed name length.

    Single greedy pass. A named item is charged against the page budget before
    it is placed; if that exhausts the budget the current page is closed and the
    item opens the next one, its length pre-charged. The overflow check runs
    before the item-count check. An item longer than the whole budget still
    gets a page of its own and is never split or dropped.
    """
    _require_positive("max_per_page", max_per_page)
    _require_positive("max_chars", max_chars)

    pages: List[List[Dict[str, Any]]] = []
    page: List[Dict[str, Any]] = []
    items_left = max_per_page
    chars_left = max_chars

    for item in items:
        length = _name_length(item)
        if length is not None:
            chars_left -= length
            if chars_left <= 0:
                # would overflow into the next row
                if page:
                    pages.append(page)
                    page = []
                items_left = max_per_page
                chars_left = max_chars - length
        page.append(item)
        items_left -= 1
        if items_left == 0:
            pages.append(page)
            page = []
            items_left = max_per_page
            chars_left = max_chars

    if page:
        pages.append(page)
    return pages


def chunk(items: Sequence[Any], size: int) -> List[List[Any]]:
    _require_positive("size", size)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def paginate(items: Sequence[Any], page: int, page_size: int = EVENT_ROWS_PER_SCREEN) -> List[Any]:
    start = (page - 1) * page_size
    end = start + page_size
    return list(items[start:end])


def page_count(total: int, page_size: int) -> int:
    _require_positive("page_size", page_size)
    return max(1, (total + page_size - 1) // page_size)
