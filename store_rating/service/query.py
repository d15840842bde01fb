from typing import Iterable, Tuple

from store_rating.core.errors import ValidationError

SORT_ORDERS = ("asc", "desc")


def parse_sort(sort_by: str, sort_order: str, allowed: Iterable[str]) -> Tuple[str, bool]:
    """Validate sort parameters, returning (field, descending)."""
    allowed = tuple(allowed)
    if sort_by not in allowed:
        raise ValidationError(f"sort_by must be one of: {', '.join(allowed)}", field="sort_by")
    order = (sort_order or "asc").lower()
    if order not in SORT_ORDERS:
        raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")
    return sort_by, order == "desc"
