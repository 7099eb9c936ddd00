from dataclasses import dataclass
from typing import Optional

from fastapi import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Optional[str], default: int) -> int:
    # Missing, non-numeric and non-positive values fall back to the default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


@dataclass
class Pagination:
    page: int
    limit: int
    search: str

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_items: int) -> int:
        return (total_items + self.limit - 1) // self.limit

    def matches(self, column):
        """Case-insensitive substring filter on ``column``; wildcards in the search are literal."""
        escaped = self.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return column.ilike(f"%{escaped}%", escape="\\")

    def envelope(self, total_items: int, key: str, rows: list) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total_items": total_items,
            "total_pages": self.total_pages(total_items),
            key: rows,
        }


def get_pagination(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: str = Query(""),
) -> Pagination:
    return Pagination(
        page=_positive_int(page, DEFAULT_PAGE),
        limit=_positive_int(limit, DEFAULT_LIMIT),
        search=search.strip(),
    )
