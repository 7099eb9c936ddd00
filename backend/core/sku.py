import re
from datetime import date
from typing import Optional, Protocol, Tuple

SKU_PREFIX = "IC"
_SKU_PATTERN = re.compile(r"^IC-(\d{8})-(\d{3,})$")


class RecipeLike(Protocol):
    sku: str
    created_at: object


def format_day(day: date) -> str:
    return day.strftime("%Y%m%d")


def format_sku(day: date, sequence: int) -> str:
    return f"{SKU_PREFIX}-{format_day(day)}-{sequence:03d}"


def parse_sku(sku: str) -> Tuple[str, int]:
    """Split ``IC-YYYYMMDD-NNN`` into its day string and sequence number."""
    match = _SKU_PATTERN.match(sku or "")
    if not match:
        raise ValueError(f"Malformed SKU: {sku!r}")
    return match.group(1), int(match.group(2))


def _created_on(recipe: RecipeLike) -> Optional[date]:
    created_at = getattr(recipe, "created_at", None)
    if created_at is None:
        return None
    if hasattr(created_at, "date"):
        return created_at.date()
    return created_at


def next_sequence(today: date, most_recent: Optional[RecipeLike]) -> int:
    """Sequence number the next recipe created ``today`` should get."""
    if most_recent is None or _created_on(most_recent) != today:
        return 1
    try:
        _, sequence = parse_sku(most_recent.sku)
    except ValueError:
        return 1
    return sequence + 1


def generate_sku(today: date, most_recent: Optional[RecipeLike]) -> str:
    """
    SKU for a new recipe: ``IC-<today>-NNN``.

    The sequence restarts at 001 each day and otherwise continues from the
    most recently created recipe's suffix.
    """
    return format_sku(today, next_sequence(today, most_recent))
