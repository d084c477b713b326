# storefront/utils/formatting.py
import re
import unicodedata
from typing import Any, List, Optional

PRICE_ON_REQUEST = "Sob consulta"

SNEAKER_SIZES = ["36", "37", "38", "39", "40", "41", "42", "43", "44"]
CLOTHING_SIZES = ["S", "M", "L", "XL", "XXL"]


def format_currency(cents: int) -> str:
    """12345 -> 'R$ 123,45'"""
    return f"R$ {cents / 100:.2f}".replace(".", ",")


def price_label(price_cents: Optional[int]) -> str:
    if not isinstance(price_cents, int) or isinstance(price_cents, bool) or price_cents <= 0:
        return PRICE_ON_REQUEST
    return format_currency(price_cents)


def slugify(value: str) -> str:
    folded = unicodedata.normalize("NFD", value.lower())
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9]+", "-", folded).strip("-")
    return slug[:80]


def to_list(value: Any) -> List[str]:
    """Accepts a list or comma/newline separated text, drops blanks."""
    if isinstance(value, list):
        items = [str(v).strip() for v in value]
    elif isinstance(value, str):
        items = [s.strip() for s in re.split(r"[\n,]+", value)]
    else:
        return []
    return [i for i in items if i]


def empty_to_null(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clamp_cents(value: Any) -> Optional[int]:
    # bools are ints in python, they are not prices
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return max(0, int(round(value)))


def default_sizes_for_category(category: Optional[str]) -> List[str]:
    # sneakers use numeric sizes, everything else is clothing
    if (category or "").strip().lower() == "sneakers":
        return list(SNEAKER_SIZES)
    return list(CLOTHING_SIZES)
