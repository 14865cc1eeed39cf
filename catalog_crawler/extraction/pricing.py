"""
Price Helpers

Shopify exposes prices in two units depending on the source: product JSON
and analytics metadata use minor units (cents), rendered pages and the
Storefront API use major units. These helpers convert between them.
"""

import re
from typing import Any, Optional

from ..common.constants import CENTS_THRESHOLD

_DOT_THOUSANDS_RE = re.compile(r'^\d{1,3}(\.\d{3}){2,}$')


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def normalize_price(value: Any) -> Optional[float]:
    """
    Normalize a price that may be expressed in cents.

    Values above CENTS_THRESHOLD are assumed to be in minor units and divided
    by 100; anything else is returned unchanged. A genuine price of 15000 in
    major units is therefore misread as 150.00 (known limitation).

    Args:
        value: Price as int, float or numeric string

    Returns:
        Price in major units, or None when the value is not numeric

    Example:
        normalize_price(12999) -> 129.99
        normalize_price(45) -> 45
    """
    number = _to_number(value)
    if number is None:
        return None
    if number > CENTS_THRESHOLD:
        return number / 100
    return number


def price_from_cents(value: Any) -> Optional[float]:
    """Convert a price known to be in cents to major units."""
    number = _to_number(value)
    if number is None:
        return None
    return number / 100


def parse_money(text: Optional[str]) -> Optional[float]:
    """
    Parse a rendered money string such as "$1,299.00", "12,50 €",
    "Rs. 1,299.00" or "1.299,00 €".

    When both separators appear, the last one is the decimal separator.
    A lone comma followed by exactly two digits at the end is decimal;
    other commas are thousands separators. Dots alone are thousands
    separators only in the "1.299.000" grouping.

    Returns:
        Parsed amount, or None if no single number is present
    """
    if not text:
        return None

    cleaned = re.sub(r'[^\d,.]', '', text).strip('.,')
    if ',' in cleaned and '.' in cleaned:
        if cleaned.rfind(',') > cleaned.rfind('.'):
            cleaned = cleaned.replace('.', '').replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    elif ',' in cleaned:
        cleaned = re.sub(r',(\d{2})$', r'.\1', cleaned).replace(',', '')
    elif _DOT_THOUSANDS_RE.match(cleaned):
        cleaned = cleaned.replace('.', '')

    try:
        return float(cleaned)
    except ValueError:
        return None


def estimate_compare_price(price: Optional[float]) -> Optional[float]:
    """Estimate a compare-at price 15% above the sale price."""
    if not price:
        return None
    return round(price * 1.15, 2)
