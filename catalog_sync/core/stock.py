# catalog_sync/core/stock.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Union

from catalog_sync.exceptions import InvalidValueError

Number = Union[int, float, Decimal]

# Scale of cataloginventory_stock_item.qty
QTY_SCALE = Decimal('0.0001')

def normalize_quantity(value: Any) -> Decimal:
    """Convert a feed quantity into a storable stock quantity.

    Numeric strings are accepted the same way as numbers. The result is
    rounded to the scale of the stored quantity, so the stock flag is
    derived from the same value the database keeps. Negative quantities
    are clamped to zero.

    Args:
        value: Raw quantity value from the update

    Returns:
        Non-negative quantity at storage scale

    Raises:
        InvalidValueError: If the value is not numeric
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise InvalidValueError(f'Stock quantity cannot be set to non-numeric value "{value}"')

    try:
        qty = Decimal(value.strip()) if isinstance(value, str) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidValueError(f'Stock quantity cannot be set to non-numeric value "{value}"')

    if not qty.is_finite():
        raise InvalidValueError(f'Stock quantity cannot be set to non-numeric value "{value}"')

    try:
        qty = qty.quantize(QTY_SCALE, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidValueError(f'Stock quantity "{value}" is out of range')

    return qty if qty > 0 else Decimal(0)

def is_in_stock(qty: Number) -> bool:
    """Derived stock flag: strictly positive quantity means in stock."""
    return qty > 0

def is_website_id(value: Any) -> bool:
    """Check that a single website id is a plain integer."""
    return isinstance(value, int) and not isinstance(value, bool)
