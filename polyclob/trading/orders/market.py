"""Market order price discovery

Book levels are expected in the order the book endpoint serves them: the worst
price first and the best price last. Both walks therefore start at the end of
the list and move toward worse prices until the requested amount is covered.
The price returned is the worst level touched, so a limit order signed at that
price fills the whole amount when it reaches the book.
"""

from typing import List, Tuple
from polyclob.errors import ClobError, NoMatchError
from polyclob.models import OrderSummary, OrderType


def _parse_level(level: OrderSummary) -> Tuple[float, float]:
    try:
        return float(level.price), float(level.size)
    except (TypeError, ValueError) as e:
        raise ClobError(f"Invalid level in orderbook: {level}") from e


def calculate_buy_market_price(
    positions: List[OrderSummary],
    amount_to_match: float,
    order_type: OrderType = OrderType.FOK,
) -> float:
    """Worst ask price needed to spend `amount_to_match` collateral"""
    if not positions:
        raise NoMatchError()

    total = 0.0
    for level in reversed(positions):
        price, size = _parse_level(level)
        total += price * size
        if total >= amount_to_match:
            return price

    if order_type == OrderType.FOK:
        raise NoMatchError()
    # Partial fill: everything on the book, down to the worst level
    return _parse_level(positions[0])[0]


def calculate_sell_market_price(
    positions: List[OrderSummary],
    amount_to_match: float,
    order_type: OrderType = OrderType.FOK,
) -> float:
    """Worst bid price needed to sell `amount_to_match` shares"""
    if not positions:
        raise NoMatchError()

    total = 0.0
    for level in reversed(positions):
        price, size = _parse_level(level)
        total += size
        if total >= amount_to_match:
            return price

    if order_type == OrderType.FOK:
        raise NoMatchError()
    return _parse_level(positions[0])[0]
