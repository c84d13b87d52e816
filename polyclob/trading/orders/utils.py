"""Order amount rounding and validation helpers"""

import hashlib
import json
from dataclasses import asdict
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any, Optional, Union
from .constants import COLLATERAL_TOKEN_DECIMALS, CONTRACTS, ROUNDING_CONFIG
from polyclob.errors import ClobError, InvalidTickSizeError
from polyclob.models import OrderBookSummary, RawAmounts, RoundConfig, Side, TickSize


def _quantize(x: float, sig_digits: int, rounding: str) -> float:
    # repr keeps the shortest literal, so 2.01 scales as 2.01 and not 2.0099999
    exp = Decimal(1).scaleb(-sig_digits)
    return float(Decimal(repr(float(x))).quantize(exp, rounding=rounding))


def round_normal(x: float, sig_digits: int) -> float:
    """Round half-up to `sig_digits` decimal places"""
    return _quantize(x, sig_digits, ROUND_HALF_UP)


def round_down(x: float, sig_digits: int) -> float:
    return _quantize(x, sig_digits, ROUND_FLOOR)


def round_up(x: float, sig_digits: int) -> float:
    return _quantize(x, sig_digits, ROUND_CEILING)


def decimal_places(x: float) -> int:
    """Number of digits after the decimal point (0 for whole numbers)"""
    if float(x).is_integer():
        return 0
    exponent = Decimal(repr(float(x))).as_tuple().exponent
    return abs(exponent)


def to_token_decimals(x: float) -> int:
    """Scale a human amount to the 6-decimal on-chain integer"""
    f = (10**COLLATERAL_TOKEN_DECIMALS) * x
    if decimal_places(f) > 0:
        # Strip float noise such as 54999999.99999999
        f = round_normal(f, 0)
    return int(f)


def parse_tick_size(tick_size: Union[str, float, TickSize]) -> Optional[TickSize]:
    if isinstance(tick_size, TickSize):
        return tick_size
    if isinstance(tick_size, float):
        tick_size = repr(tick_size)
    try:
        return TickSize(str(tick_size).strip())
    except ValueError:
        return None


def is_tick_size_smaller(a: TickSize, b: TickSize) -> bool:
    return a.as_float < b.as_float


def price_valid(price: float, tick_size: TickSize) -> bool:
    tick = tick_size.as_float
    return tick <= price <= 1 - tick


def get_round_config(tick_size: Union[str, TickSize]) -> RoundConfig:
    parsed = parse_tick_size(tick_size)
    if parsed is None:
        raise InvalidTickSizeError(str(tick_size))
    return ROUNDING_CONFIG[parsed]


def get_contract_config(chain_id: int) -> dict:
    config = CONTRACTS.get(chain_id)
    if config is None:
        raise ClobError(f"Invalid network: chain ID {chain_id}")
    return config


def get_exchange_address(chain_id: int, neg_risk: bool = False) -> str:
    config = get_contract_config(chain_id)
    return config["neg_risk_exchange"] if neg_risk else config["exchange"]


def _fit_amount(amount: float, round_config: RoundConfig) -> float:
    """Bring a derived amount down to `round_config.amount` decimals.

    Rounds up at four extra digits first, which absorbs float noise such as
    55.00000000000001. Floors at `amount` digits only if that is not enough.
    """
    if decimal_places(amount) > round_config.amount:
        amount = round_up(amount, round_config.amount + 4)
        if decimal_places(amount) > round_config.amount:
            amount = round_down(amount, round_config.amount)
    return amount


def get_order_raw_amounts(
    side: Side, size: float, price: float, round_config: RoundConfig
) -> RawAmounts:
    raw_price = round_normal(price, round_config.price)

    if side == Side.BUY:
        raw_taker_amt = round_down(size, round_config.size)
        raw_maker_amt = _fit_amount(raw_taker_amt * raw_price, round_config)
        return RawAmounts(Side.BUY, raw_maker_amt, raw_taker_amt)
    if side == Side.SELL:
        raw_maker_amt = round_down(size, round_config.size)
        raw_taker_amt = _fit_amount(raw_maker_amt * raw_price, round_config)
        return RawAmounts(Side.SELL, raw_maker_amt, raw_taker_amt)
    raise ClobError(f"order_args.side must be '{Side.BUY.value}' or '{Side.SELL.value}'")


def get_market_order_raw_amounts(
    side: Side, amount: float, price: float, round_config: RoundConfig
) -> RawAmounts:
    raw_price = round_normal(price, round_config.price)
    raw_maker_amt = round_down(amount, round_config.size)

    if side == Side.BUY:
        # Collateral in, shares out: size is unknown so divide by price
        raw_taker_amt = _fit_amount(raw_maker_amt / raw_price, round_config)
        return RawAmounts(Side.BUY, raw_maker_amt, raw_taker_amt)
    if side == Side.SELL:
        raw_taker_amt = _fit_amount(raw_maker_amt * raw_price, round_config)
        return RawAmounts(Side.SELL, raw_maker_amt, raw_taker_amt)
    raise ClobError(f"order_args.side must be '{Side.BUY.value}' or '{Side.SELL.value}'")


def normalize_token_id(tid: Any) -> str:
    """Normalize token ID to decimal string"""
    if tid is None:
        return ""
    s = str(tid).strip().lower()
    if not s:
        return ""
    if s.isdigit():
        return s
    if s.startswith("0x"):
        try:
            return str(int(s, 16))
        except ValueError:
            return s
    return s


def generate_orderbook_summary_hash(orderbook: OrderBookSummary) -> str:
    """SHA-1 of the book's compact JSON, computed with an empty hash field"""
    orderbook.hash = ""
    payload = json.dumps(asdict(orderbook), separators=(",", ":"))
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    orderbook.hash = digest
    return digest
