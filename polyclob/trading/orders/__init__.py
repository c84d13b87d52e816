"""Order construction, signing and submission package"""

from .client import ClobClient, from_env, parse_order_book
from .builder import OrderBuilder, resolve_fee_rate_bps, signed_order_to_json
from .cache import MarketParamsCache
from .constants import POLYGON, AMOY, ZERO_ADDRESS, ROUNDING_CONFIG, CONTRACTS
from .market import calculate_buy_market_price, calculate_sell_market_price
from .utils import (
    round_normal,
    round_down,
    round_up,
    decimal_places,
    to_token_decimals,
    price_valid,
    is_tick_size_smaller,
    get_round_config,
    get_contract_config,
    get_order_raw_amounts,
    get_market_order_raw_amounts,
    generate_orderbook_summary_hash,
)

__all__ = [
    "ClobClient",
    "from_env",
    "parse_order_book",
    "OrderBuilder",
    "resolve_fee_rate_bps",
    "signed_order_to_json",
    "MarketParamsCache",
    "POLYGON",
    "AMOY",
    "ZERO_ADDRESS",
    "ROUNDING_CONFIG",
    "CONTRACTS",
    "calculate_buy_market_price",
    "calculate_sell_market_price",
    "round_normal",
    "round_down",
    "round_up",
    "decimal_places",
    "to_token_decimals",
    "price_valid",
    "is_tick_size_smaller",
    "get_round_config",
    "get_contract_config",
    "get_order_raw_amounts",
    "get_market_order_raw_amounts",
    "generate_orderbook_summary_hash",
]
