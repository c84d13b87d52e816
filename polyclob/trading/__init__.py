from .orders import (
    ClobClient,
    OrderBuilder,
    from_env,
    calculate_buy_market_price,
    calculate_sell_market_price,
    signed_order_to_json,
)

__all__ = [
    "ClobClient",
    "OrderBuilder",
    "from_env",
    "calculate_buy_market_price",
    "calculate_sell_market_price",
    "signed_order_to_json",
]
