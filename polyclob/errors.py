"""Order and authentication errors"""

from typing import Optional


class ClobError(Exception):
    """Base class for every error raised by the client"""


class InvalidPriceError(ClobError):
    def __init__(self, price: float, min_price: float, max_price: float):
        self.price = price
        self.min_price = min_price
        self.max_price = max_price
        super().__init__(f"Invalid price ({price}), min: {min_price} - max: {max_price}")


class InvalidTickSizeError(ClobError):
    def __init__(self, tick_size: str, min_tick_size: Optional[str] = None):
        self.tick_size = tick_size
        self.min_tick_size = min_tick_size
        if min_tick_size is None:
            msg = f"Invalid tick size ({tick_size})"
        else:
            msg = f"Invalid tick size ({tick_size}), minimum for the market is {min_tick_size}"
        super().__init__(msg)


class InvalidFeeRateError(ClobError):
    def __init__(self, user_fee_rate: int, market_fee_rate: int):
        self.user_fee_rate = user_fee_rate
        self.market_fee_rate = market_fee_rate
        super().__init__(
            f"Invalid user provided fee rate: {user_fee_rate}, "
            f"fee rate for the market must be {market_fee_rate}"
        )


class NoMatchError(ClobError):
    def __init__(self, message: str = "No match found in orderbook"):
        super().__init__(message)


class SigningError(ClobError):
    """Wraps a failure of the underlying signing primitive"""


class EncodingError(ClobError):
    """Malformed base64 input (e.g. an API secret)"""


class L1AuthUnavailableError(ClobError):
    def __init__(self):
        super().__init__("Signer is needed to interact with this endpoint")


class L2AuthUnavailableError(ClobError):
    def __init__(self):
        super().__init__("API Credentials are needed to interact with this endpoint")


class ApiError(ClobError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error ({status_code}): {message}")
