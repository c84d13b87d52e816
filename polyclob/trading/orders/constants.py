"""Order related constants"""

from polyclob.models import RoundConfig, TickSize

POLYGON = 137
AMOY = 80002

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Collateral (USDC) and conditional tokens share 6 decimals on-chain
COLLATERAL_TOKEN_DECIMALS = 6

ROUNDING_CONFIG = {
    TickSize.TENTH: RoundConfig(price=1, size=2, amount=3),
    TickSize.HUNDREDTH: RoundConfig(price=2, size=2, amount=4),
    TickSize.THOUSANDTH: RoundConfig(price=3, size=2, amount=5),
    TickSize.TEN_THOUSANDTH: RoundConfig(price=4, size=2, amount=6),
}

# Exchange contracts per chain
CONTRACTS = {
    POLYGON: {
        "exchange": "0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E",
        "neg_risk_exchange": "0xC5d563A36AE78145C45a50134d48A1215220f80a",
    },
    AMOY: {
        "exchange": "0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40",
        "neg_risk_exchange": "0xC5d563A36AE78145C45a50134d48A1215220f80a",
    },
}

# Endpoints
TIME = "/time"
CREATE_API_KEY = "/auth/api-key"
GET_API_KEYS = "/auth/api-keys"
DERIVE_API_KEY = "/auth/derive-api-key"
GET_ORDER_BOOK = "/book"
GET_TICK_SIZE = "/tick-size"
GET_NEG_RISK = "/neg-risk"
GET_FEE_RATE = "/fee-rate"
POST_ORDER = "/order"
CANCEL_ORDER = "/order"

# Known API Error Messages
API_ERRORS = {
    "INVALID_ORDER_MIN_TICK_SIZE": "Price breaks minimum tick size rules",
    "INVALID_ORDER_MIN_SIZE": "Size lower than minimum",
    "INVALID_ORDER_DUPLICATED": "Order already placed",
    "INVALID_ORDER_NOT_ENOUGH_BALANCE": "Not enough balance/allowance",
    "INVALID_ORDER_EXPIRATION": "Invalid expiration time",
    "INVALID_ORDER_ERROR": "Could not insert order",
    "EXECUTION_ERROR": "Could not execute trade",
    "FOK_ORDER_NOT_FILLED_ERROR": "FOK order not fully filled",
    "MARKET_NOT_READY": "Market not ready for orders",
}
