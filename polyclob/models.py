"""Order, order book and credential types"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    GTC = "GTC"  # Good-Til-Cancelled
    FOK = "FOK"  # Fill-Or-Kill
    GTD = "GTD"  # Good-Til-Date
    FAK = "FAK"  # Fill-And-Kill


class TickSize(str, Enum):
    """Minimum price increment of a market"""

    TENTH = "0.1"
    HUNDREDTH = "0.01"
    THOUSANDTH = "0.001"
    TEN_THOUSANDTH = "0.0001"

    @property
    def as_float(self) -> float:
        return float(self.value)


class SignatureType(IntEnum):
    """How the exchange verifies the order signer on-chain"""

    EOA = 0
    POLY_PROXY = 1
    POLY_GNOSIS_SAFE = 2


@dataclass(frozen=True)
class RoundConfig:
    price: int
    size: int
    amount: int


@dataclass(frozen=True)
class RawAmounts:
    side: Side
    raw_maker_amt: float
    raw_taker_amt: float


@dataclass(frozen=True)
class UserOrder:
    """Limit order intent

    token_id: conditional token id (decimal big-integer string)
    size: amount of conditional tokens
    """

    token_id: str
    price: float
    size: float
    side: Side
    fee_rate_bps: Optional[int] = None
    nonce: Optional[int] = None
    expiration: Optional[int] = None
    taker: Optional[str] = None


@dataclass(frozen=True)
class UserMarketOrder:
    """Market order intent

    amount: BUY orders spend this much collateral, SELL orders sell this many shares
    price: resolved from the order book when not provided
    """

    token_id: str
    amount: float
    side: Side
    price: Optional[float] = None
    fee_rate_bps: Optional[int] = None
    nonce: Optional[int] = None
    taker: Optional[str] = None
    order_type: OrderType = OrderType.FOK


@dataclass(frozen=True)
class CreateOrderOptions:
    """Market parameters an order is built against

    fee_rate_bps: the market's fee rate, when known
    """

    tick_size: TickSize
    neg_risk: bool = False
    fee_rate_bps: Optional[int] = None


@dataclass(frozen=True)
class OrderSummary:
    price: str
    size: str


@dataclass
class OrderBookSummary:
    market: str = ""
    asset_id: str = ""
    timestamp: str = ""
    bids: List[OrderSummary] = field(default_factory=list)
    asks: List[OrderSummary] = field(default_factory=list)
    min_order_size: str = ""
    tick_size: str = ""
    neg_risk: bool = False
    hash: str = ""


@dataclass(frozen=True)
class ApiCreds:
    api_key: str
    api_secret: str
    api_passphrase: str


@dataclass(frozen=True)
class BuilderCreds:
    key: str
    secret: str
    passphrase: str

    def is_valid(self) -> bool:
        return bool(self.key and self.secret and self.passphrase)


@dataclass(frozen=True)
class RequestArgs:
    method: str
    request_path: str
    body: Optional[str] = None
