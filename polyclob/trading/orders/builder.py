"""Order construction and signing"""

from typing import Any, Dict, List, Optional
from py_order_utils.builders import OrderBuilder as UtilsOrderBuilder
from py_order_utils.model import BUY as UtilsBuy, SELL as UtilsSell
from py_order_utils.model import OrderData, SignedOrder
from py_order_utils.signer import Signer as UtilsSigner
from polyclob.errors import (
    ClobError,
    InvalidFeeRateError,
    InvalidPriceError,
    InvalidTickSizeError,
    SigningError,
)
from polyclob.models import (
    CreateOrderOptions,
    OrderSummary,
    RawAmounts,
    Side,
    SignatureType,
    TickSize,
    UserMarketOrder,
    UserOrder,
)
from polyclob.signing.signer import Signer, SignerProvider
from .constants import ZERO_ADDRESS
from .market import calculate_buy_market_price, calculate_sell_market_price
from .utils import (
    get_exchange_address,
    get_market_order_raw_amounts,
    get_order_raw_amounts,
    get_round_config,
    parse_tick_size,
    price_valid,
    to_token_decimals,
)


def resolve_fee_rate_bps(user_fee_rate: Optional[int], market_fee_rate: Optional[int]) -> int:
    """Fee rate to sign.

    A known market rate wins; a user rate that disagrees with a non-zero market
    rate is rejected. Without a market rate the user's rate (or 0) is used.
    """
    if market_fee_rate is None:
        return user_fee_rate or 0
    if user_fee_rate is not None and market_fee_rate > 0 and user_fee_rate != market_fee_rate:
        raise InvalidFeeRateError(user_fee_rate, market_fee_rate)
    return market_fee_rate


def _validate_price(price: Optional[float], tick_size: TickSize) -> float:
    if price is None or not price_valid(price, tick_size):
        tick = tick_size.as_float
        raise InvalidPriceError(price, tick, round(1 - tick, 4))
    return price


def _parse_token_id(token_id: str) -> str:
    try:
        value = int(str(token_id), 0) if str(token_id).startswith("0x") else int(str(token_id))
    except ValueError as e:
        raise ClobError(f"Invalid token_id: {token_id}") from e
    if value < 0:
        raise ClobError(f"Invalid token_id: {token_id}")
    return str(value)


def _utils_side(side: Side) -> int:
    return UtilsBuy if side == Side.BUY else UtilsSell


class OrderBuilder:
    """
    Turns user order intents into signed exchange orders.

    Args:
        chain_id: 137 (Polygon) or 80002 (Amoy)
        signer_provider: resolves the signing key for each build
        signature_type: verification path stamped on the order
        funder: address holding the funds; defaults to the signer
    """

    def __init__(
        self,
        chain_id: int,
        signer_provider: SignerProvider,
        signature_type: SignatureType = SignatureType.EOA,
        funder: Optional[str] = None,
    ):
        self.chain_id = chain_id
        self.signer_provider = signer_provider
        self.signature_type = SignatureType(signature_type)
        self.funder = funder

    @staticmethod
    def _resolve_tick_size(options: CreateOrderOptions) -> TickSize:
        tick_size = parse_tick_size(options.tick_size)
        if tick_size is None:
            raise InvalidTickSizeError(str(options.tick_size))
        return tick_size

    def build_order_data(
        self,
        signer: Signer,
        token_id: str,
        amounts: RawAmounts,
        fee_rate_bps: int,
        nonce: Optional[int] = None,
        expiration: Optional[int] = None,
        taker: Optional[str] = None,
    ) -> OrderData:
        return OrderData(
            maker=self.funder or signer.address(),
            taker=taker or ZERO_ADDRESS,
            tokenId=_parse_token_id(token_id),
            makerAmount=str(to_token_decimals(amounts.raw_maker_amt)),
            takerAmount=str(to_token_decimals(amounts.raw_taker_amt)),
            side=_utils_side(amounts.side),
            feeRateBps=str(fee_rate_bps),
            nonce=str(nonce or 0),
            signer=signer.address(),
            expiration=str(expiration or 0),
            signatureType=int(self.signature_type),
        )

    def sign_order_data(self, signer: Signer, data: OrderData, neg_risk: bool) -> SignedOrder:
        exchange = get_exchange_address(self.chain_id, neg_risk)
        try:
            utils_builder = UtilsOrderBuilder(
                exchange, self.chain_id, UtilsSigner(key=signer.private_key)
            )
            return utils_builder.build_signed_order(data)
        except Exception as e:
            raise SigningError(str(e)) from e

    def build_order(self, order: UserOrder, options: CreateOrderOptions) -> SignedOrder:
        """Build and sign a limit order"""
        tick_size = self._resolve_tick_size(options)
        price = _validate_price(order.price, tick_size)
        if order.size is None or order.size <= 0:
            raise ClobError(f"Invalid order size ({order.size})")
        fee_rate_bps = resolve_fee_rate_bps(order.fee_rate_bps, options.fee_rate_bps)

        amounts = get_order_raw_amounts(
            Side(order.side), order.size, price, get_round_config(tick_size)
        )

        signer = self.signer_provider.get_signer()
        data = self.build_order_data(
            signer,
            order.token_id,
            amounts,
            fee_rate_bps,
            nonce=order.nonce,
            expiration=order.expiration,
            taker=order.taker,
        )
        return self.sign_order_data(signer, data, options.neg_risk)

    def build_market_order(
        self,
        order: UserMarketOrder,
        options: CreateOrderOptions,
        levels: Optional[List[OrderSummary]] = None,
    ) -> SignedOrder:
        """
        Build and sign a market order.

        When the order carries no price it is resolved from `levels`, the asks
        for a BUY or the bids for a SELL.
        """
        tick_size = self._resolve_tick_size(options)
        side = Side(order.side)
        if order.amount is None or order.amount <= 0:
            raise ClobError(f"Invalid order amount ({order.amount})")

        price = order.price
        if price is None:
            if levels is None:
                raise ClobError("Market order needs a price or order book levels")
            if side == Side.BUY:
                price = calculate_buy_market_price(levels, order.amount, order.order_type)
            else:
                price = calculate_sell_market_price(levels, order.amount, order.order_type)
        price = _validate_price(price, tick_size)
        fee_rate_bps = resolve_fee_rate_bps(order.fee_rate_bps, options.fee_rate_bps)

        amounts = get_market_order_raw_amounts(
            side, order.amount, price, get_round_config(tick_size)
        )

        signer = self.signer_provider.get_signer()
        data = self.build_order_data(
            signer,
            order.token_id,
            amounts,
            fee_rate_bps,
            nonce=order.nonce,
            taker=order.taker,
        )
        return self.sign_order_data(signer, data, options.neg_risk)


def signed_order_to_json(signed_order: Any) -> Dict[str, Any]:
    """Wire representation of a signed order; side travels as BUY/SELL"""
    d = dict(signed_order.dict())

    side = d.get("side")
    if side in (UtilsBuy, str(UtilsBuy), Side.BUY.value):
        d["side"] = Side.BUY.value
    elif side in (UtilsSell, str(UtilsSell), Side.SELL.value):
        d["side"] = Side.SELL.value
    else:
        raise ClobError(f"Unknown order side: {side}")

    for key in ("tokenId", "makerAmount", "takerAmount", "expiration", "nonce", "feeRateBps"):
        if key in d:
            d[key] = str(d[key])
    for key in ("salt", "signatureType"):
        if key in d:
            d[key] = int(d[key])

    signature = str(d.get("signature", ""))
    if signature and not signature.startswith("0x"):
        d["signature"] = "0x" + signature
    return d
