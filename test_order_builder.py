"""
Tests for order construction: validation, amounts and signing
"""

import pytest
from py_order_utils.model import BUY as UtilsBuy, SELL as UtilsSell
from polyclob.errors import (
    ClobError,
    InvalidFeeRateError,
    InvalidPriceError,
    InvalidTickSizeError,
)
from polyclob.models import (
    CreateOrderOptions,
    OrderSummary,
    Side,
    SignatureType,
    TickSize,
    UserMarketOrder,
    UserOrder,
)
from polyclob.signing import Signer, StaticSignerProvider
from polyclob.trading.orders.builder import (
    OrderBuilder,
    resolve_fee_rate_bps,
    signed_order_to_json,
)
from polyclob.trading.orders.constants import ROUNDING_CONFIG, ZERO_ADDRESS
from polyclob.trading.orders.utils import get_order_raw_amounts

PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
FUNDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TOKEN_ID = "71321045679252212594626385532706912750332728571942532289631379312455583992563"
AMOY = 80002


def _builder(**kwargs) -> OrderBuilder:
    signer = Signer(PRIVATE_KEY, AMOY)
    return OrderBuilder(AMOY, StaticSignerProvider(signer), **kwargs)


def test_resolve_fee_rate():
    assert resolve_fee_rate_bps(None, None) == 0
    assert resolve_fee_rate_bps(10, None) == 10
    assert resolve_fee_rate_bps(None, 100) == 100
    assert resolve_fee_rate_bps(100, 100) == 100
    # Free markets ignore whatever the caller asked for
    assert resolve_fee_rate_bps(10, 0) == 0

    with pytest.raises(InvalidFeeRateError) as exc:
        resolve_fee_rate_bps(10, 100)
    assert exc.value.user_fee_rate == 10
    assert exc.value.market_fee_rate == 100


def test_validation_errors():
    """Invalid input is rejected before anything is signed"""
    print("🧪 Testing order validation...")

    builder = _builder()
    options = CreateOrderOptions(tick_size=TickSize.HUNDREDTH)

    with pytest.raises(InvalidPriceError) as exc:
        builder.build_order(UserOrder(TOKEN_ID, 0.995, 10, Side.BUY), options)
    assert exc.value.min_price == 0.01
    assert exc.value.max_price == 0.99

    with pytest.raises(InvalidPriceError):
        builder.build_order(UserOrder(TOKEN_ID, 0.005, 10, Side.BUY), options)

    with pytest.raises(InvalidTickSizeError):
        builder.build_order(
            UserOrder(TOKEN_ID, 0.5, 10, Side.BUY), CreateOrderOptions(tick_size="0.05")
        )

    with pytest.raises(InvalidFeeRateError):
        builder.build_order(
            UserOrder(TOKEN_ID, 0.5, 10, Side.BUY, fee_rate_bps=10),
            CreateOrderOptions(tick_size=TickSize.HUNDREDTH, fee_rate_bps=100),
        )

    with pytest.raises(ClobError):
        builder.build_order(UserOrder(TOKEN_ID, 0.5, 0, Side.BUY), options)

    print("   ✅ validation errors raised")


def test_build_order_data_amounts():
    builder = _builder()
    signer = Signer(PRIVATE_KEY, AMOY)
    amounts = get_order_raw_amounts(Side.BUY, 100, 0.55, ROUNDING_CONFIG[TickSize.HUNDREDTH])

    data = builder.build_order_data(signer, TOKEN_ID, amounts, fee_rate_bps=0)
    assert data.maker == ADDRESS
    assert data.signer == ADDRESS
    assert data.taker == ZERO_ADDRESS
    assert data.tokenId == TOKEN_ID
    assert data.makerAmount == "55000000"
    assert data.takerAmount == "100000000"
    assert data.side == UtilsBuy
    assert data.feeRateBps == "0"
    assert data.nonce == "0"
    assert data.expiration == "0"
    assert data.signatureType == 0


def test_funder_and_signature_type():
    builder = _builder(signature_type=SignatureType.POLY_GNOSIS_SAFE, funder=FUNDER)
    signer = Signer(PRIVATE_KEY, AMOY)
    amounts = get_order_raw_amounts(Side.SELL, 100, 0.55, ROUNDING_CONFIG[TickSize.HUNDREDTH])

    data = builder.build_order_data(signer, TOKEN_ID, amounts, fee_rate_bps=100, nonce=7)
    assert data.maker == FUNDER
    assert data.signer == ADDRESS
    assert data.side == UtilsSell
    assert data.makerAmount == "100000000"
    assert data.takerAmount == "55000000"
    assert data.nonce == "7"
    assert data.signatureType == 2


def test_build_and_sign_limit_order():
    print("\n🧪 Testing signed limit order...")

    builder = _builder()
    signed = builder.build_order(
        UserOrder(TOKEN_ID, 0.55, 100, Side.BUY),
        CreateOrderOptions(tick_size=TickSize.HUNDREDTH, neg_risk=False),
    )
    order = signed_order_to_json(signed)

    assert order["side"] == "BUY"
    assert order["maker"].lower() == ADDRESS.lower()
    assert order["makerAmount"] == "55000000"
    assert order["takerAmount"] == "100000000"
    assert order["tokenId"] == TOKEN_ID
    assert order["signatureType"] == 0
    assert isinstance(order["salt"], int)
    assert order["signature"].startswith("0x")
    assert len(order["signature"]) == 132

    print("   ✅ limit order signed")


def test_build_market_order_from_levels():
    builder = _builder()
    asks = [OrderSummary("0.6", "100"), OrderSummary("0.55", "100"), OrderSummary("0.5", "100")]

    signed = builder.build_market_order(
        UserMarketOrder(TOKEN_ID, 100, Side.BUY),
        CreateOrderOptions(tick_size=TickSize.HUNDREDTH),
        levels=asks,
    )
    order = signed_order_to_json(signed)

    # 100 collateral at 0.55 buys 181.8181 shares (four decimal amount precision)
    assert order["side"] == "BUY"
    assert order["makerAmount"] == "100000000"
    assert order["takerAmount"] == "181818100"


def test_market_order_needs_price_source():
    builder = _builder()
    with pytest.raises(ClobError):
        builder.build_market_order(
            UserMarketOrder(TOKEN_ID, 100, Side.BUY),
            CreateOrderOptions(tick_size=TickSize.HUNDREDTH),
        )


def test_signed_order_to_json_mapping():
    class FakeSignedOrder:
        def dict(self):
            return {
                "salt": "123",
                "maker": ADDRESS,
                "signer": ADDRESS,
                "taker": ZERO_ADDRESS,
                "tokenId": 5,
                "makerAmount": 100000000,
                "takerAmount": 55000000,
                "expiration": 0,
                "nonce": 0,
                "feeRateBps": 0,
                "side": UtilsSell,
                "signatureType": "1",
                "signature": "0xabc",
            }

    order = signed_order_to_json(FakeSignedOrder())
    assert order["side"] == "SELL"
    assert order["salt"] == 123
    assert order["signatureType"] == 1
    assert order["tokenId"] == "5"
    assert order["makerAmount"] == "100000000"
    assert order["expiration"] == "0"


if __name__ == "__main__":
    test_resolve_fee_rate()
    test_validation_errors()
    test_build_order_data_amounts()
    test_funder_and_signature_type()
    test_build_and_sign_limit_order()
    test_build_market_order_from_levels()
    test_market_order_needs_price_source()
    test_signed_order_to_json_mapping()
    print("\n✅ All order builder tests passed")
