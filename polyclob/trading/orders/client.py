"""Polymarket CLOB client: market parameters, API keys and order posting"""

import json
from typing import Any, Dict, List, Optional
import requests
from polyclob.config import settings
from polyclob.errors import (
    ApiError,
    ClobError,
    InvalidTickSizeError,
    L1AuthUnavailableError,
    L2AuthUnavailableError,
)
from polyclob.models import (
    ApiCreds,
    BuilderCreds,
    CreateOrderOptions,
    OrderBookSummary,
    OrderSummary,
    OrderType,
    RequestArgs,
    Side,
    SignatureType,
    TickSize,
    UserMarketOrder,
    UserOrder,
)
from polyclob.signing import (
    Signer,
    SignerProvider,
    StaticSignerProvider,
    create_builder_headers,
    create_level_1_headers,
    create_level_2_headers,
    inject_builder_headers,
)
from polyclob.utils.logger import log, log_error
from .builder import OrderBuilder, resolve_fee_rate_bps, signed_order_to_json
from .cache import FEE_RATE, NEG_RISK, TICK_SIZE, MarketParamsCache
from .constants import (
    API_ERRORS,
    CANCEL_ORDER,
    CREATE_API_KEY,
    DERIVE_API_KEY,
    GET_API_KEYS,
    GET_FEE_RATE,
    GET_NEG_RISK,
    GET_ORDER_BOOK,
    GET_TICK_SIZE,
    POST_ORDER,
    TIME,
)
from .market import calculate_buy_market_price, calculate_sell_market_price
from .utils import is_tick_size_smaller, normalize_token_id, parse_tick_size

DEFAULT_HEADERS = {
    "User-Agent": "polyclob",
    "Accept": "*/*",
    "Content-Type": "application/json",
}


def _error_message(response: requests.Response) -> str:
    """Best-effort readable message from an error response"""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason or ""
    if isinstance(data, dict):
        message = str(data.get("error") or data.get("message") or data)
    else:
        message = str(data)
    for code, description in API_ERRORS.items():
        if code in message:
            return f"{description} ({message})"
    return message


def parse_order_book(raw: Dict[str, Any]) -> OrderBookSummary:
    """Order book response -> OrderBookSummary"""

    def _levels(items: Optional[List[Dict[str, Any]]]) -> List[OrderSummary]:
        return [OrderSummary(price=str(x["price"]), size=str(x["size"])) for x in items or []]

    try:
        return OrderBookSummary(
            market=raw.get("market", ""),
            asset_id=raw.get("asset_id", ""),
            timestamp=str(raw.get("timestamp", "")),
            bids=_levels(raw.get("bids")),
            asks=_levels(raw.get("asks")),
            min_order_size=str(raw.get("min_order_size", "")),
            tick_size=str(raw.get("tick_size", "")),
            neg_risk=bool(raw.get("neg_risk", False)),
            hash=raw.get("hash", ""),
        )
    except (AttributeError, KeyError, TypeError) as e:
        raise ClobError(f"Invalid order book response: {raw}") from e


def _creds_from_response(raw: Any) -> ApiCreds:
    try:
        return ApiCreds(
            api_key=raw["apiKey"],
            api_secret=raw["secret"],
            api_passphrase=raw["passphrase"],
        )
    except (KeyError, TypeError) as e:
        raise ClobError(f"Invalid API key response: {raw}") from e


class ClobClient:
    """
    Client for the Polymarket CLOB REST API.

    Without a key only public endpoints work (level 0). A key unlocks API key
    management (level 1); API credentials on top of it unlock trading (level 2).
    """

    def __init__(
        self,
        host: str = settings.CLOB_HOST,
        chain_id: int = settings.CHAIN_ID,
        key: Optional[str] = None,
        creds: Optional[ApiCreds] = None,
        signature_type: SignatureType = SignatureType.EOA,
        funder: Optional[str] = None,
        builder_creds: Optional[BuilderCreds] = None,
        use_server_time: bool = False,
        signer_provider: Optional[SignerProvider] = None,
        timeout: float = settings.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.host = host.rstrip("/")
        self.chain_id = chain_id
        if signer_provider is None and key:
            signer_provider = StaticSignerProvider(Signer(key, chain_id))
        self.signer_provider = signer_provider
        self.creds = creds
        self.builder_creds = builder_creds
        self.use_server_time = use_server_time
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cache = MarketParamsCache()

        self.builder: Optional[OrderBuilder] = None
        if signer_provider is not None:
            self.builder = OrderBuilder(chain_id, signer_provider, signature_type, funder)

    # --- transport ---

    def _request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[str] = None,
    ) -> Any:
        request_headers = dict(DEFAULT_HEADERS)
        if headers:
            request_headers.update(headers)

        try:
            response = self.session.request(
                method,
                f"{self.host}{path}",
                headers=request_headers,
                params=params,
                data=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(0, f"Request exception: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, _error_message(response))

        try:
            return response.json()
        except ValueError:
            return response.text

    def _timestamp(self) -> Optional[int]:
        return self.get_server_time() if self.use_server_time else None

    def _signer(self) -> Signer:
        if self.signer_provider is None:
            raise L1AuthUnavailableError()
        return self.signer_provider.get_signer()

    def _assert_l2(self) -> ApiCreds:
        if self.signer_provider is None:
            raise L1AuthUnavailableError()
        if self.creds is None:
            raise L2AuthUnavailableError()
        return self.creds

    def _l2_headers(self, request_args: RequestArgs, with_builder: bool = False) -> Dict[str, str]:
        creds = self._assert_l2()
        ts = self._timestamp()
        headers = create_level_2_headers(self._signer(), creds, request_args, ts)
        if not with_builder or self.builder_creds is None:
            return headers

        builder_headers = None
        if self.builder_creds.is_valid():
            try:
                builder_headers = create_builder_headers(self.builder_creds, request_args, ts)
            except ClobError as e:
                log_error(f"Builder headers unavailable, posting without attribution: {e}")
        else:
            log("⚠ Builder credentials incomplete, posting without attribution")
        return inject_builder_headers(headers, builder_headers)

    # --- public ---

    def get_ok(self) -> Any:
        return self._request("GET", "/")

    def get_server_time(self) -> int:
        result = self._request("GET", TIME)
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise ClobError(f"Invalid server time: {result}") from e

    def get_order_book(self, token_id: str) -> OrderBookSummary:
        raw = self._request("GET", GET_ORDER_BOOK, params={"token_id": normalize_token_id(token_id)})
        if not isinstance(raw, dict):
            raise ClobError(f"Invalid order book response: {raw}")
        return parse_order_book(raw)

    def _fetch_tick_size(self, token_id: str) -> TickSize:
        raw = self._request("GET", GET_TICK_SIZE, params={"token_id": token_id})
        value = raw.get("minimum_tick_size") if isinstance(raw, dict) else None
        tick_size = parse_tick_size(value) if value is not None else None
        if tick_size is None:
            raise ClobError(f"Invalid tick size: {value}")
        return tick_size

    def _fetch_neg_risk(self, token_id: str) -> bool:
        raw = self._request("GET", GET_NEG_RISK, params={"token_id": token_id})
        if not isinstance(raw, dict) or "neg_risk" not in raw:
            raise ClobError(f"Invalid neg risk response: {raw}")
        return bool(raw["neg_risk"])

    def _fetch_fee_rate_bps(self, token_id: str) -> int:
        raw = self._request("GET", GET_FEE_RATE, params={"token_id": token_id})
        value = None
        if isinstance(raw, dict):
            value = raw.get("makerBaseFeeRateBps", raw.get("base_fee"))
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ClobError(f"Invalid fee rate response: {raw}") from e

    def get_tick_size(self, token_id: str) -> TickSize:
        token_id = normalize_token_id(token_id)
        return self.cache.get_or_fetch(TICK_SIZE, token_id, self._fetch_tick_size)

    def get_neg_risk(self, token_id: str) -> bool:
        token_id = normalize_token_id(token_id)
        return self.cache.get_or_fetch(NEG_RISK, token_id, self._fetch_neg_risk)

    def get_fee_rate_bps(self, token_id: str) -> int:
        token_id = normalize_token_id(token_id)
        return self.cache.get_or_fetch(FEE_RATE, token_id, self._fetch_fee_rate_bps)

    def calculate_market_price(
        self,
        token_id: str,
        side: Side,
        amount: float,
        order_type: OrderType = OrderType.FOK,
    ) -> float:
        """Worst book price needed to fill `amount` on the given side"""
        book = self.get_order_book(token_id)
        if Side(side) == Side.BUY:
            return calculate_buy_market_price(book.asks, amount, order_type)
        return calculate_sell_market_price(book.bids, amount, order_type)

    # --- level 1 ---

    def create_api_key(self, nonce: Optional[int] = None) -> ApiCreds:
        signer = self._signer()
        headers = create_level_1_headers(signer, nonce, self._timestamp())
        creds = _creds_from_response(self._request("POST", CREATE_API_KEY, headers=headers))
        log(f"✓ API key created: {creds.api_key}")
        return creds

    def derive_api_key(self, nonce: Optional[int] = None) -> ApiCreds:
        signer = self._signer()
        headers = create_level_1_headers(signer, nonce, self._timestamp())
        return _creds_from_response(self._request("GET", DERIVE_API_KEY, headers=headers))

    def create_or_derive_api_creds(self, nonce: Optional[int] = None) -> ApiCreds:
        """Derive the existing API key for this wallet, creating one if none exists"""
        try:
            return self.derive_api_key(nonce)
        except ClobError as e:
            log(f"⚠ Could not derive API key ({e}), creating a new one")
        return self.create_api_key(nonce)

    def set_api_creds(self, creds: ApiCreds) -> None:
        self.creds = creds

    # --- order creation ---

    def _resolve_tick_size(self, token_id: str, tick_size: Optional[TickSize]) -> TickSize:
        min_tick_size = self.get_tick_size(token_id)
        if tick_size is None:
            return min_tick_size
        parsed = parse_tick_size(tick_size)
        if parsed is None:
            raise InvalidTickSizeError(str(tick_size))
        if is_tick_size_smaller(parsed, min_tick_size):
            raise InvalidTickSizeError(parsed.value, min_tick_size.value)
        return parsed

    def _resolve_options(
        self, token_id: str, user_fee_rate: Optional[int], options: Optional[CreateOrderOptions]
    ) -> CreateOrderOptions:
        tick_size = self._resolve_tick_size(token_id, options.tick_size if options else None)
        fee_rate_bps = resolve_fee_rate_bps(user_fee_rate, self.get_fee_rate_bps(token_id))
        neg_risk = options.neg_risk if options else self.get_neg_risk(token_id)
        return CreateOrderOptions(tick_size=tick_size, neg_risk=neg_risk, fee_rate_bps=fee_rate_bps)

    def _require_builder(self) -> OrderBuilder:
        if self.builder is None:
            raise L1AuthUnavailableError()
        return self.builder

    def create_order(
        self, order: UserOrder, options: Optional[CreateOrderOptions] = None
    ) -> Dict[str, Any]:
        """Build and sign a limit order, returning its wire JSON"""
        builder = self._require_builder()
        resolved = self._resolve_options(order.token_id, order.fee_rate_bps, options)
        return signed_order_to_json(builder.build_order(order, resolved))

    def create_market_order(
        self, order: UserMarketOrder, options: Optional[CreateOrderOptions] = None
    ) -> Dict[str, Any]:
        """Build and sign a market order, pricing it from the live book when needed"""
        builder = self._require_builder()
        resolved = self._resolve_options(order.token_id, order.fee_rate_bps, options)

        levels = None
        if order.price is None:
            book = self.get_order_book(order.token_id)
            levels = book.asks if Side(order.side) == Side.BUY else book.bids
        return signed_order_to_json(builder.build_market_order(order, resolved, levels))

    # --- level 2 ---

    def post_order(self, order: Dict[str, Any], order_type: OrderType = OrderType.GTC) -> Any:
        creds = self._assert_l2()
        payload = {
            "order": order,
            "owner": creds.api_key,
            "orderType": OrderType(order_type).value,
            "deferExec": False,
        }
        body = json.dumps(payload, separators=(",", ":"))
        headers = self._l2_headers(RequestArgs("POST", POST_ORDER, body), with_builder=True)
        result = self._request("POST", POST_ORDER, headers=headers, body=body)
        log(f"✓ Order posted ({payload['orderType']} {order.get('side')} {order.get('tokenId')})")
        return result

    def create_and_post_order(
        self,
        order: UserOrder,
        options: Optional[CreateOrderOptions] = None,
        order_type: OrderType = OrderType.GTC,
    ) -> Any:
        return self.post_order(self.create_order(order, options), order_type)

    def cancel_order(self, order_id: str) -> Any:
        body = json.dumps({"orderID": order_id}, separators=(",", ":"))
        headers = self._l2_headers(RequestArgs("DELETE", CANCEL_ORDER, body))
        result = self._request("DELETE", CANCEL_ORDER, headers=headers, body=body)
        log(f"✓ Cancel requested for order {order_id}")
        return result

    def get_api_keys(self) -> Any:
        headers = self._l2_headers(RequestArgs("GET", GET_API_KEYS))
        return self._request("GET", GET_API_KEYS, headers=headers)


def from_env() -> ClobClient:
    """Client configured from environment settings"""
    creds = None
    if settings.API_KEY and settings.API_SECRET and settings.API_PASSPHRASE:
        creds = ApiCreds(settings.API_KEY, settings.API_SECRET, settings.API_PASSPHRASE)

    builder_creds = None
    if settings.BUILDER_API_KEY:
        builder_creds = BuilderCreds(
            settings.BUILDER_API_KEY, settings.BUILDER_SECRET, settings.BUILDER_PASSPHRASE
        )

    return ClobClient(
        host=settings.CLOB_HOST,
        chain_id=settings.CHAIN_ID,
        key=settings.PRIVATE_KEY or None,
        creds=creds,
        signature_type=SignatureType(settings.SIGNATURE_TYPE),
        funder=settings.FUNDER_ADDRESS or None,
        builder_creds=builder_creds,
        use_server_time=settings.USE_SERVER_TIME,
    )
