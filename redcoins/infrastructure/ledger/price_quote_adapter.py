"""
Adapter: market price of the asset.

Implements PriceQuotePort against a CoinMarketCap-style ticker that
answers with ``{"data": {"quotes": {"<CURRENCY>": {"price": ...}}}}``.

The unit price is cached for the current clock hour: any change of
year, month, day or hour triggers a fresh request. This keeps the
number of outbound calls to roughly one per hour regardless of load.

Reads of a fresh cache take no lock. On expiry one caller refreshes
under the lock while concurrent callers wait for it, up to the HTTP
timeout, and then reuse its result instead of issuing their own calls.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from redcoins.domain.ledger.entities import to_currency
from redcoins.domain.ledger.errors import PriceQuoteError
from redcoins.domain.ledger.ports import PriceQuotePort

logger = logging.getLogger(__name__)

CACHE_KEY_FORMAT = "%Y-%m-%d-%H"


class HttpPriceQuoteAdapter(PriceQuotePort):
    """Fetches and caches the asset's unit price over HTTP.

    Args:
        url: Ticker endpoint.
        currency: Key of the quote currency in the payload.
        timeout: Request timeout in seconds.
        client: Optional pre-built httpx client (tests inject a
            MockTransport-backed one).
        clock: Returns the current local time; drives cache expiry.
    """

    def __init__(
        self,
        url: str,
        currency: str = "BRL",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._url = url
        self._currency = currency
        self._client = client or httpx.Client(timeout=timeout)
        self._clock = clock
        self._lock = threading.Lock()
        # (hour key, unit price), replaced as a whole
        self._cached: Optional[tuple[str, Decimal]] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def currency(self) -> str:
        return self._currency

    def unit_price(self) -> Decimal:
        cache_key = self._clock().strftime(CACHE_KEY_FORMAT)
        cached = self._cached
        if cached is not None and cached[0] == cache_key:
            return cached[1]

        with self._lock:
            cached = self._cached
            if cached is not None and cached[0] == cache_key:
                return cached[1]
            price = self._fetch()
            self._cached = (cache_key, price)
        logger.info("Refreshed %s unit price: %s", self._currency, price)
        return price

    def price(self, asset_qty: Decimal) -> Decimal:
        return to_currency(self.unit_price() * asset_qty)

    def close(self) -> None:
        self._client.close()

    def _fetch(self) -> Decimal:
        try:
            response = self._client.get(self._url)
        except httpx.HTTPError as exc:
            raise PriceQuoteError(f"request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise PriceQuoteError(f"unexpected status {response.status_code}")

        try:
            raw_price = response.json()["data"]["quotes"][self._currency]["price"]
            price = Decimal(str(raw_price))
        except (ValueError, KeyError, TypeError, InvalidOperation) as exc:
            raise PriceQuoteError("malformed ticker payload") from exc

        if not price.is_finite() or price <= 0:
            raise PriceQuoteError(f"invalid unit price {price}")
        return price
