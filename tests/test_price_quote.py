"""
Tests for the HTTP price-quote adapter.

The ticker is served by httpx.MockTransport; the clock is injected so
the hourly cache can be driven deterministically.
"""

import threading
import time
from datetime import datetime
from decimal import Decimal

import httpx
import pytest

from redcoins.domain.ledger.errors import PriceQuoteError
from redcoins.infrastructure.ledger.price_quote_adapter import HttpPriceQuoteAdapter

URL = "https://ticker.test/v2/ticker/1/?convert=BRL"


def _ticker(price) -> dict:
    return {"data": {"quotes": {"BRL": {"price": price}, "USD": {"price": 6500.0}}}}


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _adapter(handler, clock=None) -> HttpPriceQuoteAdapter:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    kwargs = {"client": client}
    if clock is not None:
        kwargs["clock"] = clock
    return HttpPriceQuoteAdapter(URL, **kwargs)


class TestUnitPrice:
    """Tests for HttpPriceQuoteAdapter.unit_price."""

    def test_reads_configured_currency(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json=_ticker(24513.5)))
        assert adapter.unit_price() == Decimal("24513.5")

    def test_price_multiplies_and_quantizes(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json=_ticker(30000)))
        assert adapter.price(Decimal("0.00012345")) == Decimal("3.703500000")

    def test_cached_within_the_hour(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(200, json=_ticker(100 + len(calls)))

        clock = FakeClock(datetime(2018, 8, 1, 14, 5))
        adapter = _adapter(handler, clock)

        first = adapter.unit_price()
        clock.now = datetime(2018, 8, 1, 14, 59)
        second = adapter.unit_price()

        assert first == second == Decimal("101")
        assert len(calls) == 1

    def test_refreshed_on_new_hour(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(200, json=_ticker(100 + len(calls)))

        clock = FakeClock(datetime(2018, 8, 1, 14, 59))
        adapter = _adapter(handler, clock)
        adapter.unit_price()

        clock.now = datetime(2018, 8, 1, 15, 0)
        assert adapter.unit_price() == Decimal("102")

        # Same hour on another day is a different cache slot.
        clock.now = datetime(2018, 8, 2, 15, 0)
        assert adapter.unit_price() == Decimal("103")
        assert len(calls) == 3

    def test_concurrent_callers_share_one_refresh(self) -> None:
        """Callers arriving together on an expired cache trigger one request."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            time.sleep(0.05)
            return httpx.Response(200, json=_ticker(500))

        adapter = _adapter(handler, FakeClock(datetime(2018, 8, 1, 9, 0)))
        workers = 8
        barrier = threading.Barrier(workers)
        prices = []

        def read() -> None:
            barrier.wait()
            prices.append(adapter.unit_price())

        threads = [threading.Thread(target=read) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert prices == [Decimal("500")] * workers
        assert len(calls) == 1


class TestFailures:
    """Every failure mode surfaces as PriceQuoteError."""

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(PriceQuoteError):
            _adapter(handler).unit_price()

    def test_non_200_status(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(503))
        with pytest.raises(PriceQuoteError) as exc_info:
            adapter.unit_price()
        assert exc_info.value.code == "preco_indisponivel"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"data": {"quotes": {}}},
            {"data": {"quotes": {"BRL": {"price": None}}}},
            {"data": {"quotes": {"BRL": {"price": "abc"}}}},
            _ticker(0),
            _ticker(-5),
        ],
    )
    def test_bad_payload(self, payload) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(PriceQuoteError):
            adapter.unit_price()

    def test_invalid_json(self) -> None:
        adapter = _adapter(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(PriceQuoteError):
            adapter.unit_price()

    def test_failure_is_not_cached(self) -> None:
        responses = [httpx.Response(500), httpx.Response(200, json=_ticker(42))]
        adapter = _adapter(lambda request: responses.pop(0))

        with pytest.raises(PriceQuoteError):
            adapter.unit_price()
        assert adapter.unit_price() == Decimal("42")
