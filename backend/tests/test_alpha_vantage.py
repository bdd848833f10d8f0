"""Alpha Vantage client tests."""

from __future__ import annotations


import pytest

from folio_api.providers.alpha_vantage import AlphaVantageClient, AlphaVantageError


class StubResponse:
    def __init__(self, payload: object, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> object:
        return self._payload


class StubClient:
    def __init__(self, payload: object | None = None, status_code: int = 200) -> None:
        self.calls: list[dict[str, object]] = []
        self._payload = payload if payload is not None else {"Time Series (Daily)": {}}
        self._status_code = status_code

    async def get(self, url: str, params: dict[str, object], timeout: float) -> StubResponse:
        self.calls.append(params)
        return StubResponse(self._payload, self._status_code)

    async def aclose(self) -> None:  # pragma: no cover - included for interface completeness
        return None


async def test_injects_api_key_and_output_size():
    stub = StubClient()
    client = AlphaVantageClient(api_key="test", requests_per_minute=10, client=stub)
    await client.daily_adjusted("AAPL", output="full")
    params = stub.calls[0]
    assert params["apikey"] == "test"
    assert params["function"] == "TIME_SERIES_DAILY_ADJUSTED"
    assert params["outputsize"] == "full"


async def test_weekly_series_has_no_output_size():
    stub = StubClient()
    client = AlphaVantageClient(api_key="test", requests_per_minute=10, client=stub)
    await client.time_series("MSFT", interval="1wk")
    assert stub.calls[0]["function"] == "TIME_SERIES_WEEKLY_ADJUSTED"
    assert "outputsize" not in stub.calls[0]


@pytest.mark.parametrize("key", ["Note", "Error Message", "Information"])
async def test_raises_on_error_payload(key):
    client = AlphaVantageClient(api_key="test", requests_per_minute=10, client=StubClient({key: "limit"}))
    with pytest.raises(AlphaVantageError):
        await client.daily_adjusted("AAPL")


async def test_raises_on_http_error_status():
    client = AlphaVantageClient(api_key="test", requests_per_minute=10, client=StubClient({}, status_code=503))
    with pytest.raises(AlphaVantageError, match="503"):
        await client.daily_adjusted("AAPL")


async def test_missing_api_key_fails_before_request():
    stub = StubClient()
    client = AlphaVantageClient(requests_per_minute=10, client=stub)
    client.api_key = None
    with pytest.raises(AlphaVantageError, match="not configured"):
        await client.daily_adjusted("AAPL")
    assert stub.calls == []
