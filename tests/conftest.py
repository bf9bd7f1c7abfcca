"""Shared fixtures for HomeSlice MCP tests."""

from typing import Callable

import httpx
import pytest

from shared.config import HomeSliceSettings


RATES_PAYLOAD = {
    "state": "fl",
    "event_datetime": "2025-01-15T14:30:00Z",
    "thirty_year_fixed": 6.875,
    "thirty_year_fixed_fha": 6.25,
    "thirty_year_fixed_va": 6.125,
    "twenty_year_fixed": 6.75,
    "fifteen_year_fixed": 6.0,
    "ten_year_fixed": 5.875,
    "seven_year_arm": 6.5,
    "five_year_arm": 6.375,
}

CALCULATION_PAYLOAD = {
    "monthly_payment": {
        "principal_and_interest": 1576.63,
        "property_tax": 250.0,
        "insurance": 125.0,
        "total": 1951.63,
    },
    "loan_amount": 240000,
    "interest_rate": 6.875,
    "total_interest": 327586.8,
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def settings(monkeypatch) -> HomeSliceSettings:
    monkeypatch.delenv("HOMESLICE_API_BASE", raising=False)
    return HomeSliceSettings(HOMESLICE_API_KEY="test-key", _env_file=None)


@pytest.fixture
def rates_transport() -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=RATES_PAYLOAD))


@pytest.fixture
def calculate_transport() -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=CALCULATION_PAYLOAD))
