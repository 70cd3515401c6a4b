"""Shared test fixtures and configuration."""

import os

import pytest

# Never point tests at a real catalog
os.environ.setdefault("CATALOG_BASE_URL", "https://catalog.test/api")

from esim_check.errors import UpstreamRateLimitedError  # noqa: E402
from esim_check.orchestrator.lookup import LookupService  # noqa: E402
from esim_check.orchestrator.schemas import DeviceDetail, SearchResult  # noqa: E402
from esim_check.services.cache import ResponseCache  # noqa: E402
from esim_check.services.throttle import ThrottleGate  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalog:
    """Stand-in for CatalogClient that records every upstream call."""

    base_url = "https://catalog.test/api"

    def __init__(self, results=None, devices=None):
        self.results = results or []
        self.devices = devices or {}
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def search(self, query: str) -> list[SearchResult]:
        self.calls.append(("search", query))
        if self.error:
            raise self.error
        return [SearchResult.model_validate(r) for r in self.results]

    async def get_device(self, device_id: str) -> DeviceDetail:
        self.calls.append(("get_device", device_id))
        if self.error:
            raise self.error
        return DeviceDetail.model_validate(self.devices[device_id])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gate(clock):
    return ThrottleGate(min_interval=5.0, cooldown=30.0, clock=clock)


@pytest.fixture
def sample_search_results():
    """Catalog search response (gsmarena-style)."""
    return [
        {
            "id": "apple_iphone_15_pro-12557",
            "name": "Apple iPhone 15 Pro",
            "img": "https://cdn.test/apple-iphone-15-pro.jpg",
            "description": "Apple iPhone 15 Pro. Announced Sep 2023.",
        },
        {
            "id": "apple_iphone_15-12559",
            "name": "Apple iPhone 15",
            "thumbnail": "https://cdn.test/apple-iphone-15.jpg",
            "brand": "Apple",
        },
    ]


@pytest.fixture
def sample_device():
    """Catalog device detail with an eSIM-capable SIM entry."""
    return {
        "name": "Apple iPhone 15 Pro",
        "img": "https://cdn.test/apple-iphone-15-pro.jpg",
        "detailSpec": [
            {
                "category": "Network",
                "specifications": [
                    {"name": "Technology", "value": "GSM / CDMA / HSPA / EVDO / LTE / 5G"},
                ],
            },
            {
                "category": "Body",
                "specifications": [
                    {"name": "Dimensions", "value": "146.6 x 70.6 x 8.3 mm"},
                    {"name": "SIM", "value": ["Nano-SIM", "eSIM"]},
                ],
            },
        ],
    }


@pytest.fixture
def sample_device_no_esim():
    return {
        "name": "Nokia 105",
        "detailSpec": [
            {
                "category": "Body",
                "specifications": [{"name": "SIM", "value": "Mini-SIM"}],
            },
        ],
    }


@pytest.fixture
def catalog(sample_search_results, sample_device, sample_device_no_esim):
    return FakeCatalog(
        results=sample_search_results,
        devices={
            "apple_iphone_15_pro-12557": sample_device,
            "nokia_105-1234": sample_device_no_esim,
            "bare-1": {"name": "Bare Phone", "detailSpec": []},
        },
    )


@pytest.fixture
def service(gate, catalog):
    return LookupService(gate, ResponseCache(), catalog, result_limit=8)


@pytest.fixture
def rate_limited():
    return UpstreamRateLimitedError("Catalog responded 429")
