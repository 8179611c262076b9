import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("HOME_URL", "https://example.com")

import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from atf_optimizer.core.options import Options
from atf_optimizer.models.above_the_fold import AboveTheFold
from atf_optimizer.services.beacon import BeaconInjector
from atf_optimizer.services.context import AboveTheFoldContext
from atf_optimizer.services.controller import AboveTheFoldController
from atf_optimizer.services.filters import FilterRegistry
from atf_optimizer.services.queries import InMemoryMetadataStore

HOME = "https://example.com"
TEST_NONCE = "0123456789"


class FakeFilesystem:
    """Records existence checks; every path exists unless told otherwise."""

    def __init__(self, present: bool = True):
        self.present = present
        self.checked: list[str] = []

    def exists(self, path: str) -> bool:
        self.checked.append(path)
        return self.present


def _encode(payload):
    if payload is None or isinstance(payload, str):
        return payload
    return json.dumps(payload)


@pytest.fixture
def make_row():
    def _make_row(url: str, lcp=None, viewport=None, is_mobile: bool = False) -> AboveTheFold:
        return AboveTheFold(
            url=url,
            is_mobile=is_mobile,
            lcp=_encode(lcp),
            viewport=_encode(viewport),
            status="completed",
        )

    return _make_row


@pytest.fixture
def filters() -> FilterRegistry:
    return FilterRegistry()


@pytest.fixture
def filesystem() -> FakeFilesystem:
    return FakeFilesystem()


@pytest.fixture
def beacon(filesystem, filters) -> BeaconInjector:
    return BeaconInjector(
        filesystem=filesystem,
        filters=filters,
        nonce_factory=lambda action: TEST_NONCE,
        ajax_url=f"{HOME}/wp-admin/admin-ajax.php",
        assets_path="/srv/www/assets/js/",
        assets_url=f"{HOME}/assets/js/",
    )


@pytest.fixture
def store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest.fixture
def options() -> Options:
    return Options({"cache_mobile": True, "do_caching_mobile_files": True})


@pytest.fixture
def controller(options, store, filters, beacon) -> AboveTheFoldController:
    return AboveTheFoldController(
        options=options,
        store=store,
        context=AboveTheFoldContext(True, filters),
        beacon=beacon,
        home_url=HOME,
    )


@pytest_asyncio.fixture
async def client(controller):
    from atf_optimizer.api.deps import get_controller
    from atf_optimizer.main import app

    app.dependency_overrides[get_controller] = lambda: controller
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
