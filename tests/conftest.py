import pytest
from fastapi.testclient import TestClient

from ecofootprint.cache import ResultCache
from ecofootprint.main import app, get_cache, get_fetcher

from .fakes import FakeFetcher, FakeRedis
from .pages import PRODUCT_PAGE


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return ResultCache(fake_redis)


@pytest.fixture
def fetcher():
    return FakeFetcher(PRODUCT_PAGE)


@pytest.fixture
def client(cache, fetcher):
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
