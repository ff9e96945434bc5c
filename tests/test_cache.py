from ecofootprint.cache import ResultCache, cache_key
from ecofootprint.calculator import calculate_scraped
from ecofootprint.schemas import FootprintResult, ProductRecord


def _result():
    return calculate_scraped(ProductRecord(name="Kettle", weight_kg=1.5, category="appliances",
                                           material="metal", origin="DE"))


def test_key_uses_url_verbatim():
    assert cache_key("https://shop.example/item/1") == "footprint:https://shop.example/item/1"
    assert cache_key("https://shop.example/item/1/") != cache_key("https://shop.example/item/1")


def test_miss_then_hit(cache, fake_redis):
    key = cache_key("https://shop.example/kettle")
    assert cache.get(key, FootprintResult) is None

    fresh = _result()
    cache.set(key, fresh)
    assert fake_redis.ttls[key] == 3600
    assert cache.get(key, FootprintResult) == fresh


def test_entry_without_product_name_round_trips(cache):
    fresh = calculate_scraped(ProductRecord())
    cache.set("footprint:x", fresh)
    assert cache.get("footprint:x", FootprintResult) == fresh


def test_unreachable_store_is_bypassed(cache, fake_redis):
    fake_redis.down = True
    assert cache.connected is False
    assert cache.get("footprint:x", FootprintResult) is None
    cache.set("footprint:x", _result())  # no exception
    assert fake_redis.store == {}


def test_unreadable_entry_is_a_miss(cache, fake_redis):
    fake_redis.store["footprint:x"] = "{not json"
    assert cache.get("footprint:x", FootprintResult) is None


def test_errors_during_call_are_swallowed(fake_redis):
    class Flaky(type(fake_redis)):
        def get(self, key):
            self.down = True
            self._check()

    cache = ResultCache(Flaky())
    assert cache.get("footprint:x", FootprintResult) is None
