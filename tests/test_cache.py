from typing import Optional

from parity.core.cache import (
    CACHE_TAGS,
    clear_full_cache,
    db_cache,
    get_global_tag,
    get_id_tag,
    get_user_tag,
    revalidate_db_cache,
)


def test_tag_helpers():
    assert get_global_tag("products") == "global:products"
    assert get_user_tag("user_1", "subscription") == "user:user_1-subscription"
    assert get_id_tag(42, "products") == "id:42-products"
    assert CACHE_TAGS["product_views"] == "product-views"


def make_reader(value):
    calls = []

    async def reader(db, key):
        calls.append(key)
        return value

    return reader, calls


async def test_db_cache_memoizes_until_tag_revalidated(redis):
    reader, calls = make_reader({"n": 1})
    cached = db_cache(reader, tags=[get_user_tag("user_1", "products")])

    assert await cached(None, "a") == {"n": 1}
    assert await cached(None, "a") == {"n": 1}
    assert calls == ["a"]

    # 다른 인자는 다른 캐시 키
    await cached(None, "b")
    assert calls == ["a", "b"]

    await revalidate_db_cache(tag="products", user_id="user_2")
    await cached(None, "a")
    assert calls == ["a", "b"]

    await revalidate_db_cache(tag="products", user_id="user_1")
    await cached(None, "a")
    assert calls == ["a", "b", "a"]


async def test_db_cache_stores_none(redis):
    reader, calls = make_reader(None)
    cached = db_cache(reader, tags=["t"], schema=Optional[int])
    assert await cached(None, "x") is None
    assert await cached(None, "x") is None
    assert len(calls) == 1


async def test_revalidate_id_and_global_tags(redis):
    by_id, by_id_calls = make_reader(1)
    global_reader, global_calls = make_reader(2)
    cached_by_id = db_cache(by_id, tags=[get_id_tag("p1", "products")], schema=int)
    cached_global = db_cache(global_reader, tags=[get_global_tag("products")], schema=int)

    assert await cached_by_id(None, "id-key") == 1
    assert await cached_global(None, "global-key") == 2
    await revalidate_db_cache(tag="products", id="p1")
    await cached_by_id(None, "id-key")
    await cached_global(None, "global-key")

    assert len(by_id_calls) == 2
    # global 태그는 어떤 revalidate에서도 함께 무효화된다
    assert len(global_calls) == 2


async def test_clear_full_cache(redis):
    reader, calls = make_reader(5)
    cached = db_cache(reader, tags=["anything"], schema=int)
    await cached(None, "k")
    await cached(None, "k")
    await clear_full_cache()
    await cached(None, "k")
    assert len(calls) == 2


async def test_cached_value_survives_in_redis(redis):
    reader, _ = make_reader(7)
    cached = db_cache(reader, tags=[get_user_tag("u", "products")], schema=int)
    await cached(None, "k")
    members = await redis.smembers("dbcache:tag:user:u-products")
    assert len(members) == 1
    assert await redis.get(next(iter(members))) == "7"
