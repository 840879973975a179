"""
Redis 기반 태그 캐시 (db_cache / revalidate_db_cache)

읽기 함수를 db_cache로 감싸면 결과가 Redis에 저장되고, 지정한 태그마다
Redis SET에 캐시 키가 등록된다. 쓰기 쪽은 커밋이 끝난 뒤
revalidate_db_cache로 태그에 묶인 키를 모두 지운다.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Optional
import functools
import hashlib
import json
import logging

from pydantic import TypeAdapter
from redis.exceptions import RedisError

from parity.core.config import settings
from parity.core.redis_client import get_redis_client

logger = logging.getLogger(__name__)


CACHE_TAGS = {
    "products": "products",
    "product_views": "product-views",
    "subscription": "subscription",
    "countries": "countries",
    "country_groups": "country-groups",
}

ALL_TAG = "*"


def get_global_tag(tag: str) -> str:
    return f"global:{tag}"


def get_user_tag(user_id: str, tag: str) -> str:
    return f"user:{user_id}-{tag}"


def get_id_tag(id: Any, tag: str) -> str:
    return f"id:{id}-{tag}"


def _tag_set_key(tag: str) -> str:
    return f"{settings.CACHE_KEY_PREFIX}:tag:{tag}"


def _entry_key(fn: Callable, args: tuple, kwargs: dict) -> str:
    raw = json.dumps([args, sorted(kwargs.items())], default=str, ensure_ascii=False)
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()
    return f"{settings.CACHE_KEY_PREFIX}:{fn.__module__}.{fn.__qualname__}:{digest}"


def db_cache(
    fn: Callable[..., Awaitable[Any]],
    *,
    tags: Iterable[str],
    schema: Any = Any,
) -> Callable[..., Awaitable[Any]]:
    """읽기 함수를 태그 캐시로 감싼다.

    감싸는 함수의 첫 인자는 AsyncSession이며 캐시 키에서 제외된다.
    나머지 인자로 키를 만든다. ``schema``는 pydantic TypeAdapter로
    (역)직렬화할 반환 타입이다.
    """
    adapter = TypeAdapter(schema)
    entry_tags = [*tags, ALL_TAG]

    @functools.wraps(fn)
    async def cached(db, *args, **kwargs):
        key = _entry_key(fn, args, kwargs)
        try:
            client = await get_redis_client()
            raw = await client.get(key)
        except RedisError as e:
            # Redis 장애 시 캐시를 우회하고 DB에서 바로 읽는다
            logger.warning(f"db_cache read failed, bypassing cache ({key}): {e}")
            return await fn(db, *args, **kwargs)

        if raw is not None:
            logger.debug(f"db_cache hit: {key}")
            return adapter.validate_json(raw)

        value = await fn(db, *args, **kwargs)
        payload = adapter.dump_json(value).decode("utf-8")
        ttl = settings.CACHE_TTL_SECONDS
        try:
            async with client.pipeline(transaction=True) as pipe:
                pipe.set(key, payload, ex=ttl)
                for tag in entry_tags:
                    pipe.sadd(_tag_set_key(tag), key)
                    pipe.expire(_tag_set_key(tag), ttl)
                await pipe.execute()
        except RedisError as e:
            logger.warning(f"db_cache write failed ({key}): {e}")
        return value

    return cached


async def _revalidate_tag(tag: str) -> int:
    client = await get_redis_client()
    set_key = _tag_set_key(tag)
    keys = await client.smembers(set_key)
    if keys:
        await client.delete(*keys)
    await client.delete(set_key)
    return len(keys)


async def revalidate_db_cache(
    *,
    tag: str,
    user_id: Optional[str] = None,
    id: Optional[Any] = None,
) -> None:
    """태그의 global/user/id 범위 캐시를 무효화한다. 반드시 커밋 이후에 호출."""
    targets = [get_global_tag(tag)]
    if user_id is not None:
        targets.append(get_user_tag(user_id, tag))
    if id is not None:
        targets.append(get_id_tag(id, tag))

    dropped = 0
    try:
        for target in targets:
            dropped += await _revalidate_tag(target)
    except RedisError as e:
        # 커밋은 이미 끝났으므로 전파하지 않는다. 남은 엔트리는 TTL로 만료된다
        logger.error(f"db_cache revalidate failed tag={tag} user_id={user_id} id={id}: {e}")
        return
    logger.info(f"db_cache revalidated tag={tag} user_id={user_id} id={id} entries={dropped}")


async def clear_full_cache() -> None:
    await _revalidate_tag(ALL_TAG)
