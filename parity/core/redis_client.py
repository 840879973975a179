import logging

import redis.asyncio as redis
from parity.core.config import settings

logger = logging.getLogger(__name__)

redis_client = None


async def get_redis_client() -> redis.Redis:
    """
    Provide a Redis client dependency.
    """
    global redis_client
    if redis_client is None:
        redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True
        )
    return redis_client


async def check_redis_connection() -> bool:
    """Redis 연결 테스트"""
    try:
        client = await get_redis_client()
        await client.ping()
        return True
    except Exception as e:
        logger.warning(f"Redis 연결 실패: {e}")
        return False
