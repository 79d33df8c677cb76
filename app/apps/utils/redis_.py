import logging

import redis.asyncio as redis

from config import REDIS_HOST, REDIS_DB, REDIS_PORT, REDIS_PASSWORD

logger = logging.getLogger(__name__)


class RedisManager:
    _client = None

    @classmethod
    async def init(cls):
        cls._client = redis.Redis(
            host=REDIS_HOST,
            port=REDIS_PORT,
            db=REDIS_DB,
            password=REDIS_PASSWORD or None,
            decode_responses=True,
        )
        logger.info("redis client ready at %s:%s", REDIS_HOST, REDIS_PORT)

    @classmethod
    async def close(cls):
        if cls._client:
            await cls._client.aclose()
            cls._client = None
            logger.info("redis client closed")

    @classmethod
    def get_client(cls):
        if cls._client is None:
            raise RuntimeError("Redis client is not initialized")
        return cls._client


async def get_redis_client():
    return RedisManager.get_client()


def token_key(user_id, login_time) -> str:
    return f"token-{login_time}-{user_id}"


def refresh_token_key(user_id, login_time) -> str:
    return f"refresh_token-{login_time}-{user_id}"
