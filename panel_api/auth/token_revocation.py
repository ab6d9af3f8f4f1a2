"""Redis-backed JWT deny-list.

A revoked token's ``jti`` claim is stored in Redis with a TTL matching the
token's remaining lifetime::

    await revoke_token(redis, jti, expires_in_seconds=1800)
    assert await is_token_revoked(redis, jti)
"""

from redis.asyncio import Redis

_DENY_PREFIX = "panel:token:deny:"


async def revoke_token(redis: Redis, jti: str, expires_in_seconds: int) -> None:
    """Add *jti* to the deny-list until the token would have expired anyway."""
    if expires_in_seconds > 0:
        await redis.setex(f"{_DENY_PREFIX}{jti}", expires_in_seconds, "1")


async def is_token_revoked(redis: Redis, jti: str) -> bool:
    return await redis.exists(f"{_DENY_PREFIX}{jti}") > 0
