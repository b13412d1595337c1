from redis import Redis

from .config import settings

# None when REDIS_URL is not configured: day plans are then resolved per request
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, socket_timeout=2.0)
    if settings.redis_url
    else None
)


# Dependency for FastAPI
def get_redis() -> Redis | None:
    return redis_client
