"""
Broker Health Check

Connectivity check for the Redis broker behind the Celery sweep schedule.
"""

import logging

import redis

logger = logging.getLogger(__name__)


def broker_health_check(broker_url: str, timeout: float = 1.0) -> bool:
    """
    Ping the Redis broker.

    Args:
        broker_url: Broker URL (redis:// or rediss://)
        timeout: Connect and socket timeout in seconds

    Returns:
        True if the broker answered, False otherwise
    """
    if not broker_url.startswith(("redis://", "rediss://")):
        logger.debug(f"Broker {broker_url} is not a Redis URL, skipping ping")
        return False

    client = redis.Redis.from_url(
        broker_url, socket_connect_timeout=timeout, socket_timeout=timeout
    )
    try:
        return bool(client.ping())
    except redis.RedisError as e:
        logger.warning(f"Broker health check failed: {e}")
        return False
    finally:
        client.close()
