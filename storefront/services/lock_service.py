# storefront/services/lock_service.py
import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare and delete in one step, redis runs the script atomically
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Short lived per-cart checkout lock.
    Only the owner that set the key can release it, the TTL frees it otherwise.
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(cart_id: str) -> str:
        return f"checkout:{cart_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, cart_id: str, owner: str, ttl: int) -> bool:
        key = self._key(cart_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:<cart>:lock <owner> NX EX ttl
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, cart_id: str, owner: str) -> bool:
        key = self._key(cart_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)
