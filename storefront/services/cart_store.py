# storefront/services/cart_store.py
from typing import Any, Callable, Tuple

import redis

from storefront.domain.cart import Cart
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

BANNER_TTL_SECONDS = 30 * 24 * 60 * 60


class CartStore:
    """
    Session carts kept in redis as a single JSON snapshot.
    -update() runs load/mutate/save under WATCH so two concurrent requests
     on the same session never overwrite each other
    -empty carts are deleted instead of stored
    """

    def __init__(self, url: str | None = None, client=None, ttl: int = CART_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _cart_key(session_id: str) -> str:
        return f"cart:{session_id}"

    @staticmethod
    def _banner_key(session_id: str) -> str:
        return f"session:{session_id}:promo_banner_closed"

    @redis_retry()
    def load(self, session_id: str) -> Cart:
        return Cart.from_json(self.redis.get(self._cart_key(session_id)))

    @redis_retry()
    def update(self, session_id: str, mutate: Callable[[Cart], Any]) -> Tuple[Cart, Any]:
        key = self._cart_key(session_id)
        outcome = {}

        def _txn(pipe):
            cart = Cart.from_json(pipe.get(key))
            # exceptions from mutate abort the transaction untouched
            outcome["value"] = mutate(cart)
            outcome["cart"] = cart
            pipe.multi()
            if cart.is_empty():
                pipe.delete(key)
            else:
                pipe.set(key, cart.to_json(), ex=self.ttl)

        # redis-py re-runs _txn on WatchError
        self.redis.transaction(_txn, key)
        return outcome["cart"], outcome["value"]

    @redis_retry()
    def clear(self, session_id: str):
        logger.info(f"Clearing cart for session {session_id}")
        self.redis.delete(self._cart_key(session_id))

    @redis_retry()
    def dismiss_banner(self, session_id: str):
        self.redis.set(self._banner_key(session_id), "true", ex=BANNER_TTL_SECONDS)

    @redis_retry()
    def banner_dismissed(self, session_id: str) -> bool:
        return self.redis.get(self._banner_key(session_id)) == "true"
