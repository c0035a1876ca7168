"""
Session Order Store

Keeps the most recent order of each session so it can be shown again
later, e.g. in the kitchen view. A new submission replaces the stored
order; stored orders are never modified in place.

Sync request handlers run in a thread pool, so access is guarded by a lock.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from fastapi import Request

from pizzaservice.models import Order

logger = logging.getLogger(__name__)


class SessionOrderStore:
    """
    In-memory map of session token -> latest Order.

    Attributes:
        max_sessions: Upper bound on stored sessions; the least recently
            saved session is evicted first
    """

    def __init__(self, max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._orders: "OrderedDict[str, Order]" = OrderedDict()
        self._lock = threading.Lock()

    def save(self, order: Order) -> None:
        """
        Store ``order`` as the current order of its session.

        Raises:
            ValueError: If the order has no session token
        """
        if order is None:
            raise ValueError("Order must not be None.")
        if not order.session_token:
            raise ValueError("Order has no session token.")

        with self._lock:
            self._orders.pop(order.session_token, None)
            self._orders[order.session_token] = order
            while len(self._orders) > self.max_sessions:
                evicted, _ = self._orders.popitem(last=False)
                logger.debug(f"Evicted stored order of session {evicted}")

    def get(self, session_token: Optional[str]) -> Optional[Order]:
        if not session_token:
            return None
        with self._lock:
            return self._orders.get(session_token)

    def discard(self, session_token: str) -> bool:
        """Forget the order of a session. Returns True if one was stored."""
        with self._lock:
            return self._orders.pop(session_token, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._orders.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)


def get_order_store(request: Request) -> SessionOrderStore:
    """FastAPI dependency returning the application's order store."""
    state = request.app.state
    store = getattr(state, "order_store", None)
    if store is None:
        logger.warning("Order store was not created at startup, creating it now")
        store = SessionOrderStore()
        state.order_store = store
    return store
