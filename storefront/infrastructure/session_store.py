# =========================
# FILE: storefront/storefront/infrastructure/session_store.py
# One checkout controller per shopper session
# =========================
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict

from storefront.application.checkout import CheckoutStateMachine


@dataclass
class ShopperSession:
    session_id: str
    checkout: CheckoutStateMachine
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)
    # held around every checkout action so requests on one session apply in order
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


class InMemorySessionStore:
    def __init__(
        self,
        factory: Callable[[], CheckoutStateMachine] = CheckoutStateMachine,
        ttl_seconds: int = 1800,
    ) -> None:
        self.factory = factory
        self.ttl_seconds = ttl_seconds
        self._data: Dict[str, ShopperSession] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> ShopperSession:
        with self._lock:
            self._gc()
            st = self._data.get(session_id)
            if st is None:
                st = ShopperSession(session_id=session_id, checkout=self.factory())
                self._data[session_id] = st
            st.updated_at = time.time()
            return st

    def save(self, st: ShopperSession) -> None:
        with self._lock:
            st.updated_at = time.time()
            self._data[st.session_id] = st

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _gc(self) -> None:
        # caller holds self._lock
        now = time.time()
        expired = [k for k, v in self._data.items() if now - v.updated_at > self.ttl_seconds]
        for k in expired:
            self._data.pop(k, None)
