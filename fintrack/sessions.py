# fintrack/sessions.py
"""
Server-side sessions: opaque token (held in a cookie) -> user id.

The store lives on app.state.session_store so tests and alternative
deployments can swap it without touching the routes.
"""

from __future__ import annotations

import secrets
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request


class SessionStore(ABC):
    @abstractmethod
    def create(self, user_id: int) -> str:
        """Bind a fresh token to user_id and return the token."""

    @abstractmethod
    def get(self, token: str) -> Optional[int]:
        """Return the user id for token, or None if unknown or expired."""

    @abstractmethod
    def destroy(self, token: str) -> None:
        """Forget token. Unknown tokens are ignored."""


class InMemorySessionStore(SessionStore):
    """
    Process-local store. Sessions vanish on restart.
    max_age=None means a session lives until logout. With max_age set,
    expired entries are swept on create once the store holds
    sweep_threshold sessions.
    """

    def __init__(
        self,
        max_age: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sweep_threshold: int = 1024,
    ):
        self.max_age = max_age
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._lock = threading.Lock()
        self._items: Dict[str, Tuple[int, float]] = {}

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            if len(self._items) >= self.sweep_threshold:
                self._sweep_locked()
            self._items[token] = (int(user_id), self._clock())
        return token

    def _expired(self, created: float) -> bool:
        return self.max_age is not None and self._clock() - created >= self.max_age

    def _sweep_locked(self) -> None:
        if self.max_age is None:
            return
        stale = [t for t, (_, created) in self._items.items() if self._expired(created)]
        for token in stale:
            del self._items[token]

    def get(self, token: str) -> Optional[int]:
        if not token:
            return None
        with self._lock:
            item = self._items.get(token)
            if item is None:
                return None
            user_id, created = item
            if self._expired(created):
                del self._items[token]
                return None
            return user_id

    def destroy(self, token: str) -> None:
        with self._lock:
            self._items.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def get_session_store(request: Request) -> SessionStore:
    """FastAPI dependency: the store installed on the running app."""
    return request.app.state.session_store
