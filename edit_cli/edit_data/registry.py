"""Concurrency-safe registry of active edit sessions."""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from .session import EditSession


class SessionRegistry:
    """In-memory map of owner URI to edit session.

    Lookups and lifecycle writes share one lock, so a lookup always observes
    the most recently completed register/remove for its key.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, EditSession] = {}
        self._lock = Lock()

    def lookup(self, owner_uri: str) -> Optional[EditSession]:
        with self._lock:
            return self._sessions.get(owner_uri)

    def register(self, session: EditSession) -> None:
        with self._lock:
            self._sessions[session.owner_uri] = session

    def remove(self, owner_uri: str) -> Optional[EditSession]:
        with self._lock:
            return self._sessions.pop(owner_uri, None)

    def owner_uris(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def __contains__(self, owner_uri: object) -> bool:
        with self._lock:
            return owner_uri in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
