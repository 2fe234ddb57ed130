"""Ordered checks gating access to an edit session's metadata."""

from __future__ import annotations

from dataclasses import dataclass

from edit_cli.shared.exceptions import (
    InvalidParameterError,
    SessionNotFoundError,
    SessionNotInitializedError,
)

from .registry import SessionRegistry
from .session import EditSession


@dataclass(slots=True)
class RequestValidationChain:
    """Validate a session-addressed request and return its session.

    Checks run in a fixed order and stop at the first failure:

    1. the owner URI is a non-empty string (:class:`InvalidParameterError`)
    2. a session is registered under it (:class:`SessionNotFoundError`)
    3. that session has table metadata attached (:class:`SessionNotInitializedError`)
    """

    registry: SessionRegistry

    def validate(self, owner_uri: str | None) -> EditSession:
        checked_uri = _require_owner_uri(owner_uri)
        session = _require_session(self.registry, checked_uri)
        return _require_initialized(session)


def _require_owner_uri(owner_uri: str | None) -> str:
    if not isinstance(owner_uri, str) or not owner_uri:
        raise InvalidParameterError(
            "Parameter 'ownerUri' must be a non-empty string.",
            data={"ownerUri": owner_uri},
        )
    return owner_uri


def _require_session(registry: SessionRegistry, owner_uri: str) -> EditSession:
    session = registry.lookup(owner_uri)
    if session is None:
        raise SessionNotFoundError(
            f"No edit session exists for owner URI '{owner_uri}'.",
            data={"ownerUri": owner_uri},
        )
    return session


def _require_initialized(session: EditSession) -> EditSession:
    if not session.is_initialized:
        raise SessionNotInitializedError(
            f"Edit session '{session.owner_uri}' has not finished initializing.",
            data={"ownerUri": session.owner_uri},
        )
    return session
