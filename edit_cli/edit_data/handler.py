"""Request handling for session-scoped edit-data queries."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from edit_cli.shared.exceptions import (
    ErrorCode,
    RequestValidationError,
    SessionNotFoundError,
    SessionNotInitializedError,
)
from edit_cli.shared.logging import Logger, get_logger

from .channel import ResponseChannel
from .registry import SessionRegistry
from .resolver import resolve_referenced_tables
from .types import (
    GET_REFERENCED_TABLES_METHOD,
    GetReferencedTablesParams,
    GetReferencedTablesResult,
)
from .validation import RequestValidationChain

SESSION_UNAVAILABLE_MESSAGE = "Edit session is not available."

RequestCallable = Callable[[Mapping[str, Any] | None, ResponseChannel], None]


@dataclass(slots=True)
class EditDataHandler:
    """Serve metadata queries against sessions held in ``registry``.

    Validation failures are expected outcomes: they are reported through the
    channel's error path and never propagate to the caller.
    """

    registry: SessionRegistry
    logger: Logger = field(default_factory=get_logger)
    collapse_session_errors: bool = False

    def handle_get_referenced_tables(
        self,
        params: GetReferencedTablesParams,
        channel: ResponseChannel,
    ) -> None:
        self.logger.debug(f"{GET_REFERENCED_TABLES_METHOD} requested for '{params.owner_uri}'")
        chain = RequestValidationChain(self.registry)
        try:
            session = chain.validate(params.owner_uri)
        except RequestValidationError as exc:
            self.logger.debug(f"{GET_REFERENCED_TABLES_METHOD} rejected ({exc.code.name}): {exc.message}")
            message, code = self._wire_error(exc)
            channel.send_error(message, int(code), exc.data)
            return

        referenced_tables = resolve_referenced_tables(session)
        self.logger.debug(
            f"{GET_REFERENCED_TABLES_METHOD} resolved {len(referenced_tables)} table(s) for '{session.owner_uri}'"
        )
        channel.send_result(GetReferencedTablesResult(referenced_tables=referenced_tables))

    def _wire_error(self, exc: RequestValidationError) -> tuple[str, ErrorCode]:
        if self.collapse_session_errors and isinstance(
            exc, (SessionNotFoundError, SessionNotInitializedError)
        ):
            return SESSION_UNAVAILABLE_MESSAGE, ErrorCode.SESSION_UNAVAILABLE
        return exc.message, exc.code


@dataclass(slots=True)
class RequestDispatcher:
    """Route wire method names to request callables."""

    logger: Logger = field(default_factory=get_logger)
    _routes: dict[str, RequestCallable] = field(default_factory=dict)

    def register(self, method: str, handler: RequestCallable) -> None:
        if method in self._routes:
            raise ValueError(f"Request method '{method}' is already registered.")
        self._routes[method] = handler

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(sorted(self._routes))

    def dispatch(
        self,
        method: str,
        params: Mapping[str, Any] | None,
        channel: ResponseChannel,
    ) -> None:
        handler = self._routes.get(method)
        if handler is None:
            self.logger.debug(f"Unknown request method '{method}'")
            channel.send_error(
                f"Unknown request method '{method}'.",
                int(ErrorCode.METHOD_NOT_FOUND),
                {"method": method},
            )
            return
        handler(params, channel)


def build_dispatcher(handler: EditDataHandler) -> RequestDispatcher:
    """Return a dispatcher with every edit-data request registered."""

    dispatcher = RequestDispatcher(logger=handler.logger)
    dispatcher.register(
        GET_REFERENCED_TABLES_METHOD,
        lambda raw, channel: handler.handle_get_referenced_tables(
            GetReferencedTablesParams.from_wire(raw), channel
        ),
    )
    return dispatcher
