"""Response channel abstraction between request handlers and the transport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from edit_cli.shared.exceptions import ResponseChannelError

from .types import GetReferencedTablesResult


class ResponseChannel(Protocol):
    """Transport-facing sink; exactly one method is called once per request."""

    def send_result(self, result: GetReferencedTablesResult) -> None:
        ...

    def send_error(self, message: str, code: int, data: Mapping[str, Any] | None = None) -> None:
        ...


@dataclass(frozen=True, slots=True)
class ResponseError:
    message: str
    code: int
    data: Mapping[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.data is not None:
            payload["data"] = dict(self.data)
        return payload


@dataclass(slots=True)
class CollectingResponseChannel:
    """Channel that keeps the single outcome of a request for later rendering."""

    result: GetReferencedTablesResult | None = None
    error: ResponseError | None = None

    @property
    def completed(self) -> bool:
        return self.result is not None or self.error is not None

    def send_result(self, result: GetReferencedTablesResult) -> None:
        self._ensure_open()
        self.result = result

    def send_error(self, message: str, code: int, data: Mapping[str, Any] | None = None) -> None:
        self._ensure_open()
        self.error = ResponseError(message=message, code=int(code), data=data)

    def _ensure_open(self) -> None:
        if self.completed:
            raise ResponseChannelError("A response has already been sent for this request.")
