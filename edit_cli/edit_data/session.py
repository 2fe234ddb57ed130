"""Edit session state addressed by owner URI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from edit_cli.shared.exceptions import SessionStateError

from .types import EditTableMetadata


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass(slots=True)
class EditSession:
    """Server-side state for one table open for row-level editing.

    Sessions are created uninitialized; the setup logic attaches table metadata
    exactly once via :meth:`initialize`. The metadata reference is swapped in as
    a single assignment so concurrent readers see either nothing or the whole
    object.
    """

    owner_uri: str
    table_metadata: EditTableMetadata | None = None

    @property
    def state(self) -> SessionState:
        if self.table_metadata is None:
            return SessionState.UNINITIALIZED
        return SessionState.INITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self.table_metadata is not None

    def initialize(self, metadata: EditTableMetadata) -> None:
        if self.table_metadata is not None:
            raise SessionStateError(f"Edit session '{self.owner_uri}' is already initialized.")
        self.table_metadata = metadata
