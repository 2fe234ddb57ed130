"""Public exports for the edit-data package."""

from .channel import CollectingResponseChannel, ResponseChannel, ResponseError
from .handler import EditDataHandler, RequestDispatcher, build_dispatcher
from .registry import SessionRegistry
from .resolver import resolve_referenced_tables
from .session import EditSession, SessionState
from .snapshot import load_sessions
from .types import (
    GET_REFERENCED_TABLES_METHOD,
    EditColumnMetadata,
    EditTableMetadata,
    GetReferencedTablesParams,
    GetReferencedTablesResult,
    ReferencedTableInfo,
    SessionOperationParams,
)
from .validation import RequestValidationChain

__all__ = [
    "GET_REFERENCED_TABLES_METHOD",
    "CollectingResponseChannel",
    "EditColumnMetadata",
    "EditDataHandler",
    "EditSession",
    "EditTableMetadata",
    "GetReferencedTablesParams",
    "GetReferencedTablesResult",
    "ReferencedTableInfo",
    "RequestDispatcher",
    "RequestValidationChain",
    "ResponseChannel",
    "ResponseError",
    "SessionOperationParams",
    "SessionRegistry",
    "SessionState",
    "build_dispatcher",
    "load_sessions",
    "resolve_referenced_tables",
]
