"""Rich-based logging helpers shared across the edit-data tools."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

# Log chatter goes to stderr so stdout carries only rendered payloads.
# Highlighting is off so owner URIs and qualified names are printed verbatim.
_stderr_console = Console(
    stderr=True,
    theme=Theme({"info": "cyan", "debug": "dim"}),
    highlight=False,
)


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by a Rich stderr console."""

    verbose: bool = False

    def info(self, message: str) -> None:
        _stderr_console.print(message, style="info", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            _stderr_console.print(message, style="debug", markup=False)


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)
