from __future__ import annotations

from edit_cli.shared.logging import get_logger


def test_logger_info_routes_to_stderr(capfd) -> None:
    logger = get_logger()

    logger.info("structured log to stderr")

    captured = capfd.readouterr()
    assert "structured log to stderr" in captured.err
    assert "structured log to stderr" not in captured.out


def test_debug_messages_require_verbose(capfd) -> None:
    get_logger(verbose=False).debug("quiet detail")
    get_logger(verbose=True).debug("loud detail")

    captured = capfd.readouterr()
    assert "quiet detail" not in captured.err
    assert "loud detail" in captured.err
