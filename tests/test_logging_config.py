from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from bitmeter.logging import JsonFormatter, setup_logging


def _bitmeter_handlers() -> list[logging.Handler]:
    return [
        handler
        for handler in logging.getLogger("bitmeter").handlers
        if getattr(handler, "_bitmeter_handler", False)
    ]


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        "bitmeter.test", logging.WARNING, __file__, 10, "hello %s", ("world",), None
    )
    record.event = "test.event"
    record.tick = 7

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["level"] == "warning"
    assert payload["logger"] == "bitmeter.test"
    assert payload["event"] == "test.event"
    assert payload["tick"] == 7
    assert "args" not in payload
    assert "timestamp" in payload


def test_json_formatter_serialises_exceptions() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        record = logging.LogRecord(
            "bitmeter", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exc_info"]


def test_setup_logging_writes_json_to_file(tmp_path: Path) -> None:
    destination = tmp_path / "logs" / "bitmeter.jsonl"
    setup_logging({"logging": {"level": "debug", "output": str(destination), "format": "json"}})

    logging.getLogger("bitmeter.core.session").debug(
        "Sample history is warm.", extra={"event": "session.warm", "capacity": 4}
    )
    for handler in _bitmeter_handlers():
        handler.flush()

    line = destination.read_text(encoding="utf8").strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "session.warm"
    assert payload["capacity"] == 4
    assert logging.getLogger("bitmeter").level == logging.DEBUG


def test_setup_logging_replaces_previous_handler() -> None:
    setup_logging({"logging": {"format": "text", "output": "stdout"}})
    setup_logging({"logging": {"format": "json", "output": "stderr"}})

    handlers = _bitmeter_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)


def test_setup_logging_text_format(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging({"logging": {"format": "text", "output": "stdout", "level": "info"}})

    logging.getLogger("bitmeter.cli").info("ready")

    assert "INFO bitmeter.cli: ready" in capsys.readouterr().out


@pytest.mark.parametrize(
    "logging_cfg",
    [{"level": "chatty"}, {"format": "xml"}],
)
def test_setup_logging_rejects_unknown_values(logging_cfg: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        setup_logging({"logging": logging_cfg})
