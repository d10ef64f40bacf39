import json
import logging

import pytest
import structlog

from showcase.config import get_settings
from showcase.observability.logging import configure_logging, reset_logging


@pytest.fixture
def isolated_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    yield

    reset_logging()
    structlog.contextvars.clear_contextvars()
    root.handlers = handlers
    root.setLevel(level)


def _json_lines(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


def test_json_output_carries_service_and_request_context(isolated_logging, capsys) -> None:
    configure_logging(get_settings())

    structlog.contextvars.bind_contextvars(request_id="showcase-1-1")
    structlog.get_logger("test").info("hello", n=1)
    logging.getLogger("plain.stdlib").warning("from stdlib")

    records = _json_lines(capsys.readouterr().out)
    assert [r["event"] for r in records] == ["hello", "from stdlib"]
    assert all(r["service"] == "showcase-test" for r in records)
    assert all(r["request_id"] == "showcase-1-1" for r in records)
    assert records[0]["level"] == "info"
    assert records[0]["n"] == 1
    assert records[1]["level"] == "warning"
    assert records[0]["timestamp"]


def test_log_level_setting_filters_records(isolated_logging, capsys, monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    get_settings.cache_clear()
    configure_logging(get_settings())

    structlog.get_logger("test").info("quiet")
    structlog.get_logger("test").warning("loud")

    assert [r["event"] for r in _json_lines(capsys.readouterr().out)] == ["loud"]


def test_console_format_renders_plain_lines(isolated_logging, capsys, monkeypatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "console")
    get_settings.cache_clear()
    configure_logging(get_settings())

    structlog.get_logger("test").info("hello console")

    out = capsys.readouterr().out
    assert "hello console" in out
    assert "showcase-test" in out
    with pytest.raises(json.JSONDecodeError):
        json.loads(out.strip().splitlines()[-1])


def test_configure_logging_is_idempotent(isolated_logging) -> None:
    configure_logging(get_settings())
    handlers = list(logging.getLogger().handlers)
    configure_logging(get_settings())

    assert logging.getLogger().handlers == handlers
    assert logging.getLogger("uvicorn.access").handlers == handlers
    assert logging.getLogger("uvicorn.access").propagate is False
