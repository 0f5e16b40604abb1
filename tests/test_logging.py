# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from io import StringIO

import pytest

from statsd_client.logging import (
    StructuredLogger,
    _coerce_level,
    configure_logging,
    get_logger,
)


class _CaptureHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@contextmanager
def _capture(logger: logging.Logger) -> Iterator[list[logging.LogRecord]]:
    handler = _CaptureHandler()
    logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Iterator[None]:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in original_handlers:
                handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)


def test_structured_logger_emits_structured_records() -> None:
    logger = get_logger("tests.logging").bind(component="unit-test")
    base_logger = logger.logger
    base_logger.setLevel(logging.INFO)

    with _capture(base_logger) as records:
        logger.info("structured", event="tests.event", context={"attempt": 1})

    assert len(records) == 1
    record = records[0]
    assert record.event == "tests.event"
    assert record.context == {"component": "unit-test", "attempt": 1}
    assert record.getMessage() == "structured"


def test_structured_logger_merges_extra_into_context() -> None:
    logger = get_logger("tests.logging.extra")
    base_logger = logger.logger
    base_logger.setLevel(logging.INFO)

    with _capture(base_logger) as records:
        logger.info("none-extra", event="tests.none", extra=None)
        logger.info("with-extra", extra={"event": "tests.extra", "count": 2})

    assert [record.event for record in records] == ["tests.none", "tests.extra"]
    assert records[0].context == {}
    assert records[1].context == {"count": 2}


def test_get_logger_scopes_to_module_name() -> None:
    logger = get_logger("statsd_client.channels", context={"component": "channel"})

    assert logger.logger is logging.getLogger("statsd_client.channels")
    assert logger.extra == {"component": "channel"}


def test_bind_does_not_mutate_parent() -> None:
    parent = StructuredLogger(logging.getLogger("tests.bind"), context={"a": 1})

    child = parent.bind(b=2)

    assert parent.extra == {"a": 1}
    assert child.extra == {"a": 1, "b": 2}


def test_structured_logger_exception_logging_includes_context() -> None:
    logger = get_logger("tests.exception").bind(component="channel")
    base_logger = logger.logger
    base_logger.setLevel(logging.INFO)

    with _capture(base_logger) as records:
        try:
            raise ConnectionResetError("boom")
        except ConnectionResetError:
            logger.exception("failed", event="tests.error", context={"port": 8125})

    assert len(records) == 1
    record = records[0]
    assert record.event == "tests.error"
    assert record.context == {"component": "channel", "port": 8125}
    assert record.exc_info is not None


def test_structured_logger_requires_event_metadata() -> None:
    logger = get_logger("tests.missing")
    logger.logger.setLevel(logging.INFO)

    with pytest.raises(TypeError):
        logger.info("missing-event", extra={"detail": True})


def test_structured_logger_rejects_non_mapping_context() -> None:
    logger = get_logger("tests.context")
    logger.logger.setLevel(logging.INFO)

    with pytest.raises(TypeError):
        logger.info("bad", event="tests.bad", context=["not", "a", "mapping"])


def test_configure_logging_respects_existing_handlers() -> None:
    root = logging.getLogger()
    root_handler = logging.NullHandler()
    root.handlers = [root_handler]

    configure_logging(level="DEBUG", json_mode=True)

    assert root.handlers == [root_handler]
    assert root.level == logging.DEBUG


def test_configure_logging_honors_env_toggle() -> None:
    configure_logging(force=True, env={"STATSD_CLIENT_LOG_FORMAT": "json"})

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter.__class__.__name__ == "_JsonFormatter"


def test_configure_logging_honors_env_level() -> None:
    configure_logging(force=True, env={"STATSD_CLIENT_LOG_LEVEL": "warning"})

    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_json_mode_emits_structured_output(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    stream = StringIO()
    monkeypatch.setattr(sys, "stderr", stream)

    configure_logging(json_mode=True, force=True)

    logger = get_logger("tests.logging.json").bind(component="json-test")
    logger.logger.setLevel(logging.INFO)

    logger.info("payload", event="tests.json", context={"key": "value", "obj": object()})

    root = logging.getLogger()
    root.handlers[0].flush()

    payload = json.loads(stream.getvalue().strip())
    assert payload["event"] == "tests.json"
    assert payload["context"]["component"] == "json-test"
    assert payload["context"]["key"] == "value"
    assert payload["context"]["obj"].startswith("<object object")
    assert payload["message"] == "payload"
    assert payload["logger"] == "tests.logging.json"


def test_configure_logging_text_mode_tolerates_plain_records(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    stream = StringIO()
    monkeypatch.setattr(sys, "stderr", stream)

    configure_logging(force=True, env={})

    logging.getLogger("tests.logging.plain").warning("plain record")
    logging.getLogger().handlers[0].flush()

    output = stream.getvalue()
    assert "plain record" in output
    assert "WARNING" in output


def test_configure_logging_accepts_integer_level() -> None:
    configure_logging(level=logging.WARNING, force=True)

    assert logging.getLogger().level == logging.WARNING


def test_coerce_level() -> None:
    assert _coerce_level(None) == logging.INFO
    assert _coerce_level("debug") == logging.DEBUG
    assert _coerce_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        _coerce_level("chatty")
