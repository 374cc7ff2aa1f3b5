import json
import logging

import pytest

from tours_bridge.core.logging import (
    CorrelationIdFilter,
    StructuredLogFormatter,
    correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def reset_correlation_id():
    token = correlation_id.set("")
    yield
    correlation_id.reset(token)


def render(message="hello", **extra):
    record = logging.LogRecord("tours_bridge.test", logging.INFO, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    CorrelationIdFilter().filter(record)
    return record, json.loads(StructuredLogFormatter().format(record))


def test_no_correlation_id_outside_a_request():
    record, data = render()

    assert record.correlation_id == "-"
    assert "correlation_id" not in data
    assert data["message"] == "hello"
    assert data["level"] == "INFO"


def test_correlation_id_included_when_set():
    set_correlation_id("abc-123")

    _, data = render()

    assert data["correlation_id"] == "abc-123"


def test_extra_fields_are_emitted():
    _, data = render(url="https://bokun.test/activity.json/search", status_code=502)

    assert data["url"] == "https://bokun.test/activity.json/search"
    assert data["status_code"] == 502
