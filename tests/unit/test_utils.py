"""Unit tests for rate limiting and structured logging."""

import json
import logging

import pytest

from pi_hierarchy.utils.rate_limiter import RateLimiter
from pi_hierarchy.utils.structured_logging import (
    FilterPairFormatter,
    StructuredFormatter,
    setup_structured_logging,
)


class TestRateLimiter:
    """Tests for the token bucket."""

    def test_burst_consumes_tokens(self):
        limiter = RateLimiter(requests_per_second=0.001, burst_size=3)

        limiter.acquire()
        limiter.acquire()

        assert limiter.available_tokens == pytest.approx(1.0, abs=0.01)

    def test_invalid_rate_rejected(self):
        with pytest.raises(ValueError):
            RateLimiter(requests_per_second=0)


def make_record(msg="Cache hit for key: %s", args=("epics::PI::S",), **extra):
    record = logging.LogRecord(
        name="pi_hierarchy.services.epics",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_groups_resolver_context(self):
        record = make_record(cache_key="epics::PI::S", planning_period="PI", squad="S")

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "Cache hit for key: epics::PI::S"
        assert entry["level"] == "INFO"
        assert entry["cache_key"] == "epics::PI::S"
        assert entry["filter"] == {"planning_period": "PI", "squad": "S"}
        assert "jira" not in entry

    def test_groups_jira_context(self):
        record = make_record("Error fetching issue with key %s", ("P1",), issue_key="P1", duration_ms=12)

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["jira"] == {"issue_key": "P1", "duration_ms": 12}
        assert "filter" not in entry
        assert "cache_key" not in entry


class TestFilterPairFormatter:
    """Tests for FilterPairFormatter."""

    def test_appends_filter_pair(self):
        record = make_record(cache_key="epics::PI 1::Squad A", planning_period="PI 1", squad="Squad A")

        text = FilterPairFormatter("%(message)s").format(record)

        assert text == "Cache hit for key: epics::PI 1::Squad A [PI 1 / Squad A]"

    def test_plain_message_without_pair(self):
        record = make_record("Rate limit: waiting 0.10s", ())

        assert FilterPairFormatter("%(message)s").format(record) == "Rate limit: waiting 0.10s"


class TestSetupStructuredLogging:
    """Tests for setup_structured_logging."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        handlers, level = logging.root.handlers[:], logging.root.level
        yield
        logging.root.handlers = handlers
        logging.root.setLevel(level)

    @pytest.mark.parametrize("json_output, formatter", [
        (True, StructuredFormatter),
        (False, FilterPairFormatter),
    ])
    def test_installs_single_handler(self, json_output, formatter):
        setup_structured_logging("debug", json_output=json_output)

        assert len(logging.root.handlers) == 1
        assert isinstance(logging.root.handlers[0].formatter, formatter)
        assert logging.root.level == logging.DEBUG
