"""
Logging setup for the resolvers and the CLI.

Resolver records carry the filter pair they work on and the cache key they
read or write (``extra={"cache_key": ..., "planning_period": ..., "squad": ...}``);
Jira client records carry the issue key, field id or request duration.
JSON output nests these under ``filter`` and ``jira``, and plain output
appends the filter pair so interleaved resolutions stay readable.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Record attributes collected into one JSON object per group
CONTEXT_GROUPS = {
    "filter": ("planning_period", "squad"),
    "jira": ("issue_key", "field_id", "duration_ms"),
}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the resolver and Jira attributes present on a record."""
    context: dict[str, Any] = {}

    cache_key = getattr(record, "cache_key", None)
    if cache_key is not None:
        context["cache_key"] = cache_key

    for group, keys in CONTEXT_GROUPS.items():
        values = {key: getattr(record, key) for key in keys if getattr(record, key, None) is not None}
        if values:
            context[group] = values

    return context


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for automation environments."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(record_context(record))

        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


class FilterPairFormatter(logging.Formatter):
    """Plain message, suffixed with the filter pair when the record has one."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pair = record_context(record).get("filter")
        if pair and len(pair) == 2:
            return f"{message} [{pair['planning_period']} / {pair['squad']}]"
        return message


def setup_structured_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure root logging for the CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, use JSON format; otherwise plain messages
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(FilterPairFormatter("%(message)s"))

    logging.root.handlers = [handler]
    logging.root.setLevel(log_level)
