"""JSON log output for SCE."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus the ones formatters add later
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

# Set by AnalysisContextFilter; page_url is re-added under its own key
_CONTEXT_ATTRS = frozenset({"page_url", "url_tag"})


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Keys: timestamp (UTC ISO-8601), level, message, logger (omitted for
    root), context (extra attributes and the analyzed page_url) and
    exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        context = _extra_attributes(record)
        page_url = getattr(record, "page_url", None)
        if page_url:
            context["page_url"] = page_url
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _extra_attributes(record: logging.LogRecord) -> dict[str, Any]:
    """Return the attributes passed through logger calls' extra=."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in _CONTEXT_ATTRS
        and not key.startswith("_")
    }
