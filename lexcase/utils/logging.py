"""Logging configuration for LexCase."""

import logging
import json
import re
from datetime import datetime, timezone

# Messages are written as "[cases] Created case: ..."; the bracketed part is the area
_AREA_PREFIX = re.compile(r"^\[(?P<area>[\w-]+)\]\s*")

# Attributes every LogRecord has; anything else was passed through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    The ``[area]`` prefix is lifted out of the message into its own key, and
    values given through ``extra=`` are kept under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        area = None
        match = _AREA_PREFIX.match(message)
        if match:
            area = match.group("area")
            message = message[match.end():]

        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "area": area,
            "msg": message,
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(name: str = "lexcase", level=logging.INFO, json_format: bool = True) -> logging.Logger:
    """Attach a single stream handler to the ``name`` logger.

    Calling it again for the same logger replaces the handler instead of
    stacking a second one.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for existing in list(logger.handlers):
        if getattr(existing, "_lexcase_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    handler._lexcase_handler = True
    logger.addHandler(handler)

    return logger
