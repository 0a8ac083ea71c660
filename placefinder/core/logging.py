"""Structured logging setup."""
import logging, sys, json
from typing import Optional

from placefinder.config.settings import get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for k, v in vars(record).items():
            if k in _RESERVED or k.startswith("_"):
                continue
            base[k] = v
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, default=str)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Attach one stdout handler to the root logger; level and format default to settings."""
    root = logging.getLogger()
    if root.handlers:
        return
    settings = get_settings()
    root.setLevel(level or settings.log_level.value)
    handler = logging.StreamHandler(sys.stdout)
    if (fmt or settings.log_format) == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
