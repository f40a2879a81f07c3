# shared/logging.py
import logging, json, sys
from typing import Any, Mapping

_RESERVED = ("context",)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # log.info("...", extra={"context": {...}}) lands at the top level
        ctx = getattr(record, "context", None)
        if isinstance(ctx, Mapping):
            for k, v in ctx.items():
                if k not in payload:
                    payload[k] = v
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_json_logging(level: int | str = logging.INFO, stream=None):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
