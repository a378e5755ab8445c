from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

"""
Core Logging.

Rôle :
- Configure un logging JSON uniforme pour toute l'application (API + uvicorn).
- Supporte des "extras" structurés (kind, record_id, attempt, method, path, status_code...)
  passés via logger.info(..., extra={...}).

Le format JSON (1 event = 1 ligne) est lisible par les agrégateurs de logs de l'hébergeur.
"""

_EXTRA_KEYS = (
    "kind",
    "record_id",
    "attempt",
    "delay_ms",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "email",
)


class JsonFormatter(logging.Formatter):
    """Formateur JSON pour logs structurés."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """
    Initialise le logging global (root) en JSON et aligne uvicorn sur la même configuration.
    Nettoie les handlers existants pour éviter les doublons (notamment avec --reload).
    """
    lvl = level.upper()

    root = logging.getLogger()
    root.setLevel(lvl)

    if root.handlers:
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = root.handlers
        logger.setLevel(lvl)
