"""
Logging setup and structured event lines.
"""

import json
import logging
from typing import Any, Dict


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the package logger."""
    root = logging.getLogger("carbon_registry")
    root.setLevel(level.upper())
    if not any(getattr(h, "_carbon_registry", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        handler._carbon_registry = True
        root.addHandler(handler)


def log_event(logger: logging.Logger, event: str, payload: Dict[str, Any]) -> None:
    """Emit one committed ledger event as a compact JSON line."""
    line: Dict[str, Any] = {"event": event}
    line.update(payload)
    logger.info(json.dumps(line, sort_keys=True, separators=(",", ":"), default=str))
