from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_log_path

from tol.core.paths import APP_AUTHOR, APP_NAME, LOG_FILENAME


def get_logger(name: str = "tol") -> logging.Logger:
    return logging.getLogger(name)


def default_log_dir() -> Path:
    return Path(user_log_path(APP_NAME, APP_AUTHOR))


def configure_logging(
    *,
    level: str = "warning",
    format_name: str = "json",
    stream=None,
    log_dir: Path | None = None,
    filename: str = LOG_FILENAME,
) -> None:
    """Attach a single handler to the root logger.

    Script output owns stdout and stderr, so without an explicit stream or
    log directory records are dropped through a NullHandler.
    """
    normalized = level.strip().upper()
    level_value = getattr(logging, normalized, logging.WARNING)
    if format_name == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s %(name)s %(message)s")
    if stream is None:
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            stream = open(log_dir / filename, "a", encoding="utf-8")
        else:
            handler = logging.NullHandler()
            root = logging.getLogger()
            root.setLevel(level_value)
            if not root.handlers:
                root.addHandler(handler)
            return
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(level_value)
    if not root.handlers:
        root.addHandler(handler)


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.info(json.dumps(payload, sort_keys=True))
