"""Dev-mode diagnostics printed to the console next to the structured log."""

from __future__ import annotations

import traceback
from typing import Any, Mapping

from .config import BaseConfig
from .logging_config import get_logger

logger = get_logger("dev")


def in_dev_mode(config: BaseConfig | None) -> bool:
    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def format_dev_line(message: str, context: Mapping[str, Any] | None = None) -> str:
    """Render ``[DEV] message (k=v ...)`` with keys in insertion order."""

    line = f"[DEV] {message}"
    if context:
        extras = " ".join(f"{key}={value}" for key, value in context.items())
        if extras:
            line = f"{line} ({extras})"
    return line


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Echo a diagnostic line (and traceback) when dev mode is enabled."""

    if not in_dev_mode(config):
        return

    line = format_dev_line(message, context)
    print(line)
    logger.debug(line, extra={"dev_context": dict(context or {})})
    if exc is not None:
        print("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), end="")
