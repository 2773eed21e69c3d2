# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for apiwidget."""

from __future__ import annotations

import logging
import os
from typing import Any

DEFAULT_LOG_LEVEL = os.getenv("APIWIDGET_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def log_debug(logger: logging.Logger, content: Any, title: str = "") -> None:
    """Emit one titled diagnostic entry at DEBUG level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if title:
        logger.debug("%s: %s", title, content, extra={"title": title})
    else:
        logger.debug("%s", content, extra={"title": title})


__all__ = ["log_debug", "setup_logging"]
