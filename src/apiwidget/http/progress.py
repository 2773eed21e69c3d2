# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Progress indicator capability shown while a request is in flight."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from ..config import ApiConfig


class ProgressIndicator(Protocol):
    """Implemented by the calling environment (spinner, overlay, status line...)."""

    def begin(self) -> None: ...

    def end(self) -> None: ...


@contextmanager
def loader_scope(config: ApiConfig, show_loader: bool = True) -> Iterator[ProgressIndicator | None]:
    """
    Show a fresh indicator from ``config.loader`` for the duration of the block.

    ``end()`` runs on every exit path. Yields None when no indicator is shown.
    """
    if not show_loader or config.loader is None:
        yield None
        return

    indicator = config.loader()
    indicator.begin()
    try:
        yield indicator
    finally:
        indicator.end()


__all__ = ["ProgressIndicator", "loader_scope"]
