# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry policy for request dispatch."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import ApiConfig
from ..errors import ErrorCategory

RETRYABLE_CATEGORIES = frozenset({ErrorCategory.TIMEOUT, ErrorCategory.TRANSPORT})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-delay retry policy.

    No backoff and no jitter: every retry waits ``delay`` seconds. Without a delay
    nothing is retried. ``max_attempts`` of None means attempts are unbounded.
    """

    delay: float | None = None
    max_attempts: int | None = None

    @classmethod
    def from_config(cls, config: ApiConfig) -> RetryPolicy:
        max_attempts = config.max_attempts
        if max_attempts is not None:
            max_attempts = max(1, max_attempts)
        return cls(delay=config.retry_delay, max_attempts=max_attempts)

    @property
    def enabled(self) -> bool:
        return self.delay is not None

    def should_retry(self, category: ErrorCategory, attempt: int) -> bool:
        """Return True when the failure of 1-based ``attempt`` warrants another one."""
        if not self.enabled or category not in RETRYABLE_CATEGORIES:
            return False
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return False
        return True


__all__ = ["RETRYABLE_CATEGORIES", "RetryPolicy"]
