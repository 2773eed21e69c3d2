# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import asyncio
from enum import Enum

import httpx


class ApiWidgetError(Exception):
    """Base error raised by apiwidget itself."""


class ConfigurationError(ApiWidgetError):
    """The configuration store was read before ``initialize`` was called."""


class InvalidRequestError(ApiWidgetError):
    """The request cannot be dispatched as described (e.g. empty multipart)."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    TRANSPORT = "TRANSPORT"
    UNKNOWN = "UNKNOWN"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    Timeouts are checked first: httpx.TimeoutException is itself a TransportError.
    """
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.RequestError, ConnectionError)):
        return ErrorCategory.TRANSPORT

    return ErrorCategory.UNKNOWN


def error_message(category: ErrorCategory, exc: BaseException) -> str:
    """User-facing message shown through the toast hook."""
    if category is ErrorCategory.TRANSPORT:
        return f"Network error: {exc}"
    return f"An error occurred: {exc}"


__all__ = [
    "ApiWidgetError",
    "ConfigurationError",
    "ErrorCategory",
    "InvalidRequestError",
    "categorize_exception",
    "error_message",
]
