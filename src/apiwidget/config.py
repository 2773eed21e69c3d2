# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Configuration helpers for apiwidget.

Two layers live here:

- ``HttpSettings``: environment-backed transport defaults, read at call time.
- ``ApiConfig``: the immutable per-application configuration. One instance is
  active per process; ``initialize`` replaces it and ``update_access_token``
  swaps only the token.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from .errors import ConfigurationError
from .version import __version__

if TYPE_CHECKING:
    from .http.models import HttpResponse
    from .http.progress import ProgressIndicator

DEFAULT_USER_AGENT = f"apiwidget/{__version__}"

ToastHook = Callable[[Any, str], None]
StatusHook = Callable[[Any, "HttpResponse"], None]
LoaderFactory = Callable[[], "ProgressIndicator"]


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 60.0
    retry_delay: float | None = None
    max_attempts: int | None = None
    create_curl: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("APIWIDGET_HTTP_TIMEOUT", cls.timeout),
            retry_delay=_optional_float_env("APIWIDGET_HTTP_RETRY_DELAY", cls.retry_delay),
            max_attempts=_optional_int_env("APIWIDGET_HTTP_MAX_ATTEMPTS", cls.max_attempts),
            create_curl=_bool_env("APIWIDGET_CREATE_CURL", cls.create_curl),
            user_agent=os.getenv("APIWIDGET_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("APIWIDGET_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("APIWIDGET_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def _noop_logout() -> None:
    return None


def _noop_toast(_context: Any, _message: str) -> None:
    return None


@dataclass(frozen=True)
class ApiConfig:
    """
    Settings shared by every dispatched request.

    ``custom_headers`` replaces the bearer token header entirely when set.
    ``retry_delay`` enables retry on timeout/transport failure; ``max_attempts``
    caps the total number of attempts (``None`` retries until success).
    """

    access_token: str
    on_logout: Callable[[], None] = _noop_logout
    toast: ToastHook = _noop_toast
    timeout: float = 60.0
    retry_delay: float | None = None
    handle_response_status: StatusHook | None = None
    loader: LoaderFactory | None = None
    custom_headers: Mapping[str, str] | None = None
    create_curl: bool = False
    max_attempts: int | None = None

    def with_token(self, access_token: str) -> ApiConfig:
        return replace(self, access_token=access_token)


_instance: ApiConfig | None = None


def initialize(
    *,
    access_token: str,
    timeout: float | None = None,
    loader: LoaderFactory | None = None,
    on_logout: Callable[[], None] = _noop_logout,
    toast: ToastHook = _noop_toast,
    handle_response_status: StatusHook | None = None,
    custom_headers: Mapping[str, str] | None = None,
    create_curl: bool | None = None,
    retry_delay: float | None = None,
    max_attempts: int | None = None,
) -> ApiConfig:
    """
    Build an ApiConfig and make it the active instance.

    Values left as ``None`` fall back to ``HttpSettings`` from the environment.
    Calling again replaces the previous instance.
    """
    global _instance
    settings = load_http_settings()
    _instance = ApiConfig(
        access_token=access_token,
        on_logout=on_logout,
        toast=toast,
        timeout=timeout if timeout is not None else settings.timeout,
        retry_delay=retry_delay if retry_delay is not None else settings.retry_delay,
        handle_response_status=handle_response_status,
        loader=loader,
        custom_headers=dict(custom_headers) if custom_headers is not None else None,
        create_curl=create_curl if create_curl is not None else settings.create_curl,
        max_attempts=max_attempts if max_attempts is not None else settings.max_attempts,
    )
    return _instance


def get_config() -> ApiConfig:
    """Return the active ApiConfig or raise ConfigurationError."""
    if _instance is None:
        raise ConfigurationError("ApiConfig not initialized. Call apiwidget.initialize() first.")
    return _instance


def update_access_token(access_token: str) -> ApiConfig:
    """Replace the active instance with one carrying a new token."""
    global _instance
    _instance = get_config().with_token(access_token)
    return _instance


def reset() -> None:
    global _instance
    _instance = None


def token() -> str:
    return get_config().access_token


def timeout() -> float:
    return get_config().timeout


def custom_loader() -> LoaderFactory | None:
    return get_config().loader


__all__ = [
    "ApiConfig",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "LoaderFactory",
    "StatusHook",
    "ToastHook",
    "custom_loader",
    "get_config",
    "initialize",
    "load_http_settings",
    "reset",
    "timeout",
    "token",
    "update_access_token",
]
