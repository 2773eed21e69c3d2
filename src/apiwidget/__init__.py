# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
apiwidget package entrypoint.

A thin layer over an async HTTP client: one configuration shared by every
request, bearer-token headers, a progress indicator around each attempt,
fixed-delay retry on timeouts and transport failures, and debug diagnostics
with optional curl command generation. The transport is abstracted behind an
injectable client interface.
"""

from .config import (
    ApiConfig,
    HttpSettings,
    get_config,
    initialize,
    load_http_settings,
    update_access_token,
)
from .errors import ApiWidgetError, ConfigurationError, ErrorCategory, InvalidRequestError
from .http import (
    HttpClient,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    MultipartFile,
    ProgressIndicator,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .runtime import ApiClient
from .version import __version__
from .widget import ApiWidget

__all__ = [
    "ApiClient",
    "ApiConfig",
    "ApiWidget",
    "ApiWidgetError",
    "ConfigurationError",
    "ErrorCategory",
    "HttpClient",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidRequestError",
    "MultipartFile",
    "ProgressIndicator",
    "StubHttpClient",
    "create_default_http_client",
    "get_config",
    "initialize",
    "load_http_settings",
    "setup_logging",
    "update_access_token",
    "__version__",
]
