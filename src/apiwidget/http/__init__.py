# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .curl import generate_curl_command
from .headers import build_request_headers, header_value
from .httpx_client import HttpxClient
from .models import Headers, HttpMethod, HttpRequest, HttpResponse, MultipartFile
from .progress import ProgressIndicator, loader_scope
from .retry import RetryPolicy

__all__ = [
    "Headers",
    "HttpClient",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "MultipartFile",
    "ProgressIndicator",
    "RetryPolicy",
    "StubHttpClient",
    "build_request_headers",
    "create_default_http_client",
    "generate_curl_command",
    "header_value",
    "loader_scope",
]
