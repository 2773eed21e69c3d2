# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header assembly and lookup utilities.

HTTP header field names are case-insensitive (RFC 9110). Requests carry plain dicts,
so lookups go through ``header_value`` rather than direct indexing.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..config import ApiConfig
from .models import Headers, HttpMethod

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


def build_request_headers(config: ApiConfig, method: HttpMethod) -> Headers:
    """
    Assemble the headers for one request attempt.

    Custom headers are used verbatim and suppress the bearer token header.
    Without them a non-empty token becomes ``Authorization: Bearer <token>``.
    ``Content-Type`` is always set last and depends only on the method.
    """
    headers: Headers = {}
    if config.custom_headers is not None:
        headers.update(config.custom_headers)
    elif config.access_token:
        headers["Authorization"] = f"Bearer {config.access_token}"

    # Drop any differently-cased Content-Type from custom headers so exactly one remains.
    for key in [key for key in headers if key.lower() == "content-type"]:
        del headers[key]
    headers["Content-Type"] = MULTIPART_CONTENT_TYPE if method is HttpMethod.MULTIPART else JSON_CONTENT_TYPE
    return headers


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    lower = name.lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def without_header(headers: Mapping[str, str], name: str) -> Headers:
    """Return a copy of ``headers`` with every casing of ``name`` removed."""
    lower = name.lower()
    return {key: value for key, value in headers.items() if key.lower() != lower}


__all__ = [
    "JSON_CONTENT_TYPE",
    "MULTIPART_CONTENT_TYPE",
    "build_request_headers",
    "header_value",
    "without_header",
]
