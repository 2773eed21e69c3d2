# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .headers import header_value, without_header
from .models import HttpMethod, HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def send(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent
        timeout = httpx.Timeout(request.timeout)

        if request.method is HttpMethod.MULTIPART:
            # httpx writes its own multipart Content-Type carrying the boundary.
            wire_headers = without_header(headers, "Content-Type")
            # Fields travel as filename-less parts so the body is multipart even without files.
            parts = [(name, (None, value)) for name, value in (request.fields or {}).items()]
            parts.extend(part.as_httpx_file() for part in (request.files or {}).values())
            resp = await self._client.request(
                request.method.verb,
                request.url,
                headers=wire_headers,
                files=parts,
                timeout=timeout,
            )
        else:
            content = request.body if request.method in (HttpMethod.POST, HttpMethod.PUT) else None
            resp = await self._client.request(
                request.method.verb,
                request.url,
                headers=headers,
                content=content,
                timeout=timeout,
            )

        return HttpResponse.from_httpx(resp, request_headers=headers)

    async def aclose(self) -> None:
        await self._client.aclose()
