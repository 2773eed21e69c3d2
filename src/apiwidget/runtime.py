# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade sharing one configuration and transport across requests."""

from __future__ import annotations

from contextlib import suppress
from typing import Any

from . import config as config_store
from .config import ApiConfig, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpMethod, HttpResponse, MultipartFile
from .widget import ApiWidget


class ApiClient:
    """
    Convenience wrapper that wires a shared HTTP client into every ApiWidget.

    With an explicit ``config`` the facade owns that configuration; otherwise each
    request reads the active one from the configuration store.
    """

    def __init__(self, config: ApiConfig | None = None, http_client: HttpClient | None = None, context: Any = None):
        self.config = config
        self.http_settings = load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.context = context

    def widget(self, url: str, method: HttpMethod | str, **kwargs: Any) -> ApiWidget:
        kwargs.setdefault("context", self.context)
        return ApiWidget(url, method, client=self.http_client, config=self.config, **kwargs)

    async def request(self, url: str, method: HttpMethod | str, **kwargs: Any) -> HttpResponse:
        return await self.widget(url, method, **kwargs).send_request()

    async def get(self, url: str, **kwargs: Any) -> HttpResponse:
        return await self.request(url, HttpMethod.GET, **kwargs)

    async def post(self, url: str, body: bytes | str | None = None, **kwargs: Any) -> HttpResponse:
        return await self.request(url, HttpMethod.POST, body=body, **kwargs)

    async def put(self, url: str, body: bytes | str | None = None, **kwargs: Any) -> HttpResponse:
        return await self.request(url, HttpMethod.PUT, body=body, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> HttpResponse:
        return await self.request(url, HttpMethod.DELETE, **kwargs)

    async def multipart(
        self,
        url: str,
        *,
        fields: dict[str, str] | None = None,
        files: dict[str, MultipartFile] | None = None,
        **kwargs: Any,
    ) -> HttpResponse:
        return await self.request(url, HttpMethod.MULTIPART, fields=fields, files=files, **kwargs)

    def update_access_token(self, access_token: str) -> ApiConfig:
        """Swap the token on the owned configuration, or on the store when none is owned."""
        if self.config is None:
            return config_store.update_access_token(access_token)
        self.config = self.config.with_token(access_token)
        return self.config

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "aclose"):
                await self.http_client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
