# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request dispatcher.

``ApiWidget`` issues one HTTP request with the shared configuration applied:
bearer/custom headers, a progress indicator around each attempt, fixed-delay
retry on timeouts and transport failures, and DEBUG diagnostics (optionally
including an equivalent curl command).
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Any

from . import config as config_store
from .config import ApiConfig
from .errors import ErrorCategory, InvalidRequestError, categorize_exception, error_message
from .http.client import HttpClient, create_default_http_client
from .http.curl import generate_curl_command
from .http.headers import build_request_headers
from .http.models import HttpMethod, HttpRequest, HttpResponse, MultipartFile
from .http.progress import loader_scope
from .http.retry import RetryPolicy
from .log import log_debug

logger = logging.getLogger(__name__)


class ApiWidget:
    """
    One API call bound to a URL and method.

    ``context`` is opaque and handed to the toast and response-status hooks.
    ``config`` pins an explicit ApiConfig; when omitted the active configuration
    is read at the start of every attempt, so a refreshed token applies to retries.
    ``client`` overrides the transport; by default an httpx client is created for
    the call and closed afterwards.
    """

    def __init__(
        self,
        url: str,
        method: HttpMethod | str,
        context: Any = None,
        *,
        body: bytes | str | None = None,
        show_loader: bool = True,
        fields: dict[str, str] | None = None,
        files: dict[str, MultipartFile] | None = None,
        client: HttpClient | None = None,
        config: ApiConfig | None = None,
    ):
        self.url = url
        self.method = HttpMethod(method)
        self.context = context
        self.body = body
        self.show_loader = show_loader
        self.fields = fields
        self.files = files
        self._client = client
        self._config = config

    @staticmethod
    async def create_multipart_file(
        field_name: str,
        file_path: str | os.PathLike[str],
        content_type: str | None = None,
    ) -> MultipartFile:
        """Build a file part from a path on disk."""
        return await MultipartFile.from_path(field_name, file_path, content_type=content_type)

    @staticmethod
    def create_multipart_file_from_bytes(
        field_name: str,
        data: bytes | bytearray | memoryview,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MultipartFile:
        """Build a file part from an in-memory buffer."""
        return MultipartFile.from_bytes(field_name, data, filename=filename, content_type=content_type)

    async def send_request(self) -> HttpResponse:
        """
        Send the request and return the transport's response unmodified.

        Raises ConfigurationError when no configuration is available. Timeouts
        and transport errors are retried after ``retry_delay`` when one is
        configured; otherwise they propagate, transport errors after a toast.
        Any other error shows a generic toast and propagates.
        """
        owned_client = self._client is None
        client = self._client or create_default_http_client()
        attempt = 0
        try:
            while True:
                config = self._resolve_config()
                policy = RetryPolicy.from_config(config)
                attempt += 1
                try:
                    return await self._attempt(client, config)
                except Exception as exc:  # noqa: BLE001
                    category = categorize_exception(exc)
                    if policy.should_retry(category, attempt):
                        logger.info(
                            "Retrying %s %s in %.2fs after %s (attempt %d)",
                            self.method.verb,
                            self.url,
                            policy.delay,
                            category.value.lower(),
                            attempt,
                        )
                        await asyncio.sleep(policy.delay)
                        continue
                    if category is not ErrorCategory.TIMEOUT:
                        config.toast(self.context, error_message(category, exc))
                    raise
        finally:
            if owned_client:
                await client.aclose()

    def _resolve_config(self) -> ApiConfig:
        if self._config is not None:
            return self._config
        return config_store.get_config()

    async def _attempt(self, client: HttpClient, config: ApiConfig) -> HttpResponse:
        started = time.monotonic()
        with loader_scope(config, self.show_loader):
            request = self._build_request(config)
            if self.method is HttpMethod.MULTIPART:
                self._validate_multipart()
                response = await client.send(request)
            else:
                response = await asyncio.wait_for(client.send(request), timeout=config.timeout)
            self._log_response(config, request, response, started)

        if config.handle_response_status is not None:
            config.handle_response_status(self.context, response)
        return response

    def _build_request(self, config: ApiConfig) -> HttpRequest:
        multipart = self.method is HttpMethod.MULTIPART
        return HttpRequest(
            url=self.url,
            method=self.method,
            headers=build_request_headers(config, self.method),
            body=self.body if self.method in (HttpMethod.POST, HttpMethod.PUT) else None,
            fields=self.fields if multipart else None,
            files=self.files if multipart else None,
            timeout=None if multipart else config.timeout,
        )

    def _validate_multipart(self) -> None:
        if not self.fields and not self.files:
            raise InvalidRequestError("Fields or files are required for multipart request")

    def _log_response(self, config: ApiConfig, request: HttpRequest, response: HttpResponse, started: float) -> None:
        elapsed_ms = int((time.monotonic() - started) * 1000)
        sent_headers = response.request_headers or request.headers

        log_debug(logger, self.url, "URL")
        log_debug(logger, self.method.value.upper(), "METHOD")
        log_debug(logger, sent_headers, "HEADERS")
        log_debug(logger, response.status_code, "STATUS CODE")
        log_debug(logger, f"{elapsed_ms} ms", "RESPONSE TIME")

        if config.create_curl and logger.isEnabledFor(logging.DEBUG):
            curl = generate_curl_command(self.url, self.method.verb, sent_headers, request.body, request.fields)
            log_debug(logger, curl, "CURL COMMAND")

        if response.status_code != 500:
            log_debug(logger, response.text, "RESPONSE BODY")


__all__ = ["ApiWidget"]
