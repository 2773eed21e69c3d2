# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across apiwidget."""

from __future__ import annotations

import asyncio
import mimetypes
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

import httpx

Headers = dict[str, str]


class HttpMethod(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    MULTIPART = "multipart"

    @property
    def verb(self) -> str:
        """Method sent on the wire; multipart uploads are POSTs."""
        if self is HttpMethod.MULTIPART:
            return "POST"
        return self.value.upper()


@dataclass
class MultipartFile:
    """One file part of a multipart request."""

    field: str
    content: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def length(self) -> int:
        return len(self.content)

    def as_httpx_file(self) -> tuple[str, tuple[str | None, bytes, str | None]]:
        return self.field, (self.filename, self.content, self.content_type)

    @classmethod
    def from_bytes(
        cls,
        field_name: str,
        data: bytes | bytearray | memoryview,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MultipartFile:
        return cls(field=field_name, content=bytes(data), filename=filename, content_type=content_type)

    @classmethod
    async def from_path(cls, field_name: str, path: str | os.PathLike[str], *, content_type: str | None = None) -> MultipartFile:
        """Read ``path`` off the event loop and wrap it as a file part."""
        file_path = os.fspath(path)
        content = await asyncio.to_thread(_read_file, file_path)
        filename = os.path.basename(file_path)
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0]
        return cls(field=field_name, content=content, filename=filename, content_type=content_type)


def _read_file(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    body: bytes | str | None = None
    fields: dict[str, str] | None = None
    files: dict[str, MultipartFile] | None = None
    # None leaves the request unbounded.
    timeout: float | None = None


@dataclass
class HttpResponse:
    """HTTP response as returned by the transport, plus the headers that were sent."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    text: str = ""
    url: str | None = None
    request_headers: Headers = field(default_factory=dict)

    @property
    def body(self) -> str:
        return self.text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @classmethod
    def from_text(
        cls,
        text: str,
        status_code: int = 200,
        *,
        headers: Mapping[str, str] | None = None,
        url: str | None = None,
    ) -> HttpResponse:
        return cls(
            status_code=status_code,
            headers=dict(headers or {}),
            content=text.encode("utf-8"),
            text=text,
            url=url,
        )

    @classmethod
    def from_httpx(cls, response: httpx.Response, request_headers: Mapping[str, str] | None = None) -> HttpResponse:
        content = response.content
        encoding = response.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=content,
            text=text,
            url=str(response.url),
            request_headers=dict(request_headers or {}),
        )


__all__ = ["Headers", "HttpMethod", "HttpRequest", "HttpResponse", "MultipartFile"]
