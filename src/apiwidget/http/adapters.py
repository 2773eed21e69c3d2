# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations for tests and offline use."""

from __future__ import annotations

import asyncio
from dataclasses import replace

from .client import HttpClient
from .models import HttpRequest, HttpResponse

StubOutcome = HttpResponse | BaseException


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Each URL maps to a list of outcomes consumed in order; the last one repeats.
    An outcome that is an exception instance is raised instead of returned.
    ``delay`` sleeps before answering, to simulate slow endpoints.
    """

    def __init__(self, responses: dict[str, StubOutcome | list[StubOutcome]] | None = None, *, delay: float = 0.0):
        self._responses: dict[str, list[StubOutcome]] = {}
        for url, outcome in (responses or {}).items():
            self.add(url, outcome)
        self.delay = delay
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, outcome: StubOutcome | list[StubOutcome]) -> None:
        self._responses[url] = list(outcome) if isinstance(outcome, list) else [outcome]

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)

        outcomes = self._responses.get(request.url)
        if not outcomes:
            return HttpResponse(status_code=404, text="No stubbed response configured", url=request.url, request_headers=dict(request.headers))

        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return replace(
            outcome,
            request_headers=outcome.request_headers or dict(request.headers),
            url=outcome.url or request.url,
        )

    async def aclose(self) -> None:
        self.closed = True
