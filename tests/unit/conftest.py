# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from apiwidget import config


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch):
    for name in (
        "APIWIDGET_HTTP_TIMEOUT",
        "APIWIDGET_HTTP_RETRY_DELAY",
        "APIWIDGET_HTTP_MAX_ATTEMPTS",
        "APIWIDGET_CREATE_CURL",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reset()
    yield
    config.reset()


class RecordingIndicator:
    def __init__(self, events):
        self._events = events

    def begin(self):
        self._events.append("begin")

    def end(self):
        self._events.append("end")


@pytest.fixture
def loader_events():
    return []


@pytest.fixture
def recording_loader(loader_events):
    return lambda: RecordingIndicator(loader_events)
