# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import logging
import time

import httpx
import pytest

from apiwidget import config
from apiwidget.config import ApiConfig
from apiwidget.errors import ConfigurationError, InvalidRequestError
from apiwidget.http.adapters import StubHttpClient
from apiwidget.http.models import HttpMethod, HttpResponse
from apiwidget.widget import ApiWidget

URL = "https://api.example.com/test"


class Recorder:
    def __init__(self):
        self.toasts = []
        self.statuses = []

    def toast(self, context, message):
        self.toasts.append((context, message))

    def status(self, context, response):
        self.statuses.append((context, response))


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def configured(recorder, recording_loader):
    return config.initialize(
        access_token="test_token",
        timeout=30,
        loader=recording_loader,
        toast=recorder.toast,
        handle_response_status=recorder.status,
    )


def test_get_request_end_to_end(configured, recorder, loader_events):
    client = StubHttpClient({URL: HttpResponse.from_text('{"data":"test"}', 200)})
    widget = ApiWidget(URL, HttpMethod.GET, context="ctx", client=client)

    result = asyncio.run(widget.send_request())

    assert result.status_code == 200
    assert result.body == '{"data":"test"}'
    assert client.calls == 1
    sent = client.requests[0]
    assert sent.method is HttpMethod.GET
    assert sent.body is None
    assert sent.timeout == 30
    assert sent.headers == {"Authorization": "Bearer test_token", "Content-Type": "application/json"}
    assert recorder.statuses == [("ctx", result)]
    assert loader_events == ["begin", "end"]


def test_post_sends_body_verbatim(configured):
    client = StubHttpClient({URL: HttpResponse.from_text('{"data":"test"}', 201)})
    widget = ApiWidget(URL, "post", body='{"key": "value"}', show_loader=False, client=client)

    result = asyncio.run(widget.send_request())

    assert result.status_code == 201
    assert client.requests[0].body == '{"key": "value"}'


def test_status_hook_runs_for_error_statuses(configured, recorder):
    client = StubHttpClient({URL: HttpResponse.from_text('{"error": "Not found"}', 404)})
    result = asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert result.status_code == 404
    assert [resp.status_code for _, resp in recorder.statuses] == [404]
    assert recorder.toasts == []


def test_custom_headers_suppress_authorization(recorder):
    config.initialize(access_token="tok", custom_headers={"X-Api-Key": "k"}, toast=recorder.toast)
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})
    asyncio.run(ApiWidget(URL, HttpMethod.DELETE, client=client).send_request())
    assert client.requests[0].headers == {"X-Api-Key": "k", "Content-Type": "application/json"}


def test_explicit_config_does_not_need_store():
    cfg = ApiConfig(access_token="explicit")
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})
    asyncio.run(ApiWidget(URL, HttpMethod.PUT, body="{}", client=client, config=cfg).send_request())
    assert client.requests[0].headers["Authorization"] == "Bearer explicit"


def test_missing_configuration_fails_fast():
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})
    with pytest.raises(ConfigurationError):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert client.calls == 0


def test_get_times_out_but_multipart_is_unbounded():
    cfg = ApiConfig(access_token="tok", timeout=0.05)
    slow = StubHttpClient({URL: HttpResponse.from_text("ok")}, delay=0.2)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, client=slow, config=cfg).send_request())

    widget = ApiWidget(URL, HttpMethod.MULTIPART, fields={"a": "1"}, client=slow, config=cfg)
    result = asyncio.run(widget.send_request())
    assert result.status_code == 200
    assert slow.requests[-1].timeout is None
    assert slow.requests[-1].headers["Content-Type"] == "multipart/form-data"


def test_timeout_without_retry_is_reraised_once(configured, recorder, loader_events):
    client = StubHttpClient({URL: httpx.ReadTimeout("timed out")})
    with pytest.raises(httpx.ReadTimeout):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert client.calls == 1
    assert recorder.toasts == []
    assert loader_events == ["begin", "end"]


def test_timeout_with_retry_delay_reissues_identical_request(recorder, recording_loader, loader_events):
    config.initialize(
        access_token="tok",
        timeout=5,
        retry_delay=0.05,
        loader=recording_loader,
        toast=recorder.toast,
    )
    timeout = httpx.ReadTimeout("timed out")
    client = StubHttpClient({URL: [timeout, timeout, HttpResponse.from_text("ok")]})

    started = time.monotonic()
    result = asyncio.run(ApiWidget(URL, HttpMethod.POST, body="{}", client=client).send_request())
    elapsed = time.monotonic() - started

    assert result.text == "ok"
    assert client.calls == 3
    assert elapsed >= 0.09
    assert client.requests[0] == client.requests[1] == client.requests[2]
    assert loader_events == ["begin", "end"] * 3
    assert recorder.toasts == []


def test_persistent_timeout_stops_at_attempt_cap(recorder):
    config.initialize(access_token="tok", retry_delay=0.01, max_attempts=3, toast=recorder.toast)
    client = StubHttpClient({URL: httpx.ReadTimeout("timed out")})
    with pytest.raises(httpx.ReadTimeout):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert client.calls == 3
    assert recorder.toasts == []


def test_transport_error_without_retry_shows_message(configured, recorder, loader_events):
    client = StubHttpClient({URL: httpx.ConnectError("Network down")})
    with pytest.raises(httpx.ConnectError):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, context="ctx", client=client).send_request())
    assert client.calls == 1
    assert recorder.toasts == [("ctx", "Network error: Network down")]
    assert loader_events == ["begin", "end"]


def test_transport_error_with_retry_recovers(recorder):
    config.initialize(access_token="tok", retry_delay=0.01, toast=recorder.toast)
    client = StubHttpClient({URL: [httpx.ConnectError("Network down"), HttpResponse.from_text("ok")]})
    result = asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert result.text == "ok"
    assert client.calls == 2
    assert recorder.toasts == []


def test_retry_picks_up_refreshed_token(recorder):
    config.initialize(access_token="old", retry_delay=0.01, toast=recorder.toast)
    client = StubHttpClient({URL: [httpx.ConnectError("expired"), HttpResponse.from_text("ok")]})

    async def run():
        task = asyncio.create_task(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
        while client.calls == 0:
            await asyncio.sleep(0)
        config.update_access_token("new")
        return await task

    asyncio.run(run())
    assert client.requests[0].headers["Authorization"] == "Bearer old"
    assert client.requests[1].headers["Authorization"] == "Bearer new"


def test_empty_multipart_is_rejected_before_transport(configured, recorder, loader_events):
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})
    widget = ApiWidget(URL, HttpMethod.MULTIPART, fields={}, files={}, context="ctx", client=client)
    with pytest.raises(InvalidRequestError):
        asyncio.run(widget.send_request())
    assert client.calls == 0
    assert recorder.toasts == [("ctx", "An error occurred: Fields or files are required for multipart request")]
    assert loader_events == ["begin", "end"]


def test_invalid_multipart_is_not_retried(recorder):
    config.initialize(access_token="tok", retry_delay=0.01, toast=recorder.toast)
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})
    with pytest.raises(InvalidRequestError):
        asyncio.run(ApiWidget(URL, HttpMethod.MULTIPART, client=client).send_request())
    assert len(recorder.toasts) == 1


def test_unexpected_error_shows_generic_message(configured, recorder):
    client = StubHttpClient({URL: ValueError("bad payload")})
    with pytest.raises(ValueError):
        asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client).send_request())
    assert recorder.toasts == [(None, "An error occurred: bad payload")]


def test_multipart_sends_fields_and_files(configured):
    client = StubHttpClient({URL: HttpResponse.from_text("uploaded", 201)})
    part = ApiWidget.create_multipart_file_from_bytes("file", b"abc", filename="test.txt")
    widget = ApiWidget(URL, HttpMethod.MULTIPART, fields={"title": "t"}, files={"file": part}, client=client)

    asyncio.run(widget.send_request())

    sent = client.requests[0]
    assert sent.method.verb == "POST"
    assert sent.fields == {"title": "t"}
    assert sent.files == {"file": part}
    assert sent.body is None


def test_create_multipart_file_helpers(tmp_path):
    part = ApiWidget.create_multipart_file_from_bytes("file", [1, 2, 3], filename="test.txt")  # type: ignore[arg-type]
    assert part.field == "file"
    assert part.filename == "test.txt"

    path = tmp_path / "test.txt"
    path.write_text("test content")
    from_path = asyncio.run(ApiWidget.create_multipart_file("file", path))
    assert from_path.field == "file"
    assert from_path.content == b"test content"


def test_diagnostics_include_body_and_curl(caplog):
    caplog.set_level(logging.DEBUG, logger="apiwidget.widget")
    cfg = ApiConfig(access_token="tok", create_curl=True)
    client = StubHttpClient({URL: HttpResponse.from_text('{"data":"test"}', 201)})

    asyncio.run(ApiWidget(URL, HttpMethod.POST, body='{"k": 1}', client=client, config=cfg).send_request())

    titles = [getattr(record, "title", "") for record in caplog.records]
    assert titles == ["URL", "METHOD", "HEADERS", "STATUS CODE", "RESPONSE TIME", "CURL COMMAND", "RESPONSE BODY"]
    assert f"URL: {URL}" in caplog.text
    assert "METHOD: POST" in caplog.text
    assert "STATUS CODE: 201" in caplog.text
    assert "--header 'Authorization: Bearer tok'" in caplog.text
    assert "--data '{\"k\": 1}'" in caplog.text
    assert 'RESPONSE BODY: {"data":"test"}' in caplog.text


def test_diagnostics_omit_body_for_500(caplog):
    caplog.set_level(logging.DEBUG, logger="apiwidget.widget")
    cfg = ApiConfig(access_token="tok")
    client = StubHttpClient({URL: HttpResponse.from_text("secret stack trace", 500)})

    result = asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client, config=cfg).send_request())

    assert result.status_code == 500
    assert "STATUS CODE: 500" in caplog.text
    assert "secret stack trace" not in caplog.text
    assert "CURL COMMAND" not in caplog.text


def test_default_client_is_created_and_closed(monkeypatch):
    stub = StubHttpClient({URL: HttpResponse.from_text("ok")})
    monkeypatch.setattr("apiwidget.widget.create_default_http_client", lambda: stub)
    cfg = ApiConfig(access_token="tok")

    result = asyncio.run(ApiWidget(URL, HttpMethod.GET, config=cfg).send_request())

    assert result.text == "ok"
    assert stub.closed is True


def test_shared_stub_reports_each_requests_own_headers():
    client = StubHttpClient({URL: HttpResponse.from_text("ok")})

    first = asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client, config=ApiConfig(access_token="a")).send_request())
    second = asyncio.run(ApiWidget(URL, HttpMethod.GET, client=client, config=ApiConfig(access_token="b")).send_request())

    assert first.request_headers["Authorization"] == "Bearer a"
    assert second.request_headers["Authorization"] == "Bearer b"


def test_multipart_diagnostics_render_curl_form_lines(caplog):
    caplog.set_level(logging.DEBUG, logger="apiwidget.widget")
    cfg = ApiConfig(access_token="tok", create_curl=True)
    client = StubHttpClient({URL: HttpResponse.from_text("uploaded", 201)})
    part = ApiWidget.create_multipart_file_from_bytes("file", b"abc", filename="test.txt")
    widget = ApiWidget(URL, HttpMethod.MULTIPART, fields={"title": "hello"}, files={"file": part}, client=client, config=cfg)

    asyncio.run(widget.send_request())

    curl = next(record.getMessage() for record in caplog.records if getattr(record, "title", "") == "CURL COMMAND")
    assert "curl --request POST" in curl
    assert f"--url {URL}" in curl
    assert "--header 'Content-Type: multipart/form-data'" in curl
    assert "--form 'title=hello'" in curl
    assert "--data" not in curl
    assert "METHOD: MULTIPART" in caplog.text
