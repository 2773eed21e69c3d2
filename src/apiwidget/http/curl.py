# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Curl command generation for request diagnostics."""

from __future__ import annotations

from collections.abc import Mapping


def generate_curl_command(
    url: str,
    method: str,
    headers: Mapping[str, str],
    body: bytes | str | None = None,
    fields: Mapping[str, str] | None = None,
) -> str:
    """
    Render a curl invocation equivalent to the request.

    Form fields win over the body; either is only emitted for POST and PUT.
    """
    lines = [f"curl --request {method} \\", f"  --url {url} \\"]
    for key, value in headers.items():
        lines.append(f"  --header '{key}: {value}' \\")

    if method in ("POST", "PUT"):
        if fields is not None:
            for key, value in fields.items():
                lines.append(f"  --form '{key}={value}' \\")
        elif body is not None:
            if isinstance(body, (bytes, bytearray)):
                body = bytes(body).decode("utf-8", errors="replace")
            lines.append(f"  --data '{body}'")

    command = "\n".join(lines)
    # The last continuation marker has nothing to continue.
    if command.endswith(" \\"):
        command = command[:-2]
    return command.rstrip()


__all__ = ["generate_curl_command"]
