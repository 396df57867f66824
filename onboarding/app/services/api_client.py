"""Client helpers for talking to the scheduling backend API."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
import urllib.error
import urllib.request

from flask import current_app

LOGGER = logging.getLogger(__name__)


class ApiCommunicationError(RuntimeError):
    """Raised when the backend API cannot be reached."""


class ApiResponseError(RuntimeError):
    """Raised when the backend API answers with a non-success status."""

    def __init__(self, status: int, payload: Any = None) -> None:
        super().__init__(f"API responded with status {status}.")
        self.status = status
        self.payload = payload

    @property
    def message(self) -> str | None:
        """Return the ``message`` field of a structured error body, if any."""

        if not isinstance(self.payload, dict):
            return None
        message = self.payload.get("message")
        if isinstance(message, str) and message:
            return message
        return None


def _decode_error_body(exc: urllib.error.HTTPError) -> Any:
    try:
        body = exc.read()
    except OSError:  # pragma: no cover - connection dropped mid-body
        return None
    if not body:
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        LOGGER.debug("Error body from API was not JSON: %r", body[:200])
        return None


@dataclass(slots=True)
class ApiClient:
    """Minimal JSON client bound to one base URL and optional bearer token."""

    base_url: str
    access_token: str | None = None
    timeout: float | None = None

    @classmethod
    def from_config(cls, access_token: str | None = None) -> "ApiClient":
        return cls(
            base_url=current_app.config["API_BASE_URL"],
            access_token=access_token,
            timeout=current_app.config.get("API_TIMEOUT"),
        )

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self.request("POST", path, payload)

    def put(self, path: str, payload: dict[str, Any]) -> Any:
        return self.request("PUT", path, payload)

    def request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        """Send a JSON request and return the decoded body of a 2xx response.

        Non-2xx responses raise :class:`ApiResponseError` carrying the decoded
        body, transport failures raise :class:`ApiCommunicationError`.
        """

        url = self.base_url.rstrip("/") + "/" + path.lstrip("/")
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None

        request = urllib.request.Request(url, data=data, headers=headers, method=method)
        options: dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout

        LOGGER.debug("Sending %s %s", method, url)
        try:
            with urllib.request.urlopen(request, **options) as response:
                body = response.read()
        except urllib.error.HTTPError as exc:
            raise ApiResponseError(exc.code, _decode_error_body(exc)) from exc
        except urllib.error.URLError as exc:
            raise ApiCommunicationError(f"Unable to contact API at {url}.") from exc

        if not body:
            return None
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Success bodies are informational only.
            LOGGER.debug("Ignoring non-JSON body from %s %s", method, url)
            return None
