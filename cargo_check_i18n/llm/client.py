"""HTTP client for the external translation endpoint.

Responsibilities:
- Shape the request body from a configurable template or the default
  chat-completions payload.
- POST it with bearer authentication and a bounded timeout.
- Extract the translated text from the response with a configurable JSON path.
- Raise `TranslationProviderError` for every failure so callers can fall back.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

import requests

from .json_path import PathOutcome, extract_string

if TYPE_CHECKING:
    from ..config import CheckConfig


_PLACEHOLDER_PATTERN = re.compile(r"\{\{(model|prompt|temperature)\}\}")


class TranslationProviderError(RuntimeError):
    """Raised when a translation request fails or returns unusable output."""

    def __init__(
        self,
        message: str,
        *,
        failure_kind: str = "unknown",
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize provider error metadata for logging."""

        super().__init__(message)
        self.failure_kind = failure_kind
        self.endpoint = endpoint
        self.status_code = status_code


class TranslationClient:
    """Requests-based client for one configured translation endpoint."""

    _MAX_PROVIDER_MESSAGE_CHARS = 180

    def __init__(self, config: CheckConfig, session: requests.Session | None = None) -> None:
        """Bind endpoint, credential and request shaping settings."""

        self.endpoint = config.api_url.strip()
        self.api_key = config.api_key.strip() if isinstance(config.api_key, str) else ""
        self.model = config.model
        self.temperature = config.temperature
        self.request_body_template = config.request_body_template
        self.response_path = config.response_path
        self.timeout_seconds = config.request_timeout_seconds
        self._post = session.post if session is not None else requests.post

    def translate(self, prompt: str) -> str:
        """Send one prompt and return the extracted translation text."""

        body = self.build_request_body(prompt)
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self._post(
                self.endpoint,
                headers=headers,
                data=body.encode("utf-8"),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise self._transport_error(exc) from exc

        if not 200 <= response.status_code < 300:
            provider_message = self._short_message(
                self._redact_sensitive_tokens(self._decode_body(response))
            )
            detail = f"Translation request to {self.endpoint} failed (HTTP {response.status_code})"
            if provider_message:
                detail = f"{detail}: {provider_message}"
            raise TranslationProviderError(
                detail,
                failure_kind="http_error",
                endpoint=self.endpoint,
                status_code=response.status_code,
            )

        return self._extract_translation(self._decode_json(response))

    def build_request_body(self, prompt: str) -> str:
        """Render the JSON request body for a prompt."""

        if self.request_body_template is None:
            payload = {
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": self.temperature,
            }
            return json.dumps(payload, ensure_ascii=False)

        values = {
            "model": self._json_string_content(self.model),
            "prompt": self._json_string_content(prompt),
            "temperature": json.dumps(self.temperature),
        }
        return _PLACEHOLDER_PATTERN.sub(
            lambda match: values[match.group(1)], self.request_body_template
        )

    def _decode_json(self, response: requests.Response) -> Any:
        """Parse the response body as JSON."""

        try:
            return json.loads(self._decode_body(response))
        except json.JSONDecodeError as exc:
            raise TranslationProviderError(
                f"Translation endpoint {self.endpoint} returned invalid JSON payload.",
                failure_kind="invalid_response",
                endpoint=self.endpoint,
                status_code=response.status_code,
            ) from exc

    def _extract_translation(self, payload: Any) -> str:
        """Extract the translation string located at the configured response path."""

        result = extract_string(payload, self.response_path)
        if result.found and result.value is not None:
            if not result.value.strip():
                raise TranslationProviderError(
                    f"Response value at `{self.response_path}` is empty.",
                    failure_kind="empty",
                    endpoint=self.endpoint,
                )
            return result.value
        if result.outcome is PathOutcome.NOT_STRING:
            raise TranslationProviderError(
                f"Response value at `{self.response_path}` is not a string.",
                failure_kind="not_string",
                endpoint=self.endpoint,
            )
        raise TranslationProviderError(
            f"Response is missing `{self.response_path}`.",
            failure_kind="missing_field",
            endpoint=self.endpoint,
        )

    def _transport_error(self, exc: requests.RequestException) -> TranslationProviderError:
        """Convert network-layer failures into provider errors."""

        if isinstance(exc, requests.Timeout):
            return TranslationProviderError(
                f"Translation request to {self.endpoint} timed out.",
                failure_kind="timeout",
                endpoint=self.endpoint,
            )
        return TranslationProviderError(
            f"Translation request transport error: {self._short_message(str(exc))}",
            failure_kind="transport",
            endpoint=self.endpoint,
        )

    @staticmethod
    def _json_string_content(value: str) -> str:
        """Return a value escaped for placement between JSON string quotes."""

        return json.dumps(value, ensure_ascii=False)[1:-1]

    @staticmethod
    def _decode_body(response: requests.Response) -> str:
        """Decode a response body into a best-effort UTF-8 string."""

        return bytes(response.content).decode("utf-8", errors="replace").strip()

    @classmethod
    def _redact_sensitive_tokens(cls, text: str) -> str:
        """Redact API-key-like tokens from provider error content."""

        redacted = re.sub(r"\bsk-[A-Za-z0-9_-]{8,}\b", "[redacted-key]", text)
        return re.sub(
            r"(?i)bearer\s+[A-Za-z0-9._-]{12,}",
            "Bearer [redacted-token]",
            redacted,
        )

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap provider message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_PROVIDER_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_PROVIDER_MESSAGE_CHARS - 1]}..."
