"""Configuration model and loaders for cargo-check-i18n.

Responsibilities:
- Define the translation runtime configuration as an immutable dataclass.
- Load and validate the YAML configuration file once per invocation.
- Write the example configuration template on first run.

Key types:
- `CheckConfig`: read-only settings snapshot shared by all pipeline components.
- `ConfigLoader`: static construction helpers for `CheckConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path
from typing import Any, Mapping

import typer
import yaml

from .llm.json_path import DEFAULT_RESPONSE_PATH
from .parsing import normalize_optional_string, parse_float


APP_NAME = "cargo-check-i18n"
CONFIG_FILE_NAME = "config.yaml"
CACHE_FILE_NAME = f".{APP_NAME}-cache.json"

DEFAULT_LANGUAGE = "zh-CN"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_RATE_LIMIT = 8.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

CONFIG_TEMPLATE = f"""\
version: "1.0"
language: "{DEFAULT_LANGUAGE}"
api_url: "{DEFAULT_API_URL}"
api_key: ""
model: "{DEFAULT_MODEL}"
temperature: {DEFAULT_TEMPERATURE}
# Maximum translation requests per second (minimum 1).
rate_limit: {int(DEFAULT_RATE_LIMIT)}
# Optional raw JSON body with {{{{model}}}}, {{{{prompt}}}} and {{{{temperature}}}} placeholders.
# request_body_template: '{{"model": "{{{{model}}}}", "prompt": "{{{{prompt}}}}"}}'
# Dot-separated keys/indices locating the translated text in the response JSON.
response_path: "{DEFAULT_RESPONSE_PATH}"
request_timeout_seconds: {int(DEFAULT_REQUEST_TIMEOUT_SECONDS)}
"""


def default_config_path() -> Path:
    """Return the per-user configuration file location."""

    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def cache_path_for(project_dir: Path) -> Path:
    """Return the translation cache file location for a project directory."""

    return project_dir / CACHE_FILE_NAME


@dataclass(frozen=True, slots=True)
class CheckConfig:
    """Read-only settings for one translation run.

    Attributes:
        language: Target language code for translated diagnostics.
        api_url: Full endpoint URL receiving translation requests.
        api_key: Bearer credential sent with each request.
        model: Model identifier substituted into the request body.
        temperature: Sampling temperature substituted into the request body.
        rate_limit: Maximum requests per second; values below 1 act as 1.
        request_body_template: Optional raw request body with placeholders.
        response_path: Dotted path to the translation string in the response.
        request_timeout_seconds: Per-request network timeout.
        version: Informational configuration format version.
    """

    language: str = DEFAULT_LANGUAGE
    api_url: str = DEFAULT_API_URL
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    rate_limit: float = DEFAULT_RATE_LIMIT
    request_body_template: str | None = None
    response_path: str = DEFAULT_RESPONSE_PATH
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    version: str | None = None

    def validate(self) -> None:
        """Validate configuration values before any work begins."""

        if self.api_key is None or not self.api_key.strip():
            raise ValueError(
                "`api_key` is missing; fill it in the configuration file or set "
                "`OPENAI_API_KEY`."
            )
        self._require_non_empty(self.language, "language")
        self._require_non_empty(self.api_url, "api_url")
        self._require_non_empty(self.model, "model")
        for field_name in ("temperature", "rate_limit", "request_timeout_seconds"):
            if not math.isfinite(getattr(self, field_name)):
                raise ValueError(f"`{field_name}` must be a finite number.")
        if self.rate_limit < 0.0:
            raise ValueError("`rate_limit` must not be negative.")
        if self.request_timeout_seconds <= 0.0:
            raise ValueError("`request_timeout_seconds` must be a positive number.")

    @staticmethod
    def _require_non_empty(value: str, field_name: str) -> None:
        """Validate that string fields are not empty."""

        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"`{field_name}` must be a non-empty string.")


class ConfigLoader:
    """Factory methods for creating `CheckConfig` from the configuration file."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "version",
            "language",
            "api_url",
            "api_key",
            "model",
            "temperature",
            "rate_limit",
            "request_body_template",
            "response_path",
            "request_timeout_seconds",
        }
    )
    _API_KEY_ENV = "OPENAI_API_KEY"

    @staticmethod
    def write_template(path: Path, *, overwrite: bool = False) -> bool:
        """Write the example configuration and report whether a file was written."""

        if path.exists() and not overwrite:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        return True

    @staticmethod
    def from_yaml(path: Path, env: Mapping[str, str] | None = None) -> CheckConfig:
        """Create a validated config from a YAML file."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload = ConfigLoader._parse_yaml_payload(path.read_text(encoding="utf-8"), path)
        config = ConfigLoader._build_config_from_mapping(
            payload,
            source_label=f"YAML `{path}`",
            env=env_map,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any],
        source_label: str,
        env: Mapping[str, str],
    ) -> CheckConfig:
        """Build a config from a mapping payload, applying defaults for absent keys."""

        unknown = sorted(str(key) for key in payload if key not in ConfigLoader._SUPPORTED_YAML_KEYS)
        if unknown:
            raise ValueError(f"{source_label} has unsupported key(s): {', '.join(unknown)}.")

        api_key = normalize_optional_string(payload.get("api_key")) or normalize_optional_string(
            env.get(ConfigLoader._API_KEY_ENV)
        )
        return CheckConfig(
            language=normalize_optional_string(payload.get("language")) or DEFAULT_LANGUAGE,
            api_url=normalize_optional_string(payload.get("api_url")) or DEFAULT_API_URL,
            api_key=api_key,
            model=normalize_optional_string(payload.get("model")) or DEFAULT_MODEL,
            temperature=ConfigLoader._optional_float(
                payload, "temperature", default=DEFAULT_TEMPERATURE
            ),
            rate_limit=ConfigLoader._optional_float(
                payload, "rate_limit", default=DEFAULT_RATE_LIMIT
            ),
            request_body_template=ConfigLoader._optional_raw_string(
                payload, "request_body_template", source_label
            ),
            response_path=normalize_optional_string(payload.get("response_path"))
            or DEFAULT_RESPONSE_PATH,
            request_timeout_seconds=ConfigLoader._optional_float(
                payload,
                "request_timeout_seconds",
                default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
            ),
            version=normalize_optional_string(payload.get("version")),
        )

    @staticmethod
    def _optional_float(payload: Mapping[str, Any], key: str, *, default: float) -> float:
        """Parse an optional numeric key, falling back to the default when absent."""

        value = payload.get(key)
        if value is None:
            return default
        return parse_float(value, key)

    @staticmethod
    def _optional_raw_string(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
    ) -> str | None:
        """Return a string value verbatim, or `None` when absent or blank."""

        value = payload.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"{source_label} key `{key}` must be a string.")
        if not value.strip():
            return None
        return value
