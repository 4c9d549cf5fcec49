"""Configuration model and loaders for the slug engine.

Responsibilities:
- Define the slug field configuration as a typed dataclass.
- Parse the host's instance parameter block (camelCase keys).
- Provide loader entry points for YAML files and environment variables.

Key types:
- `SlugFieldConfig`: normalized settings for one slug field.
- `DeliveryConfig`: Contentful space coordinates for linked-entry fetches.
- `ConfigLoader`: static construction helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_permissive_boolean, parse_seconds


_DEFAULT_DEBOUNCE_SECONDS = 0.5
_DEFAULT_ENVIRONMENT_ID = "master"
_DEFAULT_DELIVERY_URL = "https://cdn.contentful.com"


@dataclass(frozen=True, slots=True)
class SlugFieldConfig:
    """Static configuration for one slug field.

    Attributes:
        pattern: Slash-delimited slug pattern, e.g. `[field:title]/[locale]`.
        display_default_locale: Whether `[locale]` renders for the default locale.
        lock_when_published: Whether published records keep their existing slug.
        debounce_seconds: Quiet period before a field change recomputes the slug.
        legacy_separator_collapse: Collapse only the first doubled separator.
    """

    pattern: str = ""
    display_default_locale: bool = False
    lock_when_published: bool = False
    debounce_seconds: float = _DEFAULT_DEBOUNCE_SECONDS
    legacy_separator_collapse: bool = False

    def validate(self) -> None:
        """Validate configuration values before mounting."""

        if not isinstance(self.pattern, str):
            raise ValueError("`pattern` must be a string.")
        if self.debounce_seconds < 0.0:
            raise ValueError("`debounce_seconds` must be a non-negative number of seconds.")


@dataclass(frozen=True, slots=True)
class DeliveryConfig:
    """Contentful space coordinates for linked-entry fetches.

    Attributes:
        space_id: Contentful space identifier.
        access_token: Delivery or preview API token.
        environment_id: Space environment identifier.
        base_url: API base URL (delivery or preview host).
    """

    space_id: str
    access_token: str
    environment_id: str = _DEFAULT_ENVIRONMENT_ID
    base_url: str = _DEFAULT_DELIVERY_URL


class ConfigLoader:
    """Factory methods for creating `SlugFieldConfig` from external sources."""

    _PARAMETER_KEYS = {
        "pattern": "pattern",
        "displayDefaultLocale": "display_default_locale",
        "lockWhenPublished": "lock_when_published",
        "debounceSeconds": "debounce_seconds",
        "legacySeparatorCollapse": "legacy_separator_collapse",
    }
    _SUPPORTED_YAML_KEYS = frozenset(_PARAMETER_KEYS.values())
    _ENV_KEYS = {
        "BETTERSLUGS_PATTERN": "pattern",
        "BETTERSLUGS_DISPLAY_DEFAULT_LOCALE": "display_default_locale",
        "BETTERSLUGS_LOCK_WHEN_PUBLISHED": "lock_when_published",
        "BETTERSLUGS_DEBOUNCE_SECONDS": "debounce_seconds",
        "BETTERSLUGS_LEGACY_SEPARATOR_COLLAPSE": "legacy_separator_collapse",
    }

    @staticmethod
    def from_parameters(parameters: Mapping[str, Any]) -> SlugFieldConfig:
        """Create a validated config from a host instance parameter block.

        Unknown keys are ignored; hosts commonly pass additional parameters.
        """

        payload = {
            target: parameters[source]
            for source, target in ConfigLoader._PARAMETER_KEYS.items()
            if source in parameters
        }
        return ConfigLoader._build_config(payload, source_label="instance parameters")

    @staticmethod
    def from_yaml(path: Path) -> SlugFieldConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"YAML `{path}` includes unsupported key(s): {key_list}.")
        return ConfigLoader._build_config(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> SlugFieldConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload = {
            target: env_map[key]
            for key, target in ConfigLoader._ENV_KEYS.items()
            if normalize_optional_string(env_map.get(key)) is not None
        }
        return ConfigLoader._build_config(payload, source_label="environment")

    @staticmethod
    def delivery_from_env(env: Mapping[str, str] | None = None) -> DeliveryConfig | None:
        """Return delivery coordinates from the environment, or `None` when unset."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        space_id = normalize_optional_string(env_map.get("CONTENTFUL_SPACE_ID"))
        access_token = normalize_optional_string(env_map.get("CONTENTFUL_ACCESS_TOKEN"))
        if space_id is None and access_token is None:
            return None
        if space_id is None or access_token is None:
            raise ValueError(
                "`CONTENTFUL_SPACE_ID` and `CONTENTFUL_ACCESS_TOKEN` must be set together."
            )
        return DeliveryConfig(
            space_id=space_id,
            access_token=access_token,
            environment_id=(
                normalize_optional_string(env_map.get("CONTENTFUL_ENVIRONMENT"))
                or _DEFAULT_ENVIRONMENT_ID
            ),
            base_url=(
                normalize_optional_string(env_map.get("CONTENTFUL_API_URL"))
                or _DEFAULT_DELIVERY_URL
            ),
        )

    @staticmethod
    def _build_config(payload: Mapping[str, Any], source_label: str) -> SlugFieldConfig:
        """Build a validated config from a snake_case payload."""

        pattern = payload.get("pattern")
        if pattern is None:
            pattern = ""
        if not isinstance(pattern, str):
            raise ValueError(f"{source_label} field `pattern` must be a string.")

        debounce_seconds = _DEFAULT_DEBOUNCE_SECONDS
        if payload.get("debounce_seconds") is not None:
            try:
                debounce_seconds = parse_seconds(payload["debounce_seconds"], "debounce_seconds")
            except ValueError as exc:
                raise ValueError(f"{source_label}: {exc}") from exc

        config = SlugFieldConfig(
            pattern=pattern,
            display_default_locale=ConfigLoader._optional_boolean(
                payload, "display_default_locale", source_label
            ),
            lock_when_published=ConfigLoader._optional_boolean(
                payload, "lock_when_published", source_label
            ),
            debounce_seconds=debounce_seconds,
            legacy_separator_collapse=ConfigLoader._optional_boolean(
                payload, "legacy_separator_collapse", source_label
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_boolean(payload: Mapping[str, Any], key: str, source_label: str) -> bool:
        """Read a boolean field, treating missing and null values as `False`."""

        raw_value = payload.get(key)
        if raw_value is None:
            return False
        parsed = parse_permissive_boolean(raw_value)
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
