"""Startup configuration helpers.

Provides strict/non-strict parsing of the optional ``clangdoc.yml`` file and
resolution of libclang location and default parse arguments, with environment
variables taking precedence over the YAML payload.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)


class ConfigValidationError(RuntimeError):
    """Raised when strict startup validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def load_yaml_config(
    config_path: str,
    strict: bool = False,
) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    In non-strict mode this returns an empty dict on parse/read failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse config YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        msg = f"Unexpected config payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    return payload


def get_section(
    config: dict[str, Any],
    section_name: str,
    strict: bool = False,
) -> dict[str, Any]:
    """Fetch a top-level mapping section, or an empty dict when absent."""
    section = config.get(section_name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        msg = f"Config section '{section_name}' must be a mapping"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring it", msg)
        return {}
    return section


def resolve_parse_arguments(
    config: dict[str, Any],
    default: Sequence[str],
    strict: bool = False,
) -> tuple[str, ...]:
    """Resolve default compiler flags from ``parse.arguments``."""
    section = get_section(config, "parse", strict=strict)
    arguments = section.get("arguments")
    if arguments is None:
        return tuple(default)

    if not isinstance(arguments, list) or not all(
        isinstance(item, str) for item in arguments
    ):
        msg = "parse.arguments must be a list of strings"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; using defaults %s", msg, " ".join(default))
        return tuple(default)

    return tuple(arguments)


def _optional_string(
    section: dict[str, Any],
    key: str,
    label: str,
    strict: bool,
) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        msg = f"{label} must be a non-empty string"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring it", msg)
        return None
    return value


def resolve_libclang_location(
    config: dict[str, Any],
    strict: bool = False,
) -> tuple[Optional[str], Optional[str]]:
    """Resolve ``(library_file, library_path)`` for libclang.

    ``CLANGDOC_LIBCLANG_FILE`` and ``CLANGDOC_LIBCLANG_PATH`` override the
    ``libclang.file`` and ``libclang.path`` YAML keys. Both may be ``None``,
    in which case the bundled library of the ``libclang`` distribution is used.
    """
    section = get_section(config, "libclang", strict=strict)
    library_file = os.getenv("CLANGDOC_LIBCLANG_FILE") or _optional_string(
        section, "file", "libclang.file", strict
    )
    library_path = os.getenv("CLANGDOC_LIBCLANG_PATH") or _optional_string(
        section, "path", "libclang.path", strict
    )
    return library_file, library_path
