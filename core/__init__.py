"""Core shared logging and configuration utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    set_run_id,
    source_scope,
)
from core.startup_config import (
    ConfigValidationError,
    load_yaml_config,
    resolve_libclang_location,
    resolve_parse_arguments,
    resolve_strict_config_validation,
)

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "set_run_id",
    "source_scope",
    "ConfigValidationError",
    "load_yaml_config",
    "resolve_libclang_location",
    "resolve_parse_arguments",
    "resolve_strict_config_validation",
]
