"""
Configuration constants for the libclang binding.

Values may be overridden by an optional YAML file (``CLANGDOC_CONFIG``,
default ``clangdoc.yml``) and by ``CLANGDOC_LIBCLANG_*`` environment variables.
"""

import logging
import os
from typing import Optional, Tuple

from core.startup_config import (
    load_yaml_config,
    resolve_libclang_location,
    resolve_parse_arguments,
    resolve_strict_config_validation,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration source
# ---------------------------------------------------------------------------
CONFIG_PATH: str = os.getenv("CLANGDOC_CONFIG", "clangdoc.yml")
STRICT_CONFIG_VALIDATION: bool = resolve_strict_config_validation(default=False)


def _load_config() -> dict:
    # The default file is optional; an explicitly named one must load.
    if "CLANGDOC_CONFIG" not in os.environ and not os.path.isfile(CONFIG_PATH):
        return {}
    return load_yaml_config(CONFIG_PATH, strict=STRICT_CONFIG_VALIDATION)


_CONFIG = _load_config()

# ---------------------------------------------------------------------------
# libclang location (None means the library bundled with the libclang wheel)
# ---------------------------------------------------------------------------
LIBCLANG_FILE: Optional[str]
LIBCLANG_PATH: Optional[str]
LIBCLANG_FILE, LIBCLANG_PATH = resolve_libclang_location(
    _CONFIG, strict=STRICT_CONFIG_VALIDATION
)

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
DEFAULT_PARSE_ARGUMENTS: Tuple[str, ...] = resolve_parse_arguments(
    _CONFIG,
    default=("-xc++", "-std=c++20"),
    strict=STRICT_CONFIG_VALIDATION,
)

# CXTranslationUnit_None
PARSE_OPTIONS: int = 0

# Index policy used for every translation unit
DEFAULT_EXCLUDE_DECLARATIONS_FROM_PCH: int = 0
DEFAULT_DISPLAY_DIAGNOSTICS: int = 1

PARSE_ERROR_MESSAGE: str = "failed to parse source file due to error"

logger.debug(
    "clangdoc config: libclang_file=%s, libclang_path=%s, arguments=%s",
    LIBCLANG_FILE,
    LIBCLANG_PATH,
    " ".join(DEFAULT_PARSE_ARGUMENTS),
)
