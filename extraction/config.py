"""
Configuration constants for documentation extraction.

Defines which cursor kinds are collected and how they are labelled.
"""

from typing import Dict, Set

from clangdoc import CursorKind

# Cursor kinds whose children are walked to find nested entities
SCOPE_KINDS: Set[CursorKind] = {
    CursorKind.NAMESPACE,
    CursorKind.CLASS_DECL,
    CursorKind.STRUCT_DECL,
    CursorKind.CLASS_TEMPLATE,
}

# Entity type mapping (cursor kind -> entity type string)
ENTITY_TYPE_MAP: Dict[CursorKind, str] = {
    CursorKind.CLASS_DECL: "Class",
    CursorKind.STRUCT_DECL: "Struct",
    CursorKind.CLASS_TEMPLATE: "Class",
    CursorKind.FUNCTION_DECL: "Function",
    CursorKind.FUNCTION_TEMPLATE: "Function",
    CursorKind.METHOD: "Method",
}

# Name used for unnamed scopes when qualifying nested entities
ANONYMOUS_NAME: str = "(anonymous)"

# CXCursorKind codes walked through without contributing a name segment
LINKAGE_SPEC_RAW_KIND: int = 23  # CXCursor_LinkageSpec, extern "C" { ... }
TRANSLATION_UNIT_RAW_KIND: int = 350  # CXCursor_TranslationUnit

# C++ file extensions
CPP_EXTENSIONS: Set[str] = {
    ".cpp",
    ".cc",
    ".cxx",
    ".c",
    ".h",
    ".hpp",
    ".hxx",
}

# Directories never descended into during discovery
SKIPPED_DIRECTORIES: Set[str] = {
    "build",
    "cmake-build-debug",
    "cmake-build-release",
    "node_modules",
    "venv",
    "__pycache__",
    "dist",
    "out",
}
