"""
High-level orchestrator for documentation extraction.

This module provides the main entry points for extracting documented entities
from single files or entire directory trees, using the clangdoc visitor to
walk each translation unit.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set

from clangdoc import (
    ChildVisitResult,
    ClangDocError,
    CommentKind,
    Cursor,
    FileHandle,
    TranslationUnit,
)
from core.structured_logging import source_scope
from extraction.config import (
    ANONYMOUS_NAME,
    CPP_EXTENSIONS,
    ENTITY_TYPE_MAP,
    LINKAGE_SPEC_RAW_KIND,
    SCOPE_KINDS,
    SKIPPED_DIRECTORIES,
    TRANSLATION_UNIT_RAW_KIND,
)
from extraction.models import DocumentedEntity

logger = logging.getLogger(__name__)


@dataclass
class _WalkState:
    """Traversal state threaded through the visitor callback."""

    main_file: FileHandle
    file_path: str
    # Canonical cursors already recorded; redeclarations share the comment
    seen: Set[Cursor] = field(default_factory=set)
    entities: List[DocumentedEntity] = field(default_factory=list)


def _qualified_name(cursor: Cursor) -> str:
    """Join the semantic scopes of ``cursor`` with ``::``.

    Semantic rather than lexical parents, so an out-of-line definition such
    as ``void ui::Widget::draw() {}`` is named ``ui::Widget::draw``.
    """
    parts = [cursor.spelling or ANONYMOUS_NAME]
    parent = cursor.semantic_parent
    while parent is not None and parent.raw_kind != TRANSLATION_UNIT_RAW_KIND:
        if parent.raw_kind != LINKAGE_SPEC_RAW_KIND:
            parts.append(parent.spelling or ANONYMOUS_NAME)
        parent = parent.semantic_parent
    return "::".join(reversed(parts))


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.entities_extracted = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "entities_extracted": self.entities_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, entities={self.entities_extracted})"
        )


def _collect_documented(
    cursor: Cursor, parent: Cursor, state: _WalkState
) -> ChildVisitResult:
    """Visitor callback recording documented entities of the main file."""
    location = cursor.location
    # Declarations pulled in from headers belong to other files.
    if location.file is None or location.file != state.main_file:
        return ChildVisitResult.CONTINUE

    kind = cursor.kind
    if kind is None:
        if cursor.raw_kind == LINKAGE_SPEC_RAW_KIND:
            return ChildVisitResult.RECURSE
        return ChildVisitResult.CONTINUE

    entity_type = ENTITY_TYPE_MAP.get(kind)
    if entity_type is not None:
        comment = cursor.parsed_comment
        canonical = cursor.canonical
        if comment.kind is CommentKind.FULL_COMMENT and canonical not in state.seen:
            state.seen.add(canonical)
            state.entities.append(
                DocumentedEntity(
                    file_path=state.file_path,
                    entity_type=entity_type,
                    qualified_name=_qualified_name(cursor),
                    line=location.line,
                    raw_comment=cursor.raw_comment,
                    comment_html=comment.get_text(),
                )
            )

    if kind in SCOPE_KINDS:
        return ChildVisitResult.RECURSE
    return ChildVisitResult.CONTINUE

    qualified_name = state.qualify(parent, cursor.spelling or ANONYMOUS_NAME)

    entity_type = ENTITY_TYPE_MAP.get(kind)
    if entity_type is not None:
        comment = cursor.parsed_comment
        if comment.kind is CommentKind.FULL_COMMENT:
            state.entities.append(
                DocumentedEntity(
                    file_path=state.file_path,
                    entity_type=entity_type,
                    qualified_name=qualified_name,
                    line=location.line,
                    raw_comment=cursor.raw_comment,
                    comment_html=comment.get_text(),
                )
            )

    if kind in SCOPE_KINDS:
        state.scopes[cursor] = qualified_name
        return ChildVisitResult.RECURSE
    return ChildVisitResult.CONTINUE


def extract_file(
    file_path: str,
    repo_root: Optional[str] = None,
    arguments: Optional[Sequence[str]] = None,
) -> List[DocumentedEntity]:
    """Extract all documented entities from a single C++ source file.

    Args:
        file_path: Absolute or relative path to the C++ file.
        repo_root: Root used to compute the recorded relative path.
            If None, uses the file's parent directory.
        arguments: Raw compiler flags; None uses the default C++ dialect.

    Returns:
        Documented entities in traversal order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a C++ source file.
        ParseError: If libclang reports an error diagnostic.

    Example:
        >>> entities = extract_file("src/widget.cpp", "/path/to/repo")
        >>> for entity in entities:
        ...     print(entity.qualified_name)
    """
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1]
    if ext not in CPP_EXTENSIONS:
        raise ValueError(
            f"File {file_path} is not a C++ source file. "
            f"Expected one of: {CPP_EXTENSIONS}"
        )

    if repo_root is None:
        resolved_root = os.path.dirname(file_path)
    else:
        resolved_root = os.path.abspath(repo_root)

    try:
        relative_path = os.path.relpath(file_path, resolved_root)
    except ValueError:
        logger.warning(
            "Cannot compute relative path for %s from %s. Using absolute path.",
            file_path,
            resolved_root,
        )
        relative_path = file_path

    with source_scope(relative_path):
        logger.info("Extracting documentation from %s", relative_path)
        try:
            with TranslationUnit(file_path, arguments) as tu:
                state = _WalkState(
                    main_file=FileHandle(tu, file_path),
                    file_path=relative_path,
                )
                tu.cursor.visit_children(_collect_documented, state)
        except ClangDocError as e:
            logger.error("Error extracting documentation from %s: %s", file_path, e)
            raise

        logger.info(
            "Extracted %d documented entities from %s",
            len(state.entities),
            relative_path,
        )
    return state.entities


def discover_cpp_files(directory: str) -> List[str]:
    """Recursively discover all C++ source files in a directory.

    Args:
        directory: Root directory to search.

    Returns:
        Sorted list of absolute paths to C++ files.
    """
    cpp_files = []
    directory = os.path.abspath(directory)

    logger.info("Discovering C++ files in %s", directory)

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and common build/cache directories
        dirs[:] = [
            d for d in dirs
            if not d.startswith('.') and d not in SKIPPED_DIRECTORIES
        ]

        for file in files:
            if os.path.splitext(file)[1] in CPP_EXTENSIONS:
                cpp_files.append(os.path.join(root, file))

    logger.info("Found %d C++ files", len(cpp_files))
    return sorted(cpp_files)


def extract_directory(
    directory: str,
    repo_root: Optional[str] = None,
    arguments: Optional[Sequence[str]] = None,
    continue_on_error: bool = True,
) -> tuple[List[DocumentedEntity], ExtractionStats]:
    """Extract documented entities from all C++ files in a directory tree.

    Args:
        directory: Root directory to process.
        repo_root: Root for computing relative paths. If None, uses ``directory``.
        arguments: Raw compiler flags applied to every file.
        continue_on_error: If True, keep going when a file fails to parse.
            If False, re-raise the first failure.

    Returns:
        A tuple of (entities, stats).

    Raises:
        FileNotFoundError: If directory does not exist.
    """
    directory = os.path.abspath(directory)

    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    repo_root = directory if repo_root is None else os.path.abspath(repo_root)

    stats = ExtractionStats()
    all_entities: List[DocumentedEntity] = []

    cpp_files = discover_cpp_files(directory)
    if not cpp_files:
        logger.warning("No C++ files found in %s", directory)
        return all_entities, stats

    for file_path in cpp_files:
        try:
            entities = extract_file(file_path, repo_root, arguments)
        except (ClangDocError, OSError, ValueError) as e:
            logger.error("Skipping %s: %s", file_path, e)
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue

        all_entities.extend(entities)
        stats.files_processed += 1
        stats.entities_extracted += len(entities)

    logger.info("Extraction complete: %s", stats)
    return all_entities, stats


def extract_to_dict_list(
    source: str,
    repo_root: Optional[str] = None,
    arguments: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """Extract entities from a file or directory as JSON-ready dictionaries.

    Example:
        >>> entities = extract_to_dict_list("src/")
        >>> import json
        >>> json.dump(entities, open("docs.json", "w"), indent=2)
    """
    source = os.path.abspath(source)

    if os.path.isfile(source):
        entities = extract_file(source, repo_root, arguments)
    elif os.path.isdir(source):
        entities, stats = extract_directory(source, repo_root, arguments)
        logger.info("Extraction stats: %s", stats)
    else:
        raise FileNotFoundError(f"Source not found: {source}")

    return [entity.to_dict() for entity in entities]
