"""
Documentation extraction built on the clangdoc binding.

Walks parsed C++ translation units and collects the classes, structs,
functions and methods that carry documentation comments.
"""

from extraction.models import DocumentedEntity
from extraction.extractor import (
    extract_file,
    extract_directory,
    extract_to_dict_list,
    discover_cpp_files,
    ExtractionStats,
)

__all__ = [
    # Data models
    "DocumentedEntity",
    "ExtractionStats",
    # Orchestration
    "extract_file",
    "extract_directory",
    "extract_to_dict_list",
    "discover_cpp_files",
]
