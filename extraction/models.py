"""
Data models for extracted documentation.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class DocumentedEntity:
    """A declaration that carries a documentation comment.

    Attributes:
        file_path: Path of the source file, relative to the extraction root
        entity_type: One of: Class, Struct, Function, Method
        qualified_name: Name qualified by enclosing scopes (e.g., ns::Widget::draw)
        line: 1-indexed line of the declaration name
        raw_comment: Comment text exactly as written in the source
        comment_html: libclang's HTML rendering of the parsed comment
    """

    file_path: str
    entity_type: str
    qualified_name: str
    line: int
    raw_comment: Optional[str]
    comment_html: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entity to a dictionary suitable for JSON serialization."""
        return asdict(self)
