"""
Data models for XML viewer
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class DocumentNode:
    """Represents one element of a parsed XML document.

    The viewer only ever reads these. ``tag`` is the qualified name as written
    in the document (``ns:Item``), ``children`` holds element children in
    document order and ``text`` is the text content of a leaf (empty for
    internal nodes).
    """
    tag: str
    children: List['DocumentNode'] = field(default_factory=list)
    text: str = ""

    def __post_init__(self):
        """Post-initialization processing"""
        if self.text is None:
            self.text = ""

    @property
    def has_children(self) -> bool:
        """True for internal nodes"""
        return len(self.children) > 0

    def count_nodes(self) -> int:
        """Count this node and all of its descendants"""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count


@dataclass
class LoadFailedEventArgs:
    """Event arguments for a failed document load"""
    message: str
    file_path: str = ""
    line_number: int = 0
    column_number: int = 0
    error_type: str = "parse"  # parse, read

    def __str__(self):
        """String representation"""
        if self.line_number > 0 and self.column_number > 0:
            return f"XML {self.error_type} error at line {self.line_number}, column {self.column_number}: {self.message}"
        elif self.line_number > 0:
            return f"XML {self.error_type} error at line {self.line_number}: {self.message}"
        else:
            return f"XML {self.error_type} error: {self.message}"
