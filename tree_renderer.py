"""
Rendering decisions for the XML tree view

Turns a document node, its path and the active collapse map into a tree of
RenderedNode records describing exactly what the view must show. Nothing here
touches widgets; XmlTreeWidget materialises the result.
"""

from dataclasses import dataclass, field
from typing import Iterator, List

from models import DocumentNode
from collapse_state import CollapseMap, is_collapsed
from tree_paths import child_path

NAMESPACE_DELIMITER = ":"
MAX_CONTENT_LENGTH = 80
ELLIPSIS = "..."

COLLAPSED_INDICATOR = "▶"
EXPANDED_INDICATOR = "▼"


def strip_namespace(tag_name: str) -> str:
    """Drop the namespace prefix from a tag name for display.

    Only the first delimiter is split on, so ``a:b:c`` shows as ``b:c``.
    """
    if NAMESPACE_DELIMITER in tag_name:
        return tag_name.split(NAMESPACE_DELIMITER, 1)[1]
    return tag_name


def limit_content(content, max_length: int = MAX_CONTENT_LENGTH) -> str:
    """Trim text content and cut it down to ``max_length`` characters"""
    if not content:
        return ""
    content = content.strip()
    if len(content) > max_length:
        return content[:max_length] + ELLIPSIS
    return content


@dataclass(frozen=True)
class RenderedNode:
    """What to present for one node.

    Leaves carry a display value; internal nodes carry their resolved
    collapsed state and, when expanded, their rendered children.
    """
    path: str
    depth: int
    label: str
    is_leaf: bool
    value: str = ""
    collapsed: bool = False
    children: List['RenderedNode'] = field(default_factory=list)

    @property
    def indicator(self) -> str:
        """Direction marker for expandable headers, empty for leaves"""
        if self.is_leaf:
            return ""
        return COLLAPSED_INDICATOR if self.collapsed else EXPANDED_INDICATOR


def render_tree(node: DocumentNode, path: str, depth: int, collapse_map: CollapseMap) -> RenderedNode:
    """Render ``node`` and, if it is expanded, its subtree.

    Built with an explicit stack so very deep documents do not hit the
    recursion limit.
    """
    rendered = None
    stack = [(node, path, depth, None)]
    while stack:
        current, current_path, current_depth, parent_children = stack.pop()
        label = strip_namespace(current.tag)

        if not current.has_children:
            item = RenderedNode(
                path=current_path,
                depth=current_depth,
                label=label,
                is_leaf=True,
                value=limit_content(current.text),
            )
        else:
            collapsed = is_collapsed(collapse_map, current_path, current_depth)
            item = RenderedNode(
                path=current_path,
                depth=current_depth,
                label=label,
                is_leaf=False,
                collapsed=collapsed,
            )
            if not collapsed:
                # Reversed so siblings are appended in document order
                for index in range(len(current.children) - 1, -1, -1):
                    stack.append((current.children[index], child_path(current_path, index),
                                  current_depth + 1, item.children))

        if parent_children is None:
            rendered = item
        else:
            parent_children.append(item)

    return rendered


def iter_visible(rendered: RenderedNode) -> Iterator[RenderedNode]:
    """Yield every rendered node in display order"""
    stack = [rendered]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
