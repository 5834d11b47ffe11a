"""
Path addressing for document nodes

Every node gets a string path built from its position among its siblings:
the root is ``"0"``, its second child ``"0.1"``, that child's third child
``"0.1.2"``. Paths come from structure only, never from tag names.
"""

from typing import Iterator, Tuple

from models import DocumentNode

ROOT_PATH = "0"
PATH_SEPARATOR = "."


def root_path() -> str:
    """Return the fixed path of the document root"""
    return ROOT_PATH


def child_path(parent_path: str, child_index: int) -> str:
    """Return the path of the child at ``child_index`` under ``parent_path``"""
    return f"{parent_path}{PATH_SEPARATOR}{child_index}"


def path_depth(path: str) -> int:
    """Depth of the node addressed by ``path`` (root is 0)"""
    return path.count(PATH_SEPARATOR)


def walk_tree(root: DocumentNode) -> Iterator[Tuple[DocumentNode, str, int]]:
    """Yield ``(node, path, depth)`` for every node, depth-first in document order.

    Uses an explicit stack so very deep documents do not hit the recursion
    limit.
    """
    stack = [(root, root_path(), 0)]
    while stack:
        node, path, depth = stack.pop()
        yield node, path, depth
        # Reversed so the first child is popped first
        for index in range(len(node.children) - 1, -1, -1):
            stack.append((node.children[index], child_path(path, index), depth + 1))
