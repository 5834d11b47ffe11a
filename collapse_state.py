"""
Collapse state for the XML tree view

A collapse map is a plain dict from node path to bool, where True means the
node's children are hidden. Maps are treated as immutable: every operation
here returns a new dict and leaves its input untouched, so a caller can keep
the previous map around for comparison.
"""

import logging
from typing import Dict

from models import DocumentNode
from tree_paths import walk_tree

logger = logging.getLogger(__name__)

CollapseMap = Dict[str, bool]


def default_collapsed(depth: int) -> bool:
    """Default state for a node never seen before: root open, everything else closed"""
    return depth > 0


def is_collapsed(collapse_map: CollapseMap, path: str, depth: int) -> bool:
    """Resolve whether the node at ``path`` currently hides its children.

    Falls back to the depth-based default when the map has no entry for the
    path, so a partially populated map is never an error.
    """
    value = collapse_map.get(path)
    if value is None:
        return default_collapsed(depth)
    return value


def toggle(collapse_map: CollapseMap, path: str, current_value: bool) -> CollapseMap:
    """Return a copy of ``collapse_map`` with ``path`` set to ``not current_value``"""
    new_map = dict(collapse_map)
    new_map[path] = not current_value
    return new_map


def set_all(root: DocumentNode, value: bool) -> CollapseMap:
    """Map every internal node of the tree under ``root`` to ``value``.

    Leaves are left out, they have nothing to collapse.
    """
    return {path: value for node, path, depth in walk_tree(root) if node.has_children}


def expand_all(root: DocumentNode) -> CollapseMap:
    """Collapse map with every internal node shown"""
    logger.debug("Expanding all nodes")
    return set_all(root, False)


def collapse_all(root: DocumentNode) -> CollapseMap:
    """Collapse map with every internal node hidden"""
    logger.debug("Collapsing all nodes")
    return set_all(root, True)


def build_default(root: DocumentNode) -> CollapseMap:
    """Initial collapse map for a freshly loaded document"""
    return {
        path: default_collapsed(depth)
        for node, path, depth in walk_tree(root)
        if node.has_children
    }
