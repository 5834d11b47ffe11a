"""
Tree model construction for a loaded document
"""

import logging
from dataclasses import dataclass, field

from models import DocumentNode
from collapse_state import CollapseMap, build_default
from tree_paths import root_path

logger = logging.getLogger(__name__)


@dataclass
class TreeModel:
    """A loaded document together with the collapse map that seeds its view"""
    root: DocumentNode
    root_path: str
    collapse_map: CollapseMap = field(default_factory=dict)


def build_tree_model(root: DocumentNode) -> TreeModel:
    """Build the initial model for a successfully parsed document root.

    Called once per successful load. Paths and the collapse map are always
    derived from scratch, nothing from a previously loaded document carries
    over.
    """
    collapse_map = build_default(root)
    logger.debug("Built default collapse map with %d entries", len(collapse_map))
    return TreeModel(root=root, root_path=root_path(), collapse_map=collapse_map)
