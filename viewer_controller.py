"""
Viewer controller - owns the loaded document and its collapse map
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from models import DocumentNode
from collapse_state import CollapseMap, collapse_all, expand_all, is_collapsed, toggle
from tree_model import TreeModel, build_tree_model
from tree_paths import path_depth
from tree_renderer import RenderedNode, render_tree
from file_loader import NOT_VALID_XML_MESSAGE

logger = logging.getLogger(__name__)


class XmlViewerController(QObject):
    """Single owner of the viewer state.

    Holds the active TreeModel (document root plus collapse map) and the
    current error message. Renderers receive this state as parameters and ask
    for changes through the methods below; the collapse map is replaced on
    every change, never edited in place.
    """
    state_changed = pyqtSignal()
    error_changed = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.model: Optional[TreeModel] = None
        self.error: Optional[str] = None

    @property
    def root(self) -> Optional[DocumentNode]:
        return self.model.root if self.model else None

    @property
    def collapse_map(self) -> CollapseMap:
        return self.model.collapse_map if self.model else {}

    @property
    def has_document(self) -> bool:
        return self.model is not None

    def on_document_loaded(self, root: DocumentNode):
        """Install a freshly parsed document with its default collapse map"""
        self.model = build_tree_model(root)
        self._set_error(None)
        logger.debug("Installed document <%s>", root.tag)
        self.state_changed.emit()

    def on_load_failed(self, message: str = NOT_VALID_XML_MESSAGE):
        """Drop the current document and show ``message``"""
        self.model = None
        self._set_error(message or NOT_VALID_XML_MESSAGE)
        self.state_changed.emit()

    def is_collapsed(self, path: str) -> bool:
        """Resolved collapsed state of the node at ``path``"""
        return is_collapsed(self.collapse_map, path, path_depth(path))

    def toggle(self, path: str, current_value: Optional[bool] = None):
        """Flip one node between collapsed and expanded"""
        if self.model is None:
            return
        if current_value is None:
            current_value = self.is_collapsed(path)
        self._replace_map(toggle(self.model.collapse_map, path, current_value))

    def expand_all(self):
        if self.model is None:
            return
        self._replace_map(expand_all(self.model.root))

    def collapse_all(self):
        if self.model is None:
            return
        self._replace_map(collapse_all(self.model.root))

    def render(self) -> Optional[RenderedNode]:
        """Render the whole tree from the root with the current collapse map"""
        if self.model is None:
            return None
        return render_tree(self.model.root, self.model.root_path, 0, self.model.collapse_map)

    def _replace_map(self, collapse_map: CollapseMap):
        self.model = TreeModel(
            root=self.model.root,
            root_path=self.model.root_path,
            collapse_map=collapse_map,
        )
        self.state_changed.emit()

    def _set_error(self, message: Optional[str]):
        if message == self.error:
            return
        self.error = message
        if message:
            logger.info("Showing error: %s", message)
        self.error_changed.emit(message or "")
