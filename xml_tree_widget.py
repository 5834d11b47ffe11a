"""
Tree widget for displaying a rendered XML document
"""

from typing import Optional

from PyQt6.QtWidgets import QTreeWidget, QTreeWidgetItem, QHeaderView
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont

from tree_renderer import RenderedNode

PATH_ROLE = Qt.ItemDataRole.UserRole
COLLAPSED_ROLE = Qt.ItemDataRole.UserRole.value + 1


class XmlTreeWidget(QTreeWidget):
    """Shows a RenderedNode tree and reports header clicks.

    The widget holds no collapse state of its own. Native expand/collapse is
    disabled; every change goes out through ``toggle_requested`` and comes back
    as a fresh render passed to ``show_rendered``.
    """
    toggle_requested = pyqtSignal(str, bool)  # path, currently collapsed

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setHeaderLabels(["Element", "Value"])
        self.setAlternatingRowColors(True)
        self.setUniformRowHeights(True)
        self.setRootIsDecorated(False)
        self.setItemsExpandable(False)
        self.setExpandsOnDoubleClick(False)
        self.setAllColumnsShowFocus(True)
        self.header().setStretchLastSection(False)
        self.header().setSectionResizeMode(0, QHeaderView.ResizeMode.Interactive)
        self.header().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.itemClicked.connect(self._on_item_clicked)

        self.header_font = QFont()
        self.header_font.setBold(True)

    def resizeEvent(self, event):
        """Keep a 40/60 split between the Element and Value columns"""
        super().resizeEvent(event)
        total_width = self.viewport().width()
        if total_width > 0:
            self.setColumnWidth(0, int(total_width * 0.4))
            self.setColumnWidth(1, int(total_width * 0.6))

    def show_rendered(self, rendered: Optional[RenderedNode]):
        """Replace the widget contents with ``rendered``.

        The scroll position and the current row survive the rebuild when the
        current node is still shown.
        """
        scroll_value = self.verticalScrollBar().value()
        current = self.currentItem()
        current_path = current.data(0, PATH_ROLE) if current is not None else None

        self.setUpdatesEnabled(False)
        try:
            self.clear()
            if rendered is not None:
                self._add_tree_items(rendered)
            if current_path is not None:
                item = self.item_for_path(current_path)
                if item is not None:
                    self.setCurrentItem(item)
        finally:
            self.setUpdatesEnabled(True)
        self.verticalScrollBar().setValue(scroll_value)

    def item_for_path(self, path: str) -> Optional[QTreeWidgetItem]:
        """Find the item currently showing the node at ``path``"""
        stack = [self.topLevelItem(i) for i in range(self.topLevelItemCount())]
        while stack:
            item = stack.pop()
            if item.data(0, PATH_ROLE) == path:
                return item
            stack.extend(item.child(i) for i in range(item.childCount()))
        return None

    def _add_tree_items(self, rendered: RenderedNode):
        """Add items iteratively, parents before children"""
        expanded_items = []
        stack = [(None, rendered)]
        while stack:
            parent_item, node = stack.pop()

            item = QTreeWidgetItem()
            item.setData(0, PATH_ROLE, node.path)
            if node.is_leaf:
                item.setText(0, f"{node.label}:")
                item.setText(1, node.value)
                item.setToolTip(1, node.value)
            else:
                item.setText(0, f"{node.label} {node.indicator}")
                item.setFont(0, self.header_font)
                item.setData(0, COLLAPSED_ROLE, node.collapsed)

            if parent_item is None:
                self.addTopLevelItem(item)
            else:
                parent_item.addChild(item)

            for child in reversed(node.children):
                stack.append((item, child))

            if node.children:
                expanded_items.append(item)

        for item in expanded_items:
            item.setExpanded(True)

    def _on_item_clicked(self, item, column):
        """Ask for a toggle when an expandable header is clicked"""
        collapsed = item.data(0, COLLAPSED_ROLE)
        if collapsed is None:
            return
        self.toggle_requested.emit(item.data(0, PATH_ROLE), bool(collapsed))
