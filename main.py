#!/usr/bin/env python3
"""
Lotus XML Viewer
Open a local XML file and browse it as a collapsible tree
"""

import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import (QApplication, QMainWindow, QVBoxLayout, QHBoxLayout,
                             QWidget, QLabel, QPushButton, QFrame, QFileDialog)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QFont

from version import __version__, __app_name__
from about_dialog import AboutDialog
from file_loader import XmlFileLoader
from tree_renderer import iter_visible
from viewer_controller import XmlViewerController
from viewer_settings import load_settings, save_settings
from xml_tree_widget import XmlTreeWidget

logger = logging.getLogger(__name__)

IDLE_HINT = "Click or drag & drop your XML file here. This file will not be sent to any servers."
DRAG_HINT = "Drop the file here…"

IDLE_STYLE = """
    QFrame#dropZone {
        background-color: #ffffff;
        border: 2px dashed #d1d5db;
        border-radius: 12px;
    }
"""
DRAG_STYLE = """
    QFrame#dropZone {
        background-color: #dbeafe;
        border: 2px dashed #60a5fa;
        border-radius: 12px;
    }
"""


def _local_paths(mime_data):
    """Local file paths carried by a drag"""
    paths = []
    if mime_data.hasUrls():
        for url in mime_data.urls():
            if url.isLocalFile():
                paths.append(url.toLocalFile())
    elif mime_data.hasText():
        text = mime_data.text().strip()
        if text and os.path.exists(text):
            paths.append(text)
    return paths


class DropZone(QFrame):
    """Click-to-browse area that also accepts dropped files"""
    file_chosen = pyqtSignal(str)
    browse_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setMinimumHeight(120)
        self.is_dragging = False

        layout = QVBoxLayout()
        layout.setContentsMargins(40, 40, 40, 40)
        self.hint_label = QLabel(IDLE_HINT)
        self.hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.hint_label.setWordWrap(True)
        self.hint_label.setStyleSheet("color: #4b5563;")
        layout.addWidget(self.hint_label)
        self.setLayout(layout)
        self._set_dragging(False)

    def _set_dragging(self, dragging: bool):
        self.is_dragging = dragging
        self.hint_label.setText(DRAG_HINT if dragging else IDLE_HINT)
        self.setStyleSheet(DRAG_STYLE if dragging else IDLE_STYLE)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.browse_requested.emit()
        super().mousePressEvent(event)

    def dragEnterEvent(self, event):
        """Highlight while local files hover over the zone"""
        if _local_paths(event.mimeData()):
            self._set_dragging(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if _local_paths(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_dragging(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        """Hand the first dropped file on"""
        self._set_dragging(False)
        paths = _local_paths(event.mimeData())
        if paths:
            event.acceptProposedAction()
            self.file_chosen.emit(paths[0])
        else:
            event.ignore()


class MainWindow(QMainWindow):
    """Main application window"""

    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings
        self.viewer_settings = load_settings(settings)
        self.controller = XmlViewerController(self)
        self.loader = XmlFileLoader(self)
        self.current_file = None

        self.setup_ui()
        self.setup_connections()
        self._on_state_changed()

        if self.viewer_settings.window_geometry is not None:
            self.restoreGeometry(self.viewer_settings.window_geometry)

    def setup_ui(self):
        self.setWindowTitle(__app_name__)
        self.resize(900, 700)

        central_widget = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        title_label = QLabel("Open XML File")
        title_font = QFont()
        title_font.setPointSize(18)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label)

        self.drop_zone = DropZone()
        layout.addWidget(self.drop_zone)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #dc2626; font-weight: bold;")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        buttons_layout = QHBoxLayout()
        self.expand_all_btn = QPushButton("Expand all")
        self.collapse_all_btn = QPushButton("Collapse all")
        buttons_layout.addWidget(self.expand_all_btn)
        buttons_layout.addWidget(self.collapse_all_btn)
        buttons_layout.addStretch()
        layout.addLayout(buttons_layout)

        self.xml_tree = XmlTreeWidget()
        layout.addWidget(self.xml_tree, 1)

        central_widget.setLayout(layout)
        self.setCentralWidget(central_widget)

        file_menu = self.menuBar().addMenu("&File")
        self.open_action = QAction("&Open...", self)
        self.open_action.setShortcut("Ctrl+O")
        file_menu.addAction(self.open_action)
        file_menu.addSeparator()
        self.exit_action = QAction("E&xit", self)
        file_menu.addAction(self.exit_action)

        help_menu = self.menuBar().addMenu("&Help")
        self.about_action = QAction("&About", self)
        help_menu.addAction(self.about_action)

        self.status_label = QLabel("Ready")
        self.statusBar().addWidget(self.status_label)

    def setup_connections(self):
        self.drop_zone.browse_requested.connect(self.browse_file)
        self.drop_zone.file_chosen.connect(self.open_file)
        self.open_action.triggered.connect(self.browse_file)
        self.exit_action.triggered.connect(self.close)
        self.about_action.triggered.connect(self.show_about)

        self.loader.document_loaded.connect(self.controller.on_document_loaded)
        self.loader.load_failed.connect(self.controller.on_load_failed)

        self.expand_all_btn.clicked.connect(self.controller.expand_all)
        self.collapse_all_btn.clicked.connect(self.controller.collapse_all)
        # Queued so the clicked item is not deleted while its click is being handled
        self.xml_tree.toggle_requested.connect(
            self.controller.toggle, Qt.ConnectionType.QueuedConnection)

        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.error_changed.connect(self._on_error_changed)

    def browse_file(self):
        """Let the user pick a file"""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open XML File", self.viewer_settings.last_directory,
            "XML Files (*.xml);;All Files (*.*)"
        )
        if file_path:
            self.open_file(file_path)

    def open_file(self, file_path: str) -> bool:
        """Start loading ``file_path``; non-XML files are ignored silently"""
        if not self.loader.load(file_path):
            return False

        self.current_file = file_path
        self.viewer_settings.last_directory = os.path.dirname(os.path.abspath(file_path))
        self.status_label.setText(f"Loading {os.path.basename(file_path)}...")
        return True

    def show_about(self):
        dialog = AboutDialog(self, self.current_file)
        dialog.exec()

    def _on_state_changed(self):
        """Re-render the whole tree from the root"""
        rendered = self.controller.render()
        self.xml_tree.show_rendered(rendered)
        has_document = self.controller.has_document
        self.xml_tree.setVisible(has_document)
        self.expand_all_btn.setEnabled(has_document)
        self.collapse_all_btn.setEnabled(has_document)
        if has_document and self.current_file:
            self.setWindowTitle(f"{__app_name__} - {os.path.basename(self.current_file)}")
            visible_count = sum(1 for _ in iter_visible(rendered))
            self.status_label.setText(f"Opened: {self.current_file} ({visible_count} nodes shown)")
        elif not has_document:
            self.setWindowTitle(__app_name__)

    def _on_error_changed(self, message: str):
        self.error_label.setText(message)
        self.error_label.setVisible(bool(message))
        if message:
            self.status_label.setText(message)

    def closeEvent(self, event):
        self.loader.wait()
        self.viewer_settings.window_geometry = self.saveGeometry()
        save_settings(self.viewer_settings, self.settings)
        super().closeEvent(event)


def parse_args(argv):
    parser = argparse.ArgumentParser(description=f"{__app_name__} {__version__}")
    parser.add_argument("file", nargs="?", help="XML file to open at start-up")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    # Qt consumes its own options (-style, -platform, ...)
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv=None):
    """Application entry point"""
    argv = sys.argv if argv is None else argv
    args = parse_args(argv[1:])

    app = QApplication(argv)
    app.setApplicationName(__app_name__)
    app.setApplicationVersion(__version__)

    log_level = args.log_level
    if log_level is None:
        log_level = "DEBUG" if load_settings().debug_mode else "WARNING"
    logging.basicConfig(level=getattr(logging, log_level),
                        format="%(levelname)s:%(name)s: %(message)s")
    logger.info("Starting %s %s", __app_name__, __version__)

    window = MainWindow()
    window.show()
    if args.file:
        window.open_file(args.file)

    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
