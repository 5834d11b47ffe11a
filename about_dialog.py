"""
About Dialog for Lotus XML Viewer
"""

import os
from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QLabel, QPushButton,
                             QLineEdit, QGroupBox)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from version import __version__, __build_date__, __app_name__


class AboutDialog(QDialog):
    """About dialog showing version and the file being viewed"""

    def __init__(self, parent=None, current_file_path=None):
        super().__init__(parent)
        self.current_file_path = current_file_path
        self.setWindowTitle(f"About {__app_name__}")
        self.setMinimumWidth(480)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout()
        layout.setSpacing(12)

        title_label = QLabel(__app_name__)
        title_font = QFont()
        title_font.setPointSize(16)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label)

        version_label = QLabel(f"Version: {__version__} ({__build_date__})")
        version_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(version_label)

        privacy_label = QLabel("Documents are read locally and never sent anywhere.")
        privacy_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        privacy_label.setStyleSheet("color: #666; font-style: italic;")
        layout.addWidget(privacy_label)

        file_group = QGroupBox("Current File")
        file_layout = QVBoxLayout()
        if self.current_file_path:
            file_path = os.path.abspath(self.current_file_path)
        else:
            file_path = "No file opened"
        self.file_text = QLineEdit(file_path)
        self.file_text.setReadOnly(True)
        file_layout.addWidget(self.file_text)
        file_group.setLayout(file_layout)
        layout.addWidget(file_group)

        layout.addStretch()

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        close_btn.setDefault(True)
        layout.addWidget(close_btn)

        self.setLayout(layout)
