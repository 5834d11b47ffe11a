"""
Asynchronous file loading for the XML viewer
"""

import logging
import os

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from models import LoadFailedEventArgs
from xml_service import XmlService, XmlParseError, is_xml_file

logger = logging.getLogger(__name__)

NOT_VALID_XML_MESSAGE = "Not a valid XML"
READ_FAILED_MESSAGE = "Could not read file"


class XmlReadThread(QThread):
    """Background thread reading a file as text"""
    read_complete = pyqtSignal(int, str)
    read_failed = pyqtSignal(int, str)

    def __init__(self, file_path: str, generation: int, xml_service: XmlService = None):
        super().__init__()
        self.file_path = file_path
        self.generation = generation
        self.xml_service = xml_service or XmlService()

    def run(self):
        """Read the file in the background thread"""
        try:
            content = self.xml_service.read_text(self.file_path)
            self.read_complete.emit(self.generation, content)
        except OSError as e:
            self.read_failed.emit(self.generation, str(e))


class XmlFileLoader(QObject):
    """Loads XML files and hands parsed roots to whoever is listening.

    Only the most recent load is reported. A load that finishes after a newer
    one was started is dropped.
    """
    document_loaded = pyqtSignal(object)
    load_failed = pyqtSignal(str)
    file_rejected = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.xml_service = XmlService()
        self.current_file = None
        self.last_error = None
        self._generation = 0
        self._threads = {}

    @property
    def generation(self) -> int:
        """Number of the most recently started load"""
        return self._generation

    def load(self, file_path: str, declared_type: str = None) -> bool:
        """Start loading ``file_path``; returns False if the file was rejected"""
        if not file_path or not is_xml_file(file_path, declared_type):
            logger.debug("Ignoring non-XML file: %s", file_path)
            self.file_rejected.emit(file_path or "")
            return False

        self._generation += 1
        generation = self._generation
        self.current_file = file_path
        logger.info("Loading %s", self.xml_service.describe_file(file_path))

        thread = XmlReadThread(file_path, generation, self.xml_service)
        thread.read_complete.connect(self._on_read_complete)
        thread.read_failed.connect(self._on_read_failed)
        thread.finished.connect(lambda g=generation: self._forget_thread(g))
        self._threads[generation] = thread
        thread.start()
        return True

    def _load_content(self, xml_content: str, file_path: str = "") -> None:
        """Parse already-read content synchronously, superseding any pending load"""
        self._generation += 1
        self.current_file = file_path or None
        self._on_read_complete(self._generation, xml_content)

    def wait(self, msecs: int = 5000) -> bool:
        """Block until every running read thread has finished"""
        for thread in list(self._threads.values()):
            if not thread.wait(msecs):
                return False
        return True

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info("Dropping stale load result (generation %d, current %d)",
                        generation, self._generation)
            return True
        return False

    def _on_read_complete(self, generation: int, xml_content: str):
        """Parse freshly read content on the GUI thread"""
        if self._is_stale(generation):
            return

        try:
            root = self.xml_service.parse_document(xml_content)
        except XmlParseError as e:
            self.last_error = LoadFailedEventArgs(
                message=NOT_VALID_XML_MESSAGE,
                file_path=self.current_file or "",
                line_number=e.line,
                column_number=e.column,
                error_type="parse",
            )
            logger.warning("%s (%s)", self.last_error, e)
            self.load_failed.emit(NOT_VALID_XML_MESSAGE)
            return

        self.last_error = None
        logger.info("Opened %s, %d nodes", self.current_file or "<content>", root.count_nodes())
        self.document_loaded.emit(root)

    def _on_read_failed(self, generation: int, reason: str):
        if self._is_stale(generation):
            return

        self.last_error = LoadFailedEventArgs(
            message=READ_FAILED_MESSAGE,
            file_path=self.current_file or "",
            error_type="read",
        )
        logger.warning("%s: %s (%s)", self.last_error, os.path.basename(self.current_file or ""), reason)
        self.load_failed.emit(READ_FAILED_MESSAGE)

    def _forget_thread(self, generation: int):
        thread = self._threads.pop(generation, None)
        if thread is not None:
            thread.deleteLater()
