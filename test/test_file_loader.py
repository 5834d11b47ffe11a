"""
Tests for asynchronous file loading
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import tempfile
import unittest

from PyQt6.QtWidgets import QApplication

from file_loader import NOT_VALID_XML_MESSAGE, READ_FAILED_MESSAGE, XmlFileLoader


class TestXmlFileLoader(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.loader = XmlFileLoader()
        self.loaded = []
        self.failed = []
        self.rejected = []
        self.loader.document_loaded.connect(self.loaded.append)
        self.loader.load_failed.connect(self.failed.append)
        self.loader.file_rejected.connect(self.rejected.append)

    def tearDown(self):
        self.loader.wait()
        QApplication.processEvents()
        self.temp_dir.cleanup()

    def _write(self, name, text):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def _finish(self):
        self.assertTrue(self.loader.wait())
        QApplication.processEvents()

    def test_loads_valid_file(self):
        path = self._write("ok.xml", "<root><a>1</a><b><c>2</c></b></root>")
        self.assertTrue(self.loader.load(path))
        self._finish()

        self.assertEqual(len(self.loaded), 1)
        self.assertEqual(self.loaded[0].tag, "root")
        self.assertEqual(self.failed, [])
        self.assertIsNone(self.loader.last_error)

    def test_malformed_file_fails(self):
        path = self._write("bad.xml", "<root><a>1</a>")
        self.assertTrue(self.loader.load(path))
        self._finish()

        self.assertEqual(self.loaded, [])
        self.assertEqual(self.failed, [NOT_VALID_XML_MESSAGE])
        self.assertEqual(self.loader.last_error.error_type, "parse")

    def test_non_xml_file_rejected_silently(self):
        path = self._write("notes.txt", "<root/>")
        self.assertFalse(self.loader.load(path))
        self._finish()

        self.assertEqual(self.loaded, [])
        self.assertEqual(self.failed, [])
        self.assertEqual(self.rejected, [path])
        self.assertEqual(self.loader.generation, 0)

    def test_declared_non_xml_type_rejects_xml_name(self):
        path = self._write("data.xml", "<root/>")
        self.assertFalse(self.loader.load(path, "application/json"))
        self._finish()

        self.assertEqual(self.loaded, [])
        self.assertEqual(self.failed, [])
        self.assertEqual(self.rejected, [path])

    def test_missing_file_reports_read_failure(self):
        path = os.path.join(self.temp_dir.name, "missing.xml")
        self.assertTrue(self.loader.load(path))
        self._finish()

        self.assertEqual(self.failed, [READ_FAILED_MESSAGE])
        self.assertEqual(self.loader.last_error.error_type, "read")

    def test_stale_completion_is_dropped(self):
        self.loader._load_content("<first/>")
        stale_generation = self.loader.generation
        self.loader._load_content("<second/>")
        self.loader._on_read_complete(stale_generation, "<late/>")
        self.loader._on_read_failed(stale_generation, "late failure")

        self.assertEqual([root.tag for root in self.loaded], ["first", "second"])
        self.assertEqual(self.failed, [])

    def test_last_load_wins(self):
        first = self._write("first.xml", "<first/>")
        second = self._write("second.xml", "<second/>")
        self.loader.load(first)
        self.loader.load(second)
        self._finish()

        self.assertEqual([root.tag for root in self.loaded], ["second"])
        self.assertEqual(self.loader.current_file, second)

    def test_error_then_success(self):
        self.loader._load_content("<broken>")
        self.loader._load_content("<fixed/>")
        self.assertEqual(self.failed, [NOT_VALID_XML_MESSAGE])
        self.assertEqual([root.tag for root in self.loaded], ["fixed"])
        self.assertIsNone(self.loader.last_error)


if __name__ == '__main__':
    unittest.main(verbosity=2)
