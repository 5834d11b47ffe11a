"""
XML Service - Reading and parsing documents for the viewer
"""

import logging
import mimetypes
import os
from typing import Optional

from lxml import etree

from models import DocumentNode

logger = logging.getLogger(__name__)

XML_EXTENSIONS = (".xml", ".xsd", ".xsl", ".xslt")
XML_MIME_TYPES = ("text/xml", "application/xml")
FILE_ENCODINGS = ("utf-8", "cp1252")
FALLBACK_ENCODING = "latin-1"


class XmlParseError(ValueError):
    """Raised when content is not well-formed XML"""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column


def is_xml_file(file_path: str, declared_type: Optional[str] = None) -> bool:
    """Check whether a file looks like XML.

    A declared MIME type decides on its own. Without one, the type guessed from
    the file name decides, and the extension list is only consulted when
    nothing can be guessed.
    """
    mime_type = declared_type
    if not mime_type:
        mime_type, _ = mimetypes.guess_type(file_path)
    if mime_type:
        mime_type = mime_type.lower()
        return mime_type in XML_MIME_TYPES or mime_type.endswith("+xml")
    return file_path.lower().endswith(XML_EXTENSIONS)


class XmlService:
    """Service for XML reading and parsing"""

    def __init__(self):
        self.parser = etree.XMLParser(
            # Internal DTD entities expand into text; external ones are never fetched
            resolve_entities="internal",
            no_network=True,
            huge_tree=True,
            encoding="utf-8",
        )

    def read_text(self, file_path: str) -> str:
        """Read a file as text, trying common encodings in turn"""
        with open(file_path, "rb") as file:
            raw = file.read()

        for encoding in FILE_ENCODINGS:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError:
                continue

        # Decodes any byte sequence
        return raw.decode(FALLBACK_ENCODING)

    def parse_document(self, xml_content: str) -> DocumentNode:
        """Parse XML content and return the root as a DocumentNode"""
        # Remove BOM if present
        if xml_content.startswith("\ufeff"):
            xml_content = xml_content[1:]

        if not xml_content.strip():
            raise XmlParseError("Document is empty")

        try:
            root = etree.fromstring(xml_content.encode("utf-8"), self.parser)
        except etree.XMLSyntaxError as e:
            line, column = e.position if e.position else (0, 0)
            raise XmlParseError(str(e), line=line or 0, column=column or 0) from e

        return self._element_to_document_node(root)

    def _element_to_document_node(self, root) -> DocumentNode:
        """Convert an lxml element tree into DocumentNodes without recursion"""
        root_node = DocumentNode(tag=self._qualified_name(root))
        stack = [(root, root_node)]

        while stack:
            element, node = stack.pop()
            element_children = [child for child in element if isinstance(child.tag, str)]

            if element_children:
                # Only leaves carry text in this viewer
                for child in element_children:
                    child_node = DocumentNode(tag=self._qualified_name(child))
                    node.children.append(child_node)
                    stack.append((child, child_node))
            else:
                node.text = self._leaf_text(element)

        return root_node

    def _leaf_text(self, element) -> str:
        """Text content of an element whose only children are comments, PIs or unresolved entities"""
        parts = [element.text or ""]
        for child in element:
            parts.append(child.tail or "")
        return "".join(parts)

    def _qualified_name(self, element) -> str:
        """Tag name as written in the document, prefix included"""
        local_name = etree.QName(element).localname
        if element.prefix:
            return f"{element.prefix}:{local_name}"
        return local_name

    def describe_file(self, file_path: str) -> str:
        """Short label for status messages"""
        try:
            size = os.path.getsize(file_path)
        except OSError:
            return os.path.basename(file_path)
        if size < 1024:
            size_string = f"{size} bytes"
        elif size < 1024 * 1024:
            size_string = f"{size / 1024:.1f} KB"
        else:
            size_string = f"{size / (1024 * 1024):.1f} MB"
        return f"{os.path.basename(file_path)} ({size_string})"
