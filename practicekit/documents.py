"""Importing XML documents into a repository."""

from __future__ import annotations

import argparse
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PATH = "document.xml"
DEFAULT_ID = "doc1"


@dataclass
class Section:
    """A named section of a document."""

    name: str = ""
    content: str = ""


@dataclass
class Document:
    """A document with an id, a title and its sections."""

    id: str = ""
    title: str = ""
    sections: list[Section] = field(default_factory=list)


class DocumentImportError(Exception):
    """Raised when a document cannot be read or parsed."""


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _own_text(element: ET.Element) -> str:
    """Return the character data directly inside ``element``, not in its children."""
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _parse_section(element: ET.Element) -> Section:
    section = Section()
    for child in element:
        tag = _local_name(child.tag)
        if tag == "name":
            section.name = _own_text(child)
        elif tag == "content":
            section.content = _own_text(child)
    return section


def parse_document(data: bytes | str) -> Document:
    """Parse a document from XML with ``id``, ``title`` and ``section`` children."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DocumentImportError(f"error unmarshaling XML: {exc}") from exc
    document = Document()
    for child in root:
        tag = _local_name(child.tag)
        if tag == "id":
            document.id = _own_text(child)
        elif tag == "title":
            document.title = _own_text(child)
        elif tag == "section":
            document.sections.append(_parse_section(child))
    return document


class InMemoryDocumentRepository:
    """Keeps documents in memory by id."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def save(self, document: Document) -> None:
        """Store ``document``, replacing any with the same id."""
        self._documents[document.id] = document

    def find_by_id(self, document_id: str) -> Document | None:
        """Return the document with ``document_id``, or None."""
        return self._documents.get(document_id)


class XmlDocumentService:
    """Reads XML files and saves the documents they hold."""

    def __init__(self, repository: InMemoryDocumentRepository) -> None:
        self.repository = repository

    def import_from_file(self, path: str | Path) -> Document:
        """Parse the document in ``path``, save it and return it."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise DocumentImportError(f"error reading file: {exc}") from exc
        document = parse_document(data)
        self.repository.save(document)
        return document


def main(argv: list[str] | None = None) -> int:
    """Import a document and print its title and sections."""
    parser = argparse.ArgumentParser(description="Import an XML document and show it.")
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH)
    parser.add_argument("--id", dest="document_id", default=DEFAULT_ID)
    args = parser.parse_args(argv)

    repository = InMemoryDocumentRepository()
    service = XmlDocumentService(repository)
    try:
        service.import_from_file(args.path)
    except DocumentImportError as exc:
        print(exc)
        return 1

    document = repository.find_by_id(args.document_id)
    if document is None:
        print(f"document not found: {args.document_id}")
        return 1
    print("Document Title:", document.title)
    for section in document.sections:
        print(f"Section Name: {section.name}, Content: {section.content}")
    return 0