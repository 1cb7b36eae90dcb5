"""
Read-only document tree access.

The XMD reader only needs tag names, attributes, ordered children and text,
so it works against the small DocumentNode protocol below. ElementNode adapts
xml.etree.ElementTree; any other parser can feed the reader through its own
adapter.

:return : Tree navigation utilities.
:return: DocumentNode protocol, ElementTree adapter, find_child and has_child.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Sequence, Tuple
import xml.etree.ElementTree as ET


class DocumentNode(Protocol):
    """
    Minimal read-only view of a document node.

    tag is None for non-element nodes (comments, processing instructions).
    """

    @property
    def tag(self) -> Optional[str]: ...

    @property
    def attributes(self) -> Mapping[str, str]: ...

    @property
    def children(self) -> Sequence["DocumentNode"]: ...

    @property
    def text(self) -> Optional[str]: ...


def _split_tag(tag: str) -> Tuple[Optional[str], str]:
    if tag.startswith("{"):
        uri, local = tag[1:].split("}", 1)
        return uri, local
    return None, tag


class ElementNode:
    """
    DocumentNode adapter over an ElementTree element.

    Tags in the document namespace (the one the model element uses, if any)
    are reported by local name; tags from any other namespace keep their
    full {uri}local form so they never match XMD element names.

    :param element: Wrapped element.
    :param namespace: Document namespace, taken from a namespaced model element when omitted.
    :return : ElementNode instance.
    :return: Read-only node view.
    """

    def __init__(self, element: ET.Element, namespace: Optional[str] = None) -> None:
        self._element = element
        if namespace is None and isinstance(element.tag, str):
            uri, local = _split_tag(element.tag)
            if local == "model":
                namespace = uri
        self._namespace = namespace

    @property
    def tag(self) -> Optional[str]:
        # ET.Comment / ET.ProcessingInstruction use factory functions as tags
        if not isinstance(self._element.tag, str):
            return None
        uri, local = _split_tag(self._element.tag)
        if uri is None or uri == self._namespace:
            return local
        return self._element.tag

    @property
    def attributes(self) -> Mapping[str, str]:
        return self._element.attrib

    @property
    def children(self) -> Sequence["ElementNode"]:
        return [ElementNode(child, self._namespace) for child in self._element]

    @property
    def text(self) -> Optional[str]:
        return self._element.text

    @staticmethod
    def document(tree: ET.ElementTree) -> "DocumentRoot":
        """
        Wrap a parsed tree as a document node.

        :param tree: Parsed ElementTree.
        :return : DocumentRoot.
        :return: Node whose only child is the tree's root element.
        """
        return DocumentRoot(ElementNode(tree.getroot()))

    def __repr__(self) -> str:
        return f"ElementNode({self.tag!r})"


class DocumentRoot:
    """Document-level node; its single child is the root element."""

    tag: Optional[str] = None
    attributes: Mapping[str, str] = MappingProxyType({})
    text: Optional[str] = None

    def __init__(self, root: DocumentNode) -> None:
        self.root = root

    @property
    def children(self) -> Sequence[DocumentNode]:
        return [self.root]


def find_child(parent: Optional[DocumentNode], tag: str) -> Optional[DocumentNode]:
    """
    Find the first direct child with a given tag.

    :param parent: Node to search, may be None.
    :param tag: Tag name to match.
    :return : Child node or None.
    :return: First matching child in document order, None if absent.
    """
    if parent is None:
        return None
    for child in parent.children:
        if child.tag == tag:
            return child
    return None


def has_child(parent: Optional[DocumentNode], tag: str) -> bool:
    """
    Test whether a node has a direct child with a given tag.

    :param parent: Node to search, may be None.
    :param tag: Tag name to match.
    :return : Boolean.
    :return: True if a matching child exists.
    """
    return find_child(parent, tag) is not None
