"""
Atom feed and entry objects.

Thin wrappers around an ElementTree element in the Atom namespace, with the
GData (``gd``) namespace prewired. Extension elements in other namespaces are
addressed through :class:`~dataapi.namespaces.Namespace` values handed out by
a :class:`~dataapi.namespaces.NamespaceResolver`.

Parsing goes through defusedxml so that entity expansion and external
references in server responses are refused.
"""

import copy
import re
import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, NamedTuple, Optional, Type, Union

from defusedxml import ElementTree as SafeElementTree

from dataapi.constants import MediaTypes, NamespaceConstants
from dataapi.namespaces import GD_NAMESPACE, Namespace

ATOM_NS = NamespaceConstants.ATOM
APP_NS = NamespaceConstants.APP
GD_NS = NamespaceConstants.GD

ET.register_namespace("atom", ATOM_NS)
ET.register_namespace("app", APP_NS)
ET.register_namespace(GD_NAMESPACE.prefix, GD_NS)

BUILTIN_URIS = frozenset((ATOM_NS, APP_NS, GD_NS))
BUILTIN_PREFIXES = frozenset(("atom", "app", GD_NAMESPACE.prefix, "xml"))
AUTO_PREFIX = re.compile(r"ns\d+")

EDIT_REL = "edit"
NEXT_REL = "next"
SELF_REL = "self"
POST_REL = "http://schemas.google.com/g/2005#post"


def qname(uri: str, name: str) -> str:
    return f"{{{uri}}}{name}"


class Link(NamedTuple):
    rel: Optional[str]
    href: Optional[str]
    type: Optional[str] = None


class AtomElement:
    """Common behaviour of feeds and entries."""

    element_name = ""
    fields = ("id", "title", "updated", "etag")

    def __init__(self, element: Optional[ET.Element] = None, **values):
        expected = qname(ATOM_NS, self.element_name)
        if element is None:
            element = ET.Element(expected)
        elif element.tag != expected:
            raise ValueError(
                f"expected <{self.element_name}> in {ATOM_NS}, got {element.tag}"
            )
        self._element = element
        self._prefixes: Dict[str, str] = {}

        for name, value in values.items():
            if name not in self.fields:
                raise TypeError(
                    f"{self.__class__.__name__}() got an unexpected field '{name}'"
                )
            setattr(self, name, value)

    @classmethod
    def from_xml(cls, data: Union[bytes, str]):
        """Parse a serialized document; raises ValueError or ParseError when broken."""
        if not data:
            raise ValueError("document is empty")
        return cls(SafeElementTree.fromstring(data))

    def to_xml(self) -> bytes:
        return ET.tostring(self._prefixed(), encoding="utf-8", xml_declaration=True)

    def _remember(self, ns: Namespace) -> None:
        if ns.uri in BUILTIN_URIS or ns.prefix in BUILTIN_PREFIXES:
            return
        # ns0, ns1, ... are what ElementTree invents for unknown namespaces.
        if AUTO_PREFIX.fullmatch(ns.prefix):
            return
        if ns.prefix in self._prefixes.values() and self._prefixes.get(ns.uri) != ns.prefix:
            return
        self._prefixes[ns.uri] = ns.prefix

    def _prefixed(self) -> ET.Element:
        """A copy of the tree with extension names spelled ``prefix:name``.

        ElementTree only knows prefixes from its process-wide registry, so
        extension namespaces are declared on the copied root instead.
        """
        if not self._prefixes:
            return self._element

        root = copy.deepcopy(self._element)
        for element in root.iter():
            element.tag = self._prefixed_name(element.tag)
            for key in [key for key in element.attrib if key.startswith("{")]:
                element.set(self._prefixed_name(key), element.attrib.pop(key))
        for uri, prefix in self._prefixes.items():
            root.set(f"xmlns:{prefix}", uri)
        return root

    def _prefixed_name(self, name: str) -> str:
        if not isinstance(name, str) or not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        prefix = self._prefixes.get(uri)
        return f"{prefix}:{local}" if prefix else name

    @property
    def element(self) -> ET.Element:
        return self._element

    # -- Atom children -----------------------------------------------------

    def _child(self, name: str, uri: str = ATOM_NS) -> Optional[ET.Element]:
        return self._element.find(qname(uri, name))

    def _get_text(self, name: str, uri: str = ATOM_NS) -> Optional[str]:
        child = self._child(name, uri)
        return child.text if child is not None else None

    def _set_text(self, name: str, value: Optional[str], uri: str = ATOM_NS) -> Optional[ET.Element]:
        child = self._child(name, uri)
        if value is None:
            if child is not None:
                self._element.remove(child)
            return None
        if child is None:
            child = ET.SubElement(self._element, qname(uri, name))
        child.text = value
        return child

    @property
    def id(self) -> Optional[str]:
        return self._get_text("id")

    @id.setter
    def id(self, value: Optional[str]):
        self._set_text("id", value)

    @property
    def title(self) -> Optional[str]:
        return self._get_text("title")

    @title.setter
    def title(self, value: Optional[str]):
        child = self._set_text("title", value)
        if child is not None:
            child.set("type", "text")

    @property
    def updated(self) -> Optional[str]:
        return self._get_text("updated")

    @updated.setter
    def updated(self, value: Optional[str]):
        self._set_text("updated", value)

    @property
    def etag(self) -> Optional[str]:
        """The ``gd:etag`` version marker of this resource."""
        return self._element.get(qname(GD_NS, "etag"))

    @etag.setter
    def etag(self, value: Optional[str]):
        if value is None:
            self._element.attrib.pop(qname(GD_NS, "etag"), None)
        else:
            self._element.set(qname(GD_NS, "etag"), value)

    # -- links ---------------------------------------------------------------

    @property
    def links(self) -> List[Link]:
        return [
            Link(link.get("rel"), link.get("href"), link.get("type"))
            for link in self._element.findall(qname(ATOM_NS, "link"))
        ]

    def get_link(self, rel: str) -> Optional[str]:
        for link in self.links:
            if link.rel == rel:
                return link.href
        return None

    def set_link(self, rel: str, href: str, type: Optional[str] = None) -> None:
        """Add a link, replacing any existing link with the same rel."""
        for link in self._element.findall(qname(ATOM_NS, "link")):
            if link.get("rel") == rel:
                self._element.remove(link)
        attributes = {"rel": rel, "href": href}
        if type:
            attributes["type"] = type
        ET.SubElement(self._element, qname(ATOM_NS, "link"), attributes)

    @property
    def self_url(self) -> Optional[str]:
        return self.get_link(SELF_REL)

    # -- extension elements --------------------------------------------------

    def get(self, ns: Namespace, name: str) -> Optional[str]:
        """Text of the first ``ns:name`` child, or None."""
        child = self._child(name, ns.uri)
        return child.text if child is not None else None

    def get_attributes(self, ns: Namespace, name: str) -> Dict[str, str]:
        child = self._child(name, ns.uri)
        return dict(child.attrib) if child is not None else {}

    def get_all(self, ns: Namespace, name: str) -> List[ET.Element]:
        return self._element.findall(qname(ns.uri, name))

    def set(self, ns: Namespace, name: str, value: Optional[str] = None, **attributes: str) -> ET.Element:
        """Create or replace the ``ns:name`` child with text and attributes."""
        self._remember(ns)
        for child in self.get_all(ns, name):
            self._element.remove(child)
        child = ET.SubElement(self._element, qname(ns.uri, name), attributes)
        if value is not None:
            child.text = value
        return child

    def add(self, ns: Namespace, name: str, value: Optional[str] = None, **attributes: str) -> ET.Element:
        """Append another ``ns:name`` child, keeping existing ones."""
        self._remember(ns)
        child = ET.SubElement(self._element, qname(ns.uri, name), attributes)
        if value is not None:
            child.text = value
        return child

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r} title={self.title!r}>"


class Entry(AtomElement):
    """A member of a feed; the unit of create, update and delete."""

    element_name = "entry"
    fields = AtomElement.fields + ("content",)

    @property
    def content(self) -> Optional[str]:
        return self._get_text("content")

    @content.setter
    def content(self, value: Optional[str]):
        child = self._set_text("content", value)
        if child is not None and "type" not in child.attrib:
            child.set("type", "text")

    @property
    def edit_url(self) -> Optional[str]:
        """The URL this entry must be PUT or DELETEd to."""
        return self.get_link(EDIT_REL)

    @edit_url.setter
    def edit_url(self, href: str):
        self.set_link(EDIT_REL, href, MediaTypes.ATOM)


class Feed(AtomElement):
    """A collection of entries.

    Subclasses set ``entry_class`` to get their entries deserialized into a
    specific :class:`Entry` subtype.
    """

    element_name = "feed"
    entry_class: Type[Entry] = Entry

    @property
    def entries(self) -> List[Entry]:
        return [
            self.entry_class(element)
            for element in self._element.findall(qname(ATOM_NS, "entry"))
        ]

    def add_entry(self, entry: Entry) -> None:
        self._element.append(entry.element)
        self._prefixes.update(entry._prefixes)

    @property
    def next_url(self) -> Optional[str]:
        return self.get_link(NEXT_REL)

    @property
    def post_url(self) -> Optional[str]:
        return self.get_link(POST_REL)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)
