"""
Prefix to XML namespace resolution for Atom extension elements.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple, Optional

from dataapi.constants import NamespaceConstants
from dataapi.exceptions import NamespaceNotDefinedError


class Namespace(NamedTuple):
    prefix: str
    uri: str


GD_NAMESPACE = Namespace(NamespaceConstants.GD_PREFIX, NamespaceConstants.GD)


class NamespaceResolver:
    """Resolve extension prefixes against a mapping fixed at construction.

    The ``gd`` prefix is built in and always resolves to the GData namespace,
    whatever the mapping says. Any other prefix must have been supplied up
    front; asking for an unknown one is a configuration error.
    """

    def __init__(self, namespaces: Optional[Mapping[str, str]] = None):
        self._namespaces = MappingProxyType(dict(namespaces or {}))

    def resolve(self, prefix: str) -> Namespace:
        if prefix == GD_NAMESPACE.prefix:
            return GD_NAMESPACE
        uri = self._namespaces.get(prefix)
        if not uri:
            raise NamespaceNotDefinedError(prefix)
        return Namespace(prefix, uri)

    __call__ = resolve

    @property
    def prefixes(self) -> Iterator[str]:
        yield GD_NAMESPACE.prefix
        for prefix in self._namespaces:
            if prefix != GD_NAMESPACE.prefix:
                yield prefix

    def __contains__(self, prefix: object) -> bool:
        return prefix == GD_NAMESPACE.prefix or prefix in self._namespaces

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict(self._namespaces)!r})"
