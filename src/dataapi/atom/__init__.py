"""Atom feed and entry model."""

from .models import ATOM_NS, AtomElement, Entry, Feed, Link

__all__ = ["ATOM_NS", "AtomElement", "Entry", "Feed", "Link"]
