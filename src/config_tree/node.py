"""Configuration node: the tree entity and its accessors."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from lxml import etree

from . import merge as merge_engine
from . import serialization
from . import validation
from .exceptions import InvalidAccessorError
from .models import MergeMode
from .models import PathResult
from .models import ResultKind
from .utils import compute_signature
from .utils import resolve_path
from .utils import split_path


class Configuration:
    """A node in an XML configuration tree.

    Each node has a name, an optional text value, an ordered attribute map
    and an ordered list of children. Nodes own their children and hold no
    reference to their parent.

    Args:
        name: The node name (element tag)

    Example:
        ```python
        root = Configuration.from_string('<config id="1"><item x="a"/></config>')
        root.get_childs("config/item")[0].get_attribute("x")  # 'a'
        ```
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self.value: str | None = None
        self.attributes: dict[str, str] = {}
        self.children: list[Configuration] = []
        self.schema_file: str | Path | None = None

    def __repr__(self) -> str:
        return f"Configuration({self.name!r}, attributes={self.attributes!r}, children={len(self.children)})"

    def __str__(self) -> str:
        return self.value if self.value is not None else ""

    # ===== Construction from XML =====

    @classmethod
    def from_file(cls, file: str | Path) -> Configuration:
        """Create a configuration tree from an XML file."""
        return cls().init_from_file(file)

    @classmethod
    def from_string(cls, text: str | bytes) -> Configuration:
        """Create a configuration tree from an XML string."""
        return cls().init_from_string(text)

    @classmethod
    def from_document(cls, document: etree._ElementTree | etree._Element) -> Configuration:
        """Create a configuration tree from an already parsed lxml document."""
        return cls().init_from_document(document)

    def init_from_file(self, file: str | Path) -> Configuration:
        """Populate this node from an XML file.

        Raises:
            ConfigFileError: If the file cannot be read
            ConfigParseError: If the file is not well-formed XML
        """
        return serialization.populate(self, serialization.parse_file(file))

    def init_from_string(self, text: str | bytes) -> Configuration:
        """Populate this node from an XML string.

        Raises:
            ConfigParseError: If the string is not well-formed XML
        """
        return serialization.populate(self, serialization.parse_string(text))

    def init_from_document(self, document: etree._ElementTree | etree._Element) -> Configuration:
        """Populate this node from an lxml document or element."""
        return serialization.populate(self, document)

    # ===== Children =====

    def add_child(self, child: Configuration) -> Configuration:
        """Append a child node and return this node."""
        self.children.append(child)
        return self

    def add_child_with_name_and_value(self, name: str, value: str | None) -> Configuration:
        """Append a new child with the given name and value and return the child."""
        child = type(self)(name)
        child.value = value
        self.add_child(child)
        return child

    def get_children(self) -> list[Configuration]:
        return self.children

    def set_children(self, children: Iterable[Configuration]) -> None:
        """Replace all children. Existing children are dropped."""
        self.children = list(children)

    def has_children(self) -> bool:
        return len(self.children) > 0

    # ===== Attributes =====

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def get_attributes(self) -> dict[str, str]:
        return self.attributes

    def append_attributes(self, attributes: Mapping[str, str]) -> None:
        """Add attributes, overwriting only keys that already exist."""
        for key, value in attributes.items():
            self.attributes[key] = value

    def replace_attributes(self, attributes: Mapping[str, str]) -> None:
        """Replace all attributes. Existing attributes are dropped."""
        self.attributes = dict(attributes)

    # ===== Path Queries =====

    def resolve(self, path: str, collect_all: bool = False) -> PathResult:
        """Resolve a path anchored at this node.

        See ``config_tree.utils.resolve_path`` for the matching rules.
        """
        return resolve_path(self, path, collect_all)

    def get_childs(self, path: str) -> Configuration | list[Configuration] | None:
        """Return the nodes matching a path.

        Returns:
            This node itself when the path names only this node, a list of
            matches when the path continues below it, or None when the first
            token is not this node's name
        """
        result = self.resolve(path)
        if result.kind is ResultKind.ONE:
            return result.nodes[0]
        if result.kind is ResultKind.MANY:
            return list(result.nodes)
        return None

    def get_child(self, path: str) -> Configuration | None:
        """Return the first node below this one matching a path.

        Only lookups that continue below this node yield a result; a path
        naming just this node returns None. Use ``resolve(path).first()`` to
        also get the node a path ends on.
        """
        result = self.resolve(path)
        if result.kind is ResultKind.MANY:
            return result.first()
        return None

    def remove_childs(self, path: str) -> Configuration:
        """Drop all children of this node when the path continues below it.

        Returns:
            This node, whether or not anything was removed
        """
        token, remainder = split_path(path)
        if self.name == token and remainder:
            self.set_children([])
        return self

    # ===== Equality =====

    def equals(self, other: Configuration) -> bool:
        """Return True only if ``other`` is this very instance."""
        return self is other

    def get_signature(self) -> str:
        """Return the md5 hash of the node name and attribute values."""
        return compute_signature(self.name, self.attributes.values())

    def has_same_signature(self, other: Configuration) -> bool:
        return self.get_signature() == other.get_signature()

    # ===== Merge =====

    def merge(self, other: Configuration, mode: MergeMode = MergeMode.COMPAT) -> Configuration | None:
        """Merge ``other`` onto this node in place.

        Returns:
            None when merged, or ``other`` itself when the signatures differ
        """
        return merge_engine.merge(self, other, mode)

    def merge_from_file(self, file: str | Path, mode: MergeMode = MergeMode.COMPAT) -> Configuration:
        """Merge the tree parsed from a file onto this node and return the parsed tree."""
        return merge_engine.merge_from_file(self, file, mode)

    def merge_from_string(self, text: str | bytes, mode: MergeMode = MergeMode.COMPAT) -> Configuration:
        """Merge the tree parsed from a string onto this node and return the parsed tree."""
        return merge_engine.merge_from_string(self, text, mode)

    # ===== Serialization & Validation =====

    def to_element(self, namespace: str | None = None) -> etree._Element:
        return serialization.to_element(self, namespace)

    def to_document(self, namespace: str | None = None) -> etree._ElementTree:
        return serialization.to_document(self, namespace)

    def to_string(self, namespace: str | None = None, pretty_print: bool = True) -> str:
        return serialization.to_string(self, namespace, pretty_print)

    def save(self, filename: str | Path, namespace: str | None = None) -> None:
        serialization.save(self, filename, namespace)

    def validate(self, namespace: str | None = None) -> etree._ElementTree:
        return validation.validate(self, namespace)

    # ===== Generic Accessor =====

    def get(self, name: str) -> Configuration | Any:
        """Return the child named ``name`` or, failing that, the attribute.

        Example:
            ```python
            root = Configuration.from_string('<server port="80"><host>a</host></server>')
            str(root.get("host"))  # 'a'
            root.get("port")       # '80'
            ```
        """
        child = self.get_child(f"/{self.name}/{name}")
        if child is not None:
            return child
        return self.get_attribute(name)

    def set(self, name: str, value: Any) -> None:
        """Store ``value`` as the attribute ``name``."""
        self.set_attribute(name, value)

    def invoke(self, method: str, *args: Any) -> Any:
        """Dispatch a ``getX`` / ``setX`` shaped call to ``get`` / ``set``.

        The first character after the prefix is lowercased, so
        ``invoke("getDocumentRoot")`` reads ``documentRoot``.

        Raises:
            InvalidAccessorError: If the method is not a getter or setter
        """
        prefix, key = method[:3], method[3:]
        key = key[:1].lower() + key[1:]

        if prefix == "get":
            return self.get(key)
        if prefix == "set":
            self.set(key, args[0] if args else None)
            return None

        raise InvalidAccessorError(f"Invalid method {type(self).__name__}.{method}({', '.join(map(repr, args))})")
