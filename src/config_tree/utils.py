"""Path resolution and signature helpers for config-tree."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from .models import PathResult
from .models import ResultKind

if TYPE_CHECKING:
    from .node import Configuration


def split_path(path: str) -> tuple[str, str]:
    """Split a path into its first token and the remainder.

    Leading slashes are ignored, so absolute and relative spellings of a
    path resolve the same way.

    Args:
        path: Slash-delimited path

    Returns:
        Tuple of (token, remainder); remainder is "" for the last token

    Examples:
        >>> split_path("config/database/host")
        ('config', 'database/host')

        >>> split_path("/config/database")
        ('config', 'database')

        >>> split_path("config")
        ('config', '')
    """
    token, _, remainder = path.lstrip("/").partition("/")
    return token, remainder


def resolve_path(node: Configuration, path: str, collect_all: bool = False) -> PathResult:
    """Resolve a path anchored at ``node``.

    The first token must equal the node's own name. When it is the last
    token the node itself is the result. Otherwise the remainder is resolved
    against every child and the matches are accumulated.

    While accumulating, a collection returned by a child replaces whatever
    was gathered from earlier children; only the last collection survives.
    ``collect_all=True`` extends the accumulator instead, which returns
    every match in document order.

    Args:
        node: Node the path is anchored at
        path: Slash-delimited path starting with the node's name
        collect_all: Extend rather than replace on collection results

    Returns:
        PathResult of kind NOT_FOUND, ONE or MANY
    """
    token, remainder = split_path(path)

    if node.name != token:
        return PathResult.not_found()

    if not remainder:
        return PathResult.one(node)

    matches: list[Configuration] = []
    for child in node.children:
        result = resolve_path(child, remainder, collect_all)
        if result.kind is ResultKind.MANY:
            if collect_all:
                matches.extend(result.nodes)
            else:
                matches = list(result.nodes)
        elif result.kind is ResultKind.ONE:
            matches.append(result.nodes[0])

    return PathResult.many(matches)


def compute_signature(name: str | None, values) -> str:
    """Hash a node name together with its attribute values.

    Args:
        name: Node name (None is hashed as "")
        values: Attribute values in insertion order

    Returns:
        Hex md5 digest of the concatenation

    Examples:
        >>> compute_signature("item", ["1"]) == compute_signature("item1", [])
        True
    """
    content = (name or "") + "".join(str(value) for value in values)
    return hashlib.md5(content.encode("utf-8")).hexdigest()
