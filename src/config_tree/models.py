"""Data models for config-tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Configuration


class Scope(Enum):
    """Configuration scope enumeration.

    Determines which configuration file to target for write operations.
    """

    USER = "user"
    PROJECT = "project"
    LOCAL = "local"


class MergeMode(Enum):
    """How matching children are treated when merging trees.

    COMPAT keeps the existing child and appends any incoming child whose
    signature does not match it, so repeated merges can accumulate siblings
    with the same name. STRICT merges into the sibling with the same
    signature, or replaces the first same-named sibling when there is none.
    """

    COMPAT = "compat"
    STRICT = "strict"


class ResultKind(Enum):
    """Shape of a path lookup result."""

    NOT_FOUND = "not_found"
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the three configuration scopes.

    Applications inject these paths to define their configuration policy.

    Attributes:
        user: Path to user-global configuration file (required)
        project: Path to project configuration file (optional)
        local: Path to local (machine-specific) configuration file (optional)
    """

    user: Path
    project: Path | None = None
    local: Path | None = None


@dataclass(frozen=True)
class Diagnostic:
    """A single message reported by the XML parser or schema validator.

    Attributes:
        line: Line number in the document (0 when unknown)
        column: Column number in the document (0 when unknown)
        code: libxml2 error code
        message: Human readable message
        source: File name or "<string>" for in-memory documents
    """

    line: int
    column: int
    code: int
    message: str
    source: str | None = None

    @classmethod
    def from_log_entry(cls, entry) -> Diagnostic:
        """Build a diagnostic from an ``lxml.etree`` error log entry."""
        return cls(
            line=entry.line,
            column=entry.column,
            code=entry.type,
            message=(entry.message or "").strip(),
            source=entry.filename,
        )

    def __str__(self) -> str:
        return (
            f"line {self.line}, column {self.column}, code {self.code}: "
            f"{self.message} ({self.source or '<string>'})"
        )


@dataclass(frozen=True)
class PathResult:
    """Tagged result of resolving a path against a node.

    ``NOT_FOUND`` carries no nodes, ``ONE`` carries the node the path ended
    on, ``MANY`` carries the (possibly empty) collection of matches.
    """

    kind: ResultKind
    nodes: tuple[Configuration, ...] = ()

    @classmethod
    def not_found(cls) -> PathResult:
        return cls(ResultKind.NOT_FOUND)

    @classmethod
    def one(cls, node: Configuration) -> PathResult:
        return cls(ResultKind.ONE, (node,))

    @classmethod
    def many(cls, nodes) -> PathResult:
        return cls(ResultKind.MANY, tuple(nodes))

    def first(self) -> Configuration | None:
        """Return the first matched node, or None when nothing matched."""
        return self.nodes[0] if self.nodes else None

    def __bool__(self) -> bool:
        return bool(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)
