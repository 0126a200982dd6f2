"""Signature based merging of configuration trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .models import MergeMode

if TYPE_CHECKING:
    from .node import Configuration

logger = logging.getLogger(__name__)


def merge(target: Configuration, incoming: Configuration, mode: MergeMode = MergeMode.COMPAT) -> Configuration | None:
    """Overlay ``incoming`` onto ``target`` in place.

    Only nodes with the same signature (name plus attribute values) are
    merged. The incoming value and attributes replace the target's; each
    incoming child is merged into the target's first child with the same
    name, or appended when there is no such child.

    Args:
        target: Node to update
        incoming: Node whose content takes precedence
        mode: How same-named children that cannot be merged are handled

    Returns:
        None when the trees were merged, ``incoming`` when the signatures
        differ and ``target`` was left untouched

    Example:
        ```python
        a = Configuration.from_string('<item id="1">old</item>')
        merge(a, Configuration.from_string('<item id="1">new</item>'))  # None
        a.value  # 'new'
        ```
    """
    if not target.has_same_signature(incoming):
        logger.debug(f"Signature mismatch merging '{incoming.name}' onto '{target.name}'")
        return incoming

    target.value = incoming.value
    target.replace_attributes(incoming.attributes)

    for child in list(incoming.children):
        existing = target.get_child(f"{target.name}/{child.name}")
        if existing is None:
            target.add_child(child)
        elif mode is MergeMode.STRICT:
            _merge_child_strict(target, child)
        else:
            unmerged = merge(existing, child, mode)
            if unmerged is not None:
                # Same name, different signature: keep both siblings
                target.add_child(unmerged)

    return None


def _merge_child_strict(target: Configuration, child: Configuration) -> None:
    """Merge ``child`` into its signature match or replace the first same-named sibling."""
    siblings = [node for node in target.children if node.name == child.name]

    for sibling in siblings:
        if sibling.has_same_signature(child):
            merge(sibling, child, MergeMode.STRICT)
            return

    index = target.children.index(siblings[0])
    target.children[index] = child


def merge_from_file(target: Configuration, file: str | Path, mode: MergeMode = MergeMode.COMPAT) -> Configuration:
    """Parse ``file`` and merge the result onto ``target``.

    Returns:
        The tree parsed from the file, not ``target``
    """
    configuration = type(target).from_file(file)
    logger.debug(f"Merging configuration from {file} onto '{target.name}'")
    merge(target, configuration, mode)
    return configuration


def merge_from_string(target: Configuration, text: str | bytes, mode: MergeMode = MergeMode.COMPAT) -> Configuration:
    """Parse ``text`` and merge the result onto ``target``.

    Returns:
        The tree parsed from the string, not ``target``
    """
    configuration = type(target).from_string(text)
    merge(target, configuration, mode)
    return configuration
