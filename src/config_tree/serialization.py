"""Conversion between configuration trees and XML documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .models import Diagnostic

if TYPE_CHECKING:
    from .node import Configuration

logger = logging.getLogger(__name__)


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=True)


def _collect_diagnostics(error: etree.XMLSyntaxError, parser: etree.XMLParser) -> list[Diagnostic]:
    """Turn every error the parser logged for a failed parse into a Diagnostic.

    The parser's own log is used; the exception's log is lxml's global one
    and may still hold entries from earlier parses or schema validations.
    """
    diagnostics = [Diagnostic.from_log_entry(entry) for entry in parser.error_log.filter_from_errors()]
    if not diagnostics:
        line, column = error.position
        diagnostics.append(Diagnostic(line, column, error.code, error.msg, error.filename))
    return diagnostics


# ===== Parsing =====


def parse_file(file: str | Path) -> etree._ElementTree:
    """Parse an XML file.

    Args:
        file: Path to the XML file

    Returns:
        The parsed lxml document

    Raises:
        ConfigFileError: If the file does not exist or cannot be read
        ConfigParseError: If the file is not well-formed XML
    """
    path = Path(file)
    if not path.is_file():
        raise ConfigFileError(f"Configuration file {path} does not exist")

    parser = _parser()
    try:
        document = etree.parse(str(path), parser)
    except etree.XMLSyntaxError as e:
        raise ConfigParseError(_collect_diagnostics(e, parser)) from e
    except OSError as e:
        raise ConfigFileError(f"Failed to read configuration from {path}: {e}") from e

    logger.debug(f"Parsed configuration file {path}")
    return document


def parse_string(text: str | bytes) -> etree._Element:
    """Parse an XML string.

    Text strings are encoded as UTF-8 first so that documents carrying an
    XML declaration are accepted.

    Raises:
        ConfigParseError: If the string is not well-formed XML
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    parser = _parser()
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise ConfigParseError(_collect_diagnostics(e, parser)) from e


def _direct_text(element: etree._Element) -> str:
    """Return the element's own text, excluding text inside child elements."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts).strip()


def populate(node: Configuration, source: etree._ElementTree | etree._Element) -> Configuration:
    """Recursively fill ``node`` from an lxml element or document.

    The node takes the element's local name, its stripped direct text (if
    any) and its attributes without a namespace. One child node is
    appended per child element; comments and processing instructions are
    skipped.

    Returns:
        ``node`` itself
    """
    element = source.getroot() if isinstance(source, etree._ElementTree) else source

    node.name = etree.QName(element).localname

    text = _direct_text(element)
    if text:
        node.value = text

    for key, value in element.attrib.items():
        if not key.startswith("{"):
            node.set_attribute(key, value)

    for child_element in element:
        if not isinstance(child_element.tag, str):
            continue
        child = type(node)()
        populate(child, child_element)
        node.add_child(child)

    return node


# ===== Serialization =====


def to_element(node: Configuration, namespace: str | None = None) -> etree._Element:
    """Build an lxml element for ``node`` and its descendants.

    The namespace, when given, is applied to this element only; child
    elements are always created without a namespace.
    """
    if namespace:
        element = etree.Element(etree.QName(namespace, node.name), nsmap={None: namespace})
    else:
        element = etree.Element(node.name)

    if node.value is not None:
        element.text = str(node.value)

    for key, value in node.attributes.items():
        element.set(key, str(value))

    for child in node.children:
        element.append(to_element(child))

    return element


def to_document(node: Configuration, namespace: str | None = None) -> etree._ElementTree:
    """Wrap the serialized tree of ``node`` in an lxml document."""
    return etree.ElementTree(to_element(node, namespace))


def to_string(node: Configuration, namespace: str | None = None, pretty_print: bool = True) -> str:
    """Serialize ``node`` to an XML string with declaration."""
    data = etree.tostring(
        to_document(node, namespace),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=pretty_print,
    )
    return data.decode("utf-8")


def save(node: Configuration, filename: str | Path, namespace: str | None = None) -> None:
    """Write the serialized tree of ``node`` to a file.

    Args:
        node: Root of the tree to save
        filename: Target file; missing parent directories are created
        namespace: Optional namespace for the root element

    Raises:
        ConfigFileError: If the file cannot be written
    """
    path = Path(filename)
    document = to_document(node, namespace)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        document.write(str(path), xml_declaration=True, encoding="UTF-8", pretty_print=True)
    except OSError as e:
        raise ConfigFileError(f"Failed to write configuration to {path}: {e}") from e

    logger.info(f"Saved configuration '{node.name}' to {path}")
