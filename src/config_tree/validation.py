"""XSD validation of configuration trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from .exceptions import ConfigValidationError
from .exceptions import MissingSchemaError
from .exceptions import SchemaUnavailableError
from .models import Diagnostic
from .serialization import to_document

if TYPE_CHECKING:
    from .node import Configuration

logger = logging.getLogger(__name__)


def load_schema(schema_file: str | Path) -> etree.XMLSchema:
    """Load an XSD schema.

    Raises:
        SchemaUnavailableError: If the file does not exist or is not a valid schema
    """
    path = Path(schema_file)
    if not path.is_file():
        raise SchemaUnavailableError(f"XSD schema file {path} for validation not available")

    try:
        return etree.XMLSchema(etree.parse(str(path)))
    except (etree.XMLSyntaxError, etree.XMLSchemaParseError, OSError) as e:
        raise SchemaUnavailableError(f"XSD schema file {path} could not be loaded: {e}") from e


def validate(node: Configuration, namespace: str | None = None) -> etree._ElementTree:
    """Validate the tree rooted at ``node`` against ``node.schema_file``.

    Only the first problem the validator reports is raised, even when the
    document has several.

    Args:
        node: Root of the tree; must have ``schema_file`` set
        namespace: Optional namespace for the serialized root element

    Returns:
        The serialized lxml document that passed validation

    Raises:
        MissingSchemaError: If no schema file is set
        SchemaUnavailableError: If the schema file is missing or invalid
        ConfigValidationError: If the document does not conform to the schema
    """
    if node.schema_file is None:
        raise MissingSchemaError("Missing XSD schema file for validation")

    schema = load_schema(node.schema_file)
    document = to_document(node, namespace)

    if not schema.validate(document):
        entries = list(schema.error_log)
        if entries:
            diagnostic = Diagnostic.from_log_entry(entries[0])
        else:
            diagnostic = Diagnostic(0, 0, 0, "Document does not conform to schema", str(node.schema_file))
        raise ConfigValidationError(
            f"Found a schema validation error when validating configuration '{node.name}': {diagnostic}",
            [diagnostic],
        )

    logger.debug(f"Configuration '{node.name}' is valid against {node.schema_file}")
    return document
