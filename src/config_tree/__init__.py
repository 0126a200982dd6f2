"""config-tree: Hierarchical XML configuration trees.

This library provides an in-memory configuration tree built from XML:
- Nodes carry a name, an optional text value, ordered attributes and children
- Slash-delimited paths query the tree (``config/database/host``)
- Trees whose nodes share a signature (name plus attribute values) merge in place
- Trees serialize back to XML and validate against an XSD schema

Public API:
    Configuration: The tree node
    ConfigManager: Layers user/project/local configuration files
    ConfigPaths: Dataclass defining paths to all three config scopes
    Scope: Enum for USER/PROJECT/LOCAL scopes
    MergeMode: Enum for COMPAT/STRICT merging
    PathResult, ResultKind: Tagged result of a path lookup
    Diagnostic: A parser or validator message
    merge, resolve_path: Functional forms of the merge and path lookup
    ConfigError, ConfigFileError, ConfigParseError, ConfigValidationError,
    MissingSchemaError, SchemaUnavailableError, InvalidAccessorError: Exception types

Example:
    ```python
    from config_tree import Configuration

    config = Configuration.from_file("appserver.xml")
    for container in config.get_childs("appserver/containers/container"):
        print(container.get_attribute("name"))

    # Overlay a second file onto the tree
    config.merge_from_file("appserver.local.xml")

    config.schema_file = "appserver.xsd"
    config.validate()
    config.save("appserver.xml")
    ```
"""

from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .exceptions import ConfigValidationError
from .exceptions import InvalidAccessorError
from .exceptions import MissingSchemaError
from .exceptions import SchemaUnavailableError
from .manager import ConfigManager
from .merge import merge
from .models import ConfigPaths
from .models import Diagnostic
from .models import MergeMode
from .models import PathResult
from .models import ResultKind
from .models import Scope
from .node import Configuration
from .utils import resolve_path

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigManager",
    "ConfigPaths",
    "Scope",
    "MergeMode",
    "PathResult",
    "ResultKind",
    "Diagnostic",
    "merge",
    "resolve_path",
    "ConfigError",
    "ConfigFileError",
    "ConfigParseError",
    "ConfigValidationError",
    "MissingSchemaError",
    "SchemaUnavailableError",
    "InvalidAccessorError",
]
