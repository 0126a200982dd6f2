"""Exceptions for config-tree."""

from collections.abc import Sequence

from .models import Diagnostic


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    pass


class ConfigParseError(ConfigError):
    """Configuration XML is not well-formed.

    Carries every diagnostic the parser reported; the message lists them
    one per line.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic], message: str | None = None):
        self.diagnostics = list(diagnostics)
        if message is None:
            message = "\n".join(str(diagnostic) for diagnostic in self.diagnostics)
        super().__init__(message)


class ConfigValidationError(ConfigError):
    """Configuration tree does not conform to its schema."""

    def __init__(self, message: str, diagnostics: Sequence[Diagnostic] = ()):
        self.diagnostics = list(diagnostics)
        super().__init__(message)


class MissingSchemaError(ConfigValidationError):
    """No schema file has been set on the node being validated."""

    pass


class SchemaUnavailableError(ConfigValidationError):
    """The schema file does not exist or cannot be loaded."""

    pass


class InvalidAccessorError(ConfigError, AttributeError):
    """Accessor call is neither a getter nor a setter."""

    pass
