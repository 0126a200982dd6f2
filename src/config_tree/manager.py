"""Configuration manager for layered XML configuration files."""

import logging
from pathlib import Path

from .exceptions import ConfigFileError
from .models import ConfigPaths
from .models import MergeMode
from .models import Scope
from .node import Configuration
from .serialization import save

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages XML configuration trees across user/project/local scopes.

    Each scope is one XML file. Trees are layered with the signature based
    merge, so a scope only overrides the nodes whose name and attribute
    values match the lower scope.

    Resolution order (highest to lowest priority):
    1. Local configuration (machine-specific)
    2. Project configuration (repository)
    3. User configuration (global)

    Args:
        paths: Configuration file paths for all three scopes
        mode: Merge mode used when layering scopes
    """

    def __init__(self, paths: ConfigPaths, mode: MergeMode = MergeMode.COMPAT):
        """Initialize configuration manager with injected paths.

        Args:
            paths: ConfigPaths defining where configuration files are located
            mode: Merge mode used when layering scopes (default: COMPAT)
        """
        self.paths = paths
        self.mode = mode

    # ===== Merged Configuration =====

    def get_merged_configuration(self) -> Configuration | None:
        """Get the configuration tree merged from all scopes.

        Merge order (later overrides earlier):
        1. User configuration (lowest priority)
        2. Project configuration
        3. Local configuration (highest priority)

        A scope whose root signature differs from the tree merged so far
        replaces that tree.

        Returns:
            Merged configuration tree or None if no scope has a file
        """
        merged = None

        for scope in (Scope.USER, Scope.PROJECT, Scope.LOCAL):
            configuration = self.read_scope(scope)
            if configuration is None:
                continue

            if merged is None:
                merged = configuration
                continue

            unmerged = merged.merge(configuration, self.mode)
            if unmerged is not None:
                logger.warning(
                    f"Root '{configuration.name}' in {scope.value} scope does not match "
                    f"'{merged.name}', using {scope.value} configuration instead"
                )
                merged = unmerged

        return merged

    # ===== Scope Access =====

    def read_scope(self, scope: Scope) -> Configuration | None:
        """Read the configuration tree of a single scope.

        Args:
            scope: Scope to read

        Returns:
            Parsed configuration or None if the scope has no file

        Raises:
            ConfigParseError: If the file is not well-formed XML
        """
        path = self._scope_to_path(scope)
        if path is None or not path.exists():
            return None
        return Configuration.from_file(path)

    def write_scope(self, configuration: Configuration, scope: Scope) -> None:
        """Write a configuration tree to a scope, replacing its file.

        Args:
            configuration: Tree to write
            scope: Target scope

        Raises:
            ConfigFileError: If the scope has no path or the write fails
        """
        path = self._require_path(scope)
        save(configuration, path)
        logger.info(f"Wrote '{configuration.name}' configuration to {scope.value} scope")

    def update_scope(self, configuration: Configuration, scope: Scope = Scope.PROJECT) -> Configuration:
        """Merge a configuration tree into a scope's file.

        Args:
            configuration: Tree to merge onto the stored one
            scope: Target scope (default: PROJECT)

        Returns:
            The tree that was written
        """
        existing = self.read_scope(scope)

        if existing is None:
            updated = configuration
        else:
            unmerged = existing.merge(configuration, self.mode)
            updated = existing if unmerged is None else unmerged

        self.write_scope(updated, scope)
        return updated

    def scope_to_path(self, scope: Scope) -> Path | None:
        """Get path for a given scope.

        Public accessor for scope-to-path mapping.

        Args:
            scope: Scope enum value

        Returns:
            Path for the given scope, None when the scope is disabled
        """
        return self._scope_to_path(scope)

    # ===== Private Helpers =====

    def _scope_to_path(self, scope: Scope) -> Path | None:
        scope_map = {
            Scope.USER: self.paths.user,
            Scope.PROJECT: self.paths.project,
            Scope.LOCAL: self.paths.local,
        }
        return scope_map[scope]

    def _require_path(self, scope: Scope) -> Path:
        path = self._scope_to_path(scope)
        if path is None:
            raise ConfigFileError(f"No configuration file configured for {scope.value} scope")
        return Path(path)
