"""
Custom exception types used across globscope.

The classification core never raises; these errors come from the
configuration layer and from the collaborators around it (project
discovery and the ripgrep adapter) so the CLI can tell user-facing
failures apart from unexpected bugs.
"""

from __future__ import annotations


class GlobScopeError(Exception):
    """Base class for all globscope specific errors."""


class ConfigError(GlobScopeError):
    """Raised when a glob group file cannot be read or parsed."""


class InvalidGroupIdError(ConfigError):
    """Raised when a glob group identifier cannot be bound to the menu."""


class ProjectError(GlobScopeError):
    """Raised when the project root cannot be resolved."""


class SearchToolError(GlobScopeError):
    """Raised when ripgrep is missing or reports a failure."""
