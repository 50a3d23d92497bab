"""scopepack: scope-aware web archive packaging for build pipelines.

This package provides tools for:
- Declaring dependency scopes that inherit from one another
- Deriving classpaths lazily as a set difference of resolved scopes
- Packaging a web archive that leaves out container-provided dependencies
- Publishing the archive as a component without realizing the build early

Example usage:
    >>> from scopepack.config import WebArchivePlugin
    >>> from scopepack.core.scopes import Dependency
    >>> from scopepack.pipeline import Project
    >>>
    >>> project = Project("shop", "/work/shop", version="1.0")
    >>> project.apply(WebArchivePlugin())
    >>> project.scopes.add_dependency(
    ...     "provided-compile", Dependency.parse("javax.servlet:servlet-api:2.5")
    ... )
    >>> result = project.tasks.get("package").execute()
"""

__version__ = "0.1.0"

from .errors import (
    ArchiveWriteError,
    ConfigError,
    CycleError,
    DuplicateScopeError,
    DuplicateTaskError,
    MissingDestinationError,
    PackagingError,
    ScopeError,
    ScopepackError,
    TaskError,
    UnknownScopeError,
    UnknownTaskError,
    UnresolvedArtifactError,
)

__all__ = [
    "__version__",
    "ArchiveWriteError",
    "ConfigError",
    "CycleError",
    "DuplicateScopeError",
    "DuplicateTaskError",
    "MissingDestinationError",
    "PackagingError",
    "ScopeError",
    "ScopepackError",
    "TaskError",
    "UnknownScopeError",
    "UnknownTaskError",
    "UnresolvedArtifactError",
]
