"""Exception hierarchy for scopepack.

All errors raised by the library derive from :class:`ScopepackError` so
callers (the CLI in particular) can surface them uniformly. The scope
errors carry the scope name(s) involved for diagnosis.
"""

from typing import Optional


class ScopepackError(Exception):
    """Base class for all scopepack errors."""


class ConfigError(ScopepackError):
    """Raised when a build configuration file is malformed."""


# ============================================================================
# Scope graph
# ============================================================================


class ScopeError(ScopepackError):
    """Base class for structural errors in the scope graph."""


class DuplicateScopeError(ScopeError):
    """A scope with the same name already exists in the graph."""

    def __init__(self, scope_name: str):
        super().__init__(f"Scope '{scope_name}' already exists")
        self.scope_name = scope_name


class UnknownScopeError(ScopeError):
    """A referenced scope does not exist (or no longer exists) in the graph."""

    def __init__(self, scope_name: str, context: Optional[str] = None):
        message = f"Scope '{scope_name}' not found"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)
        self.scope_name = scope_name
        self.context = context


class CycleError(ScopeError):
    """Adding an extends edge would make a scope transitively extend itself."""

    def __init__(self, child: str, parent: str):
        super().__init__(
            f"Scope '{child}' cannot extend '{parent}': "
            f"'{parent}' already extends '{child}'"
        )
        self.child = child
        self.parent = parent


# ============================================================================
# Tasks
# ============================================================================


class TaskError(ScopepackError):
    """Base class for task registration errors."""


class DuplicateTaskError(TaskError):
    def __init__(self, task_name: str):
        super().__init__(f"Task '{task_name}' already registered")
        self.task_name = task_name


class UnknownTaskError(TaskError):
    def __init__(self, task_name: str):
        super().__init__(f"Task '{task_name}' not found")
        self.task_name = task_name


# ============================================================================
# Packaging
# ============================================================================


class PackagingError(ScopepackError):
    """Base class for failures while materializing an archive."""


class UnresolvedArtifactError(PackagingError):
    """A classpath entry has no file (yet) to put into the archive."""

    def __init__(self, dependency: object, reason: str):
        super().__init__(f"Cannot package {dependency}: {reason}")
        self.dependency = dependency


class ArchiveWriteError(PackagingError):
    """The artifact writer failed to produce the archive."""

    def __init__(self, destination: object, cause: BaseException):
        super().__init__(f"Failed to write archive {destination}: {cause}")
        self.destination = destination
        self.cause = cause


class MissingDestinationError(PackagingError):
    """A packaging task was executed without a destination."""

    def __init__(self, task_name: str):
        super().__init__(f"Task '{task_name}' has no destination configured")
        self.task_name = task_name
