"""Build configuration for scopepack.

Provides the standard scope conventions, the web-archive plugin, and
YAML build-file loading.

Example
-------
>>> from scopepack.config import BuildConfig
>>> config = BuildConfig("build.yaml")
>>> config.load()
>>> config.parse()
>>> project = config.create_project()
>>> sorted(project.scopes.lookup("provided-runtime").extends)
['provided-compile']
"""

from .conventions import (
    ARCHIVES,
    IMPLEMENTATION,
    PACKAGE_TASK_NAME,
    PROVIDED_COMPILE,
    PROVIDED_RUNTIME,
    RUNTIME_CLASSPATH,
    RUNTIME_ELEMENTS,
    RUNTIME_ONLY,
    TEST_RUNTIME_CLASSPATH,
    WebArchivePlugin,
    apply_java_conventions,
)
from .build import BuildConfig, ScopeDeclaration

__all__ = [
    # Conventions
    "ARCHIVES",
    "IMPLEMENTATION",
    "PACKAGE_TASK_NAME",
    "PROVIDED_COMPILE",
    "PROVIDED_RUNTIME",
    "RUNTIME_CLASSPATH",
    "RUNTIME_ELEMENTS",
    "RUNTIME_ONLY",
    "TEST_RUNTIME_CLASSPATH",
    "WebArchivePlugin",
    "apply_java_conventions",
    # Build files
    "BuildConfig",
    "ScopeDeclaration",
]
