"""Scope graph: named dependency scopes with multiple inheritance.

Example Usage
-------------
>>> from scopepack.core.scopes import ScopeGraph, Dependency
>>> graph = ScopeGraph()
>>> provided = graph.create_scope("provided-compile")
>>> runtime = graph.create_scope("runtime-classpath")
>>> graph.extend(runtime, provided)
>>> graph.add_dependency(provided, Dependency.parse("javax.servlet:servlet-api:2.5"))
>>> len(graph.resolve(runtime))
1
"""

from .scope import Dependency, FileDependency, Scope
from .graph import ScopeGraph

__all__ = [
    "Dependency",
    "FileDependency",
    "Scope",
    "ScopeGraph",
]
