"""Directed acyclic graph of dependency scopes.

Scopes inherit dependencies through "extends" edges. A scope may extend
several others (diamonds are legal), but never itself, directly or
transitively. Resolution walks the graph on every call, so dependencies
and edges added after a scope was created are always reflected.
"""

import logging
from typing import Dict, Hashable, Iterator, List, Optional, Set, Union

from ...errors import CycleError, DuplicateScopeError, UnknownScopeError
from .scope import Dependency, Scope

logger = logging.getLogger(__name__)

ScopeRef = Union[Scope, str]


class ScopeGraph:
    """Registry and inheritance graph of named scopes.

    Parameters
    ----------
    name : str, optional
        Label used in log messages (typically the project name)

    Example
    -------
    >>> graph = ScopeGraph()
    >>> compile_ = graph.create_scope("provided-compile")
    >>> runtime = graph.create_scope("provided-runtime")
    >>> graph.extend(runtime, compile_)
    >>> graph.add_dependency(compile_, "servlet-api")
    >>> graph.resolve(runtime)
    {'servlet-api'}
    """

    def __init__(self, name: str = "build"):
        self.name = name
        self._scopes: Dict[str, Scope] = {}

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def create_scope(self, name: str, description: Optional[str] = None) -> Scope:
        """Create and register a new scope.

        Raises
        ------
        DuplicateScopeError
            If a scope with this name already exists
        """
        if name in self._scopes:
            raise DuplicateScopeError(name)

        scope = Scope(name=name, description=description)
        self._scopes[name] = scope
        logger.debug(f"[{self.name}] Created scope '{name}'")
        return scope

    def get_or_create(self, name: str, description: Optional[str] = None) -> Scope:
        """Return the named scope, creating it if needed.

        An existing scope keeps its description unless it has none.
        """
        scope = self._scopes.get(name)
        if scope is None:
            return self.create_scope(name, description)
        if scope.description is None:
            scope.description = description
        return scope

    def lookup(self, name: str) -> Scope:
        """Return the scope registered under ``name``.

        Raises
        ------
        UnknownScopeError
            If no such scope exists
        """
        try:
            return self._scopes[name]
        except KeyError:
            raise UnknownScopeError(name) from None

    def remove_scope(self, scope: ScopeRef) -> Scope:
        """Unregister a scope and drop every edge that points at it."""
        removed = self._get(scope)
        del self._scopes[removed.name]
        for other in self._scopes.values():
            other.extends.discard(removed.name)
        logger.debug(f"[{self.name}] Removed scope '{removed.name}'")
        return removed

    def names(self) -> List[str]:
        """List scope names in creation order."""
        return list(self._scopes)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, Scope):
            return self._scopes.get(name.name) is name
        return name in self._scopes

    def __iter__(self) -> Iterator[Scope]:
        return iter(list(self._scopes.values()))

    def __len__(self) -> int:
        return len(self._scopes)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def extend(self, child: ScopeRef, parent: ScopeRef) -> None:
        """Make ``child`` inherit everything visible to ``parent``.

        Adding an edge that already exists is a no-op.

        Raises
        ------
        UnknownScopeError
            If either scope is not registered in this graph
        CycleError
            If ``parent`` already reaches ``child`` (or they are the same
            scope); the graph is left unchanged
        """
        child_scope = self._get(child)
        parent_scope = self._get(parent)

        if parent_scope.name in child_scope.extends:
            return

        if parent_scope is child_scope or child_scope.name in self.hierarchy(parent_scope):
            raise CycleError(child_scope.name, parent_scope.name)

        child_scope.extends.add(parent_scope.name)
        logger.debug(
            f"[{self.name}] Scope '{child_scope.name}' extends '{parent_scope.name}'"
        )

    def add_dependency(self, scope: ScopeRef, dependency: Hashable) -> None:
        """Declare ``dependency`` directly on ``scope`` (set semantics)."""
        target = self._get(scope)
        target.dependencies.add(dependency)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def parents(self, scope: ScopeRef) -> List[Scope]:
        """Return the scopes ``scope`` directly extends."""
        target = self._get(scope)
        return [self.lookup(name) for name in sorted(target.extends)]

    def hierarchy(self, scope: ScopeRef) -> Set[str]:
        """Return the names of all scopes ``scope`` transitively extends.

        The scope itself is not included.
        """
        seen: Set[str] = set()
        stack = list(self._get(scope).extends)

        while stack:
            name = stack.pop()
            if name in seen:
                continue
            seen.add(name)
            stack.extend(self.lookup(name).extends)

        return seen

    def resolve(self, scope: ScopeRef) -> Set[Hashable]:
        """Compute every dependency visible to ``scope``.

        Depth-first walk over extends edges, parents in name order,
        collecting direct dependencies. Each scope is visited once, so a
        scope reachable through several paths contributes its
        dependencies a single time. When one module is declared in
        several scopes, a declaration with an artifact path wins over
        one without; otherwise the first one visited is kept.

        Raises
        ------
        UnknownScopeError
            If ``scope`` is not registered in this graph
        """
        root = self._get(scope)
        resolved: Dict[Hashable, Hashable] = {}
        visited: Set[str] = set()
        stack = [root]

        while stack:
            current = stack.pop()
            if current.name in visited:
                continue
            visited.add(current.name)
            for dependency in current.dependencies:
                if dependency not in resolved or _has_path_over(
                    dependency, resolved[dependency]
                ):
                    resolved[dependency] = dependency
            stack.extend(self.lookup(name) for name in sorted(current.extends, reverse=True))

        logger.debug(
            f"[{self.name}] Resolved '{root.name}': {len(resolved)} dependencies "
            f"from {len(visited)} scopes"
        )
        return set(resolved.values())

    def to_dict(self) -> Dict[str, Dict]:
        """Convert the graph to a dictionary keyed by scope name."""
        return {scope.name: scope.to_dict() for scope in self}

    def _get(self, scope: ScopeRef) -> Scope:
        if isinstance(scope, Scope):
            if self._scopes.get(scope.name) is not scope:
                raise UnknownScopeError(scope.name, "not registered in this graph")
            return scope
        return self.lookup(scope)


def _has_path_over(candidate: Hashable, current: Hashable) -> bool:
    return (
        isinstance(candidate, Dependency)
        and isinstance(current, Dependency)
        and candidate.path is not None
        and current.path is None
    )
