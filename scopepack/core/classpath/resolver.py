"""Classpath derivation by set difference over resolved scopes."""

import logging
from typing import FrozenSet, Hashable, Union

from ..scopes import Scope, ScopeGraph
from .provider import Provider

logger = logging.getLogger(__name__)


class ClasspathResolver:
    """Derives deferred classpaths from a scope graph.

    The resolver keeps scope names, not scope objects or snapshots: every
    read looks both scopes up again and re-walks the graph. A classpath
    derived during configuration therefore honours dependencies and
    edges added afterwards, and fails with ``UnknownScopeError`` if a
    scope has been removed in the meantime.

    Parameters
    ----------
    graph : ScopeGraph
        Graph the scopes are looked up in

    Example
    -------
    >>> resolver = ClasspathResolver(graph)
    >>> classpath = resolver.derive("runtime-classpath", "provided-runtime")
    >>> graph.add_dependency("runtime-classpath", "lib-a")
    >>> "lib-a" in classpath.get()
    True
    """

    def __init__(self, graph: ScopeGraph):
        self.graph = graph

    def derive(
        self,
        base: Union[Scope, str],
        subtract: Union[Scope, str],
    ) -> Provider[FrozenSet[Hashable]]:
        """Return a provider of ``resolve(base) - resolve(subtract)``.

        Difference is by dependency identity; no files are touched.
        """
        base_name = base.name if isinstance(base, Scope) else base
        subtract_name = subtract.name if isinstance(subtract, Scope) else subtract

        def compute() -> FrozenSet[Hashable]:
            included = self.graph.resolve(self.graph.lookup(base_name))
            excluded = self.graph.resolve(self.graph.lookup(subtract_name))
            classpath = frozenset(included - excluded)
            logger.debug(
                f"Classpath {base_name} - {subtract_name}: "
                f"{len(classpath)} of {len(included)} dependencies kept"
            )
            return classpath

        return Provider(compute, label=f"classpath({base_name} - {subtract_name})")
