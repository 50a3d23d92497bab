"""Scope and dependency representations."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional, Set, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Dependency:
    """An external module dependency identified by its coordinate.

    Identity is the ``group:name:version`` coordinate only. The ``path``
    to the fetched artifact is carried along for packaging but does not
    take part in equality, so the same module declared with and without
    a path is still one dependency.

    Attributes
    ----------
    group : str
        Module group (e.g. "javax.servlet")
    name : str
        Module name (e.g. "servlet-api")
    version : str
        Module version, may be empty
    path : Path, optional
        Location of the artifact file once it is available

    Example
    -------
    >>> dep = Dependency.parse("org.lib:lib-a:1.0", path="libs/lib-a.jar")
    >>> dep.coordinate
    'org.lib:lib-a:1.0'
    """

    group: str
    name: str
    version: str = ""
    path: Optional[Path] = field(default=None, compare=False, hash=False)

    @property
    def coordinate(self) -> str:
        parts = [self.group, self.name]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)

    @classmethod
    def parse(cls, notation: str, path: Optional[PathLike] = None) -> "Dependency":
        """Create a dependency from ``group:name[:version]`` notation.

        Raises
        ------
        ValueError
            If the notation does not have two or three parts
        """
        parts = notation.strip().split(":")
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(
                f"Invalid dependency notation '{notation}' "
                "(expected group:name[:version])"
            )
        return cls(
            group=parts[0],
            name=parts[1],
            version=parts[2] if len(parts) == 3 else "",
            path=Path(path) if path is not None else None,
        )

    def __str__(self) -> str:
        return self.coordinate


@dataclass(frozen=True)
class FileDependency:
    """A local file or directory placed directly on a classpath."""

    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))

    def __str__(self) -> str:
        return str(self.path)


@dataclass(eq=False)
class Scope:
    """A named node of the scope graph.

    Scopes are compared by identity; the name is unique within one
    :class:`~scopepack.core.scopes.graph.ScopeGraph`. Direct
    dependencies and extends edges are plain sets, mutated through the
    graph so that cycle checks and membership checks always run.

    Attributes
    ----------
    name : str
        Unique scope name (e.g. "provided-runtime")
    description : str, optional
        Human-readable description
    dependencies : Set[Hashable]
        Directly declared dependencies
    extends : Set[str]
        Names of the scopes this scope directly extends
    artifacts : List[Any]
        Outgoing artifacts attached to this scope (e.g. the archive
        published through the "archives" scope)
    """

    name: str
    description: Optional[str] = None
    dependencies: Set[Hashable] = field(default_factory=set)
    extends: Set[str] = field(default_factory=set)
    artifacts: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert scope to dictionary for reporting."""
        return {
            "name": self.name,
            "description": self.description,
            "extends": sorted(self.extends),
            "dependencies": sorted(str(dep) for dep in self.dependencies),
        }

    def __repr__(self) -> str:
        return f"Scope({self.name!r})"
