"""Project model: the explicit owner of scopes, tasks and components."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Set, Union

from ..core.classpath import ClasspathResolver
from ..core.publication import ComponentRegistry
from ..core.scopes import ScopeGraph
from ..io.archive import ArtifactWriter, ZipArtifactWriter
from .container import TaskContainer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class ProjectLayout:
    """Directory conventions of a project.

    Attributes
    ----------
    project_dir : Path
        Project root; relative paths are resolved against it
    build_dir : Path
        Build output directory (default: ``<project_dir>/build``)
    """

    project_dir: Path
    build_dir: Path

    @classmethod
    def create(cls, project_dir: PathLike, build_dir: Optional[PathLike] = None) -> "ProjectLayout":
        project_dir = Path(project_dir)
        if build_dir is None:
            resolved_build = project_dir / "build"
        else:
            resolved_build = Path(build_dir)
            if not resolved_build.is_absolute():
                resolved_build = project_dir / resolved_build
        return cls(project_dir=project_dir, build_dir=resolved_build)

    @property
    def classes_dir(self) -> Path:
        return self.build_dir / "classes"

    @property
    def libs_dir(self) -> Path:
        return self.build_dir / "libs"

    def dir(self, relative: PathLike) -> Path:
        return self.project_dir / relative


class Project:
    """A build project.

    Collaborators are injected rather than looked up: the scope graph and
    artifact writer may be supplied by the caller, and tasks receive the
    project explicitly.

    Parameters
    ----------
    name : str
        Project name, used in archive names
    project_dir : PathLike
        Project root directory
    version : str, optional
        Project version, appended to archive names when set
    scopes : ScopeGraph, optional
        Scope graph (a fresh one is created if omitted)
    writer : ArtifactWriter, optional
        Artifact writer (default: :class:`ZipArtifactWriter`)
    build_dir : PathLike, optional
        Build directory, relative to ``project_dir`` unless absolute

    Example
    -------
    >>> project = Project("shop", "/work/shop", version="1.0")
    >>> project.apply(WebArchivePlugin())
    >>> project.tasks.get("package").execute()
    """

    def __init__(
        self,
        name: str,
        project_dir: PathLike,
        version: str = "",
        scopes: Optional[ScopeGraph] = None,
        writer: Optional[ArtifactWriter] = None,
        build_dir: Optional[PathLike] = None,
    ):
        self.name = name
        self.version = version
        self.layout = ProjectLayout.create(project_dir, build_dir)
        self.scopes = scopes if scopes is not None else ScopeGraph(name)
        self.classpaths = ClasspathResolver(self.scopes)
        self.writer = writer or ZipArtifactWriter()
        self.tasks = TaskContainer(self)
        self.components = ComponentRegistry()
        self._applied: Set[type] = set()

    def apply(self, plugin: Any) -> None:
        """Apply a plugin once; repeated applications are ignored."""
        plugin_type = type(plugin)
        if plugin_type in self._applied:
            return
        self._applied.add(plugin_type)
        logger.debug(f"Applying {plugin_type.__name__} to project '{self.name}'")
        plugin.apply(self)

    def has_plugin(self, plugin_type: type) -> bool:
        return plugin_type in self._applied

    @property
    def archive_base_name(self) -> str:
        if self.version:
            return f"{self.name}-{self.version}"
        return self.name

    def __repr__(self) -> str:
        return f"Project({self.name!r})"
