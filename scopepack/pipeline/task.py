"""Build tasks and the archive packaging task."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, List, Optional, Union

from ..core.classpath import Provider
from ..core.scopes import Dependency, FileDependency
from ..errors import MissingDestinationError, UnresolvedArtifactError
from ..io.archive import ArchiveEntry, ArtifactWriter

if TYPE_CHECKING:
    from .project import Project

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

CLASSES_PREFIX = "WEB-INF/classes"
LIB_PREFIX = "WEB-INF/lib"


class Task:
    """Base class for an executable unit of a build.

    Parameters
    ----------
    name : str
        Task name, unique within a project
    project : Project
        Owning project

    Attributes
    ----------
    description : str
        Human-readable description
    group : str
        Task group label (e.g. "build")
    depends_on : List[str]
        Names of tasks that must run before this one
    """

    def __init__(self, name: str, project: "Project"):
        self.name = name
        self.project = project
        self.description = ""
        self.group = ""
        self.depends_on: List[str] = []

    def execute(self) -> Any:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": type(self).__name__,
            "description": self.description,
            "group": self.group,
            "depends_on": list(self.depends_on),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class TaskState(Enum):
    CONFIGURED = "configured"
    READY = "ready"
    EXECUTED = "executed"


@dataclass
class PackagingResult:
    """Outcome of one packaging execution.

    Attributes
    ----------
    destination : Path
        Archive written by the artifact writer
    entries : List[Tuple[Path, str]]
        (source path, archive path) pairs in archive order
    """

    destination: Path
    entries: List[ArchiveEntry] = field(default_factory=list)

    @property
    def archive_paths(self) -> List[str]:
        return [archive_path for _, archive_path in self.entries]


class PackagingTask(Task):
    """Assembles a web archive from a content root and a derived classpath.

    Nothing is read while the task is configured. The content root and
    every classpath source are providers that are evaluated in
    :meth:`prepare`, which :meth:`execute` calls afresh on every run.

    Archive layout:

    - content root files keep their path relative to the root
    - classpath directories are copied under ``WEB-INF/classes/``
    - classpath files go to ``WEB-INF/lib/<file name>``

    Parameters
    ----------
    name : str
        Task name
    project : Project
        Owning project; supplies the artifact writer and base directory
    writer : ArtifactWriter, optional
        Overrides the project's writer

    Example
    -------
    >>> task = PackagingTask("package", project)
    >>> task.content_root = Provider.of(Path("src/main/webapp"))
    >>> task.classpath(resolver.derive("runtime-classpath", "provided-runtime"))
    >>> task.destination = Provider.of(Path("build/libs/app.war"))
    >>> result = task.execute()
    """

    def __init__(
        self,
        name: str,
        project: "Project",
        writer: Optional[ArtifactWriter] = None,
    ):
        super().__init__(name, project)
        self.writer = writer or project.writer
        self.content_root: Optional[Provider] = None
        self.destination: Optional[Provider] = None
        self.state = TaskState.CONFIGURED
        self._classpath: List[Provider] = []
        self._prepared: List[ArchiveEntry] = []

    def classpath(self, *sources: Any) -> "PackagingTask":
        """Add classpath sources.

        Each source may be a provider, a zero-argument callable, or a
        plain value; on read it must produce a dependency, a path, or an
        iterable of those.
        """
        self._classpath.extend(Provider.lift(source) for source in sources)
        return self

    def set_content_root(self, root: Any) -> "PackagingTask":
        self.content_root = Provider.lift(root)
        return self

    def set_destination(self, destination: Any) -> "PackagingTask":
        self.destination = Provider.lift(destination)
        return self

    def prepare(self) -> List[ArchiveEntry]:
        """Read the content root listing and the classpath.

        Returns
        -------
        List[ArchiveEntry]
            Entries sorted by archive path; on duplicate archive paths
            the first source wins (content root before classpath)

        Raises
        ------
        UnknownScopeError
            If a scope behind a derived classpath no longer exists
        UnresolvedArtifactError
            If a classpath entry has no existing file
        """
        entries: Dict[str, Path] = {}

        for source, archive_path in self._content_entries():
            self._add_entry(entries, source, archive_path)

        for source, archive_path in self._classpath_entries():
            self._add_entry(entries, source, archive_path)

        self._prepared = sorted(
            ((source, archive_path) for archive_path, source in entries.items()),
            key=lambda entry: entry[1],
        )
        self.state = TaskState.READY
        logger.debug(f"Task '{self.name}' ready with {len(self._prepared)} entries")
        return list(self._prepared)

    def execute(self) -> PackagingResult:
        """Write the archive; every call re-reads its inputs.

        Raises
        ------
        MissingDestinationError
            If no destination is configured
        """
        if self.destination is None:
            raise MissingDestinationError(self.name)

        entries = self.prepare()
        destination = self._absolute(self.destination.get())
        written = self.writer.write(entries, destination)
        self.state = TaskState.EXECUTED

        logger.info(f"Task '{self.name}' wrote {len(entries)} entries to {written}")
        return PackagingResult(destination=Path(written), entries=entries)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["state"] = self.state.value
        return data

    # ------------------------------------------------------------------
    # Entry collection
    # ------------------------------------------------------------------

    def _content_entries(self) -> Iterable[ArchiveEntry]:
        if self.content_root is None:
            return []

        root = self._absolute(self.content_root.get())
        if not root.is_dir():
            logger.debug(f"Content root {root} does not exist, no files added")
            return []

        return [
            (path, path.relative_to(root).as_posix())
            for path in sorted(root.rglob("*"))
            if path.is_file()
        ]

    def _classpath_entries(self) -> Iterable[ArchiveEntry]:
        items: List[Hashable] = []
        for source in self._classpath:
            value = source.get()
            if isinstance(value, (str, Path, Dependency, FileDependency)):
                items.append(value)
            else:
                items.extend(sorted(value, key=str))

        for item in items:
            path = self._file_of(item)
            if path is None:
                continue
            if path.is_dir():
                for child in sorted(path.rglob("*")):
                    if child.is_file():
                        yield child, f"{CLASSES_PREFIX}/{child.relative_to(path).as_posix()}"
            else:
                yield path, f"{LIB_PREFIX}/{path.name}"

    def _file_of(self, item: Hashable) -> Optional[Path]:
        """Map a classpath item to its file.

        Module dependencies must have an existing artifact file. Plain
        paths that do not exist (e.g. a classes directory nothing was
        compiled into) contribute nothing.
        """
        if isinstance(item, Dependency):
            if item.path is None:
                raise UnresolvedArtifactError(item, "no artifact file declared")
            path = item.path
        elif isinstance(item, FileDependency):
            path = item.path
        elif isinstance(item, (str, Path)):
            path = Path(item)
        else:
            raise UnresolvedArtifactError(item, "not a file or module dependency")

        path = self._absolute(path)
        if path.exists():
            return path
        if isinstance(item, Dependency):
            raise UnresolvedArtifactError(item, f"file not found: {path}")
        logger.debug(f"Classpath entry {path} does not exist, skipped")
        return None

    def _add_entry(self, entries: Dict[str, Path], source: Path, archive_path: str) -> None:
        if archive_path in entries:
            logger.warning(
                f"Task '{self.name}': duplicate entry {archive_path} "
                f"from {source} ignored (keeping {entries[archive_path]})"
            )
            return
        entries[archive_path] = source

    def _absolute(self, path: PathLike) -> Path:
        path = Path(path)
        if path.is_absolute():
            return path
        return self.project.layout.project_dir / path
