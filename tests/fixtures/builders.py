"""Builders for project files and a fake artifact writer."""

from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from scopepack.io.archive import ArchiveEntry, ArtifactWriter


class RecordingWriter(ArtifactWriter):
    """Artifact writer that records calls instead of writing archives."""

    def __init__(self):
        self.calls: List[Tuple[List[ArchiveEntry], Path]] = []

    def write(self, entries: Iterable[ArchiveEntry], destination) -> Path:
        self.calls.append((list(entries), Path(destination)))
        return Path(destination)

    @property
    def last_archive_paths(self) -> List[str]:
        entries, _ = self.calls[-1]
        return [archive_path for _, archive_path in entries]


def write_file(path: Path, content: str = "") -> Path:
    """Create ``path`` (and its parents) with ``content``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def create_jar(directory: Path, name: str) -> Path:
    """Create a placeholder jar file named ``name`` in ``directory``."""
    return write_file(directory / name, f"jar:{name}")


def create_webapp_project(
    root: Path,
    webapp_files: Dict[str, str] = None,
    jars: Iterable[str] = (),
) -> Dict[str, Path]:
    """Lay out a project with webapp content and library jars.

    Parameters
    ----------
    root : Path
        Project directory
    webapp_files : Dict[str, str], optional
        Files under ``src/main/webapp`` keyed by relative path
    jars : Iterable[str]
        Jar file names to create under ``libs/``

    Returns
    -------
    Dict[str, Path]
        Map of jar name to created path
    """
    for relative, content in (webapp_files or {}).items():
        write_file(root / "src" / "main" / "webapp" / relative, content)
    return {name: create_jar(root / "libs", name) for name in jars}
