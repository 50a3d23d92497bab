"""Published artifacts whose file is only known once a task has run."""

from pathlib import Path
from typing import Any

from ..classpath import Provider


class LazyPublishArtifact:
    """Handle to the output of a not-yet-realized packaging task.

    Creating the handle never realizes the task. The task (and with it
    the destination path) is only obtained when ``file``, ``name``,
    ``extension`` or ``build_dependencies`` is read.

    Parameters
    ----------
    task_provider : Provider
        Deferred reference to a task exposing a ``destination`` provider
    artifact_type : str
        Artifact type label (e.g. "war")
    """

    def __init__(self, task_provider: Provider, artifact_type: str = "war"):
        self._task_provider = task_provider
        self.type = artifact_type
        self.classifier = ""

    @property
    def file(self) -> Path:
        task = self._task_provider.get()
        return Path(task.destination.get())

    @property
    def name(self) -> str:
        return self.file.stem

    @property
    def extension(self) -> str:
        return self.file.suffix.lstrip(".")

    @property
    def build_dependencies(self) -> Any:
        """The task that produces this artifact."""
        return self._task_provider.get()

    def __repr__(self) -> str:
        return f"LazyPublishArtifact(type={self.type!r}, task={self._task_provider!r})"
