"""Build execution module.

Provides the project model, lazily registered tasks, the archive
packaging task, and sequential task execution with logging.

Example Usage
-------------
>>> from scopepack.pipeline import BuildExecutor, BuildLogger, Project
>>> from scopepack.config import WebArchivePlugin
>>> project = Project("shop", "/work/shop", version="1.0")
>>> project.apply(WebArchivePlugin())
>>> logger = BuildLogger("build/logs")
>>> logger.setup()
>>> results = BuildExecutor(project, logger).run(["package"])
"""

# Tasks
from .task import PackagingResult, PackagingTask, Task, TaskState

# Registration
from .container import TaskContainer, TaskProvider

# Project
from .project import Project, ProjectLayout

# Logging
from .logger import BuildLogger, ColoredFormatter

# Execution
from .executor import BuildExecutor

__all__ = [
    # Tasks
    "PackagingResult",
    "PackagingTask",
    "Task",
    "TaskState",
    # Registration
    "TaskContainer",
    "TaskProvider",
    # Project
    "Project",
    "ProjectLayout",
    # Logging
    "BuildLogger",
    "ColoredFormatter",
    # Execution
    "BuildExecutor",
]
