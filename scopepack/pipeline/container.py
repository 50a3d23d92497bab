"""Lazy task registration."""

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple, Type

from ..core.classpath import Provider
from ..errors import DuplicateTaskError, UnknownTaskError
from .task import Task

if TYPE_CHECKING:
    from .project import Project

logger = logging.getLogger(__name__)

TaskAction = Callable[[Task], None]


class TaskProvider(Provider[Task]):
    """Deferred reference to a registered task.

    The task is created and configured the first time :meth:`get` is
    called; later calls return the same instance.
    """

    def __init__(self, container: "TaskContainer", name: str, task_type: Type[Task]):
        super().__init__(lambda: container.realize(name), label=f"task({name})")
        self.name = name
        self.task_type = task_type
        self._container = container

    @property
    def is_realized(self) -> bool:
        return self._container.is_realized(self.name)


class TaskContainer:
    """Registry of a project's tasks.

    Parameters
    ----------
    project : Project
        Project passed to every task constructor

    Example
    -------
    >>> tasks = TaskContainer(project)
    >>> tasks.configure_each(PackagingTask, lambda t: t.set_content_root("web"))
    >>> package = tasks.register("package", PackagingTask)
    >>> package.is_realized
    False
    """

    def __init__(self, project: "Project"):
        self.project = project
        self._registered: Dict[str, Tuple[Type[Task], Optional[TaskAction]]] = {}
        self._realized: Dict[str, Task] = {}
        self._providers: Dict[str, TaskProvider] = {}
        self._type_actions: List[Tuple[Type[Task], TaskAction]] = []

    def register(
        self,
        name: str,
        task_type: Type[Task],
        configure: Optional[TaskAction] = None,
    ) -> TaskProvider:
        """Register a task without creating it.

        Raises
        ------
        DuplicateTaskError
            If the name is already registered
        """
        if name in self._registered:
            raise DuplicateTaskError(name)

        self._registered[name] = (task_type, configure)
        provider = TaskProvider(self, name, task_type)
        self._providers[name] = provider
        logger.debug(f"Registered task '{name}' ({task_type.__name__})")
        return provider

    def configure_each(self, task_type: Type[Task], action: TaskAction) -> None:
        """Apply ``action`` to every task of ``task_type``, now and later."""
        self._type_actions.append((task_type, action))
        for task in self._realized.values():
            if isinstance(task, task_type):
                action(task)

    def named(self, name: str) -> TaskProvider:
        try:
            return self._providers[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def get(self, name: str) -> Task:
        return self.named(name).get()

    def realize(self, name: str) -> Task:
        """Create and configure the task if that has not happened yet."""
        if name in self._realized:
            return self._realized[name]
        if name not in self._registered:
            raise UnknownTaskError(name)

        task_type, configure = self._registered[name]
        task = task_type(name, self.project)
        self._realized[name] = task

        for action_type, action in self._type_actions:
            if isinstance(task, action_type):
                action(task)
        if configure is not None:
            configure(task)

        logger.debug(f"Realized task '{name}'")
        return task

    def is_realized(self, name: str) -> bool:
        return name in self._realized

    def names(self) -> List[str]:
        return list(self._registered)

    def __contains__(self, name: object) -> bool:
        return name in self._registered
