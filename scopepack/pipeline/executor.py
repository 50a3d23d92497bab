"""Task execution engine."""

import time
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..errors import TaskError
from ..io.logging import log_json
from .logger import BuildLogger
from .project import Project


class BuildExecutor:
    """Runs project tasks in dependency order.

    Requested tasks are expanded with everything they depend on and run
    sequentially. Failures are logged and re-raised; nothing is retried.

    Parameters
    ----------
    project : Project
        Configured project
    logger : BuildLogger
        Initialized BuildLogger instance
    report_path : str, optional
        JSON-lines file receiving one record per executed task

    Attributes
    ----------
    executed_tasks : List[str]
        Names of tasks that completed during the last run

    Example
    -------
    >>> logger = BuildLogger()
    >>> logger.setup()
    >>> executor = BuildExecutor(project, logger)
    >>> results = executor.run(["package"])
    """

    def __init__(
        self,
        project: Project,
        logger: BuildLogger,
        report_path: Optional[str] = None,
    ):
        self.project = project
        self.logger = logger
        self.report_path = Path(report_path) if report_path else None
        self.executed_tasks: List[str] = []

    def get_execution_order(self, task_names: Sequence[str]) -> List[str]:
        """Compute the run order for ``task_names`` and their dependencies.

        Uses Kahn's algorithm over the requested tasks' dependency
        closure. Ties keep request order.

        Raises
        ------
        UnknownTaskError
            If a task or one of its dependencies is not registered
        TaskError
            If task dependencies are circular
        """
        tasks = self.project.tasks
        closure: Dict[str, List[str]] = {}
        pending = deque(task_names)

        while pending:
            name = pending.popleft()
            if name in closure:
                continue
            depends_on = list(tasks.get(name).depends_on)
            closure[name] = depends_on
            pending.extend(depends_on)

        in_degree = {name: len(deps) for name, deps in closure.items()}
        queue = deque(name for name, degree in in_degree.items() if degree == 0)
        order: List[str] = []

        while queue:
            name = queue.popleft()
            order.append(name)

            for other, deps in closure.items():
                if name in deps:
                    in_degree[other] -= 1
                    if in_degree[other] == 0:
                        queue.append(other)

        if len(order) != len(closure):
            raise TaskError("Circular dependency detected between tasks")

        return order

    def execute_task(self, name: str) -> Any:
        """Execute a single task, logging and re-raising any failure."""
        task = self.project.tasks.get(name)
        self.logger.log_task_start(name, task.description)
        start_time = time.time()

        try:
            result = task.execute()
        except Exception as e:
            self.logger.log_task_error(name, str(e))
            self._report(name, "failed", time.time() - start_time, error=str(e))
            raise

        duration = time.time() - start_time
        self.logger.log_task_complete(name, duration)
        self.executed_tasks.append(name)
        self._report(name, "success", duration, result=result)
        return result

    def run(self, task_names: Sequence[str], dry_run: bool = False) -> Dict[str, Any]:
        """Execute ``task_names`` and everything they depend on.

        Parameters
        ----------
        task_names : Sequence[str]
            Tasks requested by the caller
        dry_run : bool
            If True, log the execution plan without running anything

        Returns
        -------
        Dict[str, Any]
            Map of task name to the value its ``execute`` returned
        """
        order = self.get_execution_order(task_names)
        self.executed_tasks = []
        self.logger.log_info(f"Execution plan: {' -> '.join(order)}")

        if dry_run:
            for name in order:
                self.logger.log_info(f"[DRY RUN] Would execute :{name}")
            return {}

        results: Dict[str, Any] = {}
        for name in order:
            results[name] = self.execute_task(name)

        self.logger.log_info("Build completed successfully")
        return results

    def _report(self, name: str, status: str, duration: float, **details: Any) -> None:
        if self.report_path is None:
            return

        record: Dict[str, Any] = {
            "project": self.project.name,
            "task": name,
            "status": status,
            "duration_seconds": round(duration, 3),
            "timestamp": datetime.now().isoformat(),
        }
        result = details.get("result")
        if result is not None and hasattr(result, "destination"):
            record["destination"] = str(result.destination)
            record["entries"] = list(getattr(result, "archive_paths", []))
        if "error" in details:
            record["error"] = details["error"]

        log_json(self.report_path, record)
