"""Unit tests for task registration, logging and execution."""

import pytest

from scopepack.errors import DuplicateTaskError, TaskError, UnknownScopeError, UnknownTaskError
from scopepack.io import read_json_lines
from scopepack.pipeline import (
    BuildExecutor,
    BuildLogger,
    PackagingTask,
    Project,
    ProjectLayout,
    Task,
)

from tests.fixtures import write_file


class RecordingTask(Task):
    """Task that appends its name to a shared list when executed."""

    log = []

    def execute(self):
        RecordingTask.log.append(self.name)
        return self.name.upper()


class FailingTask(Task):
    def execute(self):
        raise UnknownScopeError("provided-runtime", "removed")


@pytest.fixture(autouse=True)
def reset_recording_log():
    RecordingTask.log = []


@pytest.fixture
def build_logger(tmp_path) -> BuildLogger:
    """Create a logger writing to tmp_path/logs."""
    logger = BuildLogger(str(tmp_path / "logs"))
    logger.setup()
    return logger


class TestProjectLayout:
    """Tests for ProjectLayout."""

    def test_defaults(self, tmp_path):
        """Test default build directories."""
        layout = ProjectLayout.create(tmp_path)
        assert layout.build_dir == tmp_path / "build"
        assert layout.classes_dir == tmp_path / "build" / "classes"
        assert layout.libs_dir == tmp_path / "build" / "libs"

    def test_relative_build_dir(self, tmp_path):
        """Test a relative build dir is resolved against the project dir."""
        layout = ProjectLayout.create(tmp_path, "out")
        assert layout.build_dir == tmp_path / "out"

    def test_archive_base_name(self, tmp_path):
        """Test the version is appended when set."""
        assert Project("shop", tmp_path, version="2.0").archive_base_name == "shop-2.0"
        assert Project("shop", tmp_path).archive_base_name == "shop"


class TestTaskContainer:
    """Tests for TaskContainer and TaskProvider."""

    def test_register_is_lazy(self, project):
        """Test registration does not create the task."""
        created = []
        provider = project.tasks.register("a", RecordingTask, created.append)
        assert not provider.is_realized
        assert created == []

        task = provider.get()
        assert created == [task]
        assert provider.get() is task

    def test_duplicate(self, project):
        """Test task names are unique."""
        project.tasks.register("a", RecordingTask)
        with pytest.raises(DuplicateTaskError):
            project.tasks.register("a", RecordingTask)

    def test_unknown(self, project):
        """Test looking up a missing task."""
        with pytest.raises(UnknownTaskError):
            project.tasks.named("missing")

    def test_configure_each_existing_and_future(self, project):
        """Test type actions reach realized and later tasks."""
        project.tasks.register("first", RecordingTask)
        first = project.tasks.get("first")
        project.tasks.configure_each(RecordingTask, lambda t: setattr(t, "group", "verify"))
        project.tasks.register("second", RecordingTask)

        assert first.group == "verify"
        assert project.tasks.get("second").group == "verify"

    def test_configure_each_filters_by_type(self, project):
        """Test type actions skip other task types."""
        project.tasks.configure_each(PackagingTask, lambda t: setattr(t, "group", "build"))
        project.tasks.register("a", RecordingTask)
        assert project.tasks.get("a").group == ""

    def test_register_action_runs_after_type_actions(self, project):
        """Test the registration action can override conventions."""
        project.tasks.configure_each(RecordingTask, lambda t: setattr(t, "group", "convention"))
        project.tasks.register("a", RecordingTask, lambda t: setattr(t, "group", "explicit"))
        assert project.tasks.get("a").group == "explicit"


class TestBuildLogger:
    """Tests for BuildLogger class."""

    def test_init(self, tmp_path):
        """Test logger initialization creates the log directory."""
        logger = BuildLogger(str(tmp_path / "logs"))
        assert logger.log_dir.exists()
        assert logger.log_file.name.startswith("build_")

    def test_setup(self, tmp_path):
        """Test logger setup with a log directory."""
        logger = BuildLogger(str(tmp_path / "logs"))
        logger.setup()
        assert len(logger.logger.handlers) == 2

    def test_setup_console_only(self):
        """Test logger setup without a log directory."""
        logger = BuildLogger()
        logger.setup()
        assert len(logger.logger.handlers) == 1
        assert logger.log_file is None

    def test_task_events_written(self, build_logger):
        """Test task events reach the log file."""
        build_logger.log_task_start("package", "Generates a war archive")
        build_logger.log_task_complete("package", 1.5)
        for handler in build_logger.logger.handlers:
            handler.flush()

        content = build_logger.log_file.read_text()
        assert "> Task :package - Generates a war archive" in content
        assert "Task :package completed in 1.5s" in content

    def test_format_duration_seconds(self):
        """Test duration formatting for seconds."""
        assert BuildLogger.format_duration(45.2) == "45.2s"

    def test_format_duration_minutes(self):
        """Test duration formatting for minutes."""
        assert BuildLogger.format_duration(125) == "2m 5s"

    def test_format_duration_hours(self):
        """Test duration formatting for hours."""
        assert BuildLogger.format_duration(7300) == "2h 1m"


class TestBuildExecutor:
    """Tests for BuildExecutor class."""

    def test_execution_order(self, project, build_logger):
        """Test dependencies run first."""
        project.tasks.register("c", RecordingTask, lambda t: t.depends_on.append("b"))
        project.tasks.register("b", RecordingTask, lambda t: t.depends_on.append("a"))
        project.tasks.register("a", RecordingTask)

        executor = BuildExecutor(project, build_logger)
        results = executor.run(["c"])

        assert RecordingTask.log == ["a", "b", "c"]
        assert results == {"a": "A", "b": "B", "c": "C"}
        assert executor.executed_tasks == ["a", "b", "c"]

    def test_only_requested_closure(self, project, build_logger):
        """Test unrelated tasks are not executed."""
        project.tasks.register("a", RecordingTask)
        project.tasks.register("unrelated", RecordingTask)
        BuildExecutor(project, build_logger).run(["a"])
        assert RecordingTask.log == ["a"]

    def test_circular_dependencies(self, project, build_logger):
        """Test circular task dependencies are reported."""
        project.tasks.register("a", RecordingTask, lambda t: t.depends_on.append("b"))
        project.tasks.register("b", RecordingTask, lambda t: t.depends_on.append("a"))
        with pytest.raises(TaskError):
            BuildExecutor(project, build_logger).get_execution_order(["a"])

    def test_unknown_dependency(self, project, build_logger):
        """Test a dependency on a missing task."""
        project.tasks.register("a", RecordingTask, lambda t: t.depends_on.append("missing"))
        with pytest.raises(UnknownTaskError):
            BuildExecutor(project, build_logger).run(["a"])

    def test_dry_run(self, project, build_logger):
        """Test dry run executes nothing."""
        project.tasks.register("a", RecordingTask)
        assert BuildExecutor(project, build_logger).run(["a"], dry_run=True) == {}
        assert RecordingTask.log == []

    def test_failure_is_reraised_and_reported(self, project, build_logger, tmp_path):
        """Test task failures propagate and are recorded."""
        report = tmp_path / "report.jsonl"
        project.tasks.register("broken", FailingTask)
        executor = BuildExecutor(project, build_logger, report_path=str(report))

        with pytest.raises(UnknownScopeError):
            executor.run(["broken"])

        records = read_json_lines(report)
        assert records[0]["task"] == "broken"
        assert records[0]["status"] == "failed"
        assert "provided-runtime" in records[0]["error"]
        assert executor.executed_tasks == []

    def test_packaging_report(self, web_project, build_logger, tmp_path):
        """Test the report lists the archive entries."""
        write_file(tmp_path / "src/main/webapp/index.html", "<html/>")
        report = tmp_path / "report.jsonl"

        BuildExecutor(web_project, build_logger, report_path=str(report)).run(["package"])

        record = read_json_lines(report)[0]
        assert record["status"] == "success"
        assert record["project"] == "shop"
        assert record["entries"] == ["index.html"]
        assert record["destination"].endswith("shop-1.0.war")
