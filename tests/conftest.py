"""Pytest configuration and shared fixtures for scopepack tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scopepack.config import WebArchivePlugin
from scopepack.core.scopes import ScopeGraph
from scopepack.pipeline import Project

from tests.fixtures import RecordingWriter


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def detach_build_handlers():
    """Close and remove handlers a BuildLogger attached during a test."""
    yield
    build_logger = logging.getLogger("scopepack")
    for handler in list(build_logger.handlers):
        handler.close()
        build_logger.removeHandler(handler)


# ============================================================================
# Scope Fixtures
# ============================================================================


@pytest.fixture
def graph() -> ScopeGraph:
    """Create an empty scope graph."""
    return ScopeGraph("test")


@pytest.fixture
def diamond_graph(graph) -> ScopeGraph:
    """Create A extends B and C, both extending D."""
    for name in ("A", "B", "C", "D"):
        graph.create_scope(name)
    graph.extend("A", "B")
    graph.extend("A", "C")
    graph.extend("B", "D")
    graph.extend("C", "D")
    graph.add_dependency("D", "d1")
    graph.add_dependency("D", "d2")
    graph.add_dependency("B", "b1")
    graph.add_dependency("C", "c1")
    return graph


# ============================================================================
# Project Fixtures
# ============================================================================


@pytest.fixture
def recording_writer() -> RecordingWriter:
    """Create an artifact writer that records its calls."""
    return RecordingWriter()


@pytest.fixture
def project(tmp_path, recording_writer) -> Project:
    """Create a project rooted at tmp_path with a recording writer."""
    return Project("shop", tmp_path, version="1.0", writer=recording_writer)


@pytest.fixture
def web_project(project) -> Project:
    """Create a project with the web archive conventions applied."""
    project.apply(WebArchivePlugin())
    return project


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_build_file(tmp_path) -> Path:
    """Create a sample build file with one provided and one shipped library."""
    import yaml

    from tests.fixtures import create_webapp_project

    create_webapp_project(
        tmp_path,
        webapp_files={"index.html": "<html/>", "WEB-INF/web.xml": "<web-app/>"},
        jars=["lib-a.jar", "servlet-api.jar"],
    )

    config = {
        "project": {"name": "shop", "version": "1.0", "build_dir": "out"},
        "scopes": {
            "container-api": {
                "description": "APIs supplied by the servlet container",
                "extends": ["provided-compile"],
            },
        },
        "dependencies": {
            "implementation": ["org.lib:lib-a:1.0=libs/lib-a.jar"],
            "provided-runtime": [
                {"notation": "javax.servlet:servlet-api:2.5", "path": "libs/servlet-api.jar"},
            ],
        },
        "package": {
            "destination": "{project.build_dir}/dist/{project.name}.war",
        },
    }

    path = tmp_path / "build.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
