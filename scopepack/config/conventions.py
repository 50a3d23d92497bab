"""Standard scopes and the web-archive packaging conventions.

:func:`apply_java_conventions` creates the base scopes every JVM-style
project has. :class:`WebArchivePlugin` adds the two "provided" scopes,
whose dependencies the deployment container supplies at runtime, and
the ``package`` task that builds the web archive without them.

Example
-------
>>> from scopepack.config import WebArchivePlugin
>>> project = Project("shop", "/work/shop", version="1.0")
>>> project.apply(WebArchivePlugin())
>>> project.scopes.lookup(PROVIDED_RUNTIME).extends
{'provided-compile'}
"""

import logging

from ..core.classpath import Provider
from ..core.publication import AttributeContainer, LazyPublishArtifact, Usage, WebApplication
from ..pipeline.project import Project
from ..pipeline.task import PackagingTask

logger = logging.getLogger(__name__)

# Base scopes
IMPLEMENTATION = "implementation"
RUNTIME_ONLY = "runtime-only"
COMPILE_CLASSPATH = "compile-classpath"
RUNTIME_CLASSPATH = "runtime-classpath"
RUNTIME_ELEMENTS = "runtime-elements"
TEST_IMPLEMENTATION = "test-implementation"
TEST_RUNTIME_CLASSPATH = "test-runtime-classpath"
ARCHIVES = "archives"

# Web archive
PROVIDED_COMPILE = "provided-compile"
PROVIDED_RUNTIME = "provided-runtime"
PACKAGE_TASK_NAME = "package"
BUILD_GROUP = "build"
WEB_COMPONENT_NAME = "web"
WEB_VARIANT_NAME = "master"
WEBAPP_DIR = "src/main/webapp"

JAVA_SCOPES = {
    IMPLEMENTATION: ("Implementation only dependencies.", []),
    RUNTIME_ONLY: ("Runtime only dependencies.", []),
    COMPILE_CLASSPATH: ("Compile classpath.", [IMPLEMENTATION]),
    RUNTIME_CLASSPATH: ("Runtime classpath.", [IMPLEMENTATION, RUNTIME_ONLY]),
    RUNTIME_ELEMENTS: (
        "Elements of runtime for consumers.",
        [IMPLEMENTATION, RUNTIME_ONLY],
    ),
    TEST_IMPLEMENTATION: ("Implementation only dependencies for tests.", [IMPLEMENTATION]),
    TEST_RUNTIME_CLASSPATH: (
        "Runtime classpath of tests.",
        [TEST_IMPLEMENTATION, RUNTIME_CLASSPATH],
    ),
    ARCHIVES: ("Artifacts produced by the project.", []),
}


def apply_java_conventions(project: Project) -> None:
    """Create the base scopes and their extends edges.

    Scopes that already exist are reused, so this can run after a build
    file has declared some of them.
    """
    graph = project.scopes
    for name, (description, _) in JAVA_SCOPES.items():
        graph.get_or_create(name, description)
    for name, (_, parents) in JAVA_SCOPES.items():
        for parent in parents:
            graph.extend(name, parent)


class WebArchivePlugin:
    """Packages a project as a web archive that omits provided dependencies.

    Applying the plugin:

    - creates ``provided-compile`` and ``provided-runtime`` (extending it)
    - makes the implementation scope extend ``provided-compile`` and the
      runtime classpaths extend ``provided-runtime``, so provided
      dependencies stay visible for compiling and testing
    - configures every :class:`PackagingTask` with the webapp content
      root and the runtime classpath minus ``provided-runtime``
    - registers the ``package`` task and publishes its output lazily
      as the ``web`` component
    """

    def apply(self, project: Project) -> None:
        apply_java_conventions(project)

        project.tasks.configure_each(
            PackagingTask, lambda task: self._configure_packaging(project, task)
        )
        package = project.tasks.register(
            PACKAGE_TASK_NAME, PackagingTask, self._describe_package_task
        )

        artifact = LazyPublishArtifact(package, artifact_type="war")
        project.scopes.lookup(ARCHIVES).artifacts.append(artifact)

        self._configure_scopes(project)
        self._configure_component(project, artifact)
        logger.debug(f"Applied web archive conventions to '{project.name}'")

    @staticmethod
    def _configure_packaging(project: Project, task: PackagingTask) -> None:
        task.set_content_root(Provider(lambda: project.layout.dir(WEBAPP_DIR)))
        task.classpath(
            Provider(lambda: project.layout.classes_dir),
            project.classpaths.derive(RUNTIME_CLASSPATH, PROVIDED_RUNTIME),
        )
        task.set_destination(
            Provider(
                lambda: project.layout.libs_dir / f"{project.archive_base_name}.war"
            )
        )

    @staticmethod
    def _describe_package_task(task: PackagingTask) -> None:
        task.description = (
            "Generates a war archive with all the compiled classes, "
            "the web-app content and the libraries."
        )
        task.group = BUILD_GROUP

    @staticmethod
    def _configure_scopes(project: Project) -> None:
        graph = project.scopes
        provided_compile = graph.get_or_create(
            PROVIDED_COMPILE,
            "Additional compile classpath for libraries that should not be "
            "part of the WAR archive.",
        )
        provided_runtime = graph.get_or_create(
            PROVIDED_RUNTIME,
            "Additional runtime classpath for libraries that should not be "
            "part of the WAR archive.",
        )
        graph.extend(provided_runtime, provided_compile)

        graph.extend(IMPLEMENTATION, provided_compile)
        graph.extend(RUNTIME_CLASSPATH, provided_runtime)
        graph.extend(RUNTIME_ELEMENTS, provided_runtime)
        graph.extend(TEST_RUNTIME_CLASSPATH, provided_runtime)

    @staticmethod
    def _configure_component(project: Project, artifact: LazyPublishArtifact) -> None:
        attributes = AttributeContainer().attribute(Usage.ATTRIBUTE, Usage.JAVA_RUNTIME)
        project.components.add(
            WebApplication(
                artifact,
                WEB_VARIANT_NAME,
                attributes,
                name=WEB_COMPONENT_NAME,
            )
        )
