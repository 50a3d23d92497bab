"""Build configuration loader and validator."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional, Tuple

import yaml

from ..core.scopes import Dependency, FileDependency
from ..errors import ConfigError
from ..io.archive import ArtifactWriter
from ..pipeline.project import Project
from ..pipeline.task import PackagingTask
from .conventions import JAVA_SCOPES, PROVIDED_COMPILE, PROVIDED_RUNTIME, WebArchivePlugin

CONVENTION_SCOPES = set(JAVA_SCOPES) | {PROVIDED_COMPILE, PROVIDED_RUNTIME}


@dataclass
class ScopeDeclaration:
    """A scope declared in a build file.

    Attributes
    ----------
    name : str
        Scope name
    description : str, optional
        Human-readable description
    extends : List[str]
        Names of scopes this scope extends
    dependencies : List[Hashable]
        Dependencies declared directly on the scope
    """

    name: str
    description: Optional[str] = None
    extends: List[str] = field(default_factory=list)
    dependencies: List[Hashable] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "extends": list(self.extends),
            "dependencies": [_dependency_to_dict(dep) for dep in self.dependencies],
        }


class BuildConfig:
    """Loads a project's scopes, dependencies and packaging settings from YAML.

    Parameters
    ----------
    config_path : str
        Path to the YAML build file. Relative paths inside the file are
        resolved against its directory

    Attributes
    ----------
    raw_config : Dict[str, Any]
        Raw configuration dictionary loaded from YAML
    scopes : Dict[str, ScopeDeclaration]
        Scopes declared in the ``scopes`` section
    dependencies : Dict[str, List[Hashable]]
        Dependencies added to existing scopes in the ``dependencies`` section
    package : Dict[str, Any]
        Packaging overrides (``webapp_dir``, ``destination``)

    Example
    -------
    >>> config = BuildConfig("build.yaml")
    >>> config.load()
    >>> config.parse()
    >>> valid, errors = config.validate()
    >>> project = config.create_project()
    """

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.base_dir = self.config_path.absolute().parent
        self.raw_config: Dict[str, Any] = {}
        self.scopes: Dict[str, ScopeDeclaration] = {}
        self.dependencies: Dict[str, List[Hashable]] = {}
        self.package: Dict[str, Any] = {}

    def load(self) -> None:
        """Load the YAML build file.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist
        ConfigError
            If the YAML is malformed or not a mapping
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Build file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed build file {self.config_path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Build file {self.config_path} must contain a mapping")
        self.raw_config = raw

    @property
    def project_settings(self) -> Dict[str, Any]:
        return self.raw_config.get("project") or {}

    def parse(self) -> None:
        """Convert the ``scopes``, ``dependencies`` and ``package`` sections.

        Raises
        ------
        ConfigError
            If a section has the wrong shape or a dependency is malformed
        """
        self.scopes = {}
        for name, scope_def in _mapping(self.raw_config, "scopes").items():
            scope_def = scope_def or {}
            if not isinstance(scope_def, dict):
                raise ConfigError(f"Scope '{name}' must be a mapping")
            self.scopes[name] = ScopeDeclaration(
                name=name,
                description=scope_def.get("description"),
                extends=_scope_names(scope_def.get("extends"), name),
                dependencies=[
                    self.parse_dependency(spec, name)
                    for spec in _as_list(scope_def.get("dependencies"), name, "dependencies")
                ],
            )

        self.dependencies = {
            scope_name: [
                self.parse_dependency(spec, scope_name)
                for spec in _as_list(specs, scope_name, "dependencies")
            ]
            for scope_name, specs in _mapping(self.raw_config, "dependencies").items()
        }

        self.package = {
            key: self.resolve_paths(value) if isinstance(value, str) else value
            for key, value in _mapping(self.raw_config, "package").items()
        }

    def parse_dependency(self, spec: Any, scope_name: str) -> Hashable:
        """Build a dependency from its build-file form.

        Accepted forms: ``"group:name:version"``,
        ``"group:name:version=path/to.jar"``,
        ``{notation: ..., path: ...}`` and ``{file: path}``.
        """
        try:
            if isinstance(spec, str):
                notation, _, path = spec.partition("=")
                return Dependency.parse(notation, self._path(path) if path else None)
            if isinstance(spec, dict) and "file" in spec:
                return FileDependency(self._path(spec["file"]))
            if isinstance(spec, dict) and "notation" in spec:
                path = spec.get("path")
                return Dependency.parse(spec["notation"], self._path(path) if path else None)
        except ValueError as e:
            raise ConfigError(f"Scope '{scope_name}': {e}") from e

        raise ConfigError(f"Scope '{scope_name}': unsupported dependency {spec!r}")

    def resolve_paths(self, path_template: str) -> str:
        """Resolve templates like ``{project.build_dir}``.

        Parameters
        ----------
        path_template : str
            Path possibly containing {...} templates

        Returns
        -------
        str
            Resolved path; unknown references are left as written
        """
        if "{" not in path_template:
            return path_template

        def replace_template(match):
            value: Any = self.raw_config
            for part in match.group(1).split("."):
                if not isinstance(value, dict):
                    return match.group(0)
                value = value.get(part, {})

            if value and not isinstance(value, (dict, list)):
                return str(value)
            return match.group(0)

        resolved = re.sub(r"\{([^}]+)\}", replace_template, path_template)

        if resolved != path_template and "{" in resolved:
            return self.resolve_paths(resolved)

        return resolved

    def validate(self) -> Tuple[bool, List[str]]:
        """Check scope references and the extends relation.

        Returns
        -------
        Tuple[bool, List[str]]
            (valid, errors); errors name unknown scopes and cycles
        """
        errors = []
        known = CONVENTION_SCOPES | set(self.scopes)

        for name, scope in self.scopes.items():
            for parent in scope.extends:
                if parent not in known:
                    errors.append(f"Scope '{name}' extends unknown scope '{parent}'")

        for name in self.dependencies:
            if name not in known:
                errors.append(f"Dependencies declared for unknown scope '{name}'")

        cycle = self._find_cycle()
        if cycle:
            errors.append(f"Circular extends relation: {' -> '.join(cycle)}")

        return (len(errors) == 0, errors)

    def create_project(self, writer: Optional[ArtifactWriter] = None) -> Project:
        """Create a project with the web archive conventions and this build file applied."""
        settings = self.project_settings
        project = Project(
            name=str(settings.get("name") or self.base_dir.name),
            project_dir=self.base_dir,
            version=str(settings.get("version") or ""),
            writer=writer,
            build_dir=self.resolve_paths(settings["build_dir"]) if settings.get("build_dir") else None,
        )
        project.apply(WebArchivePlugin())
        self.apply(project)
        return project

    def apply(self, project: Project) -> None:
        """Declare scopes, edges and dependencies on ``project``.

        Raises
        ------
        UnknownScopeError, CycleError
            Propagated from the scope graph
        """
        graph = project.scopes

        for scope in self.scopes.values():
            graph.get_or_create(scope.name, scope.description)

        for scope in self.scopes.values():
            for parent in scope.extends:
                graph.extend(scope.name, parent)
            for dependency in scope.dependencies:
                graph.add_dependency(scope.name, dependency)

        for scope_name, dependencies in self.dependencies.items():
            for dependency in dependencies:
                graph.add_dependency(scope_name, dependency)

        webapp_dir = self.package.get("webapp_dir")
        destination = self.package.get("destination")
        if webapp_dir or destination:

            def configure(task: PackagingTask) -> None:
                if webapp_dir:
                    task.set_content_root(self._path(webapp_dir))
                if destination:
                    task.set_destination(self._path(destination))

            project.tasks.configure_each(PackagingTask, configure)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project": dict(self.project_settings),
            "scopes": {name: scope.to_dict() for name, scope in self.scopes.items()},
            "dependencies": {
                name: [_dependency_to_dict(dep) for dep in deps]
                for name, deps in self.dependencies.items()
            },
            "package": dict(self.package),
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], base_dir: str = ".") -> "BuildConfig":
        """Create a parsed BuildConfig from a dictionary.

        Parameters
        ----------
        config_dict : Dict[str, Any]
            Configuration dictionary in build-file form
        base_dir : str
            Directory relative paths are resolved against
        """
        config = cls(str(Path(base_dir) / "build.yaml"))
        config.raw_config = config_dict
        config.parse()
        return config

    def _path(self, value: str) -> Path:
        path = Path(self.resolve_paths(str(value)))
        if path.is_absolute():
            return path
        return self.base_dir / path

    def _find_cycle(self) -> List[str]:
        visited = set()
        rec_stack: List[str] = []

        def visit(node: str) -> List[str]:
            visited.add(node)
            rec_stack.append(node)

            for parent in self.scopes[node].extends:
                if parent not in self.scopes:
                    continue
                if parent in rec_stack:
                    return rec_stack[rec_stack.index(parent):] + [parent]
                if parent not in visited:
                    cycle = visit(parent)
                    if cycle:
                        return cycle

            rec_stack.pop()
            return []

        for name in self.scopes:
            if name not in visited:
                cycle = visit(name)
                if cycle:
                    return cycle
        return []


def _mapping(raw: Dict[str, Any], section: str) -> Dict[str, Any]:
    value = raw.get(section) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")
    return value


def _dependency_to_dict(dependency: Hashable) -> Dict[str, Any]:
    if isinstance(dependency, Dependency):
        data: Dict[str, Any] = {"notation": dependency.coordinate}
        if dependency.path is not None:
            data["path"] = str(dependency.path)
        return data
    if isinstance(dependency, FileDependency):
        return {"file": str(dependency.path)}
    return {"value": str(dependency)}


def _as_list(
    value: Any, scope_name: str, key: str, single: Tuple[type, ...] = (str, dict)
) -> List[Any]:
    """Normalise a build-file value that may be written as a single item."""
    if value is None:
        return []
    if isinstance(value, single):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"Scope '{scope_name}': {key} must be a list")
    return list(value)


def _scope_names(value: Any, scope_name: str) -> List[str]:
    names = _as_list(value, scope_name, "extends", single=(str,))
    for name in names:
        if not isinstance(name, str):
            raise ConfigError(f"Scope '{scope_name}': extends entries must be scope names")
    return names
