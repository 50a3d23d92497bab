"""Software components exposed to the publication subsystem."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Tuple

from ...errors import ScopepackError
from .artifact import LazyPublishArtifact
from .attributes import AttributeContainer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageContext:
    """One consumable variant of a component.

    Attributes
    ----------
    name : str
        Variant label (e.g. "master")
    attributes : Mapping[str, str]
        Read-only usage attributes
    artifacts : Tuple[LazyPublishArtifact, ...]
        Artifacts making up the variant
    """

    name: str
    attributes: Mapping[str, str]
    artifacts: Tuple[LazyPublishArtifact, ...]


class WebApplication:
    """Component describing a packaged web application.

    The usage attributes are copied at construction so the component is
    a read-only view for publishers; the artifact stays deferred.
    """

    def __init__(
        self,
        artifact: LazyPublishArtifact,
        variant: str,
        attributes: AttributeContainer,
        name: str = "web",
    ):
        self.name = name
        self._usage = UsageContext(
            name=variant,
            attributes=attributes.as_read_only(),
            artifacts=(artifact,),
        )

    @property
    def usages(self) -> List[UsageContext]:
        return [self._usage]

    def __repr__(self) -> str:
        return f"WebApplication({self.name!r}, variant={self._usage.name!r})"


class ComponentRegistry:
    """Named components of a project."""

    def __init__(self):
        self._components: Dict[str, WebApplication] = {}

    def add(self, component: WebApplication) -> None:
        if component.name in self._components:
            raise ScopepackError(f"Component '{component.name}' already registered")
        self._components[component.name] = component
        logger.debug(f"Registered component '{component.name}'")

    def get(self, name: str) -> WebApplication:
        try:
            return self._components[name]
        except KeyError:
            raise ScopepackError(f"Component '{name}' not found") from None

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[WebApplication]:
        return iter(self._components.values())
