"""Component and publication wiring for packaged archives."""

from .attributes import AttributeContainer, Usage
from .artifact import LazyPublishArtifact
from .component import ComponentRegistry, UsageContext, WebApplication

__all__ = [
    "AttributeContainer",
    "ComponentRegistry",
    "LazyPublishArtifact",
    "Usage",
    "UsageContext",
    "WebApplication",
]
