"""Usage attributes attached to published variants."""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional


class Usage:
    """Well-known values of the usage attribute."""

    ATTRIBUTE = "usage"

    JAVA_API = "java-api"
    JAVA_RUNTIME = "java-runtime"


class AttributeContainer:
    """Mutable key/value classification tags consumers select variants by.

    Example
    -------
    >>> attrs = AttributeContainer().attribute(Usage.ATTRIBUTE, Usage.JAVA_RUNTIME)
    >>> attrs.get(Usage.ATTRIBUTE)
    'java-runtime'
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    def attribute(self, key: str, value: str) -> "AttributeContainer":
        self._values[key] = value
        return self

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def as_read_only(self) -> Mapping[str, str]:
        """Return a read-only copy of the current attributes."""
        return MappingProxyType(dict(self._values))

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeContainer({self._values!r})"
