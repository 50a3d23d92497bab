"""Lazily derived classpaths.

Example Usage
-------------
>>> from scopepack.core.classpath import ClasspathResolver, Provider
>>> resolver = ClasspathResolver(graph)
>>> classpath = resolver.derive("runtime-classpath", "provided-runtime")
>>> # ... more configuration ...
>>> artifacts = classpath.get()
"""

from .provider import Provider
from .resolver import ClasspathResolver

__all__ = [
    "ClasspathResolver",
    "Provider",
]
