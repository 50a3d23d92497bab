"""Deferred values.

A :class:`Provider` wraps a zero-argument callable and evaluates it
every time it is read. Nothing is memoised, so a provider created while
a build is still being configured sees every later mutation.
"""

from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")


class Provider(Generic[T]):
    """A value computed when read rather than when declared.

    Parameters
    ----------
    compute : Callable[[], T]
        Zero-argument function producing the value
    label : str, optional
        Description used in ``repr``

    Example
    -------
    >>> items = []
    >>> size = Provider(lambda: len(items))
    >>> items.append("x")
    >>> size.get()
    1
    """

    def __init__(self, compute: Callable[[], T], label: str = "provider"):
        if not callable(compute):
            raise TypeError(f"Provider needs a callable, got {type(compute).__name__}")
        self._compute = compute
        self.label = label

    def get(self) -> T:
        return self._compute()

    def __call__(self) -> T:
        return self._compute()

    def map(self, transform: Callable[[T], R], label: str = "") -> "Provider[R]":
        """Derive a provider applying ``transform`` to this one's value on read."""
        return Provider(
            lambda: transform(self._compute()),
            label=label or f"{self.label}.map",
        )

    @classmethod
    def of(cls, value: T) -> "Provider[T]":
        """Wrap a constant."""
        return cls(lambda: value, label=f"of({value!r})")

    @classmethod
    def lift(cls, value: Union["Provider[T]", Callable[[], T], Any]) -> "Provider[T]":
        """Return ``value`` as a provider.

        Providers pass through, other zero-argument callables are
        wrapped, anything else becomes a constant.
        """
        if isinstance(value, Provider):
            return value
        if callable(value):
            return cls(value)
        return cls.of(value)

    def __repr__(self) -> str:
        return f"Provider({self.label})"
