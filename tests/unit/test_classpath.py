"""Unit tests for deferred values and classpath derivation."""

import pytest

from scopepack.core.classpath import ClasspathResolver, Provider
from scopepack.errors import UnknownScopeError


class TestProvider:
    """Tests for Provider."""

    def test_evaluated_on_every_read(self):
        """Test that providers are not memoised."""
        items = []
        size = Provider(lambda: len(items))
        assert size.get() == 0
        items.append("x")
        assert size.get() == 1
        assert size() == 1

    def test_map_is_lazy(self):
        """Test that map defers evaluation."""
        calls = []

        def compute():
            calls.append(1)
            return 2

        doubled = Provider(compute).map(lambda value: value * 2)
        assert calls == []
        assert doubled.get() == 4
        assert len(calls) == 1

    def test_of(self):
        """Test wrapping a constant."""
        assert Provider.of("value").get() == "value"

    def test_lift(self):
        """Test normalising values, callables and providers."""
        provider = Provider.of(1)
        assert Provider.lift(provider) is provider
        assert Provider.lift(lambda: 2).get() == 2
        assert Provider.lift(3).get() == 3

    def test_requires_callable(self):
        """Test that a non-callable is rejected."""
        with pytest.raises(TypeError):
            Provider("not callable")


class TestClasspathResolver:
    """Tests for ClasspathResolver."""

    @pytest.fixture
    def resolver(self, graph) -> ClasspathResolver:
        graph.create_scope("runtime")
        graph.create_scope("provided")
        return ClasspathResolver(graph)

    def test_set_difference(self, graph, resolver):
        """Test base {X, Y, Z} minus subtract {Y}."""
        for dep in ("X", "Y", "Z"):
            graph.add_dependency("runtime", dep)
        graph.add_dependency("provided", "Y")

        classpath = resolver.derive("runtime", "provided")
        assert classpath.get() == {"X", "Z"}

    def test_derive_is_lazy(self, graph, resolver):
        """Test that dependencies added after derive are included."""
        classpath = resolver.derive(graph.lookup("runtime"), graph.lookup("provided"))
        assert classpath.get() == frozenset()

        graph.add_dependency("runtime", "X")
        assert classpath.get() == {"X"}

    def test_late_subtraction(self, graph, resolver):
        """Test that dependencies added to the subtracted scope later are excluded."""
        graph.add_dependency("runtime", "X")
        classpath = resolver.derive("runtime", "provided")
        assert classpath.get() == {"X"}

        graph.add_dependency("provided", "X")
        assert classpath.get() == frozenset()

    def test_late_edge(self, graph, resolver):
        """Test that an extends edge added after derive takes effect."""
        graph.create_scope("provided-compile")
        graph.add_dependency("provided-compile", "api")
        graph.add_dependency("runtime", "api")
        classpath = resolver.derive("runtime", "provided")
        assert classpath.get() == {"api"}

        graph.extend("provided", "provided-compile")
        assert classpath.get() == frozenset()

    def test_transitive_subtraction(self, graph, resolver):
        """Test subtraction uses the resolved set of the subtracted scope."""
        graph.create_scope("provided-compile")
        graph.extend("provided", "provided-compile")
        graph.extend("runtime", "provided")
        graph.add_dependency("provided-compile", "api")
        graph.add_dependency("runtime", "impl")

        assert resolver.derive("runtime", "provided").get() == {"impl"}

    def test_unknown_scope_at_read_time(self, graph, resolver):
        """Test that a scope removed after derive fails on read."""
        classpath = resolver.derive("runtime", "provided")
        graph.remove_scope("provided")

        with pytest.raises(UnknownScopeError) as exc_info:
            classpath.get()
        assert exc_info.value.scope_name == "provided"

    def test_unknown_scope_not_checked_at_derive(self, resolver):
        """Test that derive itself does not look the scopes up."""
        classpath = resolver.derive("runtime", "not-yet-created")
        with pytest.raises(UnknownScopeError):
            classpath.get()
