"""Integration tests for batches, lazy resolution and failure handling."""

from types import SimpleNamespace

import pytest

import keywire
from keywire import (
    Arguments,
    CollisionPolicy,
    ContextOptions,
    Factory,
    InstantiationError,
    LifecycleError,
    PropertyCollisionError,
    Strategy,
    UnregisteredKeyError,
    UnsatisfiedDependencyError,
)


class Component:
    def __init__(self, options=None):
        for name, value in (options or {}).items():
            setattr(self, name, value)


class Peer:
    def __init__(self, dependencies):
        self.dependencies = dependencies
        self.peer_of_peer = None

    def ready(self):
        self.peer_of_peer = self.peer.peer


class Counter:
    created = 0

    def __init__(self):
        Counter.created += 1


class TestLazyResolution:
    """Test entries that are built on get instead of initialize."""

    def test_singleton_registered_after_initialize(self):
        """Test that a late singleton is built on first get and cached."""
        context = keywire.create_context()
        context.register("address", SimpleNamespace)
        context.initialize()

        context.register("card", Component, {"dependencies": "address"})

        card = context.get("card")
        assert card.address is context.get("address")
        assert context.get("card") is card

    def test_lazy_singleton_pulls_unbuilt_singletons_into_its_batch(self):
        """Test that mutually referencing late singletons resolve to each other."""
        context = keywire.create_context()
        context.initialize()
        context.register("x", lambda: {"dependencies": "y"}).factory(Factory.FUNCTION)
        context.register("y", lambda: {"dependencies": "x"}).factory(Factory.FUNCTION)

        x = context.get("x")

        assert x["y"] is context.get("y")
        assert context.get("y")["x"] is x

    def test_get_without_initialize(self):
        """Test that get builds singletons even if initialize was never called."""
        context = keywire.create_context()
        context.register("a", Component, {"dependencies": "b"})
        context.register("b", SimpleNamespace)

        assert context.get("a").b is context.get("b")

    def test_lazy_resolution_leaves_cached_singletons_untouched(self):
        """Test that building a new entry does not rewire existing singletons."""
        context = keywire.create_context()
        context.register("a", lambda: {"dependencies": "b"}).factory(Factory.FUNCTION)
        context.register("b", lambda: {}).factory(Factory.FUNCTION)
        context.initialize()
        before = dict(context.get("a"))

        context.register("c", lambda: {"dependencies": "a, b"}).factory(Factory.FUNCTION)
        c = context.get("c")

        assert c["a"] is context.get("a")
        assert dict(context.get("a")) == before

    def test_prototype_dependency_is_fresh_per_batch(self):
        """Test that a prototype referenced as a dependency is rebuilt for each dependent."""
        context = keywire.create_context()
        context.register("request", SimpleNamespace).strategy(Strategy.PROTOTYPE)
        context.register("first", Component, {"dependencies": "request"}).strategy(Strategy.PROTOTYPE)

        assert context.get("first").request is not context.get("first").request

    def test_prototypes_are_not_built_by_initialize(self):
        """Test that initialize skips prototype registrations."""
        Counter.created = 0
        context = keywire.create_context()
        context.register("counter", Counter).strategy(Strategy.PROTOTYPE)

        context.initialize()
        assert Counter.created == 0

        context.get("counter")
        assert Counter.created == 1


class TestReadyOrdering:
    """Test that hooks see fully wired graphs."""

    def test_ready_runs_after_whole_batch_is_wired(self):
        """Test that a hook can walk through a peer wired later in the batch."""
        context = keywire.create_context()
        context.register("a", Peer, "peer = b")
        context.register("b", Peer, "peer = a")

        context.initialize()

        assert context.get("a").peer_of_peer is context.get("a")
        assert context.get("b").peer_of_peer is context.get("b")

    def test_hook_failure_is_raised_and_nothing_is_cached(self):
        """Test that a failing hook aborts the batch."""
        calls = []

        def build():
            calls.append(1)
            return {"ready": lambda: 1 / 0}

        context = keywire.create_context()
        context.register("broken", build).factory(Factory.FUNCTION)

        with pytest.raises(LifecycleError) as exc_info:
            context.initialize()
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

        with pytest.raises(LifecycleError):
            context.get("broken")
        assert len(calls) == 2


class TestFailedBatches:
    """Test that failures discard the whole batch."""

    def test_collision_discards_batch(self):
        """Test that no instance of a failed batch is cached."""
        built = []

        def make_b():
            instance = {}
            built.append(instance)
            return instance

        context = keywire.create_context()
        context.register("a", lambda: {"dependencies": "b", "b": "taken"}).factory(Factory.FUNCTION)
        context.register("b", make_b).factory(Factory.FUNCTION)

        with pytest.raises(PropertyCollisionError):
            context.initialize()

        assert context.get("b") is not built[0]

    def test_unsatisfied_dependency_from_get(self):
        """Test that get reports a missing dependency with its exact message."""
        context = keywire.create_context()
        context.register("a", Component, {"dependencies": "missing"})

        with pytest.raises(UnsatisfiedDependencyError) as exc_info:
            context.get("a")

        assert str(exc_info.value) == "Dependency [a.missing]->[missing] can not be satisfied"

    def test_get_unregistered_key(self):
        """Test that get rejects unknown keys."""
        context = keywire.create_context()

        with pytest.raises(UnregisteredKeyError) as exc_info:
            context.get("nothing")

        assert exc_info.value.key == "nothing"

    def test_constructor_failure_is_wrapped(self):
        """Test that exceptions raised by targets become InstantiationError."""

        class Failing:
            def __init__(self):
                raise ValueError("boom")

        context = keywire.create_context()
        context.register("failing", Failing)

        with pytest.raises(InstantiationError, match="boom") as exc_info:
            context.initialize()
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestCollisionPolicies:
    """Test the configurable collision rule."""

    def _register(self, context, existing):
        context.register("a", lambda: {"dependencies": "b", "b": existing}).factory(Factory.FUNCTION)
        context.register("b", lambda: {"id": "b"}).factory(Factory.FUNCTION)

    @pytest.mark.parametrize("existing", [0, False, "", {}])
    def test_defined_policy_rejects_falsy_values(self, existing):
        """Test that the default policy treats any non-None value as taken."""
        context = keywire.create_context()
        self._register(context, existing)

        with pytest.raises(PropertyCollisionError):
            context.initialize()

    @pytest.mark.parametrize("existing", [0, False, "", {}, None])
    def test_truthy_policy_accepts_falsy_values(self, existing):
        """Test that the truthy policy only rejects truthy values."""
        context = keywire.create_context(ContextOptions(collision_policy=CollisionPolicy.TRUTHY))
        self._register(context, existing)

        context.initialize()

        assert context.get("a")["b"] is context.get("b")

    def test_none_never_collides(self):
        """Test that a None placeholder is replaced under the default policy."""
        context = keywire.create_context()
        self._register(context, None)

        context.initialize()

        assert context.get("a")["b"] is context.get("b")

    def test_same_alias_twice_is_not_a_collision(self):
        """Test that repeating a token re-assigns the same instance without error."""
        context = keywire.create_context()
        context.register("a", lambda: {"dependencies": "b, b"}).factory(Factory.FUNCTION)
        context.register("b", lambda: {}).factory(Factory.FUNCTION)

        context.initialize()

        assert context.get("a")["b"] is context.get("b")


class TestArgumentShapes:
    """Test explicit argument variants."""

    def test_scalar_list(self):
        """Test that Arguments.scalar passes a list as a single argument."""
        context = keywire.create_context()
        context.register("items", lambda items: len(items), Arguments.scalar([1, 2, 3])).factory(Factory.FUNCTION)

        assert context.get("items") == 3

    def test_trailing_mapping_is_positional(self):
        """Test that a mapping inside positional arguments is not expanded."""
        context = keywire.create_context()
        context.register("pair", lambda first, second: (first, second), [1, {"k": "v"}]).factory(Factory.FUNCTION)

        assert context.get("pair") == (1, {"k": "v"})

    def test_function_factory_with_named_options(self):
        """Test that plain callables receive named options as one mapping."""
        context = keywire.create_context()
        context.register("opts", lambda options: options, {"name": "Nick", "job": "Less"}).factory(Factory.FUNCTION)
        context.register(
            "url", lambda options: "{host}:{port}".format(**options), {"host": "db", "port": 5432}
        ).factory(Factory.FUNCTION)

        assert context.get("opts") == {"name": "Nick", "job": "Less"}
        assert context.get("url") == "db:5432"

    def test_default_factory_option(self):
        """Test that options can make function invocation the default."""
        context = keywire.create_context(ContextOptions(default_factory=Factory.FUNCTION))
        context.register("answer", lambda: 42)

        assert context.get("answer") == 42
