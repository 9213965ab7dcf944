import logging
from functools import partial
from typing import Any, Callable, Collection, Dict, List, Optional

from pydantic import ValidationError

from keywire.application.instantiator import Instantiator
from keywire.application.lifecycle import LifecycleInvoker
from keywire.application.registration import Registration
from keywire.application.wiring import WiringEngine
from keywire.domain import (
    NOT_FOUND,
    Arguments,
    ContextOptions,
    ContextState,
    IContext,
    IInstantiator,
    ILifecycleInvoker,
    IWiringEngine,
    Recipe,
    RegistrationError,
    RegistrationMetadata,
    Strategy,
    UnregisteredKeyError,
)

logger = logging.getLogger(__name__)


class Context(IContext):
    """String-keyed inversion of control context.

    Owns the registration table and the singleton cache. Instances are built
    in batches: every instance of a batch is allocated first, then all of
    them are wired, then their ready hooks run, and only then are the
    singletons cached. A failure anywhere discards the whole batch.

    Attributes:
        _options: Context configuration.
        _registry: Mapping of keys to their registration metadata.
        _instantiator: Component building raw instances.
        _wiring_engine: Component assigning dependencies.
        _lifecycle_invoker: Component calling ready hooks.
        _state: Current lifecycle state.
    """

    def __init__(self, options: Optional[ContextOptions] = None) -> None:
        """Initialize an empty context.

        Args:
            options: Optional configuration; defaults to ``ContextOptions()``.
        """
        self._options = options or ContextOptions()
        self._registry: Dict[str, RegistrationMetadata] = {}
        self._instantiator: IInstantiator = Instantiator()
        self._wiring_engine: IWiringEngine = WiringEngine(self._options.collision_policy)
        self._lifecycle_invoker: ILifecycleInvoker = LifecycleInvoker()
        self._state = ContextState.UNREGISTERED

    @property
    def options(self) -> ContextOptions:
        return self._options

    @property
    def state(self) -> ContextState:
        return self._state

    def register(self, key: str, target: Callable[..., Any], args: Any = None) -> Registration:
        """Register a recipe under a key.

        Registering an existing key replaces it and drops its cached instance.

        Args:
            key: Unique registration key.
            target: Class (constructor factory) or callable (function factory).
            args: None, a scalar, a list of positional values, a mapping of
                keyword options, or an explicit ``Arguments``.

        Returns:
            Fluent handle to adjust strategy and factory.

        Raises:
            RegistrationError: If the key or arguments are invalid.

        Example:
            >>> context.register("profile", Profile, {"name": "Nick", "job": "Less"})
            >>> context.register("request", Request).strategy(Strategy.PROTOTYPE)
        """
        if not isinstance(key, str) or not key.strip():
            raise RegistrationError(f"Registration key must be a non-empty string, got {key!r}")

        try:
            recipe = Recipe(
                key=key,
                target=target,
                arguments=Arguments.of(args),
                strategy=self._options.default_strategy,
                factory=self._options.default_factory,
            )
        except ValidationError as e:
            raise RegistrationError(f"Invalid registration for [{key}]: {e}") from e

        if key in self._registry:
            logger.warning("Registration [%s] is overwritten", key)

        metadata = RegistrationMetadata(recipe=recipe)
        self._registry[key] = metadata
        if self._state == ContextState.UNREGISTERED:
            self._state = ContextState.REGISTERING

        logger.debug("Registered [%s] with %s arguments", key, recipe.arguments.kind)
        return Registration(metadata)

    def initialize(self) -> None:
        """Build every singleton that is not materialized yet, as one batch.

        Prototypes are left for ``get``. Calling it again only builds
        singletons registered since the previous call.

        Raises:
            UnsatisfiedDependencyError: If a declared dependency is not registered.
            PropertyCollisionError: If wiring would overwrite an existing property.
            InstantiationError: If a target fails to produce an instance.
            LifecycleError: If a ready hook fails.
        """
        pending = [
            key
            for key, metadata in self._registry.items()
            if metadata.recipe.strategy == Strategy.SINGLETON and not metadata.materialized
        ]
        logger.debug("Initializing context with %d pending singletons", len(pending))

        seed = {key: self._instantiator.instantiate(self._registry[key].recipe) for key in pending}
        self._build(seed)
        self._state = ContextState.INITIALIZED

    def get(self, key: str) -> Any:
        """Return the instance for a key.

        Singletons are built on first use and then returned from the cache.
        Prototypes are built fresh on every call.

        Args:
            key: The registration key.

        Returns:
            The wired and completed instance.

        Raises:
            UnregisteredKeyError: If the key is not registered.
            ResolutionError: If building the instance fails.

        Example:
            >>> context.get("profile") is context.get("profile")
            True
        """
        metadata = self._registry.get(key)
        if metadata is None:
            raise UnregisteredKeyError(key)

        if metadata.materialized:
            instance = metadata.cached_instance
        else:
            seed = {key: self._instantiator.instantiate(metadata.recipe)}
            instance = self._build(seed)[key]

        return instance

    def create(self, key: str, args: Any = None) -> Any:
        """Build a fresh instance of a registration without caching it.

        Args:
            key: The registration key.
            args: Optional replacement arguments; the registered ones are used if None.

        Returns:
            A new wired and completed instance, regardless of strategy.

        Raises:
            UnregisteredKeyError: If the key is not registered.
            ResolutionError: If building the instance fails.
        """
        metadata = self._registry.get(key)
        if metadata is None:
            raise UnregisteredKeyError(key)

        recipe = metadata.recipe
        if args is not None:
            recipe = recipe.model_copy(update={"arguments": Arguments.of(args)})

        seed = {key: self._instantiator.instantiate(recipe)}
        return self._build(seed, uncached=(key,))[key]

    def inject(self, instance: Any, name: str = "<injected>") -> Any:
        """Wire an externally created instance and invoke its ready hook.

        Args:
            instance: The object to wire; it is never cached.
            name: Name used for the instance in error messages; must not be a registered key.

        Returns:
            The same instance.

        Raises:
            RegistrationError: If the name is a registered key.
            ResolutionError: If wiring or the ready hook fails.
        """
        if name in self._registry:
            raise RegistrationError(f"Injected name [{name}] collides with a registered key")

        return self._build({name: instance}, uncached=(name,))[name]

    def has(self, key: str) -> bool:
        return key in self._registry

    def keys(self) -> List[str]:
        return list(self._registry)

    def entry(self, key: str) -> Registration:
        """Return the fluent handle of an existing registration.

        Raises:
            UnregisteredKeyError: If the key is not registered.
        """
        metadata = self._registry.get(key)
        if metadata is None:
            raise UnregisteredKeyError(key)
        return Registration(metadata)

    def get_registry_copy(self) -> Dict[str, RegistrationMetadata]:
        """Copy the registration table without any cached instances.

        Returns:
            Fresh metadata for every key, sharing only the immutable recipes.
        """
        return {key: RegistrationMetadata(recipe=metadata.recipe) for key, metadata in self._registry.items()}

    def clear(self) -> None:
        """Drop all registrations and cached instances.

        The context behaves like a freshly created one afterwards.
        """
        self._registry.clear()
        self._state = ContextState.UNREGISTERED
        logger.debug("Context cleared")

    def _build(self, seed: Dict[str, Any], uncached: Collection[str] = ()) -> Dict[str, Any]:
        """Wire, complete and commit a batch seeded with allocated instances.

        Args:
            seed: Mapping of key to raw instance.
            uncached: Keys whose instances must not enter the singleton cache.

        Returns:
            The whole batch, including entries pulled in while wiring.
        """
        batch = dict(seed)
        order = self._wiring_engine.wire(batch, partial(self._resolve, batch))

        completed = set()
        for key in order:
            instance = batch[key]
            if id(instance) in completed:
                continue
            self._lifecycle_invoker.complete(key, instance)
            completed.add(id(instance))

        for key, instance in batch.items():
            metadata = self._registry.get(key)
            if key in uncached or metadata is None or metadata.recipe.strategy != Strategy.SINGLETON:
                continue
            metadata.cached_instance = instance
            metadata.materialized = True
            logger.debug("Cached singleton [%s]", key)

        return batch

    def _resolve(self, batch: Dict[str, Any], key: str) -> Any:
        """Find the instance for a key, allocating it into the batch if needed."""
        if key in batch:
            return batch[key]

        metadata = self._registry.get(key)
        if metadata is None:
            return NOT_FOUND
        if metadata.materialized:
            return metadata.cached_instance

        instance = self._instantiator.instantiate(metadata.recipe)
        batch[key] = instance
        return instance


def create_context(options: Optional[ContextOptions] = None) -> Context:
    """Create an empty context.

    Args:
        options: Optional configuration.

    Example:
        >>> context = create_context()
        >>> context.register("greeting", str, "hello")
        >>> context.initialize()
        >>> context.get("greeting")
        'hello'
    """
    return Context(options)
