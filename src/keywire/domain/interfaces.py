from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from keywire.domain.enums import ContextState
from keywire.domain.models import Recipe

Resolve = Callable[[str], Any]


@runtime_checkable
class HasDependencySpec(Protocol):
    """Instance declaring its wiring needs, e.g. ``"address, card = creditCard"``."""

    dependencies: Optional[str]


@runtime_checkable
class HasLifecycleHook(Protocol):
    """Instance that wants to be told when its wiring is complete."""

    def ready(self) -> Any: ...


class IContext(ABC):
    """Abstract interface for the string-keyed context."""

    @abstractmethod
    def register(self, key: str, target: Callable[..., Any], args: Any = None) -> Any:
        """Register a recipe under a key.

        Args:
            key: Unique registration key.
            target: Class or callable producing the instance.
            args: Optional arguments, see ``Arguments.of``.
        """

    @abstractmethod
    def initialize(self) -> None:
        """Materialize and wire every pending singleton in a single batch."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the instance for a key, building it if needed.

        Args:
            key: The registration key.
        """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Tell whether a key is registered."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all registrations and cached instances."""

    @property
    @abstractmethod
    def state(self) -> ContextState:
        """Current lifecycle state of the context."""


class IInstantiator(ABC):
    """Abstract interface for turning a recipe into a raw instance."""

    @abstractmethod
    def instantiate(self, recipe: Recipe) -> Any:
        """Invoke the recipe's target with its arguments.

        Args:
            recipe: The recipe to build.

        Returns:
            The raw, unwired instance.

        Raises:
            InstantiationError: If the target fails or is of the wrong kind.
        """


class IWiringEngine(ABC):
    """Abstract interface for assigning dependencies onto a batch of instances."""

    @abstractmethod
    def wire(self, batch: Dict[str, Any], resolve: Resolve) -> List[str]:
        """Wire every instance in the batch.

        Args:
            batch: Mapping of key to raw instance; ``resolve`` may add entries.
            resolve: Returns the instance for a key, or ``NOT_FOUND``.

        Returns:
            Keys in the order they were wired.

        Raises:
            UnsatisfiedDependencyError: If a target key is not registered.
            PropertyCollisionError: If an alias already holds a value.
        """


class ILifecycleInvoker(ABC):
    """Abstract interface for completing wired instances."""

    @abstractmethod
    def complete(self, key: str, instance: Any) -> None:
        """Invoke the instance's ready hook if it has one.

        Args:
            key: Key of the instance, used for error reporting.
            instance: The wired instance.

        Raises:
            LifecycleError: If the hook raises.
        """
