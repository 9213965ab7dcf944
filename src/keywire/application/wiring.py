import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, List, Set

from keywire.application.dependency_parser import parse_dependencies
from keywire.domain import (
    NOT_FOUND,
    CollisionPolicy,
    HasDependencySpec,
    IWiringEngine,
    PropertyCollisionError,
    ResolutionError,
    Resolve,
    UnsatisfiedDependencyError,
)

logger = logging.getLogger(__name__)


class WiringEngine(IWiringEngine):
    """Assigns declared dependencies onto a batch of allocated instances.

    Every instance in the batch exists before any of them is wired, so
    mutual references bind to stable objects: wiring only needs the target
    to be allocated, not finished.

    Attributes:
        _collision_policy: Which existing property values block an assignment.
    """

    def __init__(self, collision_policy: CollisionPolicy = CollisionPolicy.DEFINED) -> None:
        self._collision_policy = collision_policy

    def wire(self, batch: Dict[str, Any], resolve: Resolve) -> List[str]:
        """Wire every instance in the batch, including entries ``resolve`` adds while wiring.

        Args:
            batch: Mapping of key to raw instance.
            resolve: Returns the instance for a key, or ``NOT_FOUND``.

        Returns:
            Keys in the order they were wired.

        Raises:
            UnsatisfiedDependencyError: If a target key is not registered.
            PropertyCollisionError: If an alias already holds a value.

        Example:
            >>> a, b = {"dependencies": "b"}, {"dependencies": "a"}
            >>> batch = {"a": a, "b": b}
            >>> WiringEngine().wire(batch, lambda key: batch.get(key, NOT_FOUND))
            ['a', 'b']
            >>> a["b"] is b and b["a"] is a
            True
        """
        wired: List[str] = []
        done: Set[str] = set()

        while True:
            pending = [key for key in batch if key not in done]
            if not pending:
                return wired
            for key in pending:
                self._wire_instance(key, batch[key], resolve)
                done.add(key)
                wired.append(key)

    def _wire_instance(self, key: str, instance: Any, resolve: Resolve) -> None:
        for link in parse_dependencies(read_dependency_spec(instance)):
            dependency = resolve(link.target_key)
            if dependency is NOT_FOUND:
                raise UnsatisfiedDependencyError(key, link.alias, link.target_key)

            existing = own_value(instance, link.alias)
            if existing is not dependency and self._collides(existing):
                raise PropertyCollisionError(key, link.alias, link.target_key)

            try:
                assign(instance, link.alias, dependency)
            except (AttributeError, TypeError) as e:
                raise ResolutionError(
                    f"Dependency [{key}.{link.alias}]->[{link.target_key}] can not be assigned: {e}"
                ) from e
            logger.debug("Wired [%s.%s] -> [%s]", key, link.alias, link.target_key)

    def _collides(self, existing: Any) -> bool:
        if existing is NOT_FOUND:
            return False
        if self._collision_policy == CollisionPolicy.TRUTHY:
            return bool(existing)
        return existing is not None


def read_dependency_spec(instance: Any) -> Any:
    """Return the instance's dependency spec, or None if it declares none."""
    if isinstance(instance, Mapping):
        return instance.get("dependencies")
    if isinstance(instance, HasDependencySpec):
        return instance.dependencies
    return None


def own_value(instance: Any, name: str) -> Any:
    """Return the value the instance itself holds under ``name``, or ``NOT_FOUND``.

    Class level attributes are declarations and are not reported.
    """
    if isinstance(instance, Mapping):
        return instance.get(name, NOT_FOUND)
    instance_dict = getattr(instance, "__dict__", None)
    if isinstance(instance_dict, Mapping) and not isinstance(instance, type):
        return instance_dict.get(name, NOT_FOUND)
    # Slotted objects keep their values outside __dict__
    return getattr(instance, name, NOT_FOUND)


def assign(instance: Any, name: str, value: Any) -> None:
    if isinstance(instance, MutableMapping):
        instance[name] = value
    else:
        setattr(instance, name, value)
