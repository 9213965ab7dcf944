import inspect
import logging
from typing import Any, Tuple

from keywire.domain import (
    ArgumentKind,
    Arguments,
    ContainerError,
    Factory,
    IInstantiator,
    InstantiationError,
    Recipe,
)

logger = logging.getLogger(__name__)


class Instantiator(IInstantiator):
    """Builds raw instances from recipes.

    Knows nothing about other registrations and never reads the
    ``dependencies`` convention; wiring happens afterwards.
    """

    def instantiate(self, recipe: Recipe) -> Any:
        """Invoke the recipe's target with its bound arguments.

        Argument shapes map onto the call as follows:
        - absent: no arguments.
        - scalar: the value as the only positional argument.
        - positional: each value as a separate positional argument.
        - named: the options mapping as the only positional argument, for the
          target to unpack itself.

        Args:
            recipe: The recipe to build.

        Returns:
            The constructed object for constructor recipes, the return value for function recipes.

        Raises:
            InstantiationError: If the target is not usable with its factory, or raises.

        Example:
            >>> recipe = Recipe(key="greeting", target=str, arguments=Arguments.scalar("hi"))
            >>> Instantiator().instantiate(recipe)
            'hi'
        """
        target = recipe.target
        if recipe.factory == Factory.CONSTRUCTOR and not inspect.isclass(target):
            raise InstantiationError(recipe.key, f"Constructor factory requires a class, got {target!r}")
        if not callable(target):
            raise InstantiationError(recipe.key, f"Function factory requires a callable, got {target!r}")

        args = self._bind(recipe.arguments)
        logger.debug(
            "Instantiating [%s] via %s factory with %s arguments", recipe.key, recipe.factory, recipe.arguments.kind
        )

        try:
            return target(*args)
        except ContainerError:
            raise
        except Exception as e:
            raise InstantiationError(recipe.key, f"Failed to create instance: {e}") from e

    @staticmethod
    def _bind(arguments: Arguments) -> Tuple[Any, ...]:
        if arguments.kind == ArgumentKind.POSITIONAL:
            return tuple(arguments.value)
        if arguments.kind == ArgumentKind.NAMED:
            return (dict(arguments.value),)
        if arguments.kind == ArgumentKind.SCALAR:
            return (arguments.value,)
        return ()
