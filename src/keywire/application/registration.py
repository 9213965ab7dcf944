from typing import Union

from keywire.domain import Factory, Recipe, RegistrationError, RegistrationMetadata, Strategy


class Registration:
    """Fluent handle over a stored registration.

    Setters replace the stored recipe with an updated copy and return the
    handle, so calls can be chained right after ``register``.

    Example:
        >>> context.register("handler", RequestHandler).strategy(Strategy.PROTOTYPE)
        >>> context.register("clock", time.monotonic).factory(Factory.FUNCTION)
    """

    def __init__(self, metadata: RegistrationMetadata) -> None:
        self._metadata = metadata

    @property
    def key(self) -> str:
        return self._metadata.recipe.key

    @property
    def recipe(self) -> Recipe:
        return self._metadata.recipe

    def strategy(self, strategy: Union[Strategy, str]) -> "Registration":
        """Set the instance sharing strategy.

        Args:
            strategy: ``Strategy.SINGLETON`` or ``Strategy.PROTOTYPE`` (or their values).

        Raises:
            RegistrationError: If the value is unknown or the singleton is already materialized.
        """
        try:
            strategy = Strategy(strategy)
        except ValueError as e:
            raise RegistrationError(f"Unknown strategy for [{self.key}]: {strategy!r}") from e
        return self._update(strategy=strategy)

    def factory(self, factory: Union[Factory, str]) -> "Registration":
        """Set how the target is invoked.

        Args:
            factory: ``Factory.CONSTRUCTOR`` or ``Factory.FUNCTION`` (or their values).

        Raises:
            RegistrationError: If the value is unknown or the singleton is already materialized.
        """
        try:
            factory = Factory(factory)
        except ValueError as e:
            raise RegistrationError(f"Unknown factory for [{self.key}]: {factory!r}") from e
        return self._update(factory=factory)

    def _update(self, **changes) -> "Registration":
        if self._metadata.materialized:
            raise RegistrationError(f"Registration [{self.key}] is already materialized and can not be changed")
        self._metadata.recipe = self._metadata.recipe.model_copy(update=changes)
        return self

    def __repr__(self) -> str:
        recipe = self._metadata.recipe
        return f"Registration(key={recipe.key!r}, strategy={recipe.strategy}, factory={recipe.factory})"
