from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from keywire.domain.enums import ArgumentKind, CollisionPolicy, Factory, Strategy
from keywire.domain.exceptions import RegistrationError


class Arguments(BaseModel):
    """Invocation arguments bound to a registration, tagged by shape.

    The shape is decided once, at registration time, and never re-inferred
    when the target is invoked.

    Attributes:
        kind: Shape of the arguments.
        value: The scalar value, a tuple of positional values, or a dict of options.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ArgumentKind = Field(default=ArgumentKind.ABSENT, description="Shape of the arguments.")
    value: Any = Field(default=None, description="Payload matching the argument shape.")

    @classmethod
    def absent(cls) -> "Arguments":
        return cls(kind=ArgumentKind.ABSENT)

    @classmethod
    def scalar(cls, value: Any) -> "Arguments":
        """Bind a single value, even one that looks like a list or mapping."""
        return cls(kind=ArgumentKind.SCALAR, value=value)

    @classmethod
    def positional(cls, *values: Any) -> "Arguments":
        return cls(kind=ArgumentKind.POSITIONAL, value=tuple(values))

    @classmethod
    def named(cls, options: Mapping) -> "Arguments":
        """Bind a mapping of options, handed to the target as one argument.

        Raises:
            RegistrationError: If an option name is not a string.
        """
        invalid = [name for name in options if not isinstance(name, str)]
        if invalid:
            raise RegistrationError(f"Named options must have string keys, got: {invalid!r}")
        return cls(kind=ArgumentKind.NAMED, value=dict(options))

    @classmethod
    def of(cls, args: Any) -> "Arguments":
        """Classify raw registration arguments.

        Args:
            args: None, a list or tuple, a mapping, an Arguments instance, or any scalar.

        Returns:
            The tagged arguments.

        Example:
            >>> Arguments.of(None).kind
            <ArgumentKind.ABSENT: 'absent'>
            >>> Arguments.of([[1], {"reverse": True}]).kind
            <ArgumentKind.POSITIONAL: 'positional'>
        """
        if isinstance(args, Arguments):
            return args
        if args is None:
            return cls.absent()
        if isinstance(args, (list, tuple)):
            return cls.positional(*args)
        if isinstance(args, Mapping):
            return cls.named(args)
        return cls.scalar(args)


class Recipe(BaseModel):
    """Value object describing how to build the instance for one key.

    Attributes:
        key: Unique identifier within a context.
        target: Class or callable producing the instance.
        arguments: Arguments the target is invoked with.
        strategy: Singleton or prototype.
        factory: Constructor or function invocation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(..., min_length=1, description="Registration key.")
    target: Callable[..., Any] = Field(..., description="Class or callable producing the instance.")
    arguments: Arguments = Field(default_factory=Arguments.absent, description="Invocation arguments.")
    strategy: Strategy = Field(default=Strategy.SINGLETON, description="Instance sharing strategy.")
    factory: Factory = Field(default=Factory.CONSTRUCTOR, description="How the target is invoked.")


class RegistrationMetadata(BaseModel):
    """Tracks a recipe together with its materialized singleton.

    Attributes:
        recipe: Current recipe for the key; replaced, never mutated.
        cached_instance: Materialized singleton, if any.
        materialized: Whether the singleton has been built and cached.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    recipe: Recipe = Field(..., description="The recipe for this key.")
    cached_instance: Optional[Any] = Field(default=None, description="Cached singleton instance.")
    materialized: bool = Field(default=False, description="Whether the singleton is cached.")


class DependencyLink(BaseModel):
    """One parsed entry of a dependency spec.

    Attributes:
        alias: Property name assigned on the dependent instance.
        target_key: Registration key resolved into that property.
    """

    model_config = ConfigDict(frozen=True)

    alias: str
    target_key: str


class ContextOptions(BaseModel):
    """Configuration of a context.

    Attributes:
        collision_policy: Which existing property values block wiring.
        default_strategy: Strategy given to new registrations.
        default_factory: Factory given to new registrations.
    """

    model_config = ConfigDict(frozen=True)

    collision_policy: CollisionPolicy = Field(default=CollisionPolicy.DEFINED)
    default_strategy: Strategy = Field(default=Strategy.SINGLETON)
    default_factory: Factory = Field(default=Factory.CONSTRUCTOR)


class _NotFound:
    """Marker returned by resolvers for keys with no registration."""

    _instance: Optional["_NotFound"] = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()
