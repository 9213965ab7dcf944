from enum import Enum


class Strategy(str, Enum):
    """Defines how many instances a registration produces.

    Attributes:
        SINGLETON: One instance, cached and shared for the life of the context.
        PROTOTYPE: A fresh instance on every request, never cached.
    """

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    def __str__(self) -> str:
        return self.value


class Factory(str, Enum):
    """Defines how a registration's target is invoked.

    Attributes:
        CONSTRUCTOR: Target is a class; the instance is the constructed object.
        FUNCTION: Target is a plain callable; the instance is its return value.
    """

    CONSTRUCTOR = "constructor"
    FUNCTION = "function"

    def __str__(self) -> str:
        return self.value


class ArgumentKind(str, Enum):
    """Shape of the arguments bound to a registration."""

    ABSENT = "absent"
    SCALAR = "scalar"
    POSITIONAL = "positional"
    NAMED = "named"

    def __str__(self) -> str:
        return self.value


class CollisionPolicy(str, Enum):
    """Decides which existing property values block a wiring assignment.

    Attributes:
        DEFINED: Any own value other than None collides.
        TRUTHY: Only truthy own values collide.
    """

    DEFINED = "defined"
    TRUTHY = "truthy"

    def __str__(self) -> str:
        return self.value


class ContextState(str, Enum):
    """Lifecycle state of a context."""

    UNREGISTERED = "unregistered"
    REGISTERING = "registering"
    INITIALIZED = "initialized"

    def __str__(self) -> str:
        return self.value
