from typing import Optional


class ContainerError(Exception):
    """Base exception for container errors."""


class RegistrationError(ContainerError):
    """Raised for invalid registrations.

    This occurs when:
    - The key is empty or not a string.
    - Named options carry non-string keys.
    - A registration is modified after its singleton was materialized.
    """


class ResolutionError(ContainerError):
    """Base exception for failures while building an object graph."""


class UnsatisfiedDependencyError(ResolutionError):
    """Raised when a declared dependency points to a key with no registration.

    Attributes:
        source_key: Key of the instance declaring the dependency.
        alias: Property the dependency would have been assigned to.
        target_key: Key that could not be found.
    """

    def __init__(self, source_key: str, alias: str, target_key: str) -> None:
        self.source_key = source_key
        self.alias = alias
        self.target_key = target_key
        super().__init__(f"Dependency [{source_key}.{alias}]->[{target_key}] can not be satisfied")


class PropertyCollisionError(ResolutionError):
    """Raised when wiring would overwrite a property the instance already holds.

    Attributes:
        source_key: Key of the instance being wired.
        alias: Property that already holds a value.
        target_key: Key of the dependency that would have been assigned.
    """

    def __init__(self, source_key: str, alias: str, target_key: str) -> None:
        self.source_key = source_key
        self.alias = alias
        self.target_key = target_key
        super().__init__(f"Dependency [{source_key}.{alias}]->[{target_key}] is overriding existing property")


class UnregisteredKeyError(ResolutionError):
    """Raised when a key is requested that was never registered.

    Attributes:
        key: The requested key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key [{key}] is not registered and can not be satisfied")


class InstantiationError(ResolutionError):
    """Raised when a registration's target cannot produce an instance.

    Attributes:
        key: Key of the failing registration.
        reason: Optional reason for the failure.
    """

    def __init__(self, key: str, reason: Optional[str] = None) -> None:
        self.key = key
        self.reason = reason
        message = f"Cannot instantiate [{key}]"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class LifecycleError(ResolutionError):
    """Raised when an instance's ready hook fails.

    Attributes:
        key: Key of the instance whose hook failed.
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Lifecycle hook of [{key}] failed: {reason}")
