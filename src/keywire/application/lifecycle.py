import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from keywire.domain import ContainerError, HasLifecycleHook, ILifecycleInvoker, LifecycleError

logger = logging.getLogger(__name__)


class LifecycleInvoker(ILifecycleInvoker):
    """Calls the ``ready`` hook of fully wired instances."""

    def complete(self, key: str, instance: Any) -> None:
        hook = self._find_hook(instance)
        if hook is None:
            return

        logger.debug("Invoking ready hook of [%s]", key)
        try:
            hook()
        except ContainerError:
            raise
        except Exception as e:
            raise LifecycleError(key, str(e)) from e

    @staticmethod
    def _find_hook(instance: Any) -> Optional[Callable[[], Any]]:
        if isinstance(instance, Mapping):
            hook = instance.get("ready")
            return hook if callable(hook) else None
        if isinstance(instance, type):
            return None
        if isinstance(instance, HasLifecycleHook) and callable(instance.ready):
            return instance.ready
        return None
