"""Abstract event-dispatch interface (port)."""

from abc import ABC, abstractmethod
from typing import Any


class EventDispatcher(ABC):
    """Port for invoking named handlers in-process."""

    @abstractmethod
    async def run_event(
        self,
        event: str,
        *,
        private: bool = False,
        pre_post_exempt: bool = False,
        event_arguments: dict[str, Any] | None = None,
    ) -> Any:
        """Run the handler registered for ``event`` and return its result.

        Args:
            event: Handler identifier.
            private: Allow handlers registered as private.
            pre_post_exempt: Skip the pre/post listeners around the handler.
            event_arguments: Keyword arguments passed to the handler.
        """
        ...
