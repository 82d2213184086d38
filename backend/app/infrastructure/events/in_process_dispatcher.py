"""In-process event dispatcher — runs named handlers registered at startup."""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from app.application.interfaces import EventDispatcher
from app.domain.exceptions import EventHandlerNotFoundError

logger = logging.getLogger(__name__)

_PHASES = ("pre", "post")


@dataclass(frozen=True)
class _Registration:
    handler: Callable[..., Any]
    private: bool


async def _call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a sync or async callable and return its result."""
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


class InProcessEventDispatcher(EventDispatcher):
    """Maps event names to callables and runs them in the current task.

    Handlers receive the event arguments as keyword arguments. Listeners
    registered for the ``pre`` / ``post`` phase receive ``(event, arguments)``
    and run around every handler unless the call is pre/post exempt.

    Usage:
        dispatcher = InProcessEventDispatcher()

        @dispatcher.handler("email_template.clone", private=True)
        async def clone_template(object_name, record_id, data):
            ...
    """

    def __init__(self) -> None:
        self._handlers: dict[str, _Registration] = {}
        self._listeners: dict[str, list[Callable[..., Any]]] = {phase: [] for phase in _PHASES}

    # ── Registration ─────────────────────────────────────────────────

    def register(
        self, event: str, handler: Callable[..., Any], *, private: bool = False
    ) -> None:
        if event in self._handlers:
            logger.warning("Replacing handler for event '%s'", event)
        self._handlers[event] = _Registration(handler=handler, private=private)
        logger.debug("Registered handler for '%s' (private=%s)", event, private)

    def handler(self, event: str, *, private: bool = False) -> Callable:
        """Decorator form of :meth:`register`."""

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.register(event, fn, private=private)
            return fn

        return decorator

    def unregister(self, event: str) -> bool:
        return self._handlers.pop(event, None) is not None

    def has_handler(self, event: str) -> bool:
        return event in self._handlers

    def add_listener(self, phase: str, listener: Callable[..., Any]) -> None:
        if phase not in self._listeners:
            raise ValueError(f"Unknown listener phase '{phase}', expected one of {_PHASES}")
        self._listeners[phase].append(listener)

    # ── Dispatch ─────────────────────────────────────────────────────

    async def run_event(
        self,
        event: str,
        *,
        private: bool = False,
        pre_post_exempt: bool = False,
        event_arguments: dict[str, Any] | None = None,
    ) -> Any:
        registration = self._handlers.get(event)
        if registration is None or (registration.private and not private):
            raise EventHandlerNotFoundError(event)

        arguments = dict(event_arguments or {})
        if not pre_post_exempt:
            await self._notify("pre", event, arguments)

        logger.debug("Running event '%s'", event)
        result = await _call(registration.handler, **arguments)

        if not pre_post_exempt:
            await self._notify("post", event, arguments)
        return result

    async def _notify(self, phase: str, event: str, arguments: dict[str, Any]) -> None:
        for listener in self._listeners[phase]:
            await _call(listener, event, arguments)
