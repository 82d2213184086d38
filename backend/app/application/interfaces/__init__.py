from .event_dispatcher import EventDispatcher
from .object_service import ObjectService

__all__ = [
    "EventDispatcher",
    "ObjectService",
]
