"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import EventDispatcher, ObjectService
from app.application.services import CloneService
from app.infrastructure.database import Base, ObjectRegistry
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.repositories import SQLAlchemyObjectService
from app.infrastructure.events import InProcessEventDispatcher


@lru_cache
def get_object_registry() -> ObjectRegistry:
    """Process-wide registry of every model mapped on the application Base."""
    return ObjectRegistry.from_base(Base)


@lru_cache
def get_event_dispatcher() -> InProcessEventDispatcher:
    """Process-wide dispatcher; clone handlers register on it at startup."""
    return InProcessEventDispatcher()


async def get_object_service(
    session: AsyncSession = Depends(get_db_session),
    registry: ObjectRegistry = Depends(get_object_registry),
) -> AsyncGenerator[ObjectService, None]:
    """Provides an ObjectService bound to the request session."""
    yield SQLAlchemyObjectService(session, registry)


async def get_clone_service(
    object_service: ObjectService = Depends(get_object_service),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
) -> AsyncGenerator[CloneService, None]:
    """Provides a CloneService with its persistence and dispatch ports wired up."""
    yield CloneService(object_service, dispatcher)
