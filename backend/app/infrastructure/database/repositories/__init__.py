from .object_repository import SQLAlchemyObjectService

__all__ = [
    "SQLAlchemyObjectService",
]
