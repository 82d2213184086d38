"""Abstract object-persistence interface (port) for declared objects."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import ObjectDefinition, PropertyDefinition


class ObjectService(ABC):
    """Port for object metadata and record persistence.

    Metadata lookups are synchronous — they read an in-memory registry.
    Record access is asynchronous and runs against the database.
    """

    # ── Metadata ─────────────────────────────────────────────────────

    @abstractmethod
    def object_exists(self, object_name: str) -> bool:
        """Return True when an object is registered under the given name."""
        ...

    @abstractmethod
    def get_object(self, object_name: str) -> ObjectDefinition:
        """Return the object definition. Raises ObjectNotFoundError if unknown."""
        ...

    def get_object_properties(self, object_name: str) -> dict[str, PropertyDefinition]:
        """Declared properties keyed by name, in declaration order."""
        return self.get_object(object_name).property_map()

    def get_id_field(self, object_name: str) -> str:
        return self.get_object(object_name).id_field

    def get_date_created_field(self, object_name: str) -> str:
        return self.get_object(object_name).date_created_field

    def get_date_modified_field(self, object_name: str) -> str:
        return self.get_object(object_name).date_modified_field

    def get_object_attribute(
        self, object_name: str, attribute_name: str, default: Any = ""
    ) -> Any:
        """Read a single object-level attribute, falling back to ``default``."""
        return self.get_object(object_name).get_attribute(attribute_name, default)

    # ── Records ──────────────────────────────────────────────────────

    @abstractmethod
    async def select_data(self, object_name: str, record_id: Any) -> list[dict[str, Any]]:
        """Fetch the record with the given id as a recordset (zero or one row)."""
        ...

    @abstractmethod
    async def insert_data(
        self,
        object_name: str,
        data: dict[str, Any],
        many_to_many: dict[str, list[Any]] | None = None,
    ) -> Any:
        """Insert a new record and return its id.

        Args:
            object_name: Target object.
            data: Column values. The id and audit dates are generated when absent.
            many_to_many: Related ids to link, keyed by many-to-many property name.
        """
        ...

    @abstractmethod
    async def select_related_ids(
        self, object_name: str, record_id: Any, property_name: str
    ) -> list[Any]:
        """Return the ids linked to a record through a many-to-many property."""
        ...
