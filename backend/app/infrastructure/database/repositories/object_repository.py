"""Concrete ObjectService backed by SQLAlchemy Core over an async session."""

import logging
from typing import Any

from sqlalchemy import ColumnElement, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import RelationshipProperty

from app.application.interfaces import ObjectService
from app.domain.entities import ObjectDefinition
from app.infrastructure.database.object_registry import ObjectRegistry

logger = logging.getLogger(__name__)


def coerce_record_id(column: ColumnElement[Any], record_id: Any) -> Any:
    """Convert a record id to the Python type of the column it is matched against.

    Ids usually arrive as URL path strings. Drivers such as asyncpg do not
    cast them, so an integer key must be bound as an int.

    Raises:
        ValueError: The id cannot be a value of the column.
    """
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return record_id
    if isinstance(record_id, python_type):
        return record_id
    try:
        return python_type(record_id)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"{record_id!r} is not a valid {python_type.__name__} id for {column}"
        ) from exc


class SQLAlchemyObjectService(ObjectService):
    """Implements the ObjectService port for any model known to the registry.

    Statements run inside the caller's session; committing is left to the
    session owner (the request-scoped ``get_db_session`` dependency).
    """

    def __init__(self, session: AsyncSession, registry: ObjectRegistry):
        self._session = session
        self._registry = registry

    # ── Metadata ─────────────────────────────────────────────────────

    def object_exists(self, object_name: str) -> bool:
        return object_name in self._registry

    def get_object(self, object_name: str) -> ObjectDefinition:
        return self._registry.get(object_name)

    # ── Records ──────────────────────────────────────────────────────

    async def select_data(self, object_name: str, record_id: Any) -> list[dict[str, Any]]:
        table = self._registry.get_table(object_name)
        id_column = table.c[self.get_id_field(object_name)]
        try:
            record_id = coerce_record_id(id_column, record_id)
        except ValueError as exc:
            logger.debug("No %s record can match: %s", object_name, exc)
            return []

        result = await self._session.execute(select(table).where(id_column == record_id))
        return [dict(row) for row in result.mappings().all()]

    async def insert_data(
        self,
        object_name: str,
        data: dict[str, Any],
        many_to_many: dict[str, list[Any]] | None = None,
    ) -> Any:
        table = self._registry.get_table(object_name)

        values = {key: value for key, value in data.items() if key in table.c}
        ignored = sorted(set(data) - set(values))
        if ignored:
            logger.debug("Ignoring non-column keys for %s: %s", object_name, ignored)

        result = await self._session.execute(insert(table).values(**values))
        new_id = result.inserted_primary_key[0]

        for property_name, related_ids in (many_to_many or {}).items():
            relationship = self._many_to_many(object_name, property_name)
            (local_column, link_local), = relationship.synchronize_pairs
            (_, link_remote), = relationship.secondary_synchronize_pairs

            owner_value = values.get(local_column.key, new_id)
            rows = [
                {link_local.key: owner_value, link_remote.key: related_id}
                for related_id in related_ids
            ]
            if rows:
                await self._session.execute(insert(relationship.secondary), rows)

        logger.debug("Inserted %s '%s'", object_name, new_id)
        return new_id

    async def select_related_ids(
        self, object_name: str, record_id: Any, property_name: str
    ) -> list[Any]:
        relationship = self._many_to_many(object_name, property_name)
        (_, link_local), = relationship.synchronize_pairs
        (_, link_remote), = relationship.secondary_synchronize_pairs
        try:
            record_id = coerce_record_id(link_local, record_id)
        except ValueError as exc:
            logger.debug("No %s.%s links can match: %s", object_name, property_name, exc)
            return []

        stmt = (
            select(link_remote)
            .where(link_local == record_id)
            .order_by(link_remote)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    def _many_to_many(self, object_name: str, property_name: str) -> RelationshipProperty:
        try:
            relationship = self._registry.get_relationship(object_name, property_name)
        except KeyError:
            relationship = None
        if relationship is None or relationship.secondary is None:
            raise ValueError(
                f"'{property_name}' is not a many-to-many property of '{object_name}'"
            )
        return relationship
