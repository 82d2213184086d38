"""Record cloning — duplicates a persisted record of any declared object.

Which properties get copied is decided from object metadata. Objects that
declare a ``clone_handler`` are cloned by that handler through the event
dispatcher instead of the default copy logic.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from app.application.interfaces import EventDispatcher, ObjectService
from app.domain.entities import PropertyDefinition, Relationship
from app.domain.exceptions import ObjectNotCloneableError, RecordNotFoundError

logger = logging.getLogger(__name__)

_SIMPLE_TYPES = (str, int, float, Decimal, date, datetime, UUID)


def _is_simple_value(value: Any) -> bool:
    # bool is an int subclass, so it is covered
    return isinstance(value, _SIMPLE_TYPES)


def _as_id_list(value: Any) -> list[Any]:
    """Normalise a many-to-many override to a list of related ids."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


# ── Clone strategies ─────────────────────────────────────────────────


@dataclass(frozen=True)
class DelegatedClone:
    """Clone through an object-specific handler."""

    handler: str
    dispatcher: EventDispatcher = field(compare=False, repr=False)

    async def clone(self, object_name: str, record_id: Any, data: dict[str, Any]) -> Any:
        result = await self.dispatcher.run_event(
            self.handler,
            private=True,
            pre_post_exempt=True,
            event_arguments={
                "object_name": object_name,
                "record_id": record_id,
                "data": data,
            },
        )
        if _is_simple_value(result):
            logger.info(
                "Cloned %s '%s' via handler '%s'", object_name, record_id, self.handler
            )
            return result

        if result is not None:
            logger.warning(
                "Clone handler '%s' returned a %s, discarding it",
                self.handler,
                type(result).__name__,
            )
        return ""


@dataclass(frozen=True)
class DefaultClone:
    """Copy cloneable fields of the original record into a new record."""

    object_service: ObjectService = field(compare=False, repr=False)
    cloneable_fields: tuple[str, ...] = ()
    excluded_fields: frozenset[str] = frozenset()

    async def clone(self, object_name: str, record_id: Any, data: dict[str, Any]) -> Any:
        objects = self.object_service
        records = await objects.select_data(object_name, record_id)
        if not records:
            raise RecordNotFoundError(object_name, record_id)
        original = records[0]

        properties = objects.get_object_properties(object_name)

        new_record: dict[str, Any] = {}
        many_to_many: dict[str, list[Any]] = {}
        for name in self.cloneable_fields:
            prop = properties[name]
            if prop.relationship == Relationship.MANY_TO_MANY:
                if name not in data:
                    many_to_many[name] = await objects.select_related_ids(
                        object_name, record_id, name
                    )
            elif prop.is_column and name in original:
                new_record[name] = original[name]

        for name, value in data.items():
            prop = properties.get(name)
            if name in self.excluded_fields or (prop is not None and prop.formula):
                continue
            if prop is not None and prop.relationship == Relationship.MANY_TO_MANY:
                many_to_many[name] = _as_id_list(value)
            else:
                new_record[name] = value

        logger.debug(
            "Cloning %s '%s': fields=%s many_to_many=%s",
            object_name,
            record_id,
            sorted(new_record),
            sorted(many_to_many),
        )
        new_id = await objects.insert_data(
            object_name, new_record, many_to_many=many_to_many or None
        )
        logger.info("Cloned %s '%s' -> '%s'", object_name, record_id, new_id)
        return new_id


CloneStrategy = DelegatedClone | DefaultClone


# ── Service ──────────────────────────────────────────────────────────


class CloneService:
    """Application service for record cloning.

    Depends on the object-persistence and event-dispatch ports (DI).
    Holds no state between calls.
    """

    def __init__(self, object_service: ObjectService, event_dispatcher: EventDispatcher):
        self._object_service = object_service
        self._event_dispatcher = event_dispatcher

    async def clone_record(
        self, object_name: str, record_id: Any, data: dict[str, Any] | None = None
    ) -> Any:
        """Clone a record and return the new record id (or the handler's result).

        Raises:
            ObjectNotCloneableError: The object cannot be cloned.
            RecordNotFoundError: The source record does not exist (default path).
        """
        if not self.is_cloneable(object_name):
            raise ObjectNotCloneableError(object_name)

        strategy = self._resolve_strategy(object_name)
        return await strategy.clone(object_name, record_id, dict(data or {}))

    def is_cloneable(self, object_name: str) -> bool:
        declared = self._object_service.get_object_attribute(object_name, "cloneable", None)
        if declared is False:
            return False
        return len(self.list_cloneable_fields(object_name)) > 0

    def list_cloneable_fields(self, object_name: str) -> list[str]:
        """Names of properties copied by a clone, in declaration order."""
        excluded = self._excluded_fields(object_name)
        properties = self._object_service.get_object_properties(object_name)

        fields = [
            name
            for name, prop in properties.items()
            if name not in excluded and self._is_cloneable_property(prop)
        ]
        logger.debug("Cloneable fields for %s: %s", object_name, fields)
        return fields

    def get_clone_handler(self, object_name: str) -> str:
        return self._object_service.get_object_attribute(object_name, "clone_handler", "") or ""

    # ── Internals ────────────────────────────────────────────────────

    def _resolve_strategy(self, object_name: str) -> CloneStrategy:
        handler = self.get_clone_handler(object_name)
        if handler:
            return DelegatedClone(handler, self._event_dispatcher)
        return DefaultClone(
            self._object_service,
            cloneable_fields=tuple(self.list_cloneable_fields(object_name)),
            excluded_fields=frozenset(self._excluded_fields(object_name)),
        )

    def _excluded_fields(self, object_name: str) -> set[str]:
        return {
            self._object_service.get_id_field(object_name),
            self._object_service.get_date_created_field(object_name),
            self._object_service.get_date_modified_field(object_name),
        }

    @staticmethod
    def _is_cloneable_property(prop: PropertyDefinition) -> bool:
        if prop.cloneable is False:
            return False
        if prop.formula:
            return False
        if prop.cloneable is None:
            # Unique and one-to-many properties need an explicit opt-in
            if prop.unique_indexes or prop.relationship == Relationship.ONE_TO_MANY:
                return False
        return True
