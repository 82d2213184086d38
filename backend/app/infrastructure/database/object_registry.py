"""Object registry — builds object metadata from SQLAlchemy declarative models.

Each mapped model is one *object*, named after its table. Object-level
attributes come from the model's ``__object_attributes__`` dict; property
attributes (``cloneable``, ``formula``, ``unique_indexes``) come from the
``info`` dict of the column, ``column_property`` or ``relationship``.
"""

import logging
from collections import defaultdict
from typing import Any

from sqlalchemy import Column, Table, UniqueConstraint, inspect
from sqlalchemy.orm import DeclarativeBase, Mapper, RelationshipDirection, RelationshipProperty

from app.domain.entities import (
    ObjectDefinition,
    PropertyDefinition,
    Relationship,
    parse_tristate,
)
from app.domain.exceptions import ObjectNotFoundError

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    RelationshipDirection.ONETOMANY: Relationship.ONE_TO_MANY,
    RelationshipDirection.MANYTOMANY: Relationship.MANY_TO_MANY,
}


class ObjectRegistry:
    """In-memory lookup of object definitions and their mapped tables."""

    def __init__(self) -> None:
        self._objects: dict[str, ObjectDefinition] = {}
        self._mappers: dict[str, Mapper] = {}

    @classmethod
    def from_base(cls, base: type[DeclarativeBase]) -> "ObjectRegistry":
        """Register every model mapped on a declarative base."""
        registry = cls()
        for mapper in base.registry.mappers:
            registry.register_model(mapper.class_)
        return registry

    # ── Registration ─────────────────────────────────────────────────

    def register_model(self, model: type) -> ObjectDefinition:
        mapper: Mapper = inspect(model)
        table: Table = mapper.local_table
        attributes: dict[str, Any] = dict(getattr(model, "__object_attributes__", {}))

        definition = ObjectDefinition(
            name=attributes.pop("name", table.name),
            table_name=table.name,
            properties=self._build_properties(mapper, table),
            id_field=attributes.pop("id_field", _default_id_field(mapper)),
            date_created_field=attributes.pop("date_created_field", "datecreated"),
            date_modified_field=attributes.pop("date_modified_field", "datemodified"),
            cloneable=parse_tristate(attributes.pop("cloneable", None)),
            clone_handler=attributes.pop("clone_handler", "") or "",
            versioned=parse_tristate(attributes.pop("versioned", None)) is not False,
            no_label=parse_tristate(attributes.pop("no_label", None)) is True,
            attributes=attributes,
        )
        self._objects[definition.name] = definition
        self._mappers[definition.name] = mapper
        logger.debug(
            "Registered object '%s' (%d properties)",
            definition.name,
            len(definition.properties),
        )
        return definition

    # ── Lookup ───────────────────────────────────────────────────────

    def __contains__(self, object_name: str) -> bool:
        return object_name in self._objects

    def names(self) -> list[str]:
        return sorted(self._objects)

    def get(self, object_name: str) -> ObjectDefinition:
        try:
            return self._objects[object_name]
        except KeyError:
            raise ObjectNotFoundError(object_name) from None

    def get_table(self, object_name: str) -> Table:
        self.get(object_name)
        return self._mappers[object_name].local_table

    def get_relationship(self, object_name: str, property_name: str) -> RelationshipProperty:
        self.get(object_name)
        return self._mappers[object_name].relationships[property_name]

    # ── Introspection ────────────────────────────────────────────────

    def _build_properties(self, mapper: Mapper, table: Table) -> list[PropertyDefinition]:
        unique_map = _unique_index_names(table)
        properties: list[PropertyDefinition] = []

        for column in table.columns:
            properties.append(_column_property(column, unique_map.get(column.key, [])))

        for prop in mapper.column_attrs:
            expression = prop.expression
            if isinstance(expression, Column) and expression.table is table:
                continue
            properties.append(
                PropertyDefinition(
                    name=prop.key,
                    type="formula",
                    cloneable=parse_tristate(prop.info.get("cloneable")),
                    formula=prop.info.get("formula") or str(expression),
                )
            )

        for rel in mapper.relationships:
            relationship = _DIRECTIONS.get(rel.direction)
            if relationship is None:
                # many-to-one is represented by its foreign key column
                continue
            properties.append(
                PropertyDefinition(
                    name=rel.key,
                    type="relationship",
                    cloneable=parse_tristate(rel.info.get("cloneable")),
                    unique_indexes=rel.info.get("unique_indexes", ""),
                    relationship=relationship,
                    related_to=rel.mapper.local_table.name,
                )
            )
        return properties


def _default_id_field(mapper: Mapper) -> str:
    primary_key = mapper.primary_key
    if len(primary_key) == 1:
        return primary_key[0].key
    return "id"


def _unique_index_names(table: Table) -> dict[str, list[str]]:
    """Map column key → names of the unique constraints/indexes covering it."""
    names: dict[str, list[str]] = defaultdict(list)

    def _label(name: Any, column: Column) -> str:
        return name if isinstance(name, str) and name else f"ux_{table.name}_{column.key}"

    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            for column in constraint.columns:
                names[column.key].append(_label(constraint.name, column))

    for index in table.indexes:
        if index.unique:
            for column in index.columns:
                names[column.key].append(_label(index.name, column))

    for column in table.columns:
        if column.unique and not names.get(column.key):
            names[column.key].append(_label(None, column))
    return names


def _column_property(column: Column, unique_indexes: list[str]) -> PropertyDefinition:
    info = column.info
    relationship = Relationship.NONE
    related_to = ""
    foreign_keys = list(column.foreign_keys)
    if foreign_keys:
        relationship = Relationship.MANY_TO_ONE
        related_to = foreign_keys[0].target_fullname.rsplit(".", 1)[0]

    return PropertyDefinition(
        name=column.key,
        type=_python_type_name(column),
        db_type=column.type.__class__.__name__.lower(),
        required=not column.nullable,
        cloneable=parse_tristate(info.get("cloneable")),
        formula=info.get("formula", ""),
        unique_indexes=info.get("unique_indexes", ",".join(unique_indexes)),
        relationship=relationship,
        related_to=related_to,
    )


def _python_type_name(column: Column) -> str:
    try:
        return column.type.python_type.__name__
    except NotImplementedError:
        return "string"
