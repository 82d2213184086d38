"""Domain entities describing declared objects and their properties.

An *object* is a persisted record type (one table). Its metadata drives
generic operations such as record cloning without those operations knowing
anything about the concrete ORM model.
"""

from dataclasses import dataclass, field
from typing import Any

_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0"})

# ObjectDefinition fields readable through get_attribute
_KNOWN_ATTRIBUTES = frozenset({
    "id_field",
    "date_created_field",
    "date_modified_field",
    "cloneable",
    "clone_handler",
    "versioned",
    "no_label",
})


def parse_tristate(value: Any) -> bool | None:
    """Normalise a declared boolean attribute.

    Returns True/False when the value is an explicit boolean (or a boolean-like
    string), None when the attribute is absent or not boolean at all.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


class Relationship:
    """Relationship kinds a property can carry."""

    NONE = "none"
    MANY_TO_ONE = "many-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


@dataclass
class PropertyDefinition:
    """A single declared property (column, formula or relationship) of an object."""

    name: str
    type: str = "string"
    db_type: str = ""
    required: bool = False
    cloneable: bool | None = None  # None = not declared
    formula: str = ""
    unique_indexes: str = ""
    relationship: str = Relationship.NONE
    related_to: str = ""

    @property
    def is_column(self) -> bool:
        """True when the property is stored in the object's own table."""
        return not self.formula and self.relationship in (
            Relationship.NONE,
            Relationship.MANY_TO_ONE,
        )


@dataclass
class ObjectDefinition:
    """Metadata for a declared object, with properties in declaration order."""

    name: str
    table_name: str
    properties: list[PropertyDefinition] = field(default_factory=list)
    id_field: str = "id"
    date_created_field: str = "datecreated"
    date_modified_field: str = "datemodified"
    cloneable: bool | None = None
    clone_handler: str = ""
    versioned: bool = True
    no_label: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)

    def get_property(self, name: str) -> PropertyDefinition | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def property_map(self) -> dict[str, PropertyDefinition]:
        """Properties keyed by name, preserving declaration order."""
        return {prop.name: prop for prop in self.properties}

    def get_attribute(self, name: str, default: Any = "") -> Any:
        """Look up an object-level attribute.

        Known attributes are read from the typed fields; anything else falls
        back to the free-form ``attributes`` dict.
        """
        if name in _KNOWN_ATTRIBUTES:
            value = getattr(self, name)
            return default if value is None else value
        return self.attributes.get(name, default)
