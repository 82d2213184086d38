from .object_metadata import (
    ObjectDefinition,
    PropertyDefinition,
    Relationship,
    parse_tristate,
)

__all__ = [
    "ObjectDefinition",
    "PropertyDefinition",
    "Relationship",
    "parse_tristate",
]
