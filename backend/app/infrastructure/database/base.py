"""SQLAlchemy ORM base and model registry."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    Models may set a plain ``__object_attributes__`` dict (``cloneable``,
    ``clone_handler``, ``versioned``, ``no_label``, …) which the
    ObjectRegistry reads as object-level metadata.
    """

    pass
