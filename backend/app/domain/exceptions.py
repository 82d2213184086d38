"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ObjectNotFoundError(EntityNotFoundError):
    """Raised when no object definition is registered under a name."""

    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__("Object", object_name)


class RecordNotFoundError(EntityNotFoundError):
    """Raised when a record of a known object does not exist."""

    def __init__(self, object_name: str, record_id: int | str):
        self.object_name = object_name
        self.record_id = record_id
        super().__init__(object_name, record_id)


class ObjectNotCloneableError(Exception):
    """Raised when cloning is requested for an object that cannot be cloned.

    Either the object is explicitly declared ``cloneable=False`` or none of
    its properties are eligible for copying.
    """

    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__(f"Object '{object_name}' is not cloneable")


class EventHandlerNotFoundError(Exception):
    """Raised when the event dispatcher has no runnable handler for an event."""

    def __init__(self, event: str):
        self.event = event
        super().__init__(f"No handler registered for event '{event}'")
