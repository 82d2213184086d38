from .clone_service import CloneService, DefaultClone, DelegatedClone

__all__ = [
    "CloneService",
    "DefaultClone",
    "DelegatedClone",
]
