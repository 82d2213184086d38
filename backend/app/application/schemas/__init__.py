from .clone import (
    CloneHandlerResponse,
    CloneInfoResponse,
    CloneRecordRequest,
    CloneRecordResponse,
)

__all__ = [
    "CloneHandlerResponse",
    "CloneInfoResponse",
    "CloneRecordRequest",
    "CloneRecordResponse",
]
