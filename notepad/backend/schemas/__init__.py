# Pydantic schemas package
from notepad.backend.schemas.base import (
    CamelModel,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)

__all__ = [
    "CamelModel",
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
]
