"""Domain layer: errors and schemas."""

from .errors import ErrorCodes, ExplainError, classify_error
from .schemas import DisplayState, ExplainSession

__all__ = [
    "ErrorCodes",
    "ExplainError",
    "classify_error",
    "DisplayState",
    "ExplainSession",
]
