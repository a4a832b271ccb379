"""
Core layer: 요청 추적용 ID 발급.
"""

from .ids import generate_request_id, generate_session_id, is_valid_session_id

__all__ = [
    "generate_session_id",
    "generate_request_id",
    "is_valid_session_id",
]
