"""
ID 생성: session_id, request_id

규칙:
- session_id는 페이지 로드마다 새로 발급 (새로고침 = 새 세션)
- request_id는 submit 1회마다 발급 (로그 추적용)
"""

import uuid
from datetime import UTC, datetime


def generate_session_id() -> str:
    """
    Session ID 생성.

    고유성 보장: UUID v4

    Returns:
        session_id 문자열 (UUID 문자열)
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """
    Request ID 생성.

    포맷: REQ-{timestamp}-{uuid[:8]}

    Returns:
        request_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"REQ-{timestamp}-{unique}"


def is_valid_session_id(value: str | None) -> bool:
    """세션 ID 형식 검증 (UUID 문자열만 허용)."""
    if not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
