"""
test_ids.py - ID 생성 테스트

DoD:
- session_id 고유성 + UUID 형식
- request_id 고유성 + 포맷
- session_id 형식 검증
"""

import re
import uuid
from datetime import UTC, datetime

from src.core.ids import (
    generate_request_id,
    generate_session_id,
    is_valid_session_id,
)

# =============================================================================
# generate_session_id 테스트
# =============================================================================


class TestGenerateSessionId:
    """generate_session_id 함수 테스트."""

    def test_is_uuid_string(self):
        """UUID 문자열."""
        session_id = generate_session_id()

        assert str(uuid.UUID(session_id)) == session_id

    def test_uniqueness(self):
        """매 호출 다른 값."""
        ids = {generate_session_id() for _ in range(100)}

        assert len(ids) == 100


# =============================================================================
# generate_request_id 테스트
# =============================================================================


class TestGenerateRequestId:
    """generate_request_id 함수 테스트."""

    def test_format(self):
        """REQ-{timestamp}-{hex8}."""
        request_id = generate_request_id()

        assert re.fullmatch(r"REQ-\d{14}-[0-9a-f]{8}", request_id)

    def test_timestamp_is_current(self):
        """timestamp는 현재 UTC 날짜."""
        request_id = generate_request_id()
        today = datetime.now(UTC).strftime("%Y%m%d")

        assert request_id[4:12] == today

    def test_uniqueness(self):
        """매 호출 다른 값."""
        ids = {generate_request_id() for _ in range(100)}

        assert len(ids) == 100


# =============================================================================
# is_valid_session_id 테스트
# =============================================================================


class TestIsValidSessionId:
    """is_valid_session_id 함수 테스트."""

    def test_generated_id_is_valid(self):
        """발급된 ID는 유효."""
        assert is_valid_session_id(generate_session_id()) is True

    def test_none_and_empty_invalid(self):
        """None/빈 문자열."""
        assert is_valid_session_id(None) is False
        assert is_valid_session_id("") is False

    def test_garbage_invalid(self):
        """UUID가 아닌 문자열."""
        assert is_valid_session_id("not-a-session") is False
        assert is_valid_session_id("<script>") is False
