"""
Error definitions for the explainer.

규칙:
- 조용한 실패 금지 → 사용자에게 보이는 메시지로 명시적 실패
- 검증 오류(빈 입력/키 미설정)는 네트워크 호출 전에 처리
- 원격 호출 오류는 메시지 부분 문자열로 분류 (순서 고정)
"""

from typing import Any


class ExplainError(Exception):
    """
    설명 요청 처리 중 발생하는 에러.

    controller 밖으로 새어 나가지 않는다:
    submit()은 항상 session 상태로 결과를 남긴다.

    Usage:
        raise ExplainError("EMPTY_INPUT", message=EMPTY_INPUT_MESSAGE)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수. 새 코드 추가 시 USER_MESSAGES에도 메시지 추가."""

    # === Validation (네트워크 호출 없음) ===
    EMPTY_INPUT = "EMPTY_INPUT"
    API_KEY_MISSING = "API_KEY_MISSING"

    # === Remote call ===
    API_KEY_INVALID = "API_KEY_INVALID"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    BILLING_ISSUE = "BILLING_ISSUE"
    EXPLAIN_FAILED = "EXPLAIN_FAILED"

    # === Provider setup ===
    GEMINI_NOT_INSTALLED = "GEMINI_NOT_INSTALLED"


# =============================================================================
# User-facing Messages
# =============================================================================

EMPTY_INPUT_MESSAGE = "Please paste some code to explain"
API_KEY_MISSING_MESSAGE = "API key not configured. Please contact the developer."
GENERIC_FAILURE_MESSAGE = "Failed to explain code. Please try again."

USER_MESSAGES: dict[str, str] = {
    ErrorCodes.EMPTY_INPUT: EMPTY_INPUT_MESSAGE,
    ErrorCodes.API_KEY_MISSING: API_KEY_MISSING_MESSAGE,
    ErrorCodes.API_KEY_INVALID: "Invalid API key. Please check your Gemini API key.",
    ErrorCodes.PERMISSION_DENIED: (
        "Permission denied. Please check your API key permissions."
    ),
    ErrorCodes.QUOTA_EXCEEDED: "API quota exceeded. Please check your usage limits.",
    ErrorCodes.BILLING_ISSUE: (
        "Billing issue. Please check your Google Cloud billing setup."
    ),
}

# 원격 오류 분류표: (메시지 부분 문자열, 에러 코드)
# 위에서부터 처음 일치하는 항목 사용. 대소문자 구분.
REMOTE_ERROR_MARKERS: tuple[tuple[str, str], ...] = (
    ("API_KEY_INVALID", ErrorCodes.API_KEY_INVALID),
    ("PERMISSION_DENIED", ErrorCodes.PERMISSION_DENIED),
    ("QUOTA_EXCEEDED", ErrorCodes.QUOTA_EXCEEDED),
    ("billing", ErrorCodes.BILLING_ISSUE),
)


def classify_error(error: BaseException) -> tuple[str, str]:
    """
    원격 호출 예외 → (에러 코드, 사용자 메시지).

    Args:
        error: provider 호출에서 발생한 예외

    Returns:
        (code, message). 분류되지 않으면 EXPLAIN_FAILED +
        "Error: <원문 메시지>" (원문이 비면 기본 안내 문구)
    """
    raw_message = str(error)

    for marker, code in REMOTE_ERROR_MARKERS:
        if marker in raw_message:
            return code, USER_MESSAGES[code]

    return ErrorCodes.EXPLAIN_FAILED, f"Error: {raw_message or GENERIC_FAILURE_MESSAGE}"
