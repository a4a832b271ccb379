"""
Data schemas for the explainer.

규칙:
- 세션 상태는 4개 필드만: input_text, result_text, is_busy, error_message
- 화면 표시 상태는 RESULT / ERROR / BUSY / EMPTY 중 정확히 하나
- 영속화 없음 (새로고침 또는 clear 시 초기화)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# =============================================================================
# Display State
# =============================================================================

class DisplayState(str, Enum):
    """
    결과 패널 표시 상태.

    입력 텍스트는 표시 상태 판정에 포함되지 않는다.
    """
    EMPTY = "empty"    # 안내 문구
    BUSY = "busy"      # 로딩 스피너
    RESULT = "result"  # 설명 결과
    ERROR = "error"    # 인라인 에러


# =============================================================================
# Session State
# =============================================================================

@dataclass
class ExplainSession:
    """
    폼 controller의 세션 상태.

    ExplainService만 변경한다.
    """
    input_text: str = ""
    result_text: str = ""
    is_busy: bool = False
    error_message: str = ""

    @property
    def display_state(self) -> DisplayState:
        """현재 표시 상태 (busy > error > result > empty 순)."""
        if self.is_busy:
            return DisplayState.BUSY
        if self.error_message:
            return DisplayState.ERROR
        if self.result_text:
            return DisplayState.RESULT
        return DisplayState.EMPTY

    def reset(self) -> None:
        """4개 필드 모두 초기화."""
        self.input_text = ""
        self.result_text = ""
        self.is_busy = False
        self.error_message = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "input_text": self.input_text,
            "result_text": self.result_text,
            "is_busy": self.is_busy,
            "error_message": self.error_message,
            "display_state": self.display_state.value,
        }
