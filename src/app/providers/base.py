"""
AI Provider 추상 인터페이스.

- Provider 추상화로 모델 교체 가능
- model_requested + model_used 기록
- prompt_hash 기록 (프롬프트 원문은 결과에 남기지 않음)
"""

import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


def compute_hash(content: str) -> str:
    """SHA-256 해시 계산."""
    return f"sha256:{hashlib.sha256(content.encode()).hexdigest()[:16]}"

# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class ExplanationResult:
    """
    코드 설명 결과.

    필수 메타데이터:
    - model_requested: config에 설정된 모델
    - model_used: 실제 호출된 모델
    - prompt_hash: 프롬프트 해시 (검색/중복 제거용)
    """
    success: bool = True
    text: str | None = None

    # 모델 추적
    model_requested: str | None = None
    model_used: str | None = None

    prompt_hash: str | None = None
    processed_at: str | None = None

    error_code: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "success": self.success,
            "text": self.text,
            "model_requested": self.model_requested,
            "model_used": self.model_used,
            "prompt_hash": self.prompt_hash,
            "processed_at": self.processed_at,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }
        # None 값 제거
        return {k: v for k, v in result.items() if v is not None}


# =============================================================================
# Provider Exceptions
# =============================================================================

class ProviderError(Exception):
    """Provider 관련 에러."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")


# =============================================================================
# Abstract Provider
# =============================================================================

class LLMProvider(ABC):
    """
    LLM Provider 추상 인터페이스.

    역할: 프롬프트 → 자연어 설명. 재시도/타임아웃 없음 (1회 호출).
    """

    model: str
    api_key: str | None

    @abstractmethod
    async def explain(self, prompt: str) -> ExplanationResult:
        """
        코드 설명 생성.

        Args:
            prompt: 렌더링된 설명 요청 프롬프트

        Returns:
            ExplanationResult (성공 시에만 반환)

        Raises:
            SDK 예외를 그대로 전파 (분류는 호출자 책임)
        """
        ...

    @abstractmethod
    async def complete(self, prompt: str, **kwargs: Any) -> str:
        """
        일반 완성 API.

        Args:
            prompt: 프롬프트
            **kwargs: 추가 옵션

        Returns:
            응답 텍스트
        """
        ...
