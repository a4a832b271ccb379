"""
Google Gemini Provider.

호출 정책:
- 1회 호출, 재시도/fallback 없음
- SDK 예외는 감싸지 않고 그대로 전파 → 호출자가 메시지로 분류
  (API_KEY_INVALID, PERMISSION_DENIED, QUOTA_EXCEEDED, billing)
"""

import logging
import os
from datetime import UTC, datetime
from typing import Any

from src.domain.constants import DEFAULT_GEMINI_MODEL, GOOGLE_API_KEY_ENV
from src.domain.errors import ErrorCodes

from .base import ExplanationResult, LLMProvider, ProviderError, compute_hash

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """
    Gemini Provider.

    Usage:
        provider = GeminiProvider(model="gemini-1.5-flash")
        result = await provider.explain(prompt)
    """

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_MODEL,
        api_key: str | None = None,
    ):
        """
        Args:
            model: 모델 ID (config에서 주입)
            api_key: API 키 (환경변수 GOOGLE_API_KEY 사용 가능)
        """
        self.model = model
        self.api_key = api_key or os.environ.get(GOOGLE_API_KEY_ENV)
        self._client: Any = None

    def _get_client(self) -> Any:
        """Gemini 클라이언트 (lazy init)."""
        if self._client is None:
            try:
                import google.generativeai as genai
                genai.configure(api_key=self.api_key)
                self._client = genai
            except ImportError as e:
                raise ProviderError(
                    ErrorCodes.GEMINI_NOT_INSTALLED,
                    "google-generativeai package not installed. "
                    "Run: pip install google-generativeai",
                ) from e
        return self._client

    async def explain(self, prompt: str) -> ExplanationResult:
        """프롬프트를 Gemini에 1회 전송하고 설명 텍스트를 반환."""
        prompt_hash = compute_hash(prompt)
        logger.info(f"Sending explain request to {self.model} ({prompt_hash})")

        try:
            text = await self._call_api(self.model, prompt)
        except Exception as e:
            logger.error(f"Gemini call failed ({self.model}): {e}")
            raise

        logger.info(f"Response received from {self.model}: {len(text)} chars")

        return ExplanationResult(
            success=True,
            text=text,
            model_requested=self.model,
            model_used=self.model,
            prompt_hash=prompt_hash,
            processed_at=datetime.now(UTC).isoformat(),
        )

    async def complete(self, prompt: str, **kwargs: Any) -> str:
        """일반 완성 API."""
        model = kwargs.get("model", self.model)
        return await self._call_api(model, prompt)

    async def _call_api(self, model: str, prompt: str) -> str:
        """실제 Gemini API 호출."""
        genai = self._get_client()

        model_instance = genai.GenerativeModel(model)
        response = await model_instance.generate_content_async(prompt)

        text: str = response.text or ""
        return text


def build_provider(config: dict) -> GeminiProvider:
    """config(ai.explain) 기반 Gemini provider 생성 (키 없으면 GOOGLE_API_KEY)."""
    explain_config = config.get("ai", {}).get("explain", {})
    return GeminiProvider(
        model=explain_config.get("model", DEFAULT_GEMINI_MODEL),
        api_key=explain_config.get("api_key") or None,
    )
