"""
Explain Service: 붙여넣은 코드 → 자연어 설명.

요청/응답 흐름:
1. 검증 (빈 입력, API 키 미설정) → 네트워크 호출 없이 에러 표시
2. busy 설정 + 이전 결과/에러 초기화
3. 고정 프롬프트 템플릿에 코드 삽입 → provider 1회 호출
4. 성공: result_text = 응답 원문 / 실패: 메시지 분류 후 error_message
5. busy는 성공/실패와 무관하게 항상 해제

재시도/타임아웃/취소 없음.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from src.app.providers.base import ExplanationResult, LLMProvider
from src.app.providers.gemini import build_provider
from src.core.ids import generate_request_id
from src.domain.constants import (
    API_KEY_PLACEHOLDER,
    EXPLAIN_PROMPT_FILENAME,
    EXPLAIN_PROMPT_PLACEHOLDER,
)
from src.domain.errors import USER_MESSAGES, ErrorCodes, ExplainError, classify_error
from src.domain.schemas import ExplainSession

logger = logging.getLogger(__name__)


def is_credential_configured(api_key: str | None) -> bool:
    """API 키 설정 여부 (빈 값/공백/자리표시자는 미설정)."""
    if api_key is None:
        return False
    key = api_key.strip()
    return bool(key) and key != API_KEY_PLACEHOLDER


class ExplainService:
    """
    설명 요청 controller.

    세션 상태 4개 필드(input_text, result_text, is_busy, error_message)를
    소유하고 submit/clear로만 변경한다.
    """

    def __init__(
        self,
        config: dict,
        prompts_dir: Path,
        provider: LLMProvider | None = None,
        session: ExplainSession | None = None,
    ):
        """
        Args:
            config: 설정 (ai.explain 포함)
            prompts_dir: 프롬프트 템플릿 디렉터리
            provider: LLM Provider (None이면 config 기반 생성)
            session: 기존 세션 상태 (None이면 빈 상태)
        """
        self.config = config
        self.prompts_dir = prompts_dir
        self.session = session or ExplainSession()
        self.last_result: ExplanationResult | None = None
        self.last_error_code: str | None = None
        self._prompt_template: str | None = None
        # submit/clear마다 증가. 응답 도착 시 불일치면 결과 폐기
        self._generation = 0

        explain_config = config.get("ai", {}).get("explain", {})
        self.prompt_filename = explain_config.get(
            "prompt_file", EXPLAIN_PROMPT_FILENAME
        )

        self.provider = provider if provider is not None else build_provider(config)

    @property
    def prompt_template(self) -> str:
        """프롬프트 템플릿 로드 (lazy)."""
        if self._prompt_template is None:
            prompt_path = self.prompts_dir / self.prompt_filename
            if prompt_path.exists():
                self._prompt_template = prompt_path.read_text(encoding="utf-8")
            else:
                self._prompt_template = self._default_prompt()
        return self._prompt_template

    def build_prompt(self, code: str) -> str:
        """템플릿의 {code} 자리에 입력 코드를 그대로 삽입."""
        return self.prompt_template.replace(EXPLAIN_PROMPT_PLACEHOLDER, code)

    async def submit(self, input_text: str | None = None) -> ExplainSession:
        """
        설명 요청 1회 수행.

        Args:
            input_text: 새 입력 (None이면 현재 session.input_text 사용)

        Returns:
            갱신된 ExplainSession (예외를 밖으로 던지지 않음)
        """
        # 이미 진행 중이면 두 번째 호출 없이 현재 상태 유지 (입력도 변경 안 함)
        if self.session.is_busy:
            logger.warning("Submit ignored: explain request already in flight")
            return self.session

        if input_text is not None:
            self.session.input_text = input_text

        try:
            self._validate()
        except ExplainError as e:
            logger.info(f"Submit rejected before network call: {e.code}")
            self.last_error_code = e.code
            self.session.result_text = ""
            self.session.error_message = USER_MESSAGES[e.code]
            return self.session

        request_id = generate_request_id()
        self._generation += 1
        generation = self._generation

        with self._busy(generation):
            self.session.result_text = ""
            self.session.error_message = ""
            self.last_error_code = None

            prompt = self.build_prompt(self.session.input_text)
            logger.info(
                f"[{request_id}] Explaining {len(self.session.input_text)} chars "
                f"with {self.provider.model}"
            )

            try:
                result = await self.provider.explain(prompt)
            except Exception as e:
                code, message = classify_error(e)
                logger.error(f"[{request_id}] Explain failed ({code}): {e}", exc_info=True)
                if self._is_stale(generation, request_id):
                    return self.session
                self.last_result = None
                self.last_error_code = code
                self.session.error_message = message
            else:
                if self._is_stale(generation, request_id):
                    return self.session
                self.last_result = result
                self.session.result_text = result.text or ""
                logger.info(f"[{request_id}] Explain succeeded")

        return self.session

    def clear(self) -> ExplainSession:
        """
        세션 상태 전체 초기화.

        진행 중인 요청이 있어도 즉시 초기화하고, 그 요청의 결과는 버린다.
        """
        self._generation += 1
        self.session.reset()
        self.last_result = None
        self.last_error_code = None
        return self.session

    def _is_stale(self, generation: int, request_id: str) -> bool:
        """요청 이후 clear 또는 새 submit이 있었으면 True."""
        if generation == self._generation:
            return False
        logger.info(f"[{request_id}] Discarding result: session changed while in flight")
        return True

    def _validate(self) -> None:
        """네트워크 호출 전 검증. 실패 시 ExplainError."""
        if not self.session.input_text.strip():
            raise ExplainError(ErrorCodes.EMPTY_INPUT)

        if not is_credential_configured(self.provider.api_key):
            raise ExplainError(ErrorCodes.API_KEY_MISSING, model=self.provider.model)

    @contextmanager
    def _busy(self, generation: int) -> Generator[None, None, None]:
        """
        busy 플래그 획득/해제.

        사용법:
            with self._busy(generation):
                await self.provider.explain(prompt)

        정상/예외/취소 모두 해제. 단, 그 사이 clear 후 시작된 다른 요청의
        busy는 건드리지 않는다 (generation 불일치).
        """
        self.session.is_busy = True
        try:
            yield
        finally:
            if generation == self._generation:
                self.session.is_busy = False


    def _default_prompt(self) -> str:
        """기본 설명 프롬프트."""
        return """Please explain the following code in detail. Break it down line by line if it's complex, explain what it does, how it works, and any important concepts or patterns used:

```
{code}
```

Please provide:
1. A brief overview of what the code does
2. Line-by-line explanation for complex parts
3. Key concepts or patterns used
4. Any potential improvements or considerations"""
