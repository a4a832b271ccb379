"""
Pytest fixtures for the explainer tests.

테스트 구성:
- 정상 케이스, 검증 실패 케이스, 원격 오류 케이스 분리
- 네트워크 호출 없음: provider는 항상 mock
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from src.app.providers.base import ExplanationResult

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """빈 프롬프트 디렉터리 (내장 기본 프롬프트 사용)."""
    path = tmp_path / "prompts"
    path.mkdir()
    return path


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def test_config() -> dict:
    """테스트용 설정."""
    return {
        "ai": {
            "explain": {
                "model": "gemini-1.5-flash",
                "api_key": "test-api-key",
                "prompt_file": "explain_code.txt",
            },
        },
    }


# =============================================================================
# Provider Fixtures
# =============================================================================

@pytest.fixture
def make_provider() -> Callable[..., MagicMock]:
    """
    LLMProvider mock factory.

    MagicMock의 자동 속성 생성으로 인한 버그 방지:
    model, api_key를 명시적으로 설정한다.
    """

    def _make(
        text: str = "This function adds two numbers.",
        api_key: str | None = "test-api-key",
        model: str = "gemini-1.5-flash",
        side_effect: Any = None,
    ) -> MagicMock:
        provider = MagicMock()
        provider.model = model
        provider.api_key = api_key
        provider.explain = AsyncMock(
            return_value=ExplanationResult(
                success=True,
                text=text,
                model_requested=model,
                model_used=model,
                prompt_hash="sha256:0123456789abcdef",
            ),
            side_effect=side_effect,
        )
        return provider

    return _make


@pytest.fixture
def sample_code() -> str:
    """설명 요청용 샘플 코드."""
    return "def add(a, b):\n    return a + b\n"
