"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.providers.gemini import build_provider
from src.app.routes import explain
from src.domain.constants import PROMPTS_DIRNAME

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: .env 로드, 설정 로드, provider 생성
    종료 시: 세션 정리 (메모리 전용)
    """
    # Startup
    load_dotenv()
    app.state.config = load_config()
    app.state.prompts_dir = PROJECT_ROOT / PROMPTS_DIRNAME
    app.state.provider = build_provider(app.state.config)
    logger.info(f"Code explainer started (model: {app.state.provider.model})")

    yield

    # Shutdown
    explain._sessions.clear()


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="AI Code Explainer",
    description="붙여넣은 코드 → Gemini 자연어 설명",
    version="0.1.0",
    lifespan=lifespan,
)

# Static files (CSS)
static_dir = Path(__file__).parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


# =============================================================================
# Routes
# =============================================================================

# 페이지 라우트 (HTML)
app.include_router(explain.router, prefix="", tags=["Explain"])

# API 라우트
app.include_router(explain.api_router, prefix="/api/explain", tags=["Explain API"])


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
