"""
Explain Routes: 코드 설명 (메인 기능).

- GET / → 설명 화면 (HTMX)
- POST /api/explain → 설명 요청, 결과 패널 HTML 조각 반환
- POST /api/explain/clear → 세션 초기화
- GET /api/explain/state → 세션 상태 JSON

세션은 메모리에만 존재한다. 페이지 로드마다 새 session_id 발급.
"""

import html as html_escape_module
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.app.services.explain import ExplainService
from src.core.ids import generate_session_id, is_valid_session_id
from src.domain.constants import DEFAULT_GEMINI_MODEL
from src.domain.schemas import DisplayState, ExplainSession

logger = logging.getLogger(__name__)

# Jinja2 템플릿 설정
_templates_dir = Path(__file__).parent.parent / "templates"
jinja_templates = (
    Jinja2Templates(directory=_templates_dir) if _templates_dir.exists() else None
)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints

# Session storage (in-memory only, LRU)
_sessions: OrderedDict[str, ExplainService] = OrderedDict()
MAX_SESSIONS = 1000

EMPTY_STATE_MESSAGE = 'Paste your code and click "Explain Code" to get started'
BUSY_STATE_MESSAGE = "Analyzing your code..."


# =============================================================================
# Session Management
# =============================================================================


def get_or_create_service(request: Request, session_id: str) -> ExplainService:
    """
    세션 ID에 대응하는 ExplainService 반환.

    provider는 app.state에서 공유 (없으면 서비스가 config로 생성).
    MAX_SESSIONS를 넘으면 가장 오래 쓰지 않은 세션부터 제거.
    """
    service = _sessions.get(session_id)
    if service is not None:
        _sessions.move_to_end(session_id)
        return service

    service = ExplainService(
        config=request.app.state.config,
        prompts_dir=request.app.state.prompts_dir,
        provider=getattr(request.app.state, "provider", None),
    )
    _sessions[session_id] = service

    while len(_sessions) > MAX_SESSIONS:
        evicted_id, _ = _sessions.popitem(last=False)
        logger.info(f"Session evicted (limit {MAX_SESSIONS}): {evicted_id}")
    return service


def _resolve_session_id(session_id: str | None) -> str:
    """폼에서 온 session_id 검증 (없거나 형식 불일치면 새로 발급)."""
    if is_valid_session_id(session_id):
        return str(session_id)
    return generate_session_id()


# =============================================================================
# HTML Generation Helpers
# =============================================================================


def escape_html(text: str) -> str:
    """HTML 이스케이프."""
    return html_escape_module.escape(text)


def build_result_panel_html(session: ExplainSession) -> str:
    """
    결과 패널 HTML 생성.

    표시 상태(EMPTY/BUSY/RESULT/ERROR)에 따라 정확히 하나만 렌더.
    """
    state = session.display_state

    if state == DisplayState.ERROR:
        body = (
            '<div class="error-item">'
            '<span class="error-icon">⚠️</span> '
            f'<span class="error-text">{escape_html(session.error_message)}</span>'
            "</div>"
        )
    elif state == DisplayState.BUSY:
        body = (
            '<div class="loading">'
            '<div class="spinner"></div>'
            f"<p>{BUSY_STATE_MESSAGE}</p>"
            "</div>"
        )
    elif state == DisplayState.RESULT:
        body = f'<pre class="explanation">{escape_html(session.result_text)}</pre>'
    else:
        body = f'<div class="placeholder">{escape_html(EMPTY_STATE_MESSAGE)}</div>'

    return (
        f'<div id="result-panel" class="result-panel state-{state.value}">'
        f"{body}</div>"
    )


def build_code_input_html(value: str = "", *, oob: bool = False) -> str:
    """코드 입력 textarea HTML 생성 (clear 시 OOB swap으로 비움)."""
    oob_attr = ' hx-swap-oob="true"' if oob else ""
    return (
        f'<textarea id="code-input" name="content" class="code-input"'
        f' placeholder="Paste your code here..." spellcheck="false"{oob_attr}>'
        f"{escape_html(value)}</textarea>"
    )


def build_oob_session_input(session_id: str) -> str:
    """HTMX OOB session_id hidden input 생성."""
    return f'''<input type="hidden" name="session_id" id="session-id"
           value="{escape_html(session_id)}" hx-swap-oob="true">'''


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("/", response_class=HTMLResponse)
async def explain_page(request: Request) -> HTMLResponse:
    """
    설명 화면.

    Jinja2 템플릿으로 렌더링. 로드마다 새 세션.
    """
    session_id = generate_session_id()
    explain_config = request.app.state.config.get("ai", {}).get("explain", {})
    model = explain_config.get("model", DEFAULT_GEMINI_MODEL)

    if jinja_templates:
        return jinja_templates.TemplateResponse(
            request,
            "index.html",
            {
                "session_id": session_id,
                "model": model,
                "result_panel": build_result_panel_html(ExplainSession()),
                "code_input": build_code_input_html(),
            },
        )

    # Fallback: Jinja2 템플릿이 없는 경우 기본 HTML
    return HTMLResponse(
        content=f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>AI Code Explainer</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
</head>
<body>
    <h1>AI Code Explainer</h1>
    <form hx-post="/api/explain" hx-target="#result-panel" hx-swap="outerHTML">
        {build_code_input_html()}
        <input type="hidden" id="session-id" name="session_id" value="{session_id}">
        <button type="submit">Explain Code</button>
    </form>
    {build_result_panel_html(ExplainSession())}
</body>
</html>
    """
    )


# =============================================================================
# API Routes
# =============================================================================


@api_router.post("")
async def explain_code(
    request: Request,
    content: str = Form(""),  # 빈 textarea는 누락으로 파싱됨 → "" (검증은 서비스에서)
    session_id: str | None = Form(None),
) -> HTMLResponse:
    """
    코드 설명 요청.

    Returns:
        결과 패널 HTML (HTMX swap용) + session_id OOB 업데이트
    """
    session_id = _resolve_session_id(session_id)
    service = get_or_create_service(request, session_id)

    session = await service.submit(content)

    panel_html = build_result_panel_html(session)
    oob_session = build_oob_session_input(session_id)
    return HTMLResponse(content=panel_html + oob_session)


@api_router.post("/clear")
async def clear_session(
    request: Request,
    session_id: str | None = Form(None),
) -> HTMLResponse:
    """
    세션 초기화.

    Returns:
        빈 결과 패널 + 비운 textarea (OOB) + session_id OOB
    """
    session_id = _resolve_session_id(session_id)
    service = _sessions.get(session_id)

    session = service.clear() if service is not None else ExplainSession()

    return HTMLResponse(
        content=(
            build_result_panel_html(session)
            + build_code_input_html(oob=True)
            + build_oob_session_input(session_id)
        )
    )


@api_router.get("/state")
async def get_state(session_id: str) -> dict[str, Any]:
    """세션 상태 (JSON)."""
    service = _sessions.get(session_id)
    if service is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "SESSION_NOT_FOUND", "message": "Session not found"},
        )

    state = service.session.to_dict()
    state["session_id"] = session_id
    state["error_code"] = service.last_error_code
    state["model"] = service.provider.model
    if service.last_result is not None:
        state["last_result"] = service.last_result.to_dict()
    return state
