"""
App layer: UI 서버 (FastAPI + HTMX).

역할:
- 코드 입력 폼, 결과 패널, 세션 관리
- Gemini 호출 (providers), 요청/응답 controller (services)

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (HTMX)
- prompts/ (루트) → 프롬프트 템플릿 텍스트
"""
