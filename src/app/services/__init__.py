"""
Application Services.

역할:
- explain: 코드 붙여넣기 → Gemini 설명 (세션 상태 controller)
"""

from .explain import ExplainService, is_credential_configured

__all__ = [
    "ExplainService",
    "is_credential_configured",
]
