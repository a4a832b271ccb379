"""
Domain Constants: 설명기 전역 상수.

모델 기본값, 프롬프트 파일명, 자격증명 관련 값들.
"""

# =============================================================================
# Model (config가 SSOT, 여기 값은 config 누락 시 기본값)
# =============================================================================

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

# =============================================================================
# Credentials
# =============================================================================
# 우선순위: 생성자 인자 > default.yaml ai.explain.api_key > GOOGLE_API_KEY

GOOGLE_API_KEY_ENV = "GOOGLE_API_KEY"

# 배포 템플릿에 들어 있는 자리표시자 → 미설정으로 취급
API_KEY_PLACEHOLDER = "YOUR_GEMINI_API_KEY_HERE"

# =============================================================================
# Prompt
# =============================================================================

PROMPTS_DIRNAME = "prompts"
EXPLAIN_PROMPT_FILENAME = "explain_code.txt"
EXPLAIN_PROMPT_PLACEHOLDER = "{code}"
