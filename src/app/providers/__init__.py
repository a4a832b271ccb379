"""
AI Provider Abstraction.

모델 교체 가능하게 설계.
모델명은 config만 SSOT.
"""

from .base import ExplanationResult, LLMProvider, ProviderError
from .gemini import GeminiProvider, build_provider

__all__ = [
    "LLMProvider",
    "ExplanationResult",
    "ProviderError",
    "GeminiProvider",
    "build_provider",
]
