"""
Optional plugins.

- llm: Action-item analysis with deterministic fallback
"""

from .llm import (
    ClaudeProvider,
    HuggingFaceProvider,
    LLMProvider,
    RegulationAnalyzer,
    analysis_key,
    generate_fallback_analysis,
)

__all__ = [
    "ClaudeProvider",
    "HuggingFaceProvider",
    "LLMProvider",
    "RegulationAnalyzer",
    "analysis_key",
    "generate_fallback_analysis",
]
