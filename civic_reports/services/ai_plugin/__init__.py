"""
AI Plug-in Architecture.

Optional suggestions for report authors and staff (title/description
drafts, image description, category, dashboard summary).
Never required for report submission.
"""

from civic_reports.services.ai_plugin.base import AIProvider, AIResponse, REPORT_CATEGORIES
from civic_reports.services.ai_plugin.gemini_provider import GeminiAIProvider
from civic_reports.services.ai_plugin.mock_provider import MockAIProvider
from civic_reports.services.ai_plugin.registry import AIProviderRegistry, get_ai_registry

__all__ = [
    "AIProvider",
    "AIResponse",
    "AIProviderRegistry",
    "GeminiAIProvider",
    "MockAIProvider",
    "REPORT_CATEGORIES",
    "get_ai_registry",
]
