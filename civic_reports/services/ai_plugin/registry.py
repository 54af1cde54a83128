"""
AI Provider Registry.

Manages AI provider selection and fallback logic.
"""

from civic_reports.services.ai_plugin.base import AIProvider, AIResponse, AITask
from civic_reports.services.ai_plugin.gemini_provider import GeminiAIProvider
from civic_reports.services.ai_plugin.mock_provider import MockAIProvider
from civic_reports.core.settings import settings
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class AIProviderRegistry:
    """
    Registry for AI providers with fallback logic.

    Providers are tried in priority order; the first answer without an
    error wins.
    """

    def __init__(self, providers: Optional[List[AIProvider]] = None):
        self.providers: List[AIProvider] = []
        if providers is not None:
            self.providers.extend(providers)
        else:
            self._initialize_providers()

    def _initialize_providers(self):
        """Initialize available AI providers in priority order."""
        if not settings.AI_ENABLED:
            logger.info("⚠️ AI is disabled globally (AI_ENABLED=false), using mock provider only")
            self.providers.append(MockAIProvider())
            return

        # Priority 1: Gemini (if API key available)
        gemini_provider = GeminiAIProvider()
        if gemini_provider.is_enabled():
            self.providers.append(gemini_provider)
            logger.info("✅ Gemini AI Provider registered")

        # Priority 2: Mock (always available as fallback)
        self.providers.append(MockAIProvider())
        logger.info("✅ Mock AI Provider registered (fallback)")

    def _run(self, task: str, call: Callable[[AIProvider], AIResponse]) -> AIResponse:
        last_response: Optional[AIResponse] = None

        for provider in self.providers:
            if not provider.is_enabled():
                continue
            name = provider.get_model_info()["name"]
            try:
                response = call(provider)
            except Exception as e:
                logger.warning(f"Provider {name} failed on {task}: {e}")
                continue

            if response.error:
                logger.warning(f"Provider {name} returned error on {task}: {response.error}")
                last_response = response
                continue

            logger.info(f"✅ AI {task} answered by {name}")
            return response

        logger.error(f"⚠️ All AI providers failed for {task}")
        if last_response is not None:
            return last_response
        return AIResponse(
            task=task,
            data={},
            model_name="none",
            model_version="",
            inference_timestamp=datetime.utcnow(),
            error="No AI provider available",
        )

    def generate_suggestions(self, location: str) -> AIResponse:
        return self._run(AITask.SUGGESTIONS, lambda p: p.generate_suggestions(location))

    def analyze_image(self, image: str) -> AIResponse:
        return self._run(AITask.IMAGE_ANALYSIS, lambda p: p.analyze_image(image))

    def categorize_report(self, title: str, description: str) -> AIResponse:
        return self._run(AITask.CATEGORIZATION, lambda p: p.categorize_report(title, description))

    def summarize_reports(self, reports: List[Dict[str, Any]]) -> AIResponse:
        return self._run(AITask.DASHBOARD_SUMMARY, lambda p: p.summarize_reports(reports))


# Global registry instance (singleton)
_registry: Optional[AIProviderRegistry] = None


def get_ai_registry() -> AIProviderRegistry:
    """FastAPI dependency: the process-wide provider registry."""
    global _registry
    if _registry is None:
        _registry = AIProviderRegistry()
    return _registry
