"""
Mock AI Provider - Fallback provider when AI is disabled or unavailable.

Provides rule-based suggestions without external AI calls.
Always available.
"""

from civic_reports.services.ai_plugin.base import AIProvider, AIResponse, AITask, DEFAULT_CATEGORY
from collections import Counter
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


# First matching rule wins
CATEGORY_KEYWORDS = [
    ("Women's Safety", ["harass", "eve teasing", "stalk", "unsafe for women", "women", "molest"]),
    ("Illegal Construction", ["illegal construction", "encroach", "unauthorized", "unauthorised", "illegal building"]),
    ("Traffic Violation", ["traffic", "signal", "parking", "wrong side", "helmet", "speeding", "jam"]),
    ("Waste Management", ["garbage", "waste", "trash", "dump", "litter", "sewage", "drain"]),
    ("Infrastructure", ["pothole", "road", "streetlight", "street light", "bridge", "pipeline", "leak", "footpath"]),
    ("Public Nuisance", ["noise", "loud", "nuisance", "stray", "smoke", "spitting"]),
]


def classify_text(text: str) -> str:
    text_lower = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(word in text_lower for word in keywords):
            return category
    return DEFAULT_CATEGORY


class MockAIProvider(AIProvider):
    """
    Mock AI provider using rule-based keyword matching.

    This is the fallback provider when:
    - AI is disabled in config
    - Gemini fails
    - No API key is available
    """

    MODEL_NAME = "mock-rules-v1"
    MODEL_VERSION = "1.0.0"
    TIMEOUT_SECONDS = 0.1  # Instant (no network call)

    def is_enabled(self) -> bool:
        """Mock provider is always enabled (fallback)."""
        return True

    def get_model_info(self) -> Dict[str, str]:
        return {
            "name": self.MODEL_NAME,
            "version": self.MODEL_VERSION
        }

    def get_timeout_seconds(self) -> float:
        return self.TIMEOUT_SECONDS

    def generate_suggestions(self, location: str) -> AIResponse:
        text = " ".join(location.split())
        category = classify_text(text)
        subject = "Civic issue" if category == DEFAULT_CATEGORY else f"{category} issue"
        place = text if len(text) <= 60 else text[:57] + "..."

        return self._response(AITask.SUGGESTIONS, {
            "title": f"{subject} reported: {place}",
            "description": (
                f"A citizen has reported the following: {text}. "
                "The matter is submitted for inspection and appropriate action by the municipal authorities."
            ),
        })

    def analyze_image(self, image: str) -> AIResponse:
        return self._response(AITask.IMAGE_ANALYSIS, {
            "description": (
                "A photograph of the reported civic issue has been attached. "
                "Automated analysis is unavailable, so the issue is described by the citizen's report."
            ),
        })

    def categorize_report(self, title: str, description: str) -> AIResponse:
        return self._response(AITask.CATEGORIZATION, {
            "category": classify_text(f"{title} {description}"),
        })

    def summarize_reports(self, reports: List[Dict[str, Any]]) -> AIResponse:
        if not reports:
            return self._response(AITask.DASHBOARD_SUMMARY, {"summary": "No reports have been submitted yet."})

        categories = Counter(
            str(report.get("category") or classify_text(f"{report.get('title', '')} {report.get('description', '')}"))
            for report in reports
        )
        locations = Counter(str(report.get("location")) for report in reports if report.get("location"))
        pending = sum(1 for report in reports if report.get("status") == "pending")

        top_issues = ", ".join(f"{name} ({count})" for name, count in categories.most_common(3))
        summary = f"{len(reports)} report(s) analysed. Most common issues: {top_issues}."
        if locations:
            busiest = ", ".join(name for name, _ in locations.most_common(2))
            summary += f" Busiest locations: {busiest}."
        if pending:
            summary += f" {pending} report(s) are still awaiting verification."

        top_category = categories.most_common(1)[0][0]
        summary += f" Suggested action: schedule a focused inspection drive for {top_category.lower()} complaints."
        return self._response(AITask.DASHBOARD_SUMMARY, {"summary": summary})
