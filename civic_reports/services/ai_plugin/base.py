"""
AI Provider Base Interface.

Defines the contract for AI suggestion providers.
All AI providers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


# Categories offered to citizens (and to the classifier)
REPORT_CATEGORIES = [
    "Waste Management",
    "Infrastructure",
    "Illegal Construction",
    "Traffic Violation",
    "Women's Safety",
    "Public Nuisance",
    "General",
]

DEFAULT_CATEGORY = "General"


def normalize_category(value: Any) -> str:
    """Map a classifier answer onto REPORT_CATEGORIES (case-insensitive), else General."""
    if not isinstance(value, str):
        return DEFAULT_CATEGORY
    for category in REPORT_CATEGORIES:
        if category.lower() == value.strip().lower():
            return category
    return DEFAULT_CATEGORY


class AITask:
    SUGGESTIONS = "suggestions"
    IMAGE_ANALYSIS = "image_analysis"
    CATEGORIZATION = "categorization"
    DASHBOARD_SUMMARY = "dashboard_summary"


class AIResponse:
    """
    Standardized AI response structure.

    `data` holds the task payload, e.g. {"title": ..., "description": ...}
    for suggestions or {"category": ...} for categorization.
    """

    def __init__(
        self,
        task: str,
        data: Dict[str, Any],
        model_name: str,
        model_version: str,
        inference_timestamp: datetime,
        error: Optional[str] = None
    ):
        self.task = task
        self.data = data
        self.model_name = model_name
        self.model_version = model_version
        self.inference_timestamp = inference_timestamp
        self.error = error  # If AI failed, error message stored here

    def to_dict(self) -> Dict:
        """Log-friendly view of the response."""
        result = {
            "task": self.task,
            "data": self.data,
            "model_name": self.model_name,
            "model_version": self.model_version,
            "inference_timestamp": self.inference_timestamp.isoformat(),
        }
        if self.error:
            result["error"] = self.error
        return result


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Provider methods MUST return an AIResponse even on failure and never
    raise; the registry falls through to the next provider on error.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, str]:
        """Dict with 'name' and 'version' keys."""
        pass

    @abstractmethod
    def get_timeout_seconds(self) -> float:
        pass

    @abstractmethod
    def generate_suggestions(self, location: str) -> AIResponse:
        """Suggest a formal title and description from free text about a place/issue."""
        pass

    @abstractmethod
    def analyze_image(self, image: str) -> AIResponse:
        """Describe the civic issue shown in a base64-encoded JPEG."""
        pass

    @abstractmethod
    def categorize_report(self, title: str, description: str) -> AIResponse:
        """Pick one of REPORT_CATEGORIES."""
        pass

    @abstractmethod
    def summarize_reports(self, reports: List[Dict[str, Any]]) -> AIResponse:
        """Plain-text dashboard summary of a batch of reports."""
        pass

    def _response(self, task: str, data: Dict[str, Any], error: Optional[str] = None) -> AIResponse:
        info = self.get_model_info()
        return AIResponse(
            task=task,
            data=data,
            model_name=info["name"],
            model_version=info["version"],
            inference_timestamp=datetime.utcnow(),
            error=error,
        )
