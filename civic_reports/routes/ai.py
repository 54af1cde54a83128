"""
AI suggestion endpoints - stateless proxy to the configured AI provider.

These endpoints never touch the report store. If every provider fails the
caller gets a 502 and can still submit the report by hand.
"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from civic_reports.models.ai import (
    CategorizeRequest,
    CategoryResponse,
    DashboardSummaryRequest,
    DashboardSummaryResponse,
    ImageAnalysisRequest,
    ImageAnalysisResponse,
    SuggestionRequest,
    SuggestionResponse,
)
from civic_reports.services.ai_plugin.base import AIResponse
from civic_reports.services.ai_plugin.registry import AIProviderRegistry, get_ai_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


def _unwrap(response: AIResponse, failure_message: str) -> dict:
    if response.error:
        logger.error(f"❌ {failure_message} {response.to_dict()}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=failure_message)
    return response.data


@router.post("/generate-suggestions", response_model=SuggestionResponse)
def generate_suggestions(request: SuggestionRequest, registry: AIProviderRegistry = Depends(get_ai_registry)):
    """Draft a formal title and description from what the citizen typed."""
    return _unwrap(registry.generate_suggestions(request.location), "Failed to generate AI suggestions.")


@router.post("/analyze-image", response_model=ImageAnalysisResponse)
def analyze_image(request: ImageAnalysisRequest, registry: AIProviderRegistry = Depends(get_ai_registry)):
    """Describe the problem shown in an uploaded photo."""
    return _unwrap(registry.analyze_image(request.image), "Failed to analyze image.")


@router.post("/categorize-report", response_model=CategoryResponse)
def categorize_report(request: CategorizeRequest, registry: AIProviderRegistry = Depends(get_ai_registry)):
    return _unwrap(
        registry.categorize_report(request.title, request.description),
        "Failed to categorize report.",
    )


@router.post("/generate-dashboard-summary", response_model=DashboardSummaryResponse)
def generate_dashboard_summary(
    request: DashboardSummaryRequest,
    registry: AIProviderRegistry = Depends(get_ai_registry),
):
    """Summarize common issues and busy locations for the staff dashboard."""
    return _unwrap(registry.summarize_reports(request.reports), "Failed to generate dashboard summary.")
