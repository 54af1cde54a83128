"""
Request/response models for the AI suggestion endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List


class SuggestionRequest(BaseModel):
    location: str = Field(..., min_length=1, description="Free text about the place and the problem")


class SuggestionResponse(BaseModel):
    title: str
    description: str


class ImageAnalysisRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Base64-encoded JPEG")


class ImageAnalysisResponse(BaseModel):
    description: str


class CategorizeRequest(BaseModel):
    title: str = ""
    description: str = ""


class CategoryResponse(BaseModel):
    category: str


class DashboardSummaryRequest(BaseModel):
    reports: List[Dict[str, Any]] = Field(default_factory=list)


class DashboardSummaryResponse(BaseModel):
    summary: str
