"""
Pydantic models for citizen reports.
These models handle validation for report submission, storage and responses.

Stored and returned field names are camelCase (createdAt, fineCollected, ...);
Python code uses the snake_case attribute names.
"""

from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt, model_validator
from datetime import datetime
from typing import Optional, Dict, Any, Union
from enum import Enum


class ReportStatus(str, Enum):
    """
    Report workflow states.

    pending -> verified -> resolved
    pending -> rejected
    """
    PENDING = "pending"      # Initial state, awaiting verification
    VERIFIED = "verified"    # Checked by municipal staff
    REJECTED = "rejected"    # Dismissed during verification (terminal)
    RESOLVED = "resolved"    # Issue addressed, with or without a fine (terminal)


class Report(BaseModel):
    """
    A citizen-submitted civic-issue record, exactly as persisted.

    Text fields are optional here so that records stored by lenient
    submissions still load; strict submission is enforced by the lifecycle.
    """
    id: str = Field(..., description="Unique report identifier (uuid4)")
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = Field(None, description="Base64-encoded photo of the issue")
    category: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(..., alias="createdAt")
    verified_at: Optional[datetime] = Field(None, alias="verifiedAt")
    resolved_at: Optional[datetime] = Field(None, alias="resolvedAt")
    fine_collected: Optional[Union[NonNegativeInt, NonNegativeFloat]] = Field(None, alias="fineCollected")
    reward_disbursed: Optional[Union[NonNegativeInt, NonNegativeFloat]] = Field(None, alias="rewardDisbursed")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "3f1c2a9e-8d7b-4c61-9a52-0b6f1e2d3c4a",
                "title": "Pothole",
                "description": "Large pothole near the bus stop",
                "location": "MG Road",
                "category": "Infrastructure",
                "status": "resolved",
                "createdAt": "2024-01-15T10:30:00Z",
                "verifiedAt": "2024-01-15T11:00:00Z",
                "resolvedAt": "2024-01-16T09:15:00Z",
                "fineCollected": 600,
                "rewardDisbursed": 500,
            }
        }

    @model_validator(mode="after")
    def _fine_and_reward_together(self) -> "Report":
        if (self.fine_collected is None) != (self.reward_disbursed is None):
            raise ValueError("fineCollected and rewardDisbursed must be set together")
        return self

    def to_record(self) -> Dict[str, Any]:
        """Serialize for the JSON store (camelCase, absent fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST request).
    Required-field checks live in the lifecycle so that lenient mode can
    still accept partially filled forms.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Pothole",
                "description": "Large pothole",
                "location": "MG Road",
                "category": "Infrastructure",
            }
        }
        extra = "ignore"


class StatusUpdateRequest(BaseModel):
    """
    Request to change report status.
    `override` bypasses the transition table when ALLOW_STATUS_OVERRIDE is on.
    """
    status: str = Field(..., description="New status value")
    override: bool = Field(False, description="Administrative override of the transition rules")
