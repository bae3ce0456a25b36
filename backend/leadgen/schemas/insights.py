"""
Pydantic schemas for persona insights.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, validator


INSIGHT_TYPES = ("pain_point", "outcome")


class InsightItem(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    relevance: Optional[int] = None


class PersonaInsights(BaseModel):
    """Generator output for one industry/persona pair."""
    pain_points: List[InsightItem] = Field(default_factory=list)
    outcomes: List[InsightItem] = Field(default_factory=list)


class CustomInsightCreate(BaseModel):
    icp_id: Optional[int] = None
    industry: Optional[str] = "General"
    persona: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    relevance_score: int = Field(default=8, ge=1, le=10)
    type: str = "pain_point"
    status: str = "unassigned"

    @validator("type")
    def validate_type(cls, v):
        if v not in INSIGHT_TYPES:
            raise ValueError(f"type must be one of: {list(INSIGHT_TYPES)}")
        return v


class BulkStatusUpdate(BaseModel):
    ids: List[int] = Field(..., min_length=1)
    status: str = Field(..., min_length=1, max_length=50)
