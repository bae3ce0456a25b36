"""
Pydantic schemas for leads, webhook payloads and ICP matches.
"""
from typing import Optional
from pydantic import BaseModel, Field


# ============================================================================
# LEAD SCHEMAS
# ============================================================================

class LeadCreate(BaseModel):
    """Manual lead / ICP entry from the dashboard."""
    profile_name: str = Field(..., min_length=1, max_length=255)
    user_id: int = Field(..., alias="userId")
    industry: Optional[str] = None
    revenue: Optional[str] = None
    location: Optional[str] = None

    class Config:
        populate_by_name = True


class WebhookLeadPayload(BaseModel):
    """Zapier webhook body: free text to extract a lead from."""
    raw_content: str = Field(..., min_length=1)
    source_email: Optional[str] = None


# ============================================================================
# ICP MATCH SCHEMAS
# ============================================================================

class CandidateCompany(BaseModel):
    """Public projection of a matched business record (no score/index)."""
    business_name: Optional[str] = Field(None, alias="businessName")
    email: Optional[str] = None
    phone: Optional[str] = None
    mailing_address: Optional[str] = Field(None, alias="mailingAddress")
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    sales_volume: Optional[str] = Field(None, alias="salesVolume")
    employees: Optional[str] = None
    public_private: Optional[str] = Field(None, alias="publicPrivate")
    location_type: Optional[str] = Field(None, alias="locationType")
    sic_name: Optional[str] = Field(None, alias="sicName")
    sic: Optional[str] = None
    naics: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    title: Optional[str] = None
    web: Optional[str] = None

    class Config:
        populate_by_name = True
