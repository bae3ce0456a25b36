"""
Pydantic schemas for email sending and campaign logging.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class EmailRecipient(BaseModel):
    """One recipient with its merge fields."""
    email: Optional[str] = None
    business_name: Optional[str] = Field(None, alias="businessName")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    class Config:
        populate_by_name = True


class SendEmailRequest(BaseModel):
    subject: str = Field(..., min_length=1)
    body_template: str = Field(..., min_length=1, alias="bodyTemplate")
    leads: List[EmailRecipient]

    class Config:
        populate_by_name = True


class SendEmailResult(BaseModel):
    sent: int
    skipped: int
    errors: List[Dict[str, Any]] = Field(default_factory=list)


class PublishCampaignRequest(BaseModel):
    user_id: int = Field(..., alias="userId")
    subject: str = Field(..., min_length=1)
    leads: List[EmailRecipient]

    class Config:
        populate_by_name = True
