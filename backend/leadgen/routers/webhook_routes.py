"""
Webhook Routes - inbound leads from Zapier
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from leadgen.database import get_db
from leadgen.models import Lead
from leadgen.scheduler import enqueue_welcome_email
from leadgen.schemas.lead import WebhookLeadPayload
from leadgen.services.groq_service import GroqService, GroqServiceError, get_groq_service
from leadgen.websocket import notify_new_lead

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/webhooks", tags=["Webhooks"])


def groq_dependency() -> GroqService:
    try:
        return get_groq_service()
    except ValueError as e:
        logger.error(f"Webhook received but LLM is not configured: {e}")
        raise HTTPException(status_code=503, detail="Lead extraction is not configured")


@router.post("/zapier")
async def handle_zapier_webhook(
    payload: WebhookLeadPayload,
    db: AsyncSession = Depends(get_db),
    groq: GroqService = Depends(groq_dependency)
):
    """
    Extract a lead from free text, store it, broadcast it and queue
    the welcome email.
    """
    try:
        extracted = await groq.extract_lead_details(payload.raw_content)
    except GroqServiceError as e:
        logger.error(f"Webhook lead extraction failed: {e}")
        raise HTTPException(status_code=500, detail="Processing failed")

    new_lead = Lead(
        profile_name=extracted.get("profile_name"),
        industry=extracted.get("industry"),
        revenue=extracted.get("revenue"),
        location=extracted.get("location"),
        email=payload.source_email,
        raw_content=payload.raw_content,
    )

    try:
        db.add(new_lead)
        await db.commit()
        await db.refresh(new_lead)
    except Exception as e:
        await db.rollback()
        logger.error(f"Webhook error saving lead: {str(e)}")
        raise HTTPException(status_code=500, detail="Processing failed")

    lead = new_lead.to_dict()
    await notify_new_lead(lead)
    enqueue_welcome_email(lead)

    return {"success": True, "lead": lead}
