"""API routes for email outreach via Brevo and campaign stats."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Any, Dict, Optional
import httpx
import logging

from leadgen.database import get_db
from leadgen.models import EmailCampaign
from leadgen.schemas.email import PublishCampaignRequest, SendEmailRequest, SendEmailResult
from leadgen.services.email_service import BrevoEmailService, get_email_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/email", tags=["Email"])


def email_service_dependency() -> BrevoEmailService:
    try:
        return get_email_service()
    except ValueError as e:
        logger.error(f"Email service not configured: {e}")
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/send", response_model=SendEmailResult)
async def send_emails(
    request: SendEmailRequest,
    service: BrevoEmailService = Depends(email_service_dependency)
) -> Dict[str, Any]:
    """Send a personalized email to every lead with an address"""
    leads = [lead.model_dump() for lead in request.leads]
    return await service.send_personalized_emails(
        subject=request.subject,
        body_template=request.body_template,
        leads=leads,
    )


@router.post("/publish")
async def publish_campaign(
    request: PublishCampaignRequest,
    db: AsyncSession = Depends(get_db)
):
    """Log campaign counts without sending externally"""
    sent = sum(1 for lead in request.leads if lead.email)
    skipped = len(request.leads) - sent

    # Without delivery tracking every sent message counts as delivered
    campaign = EmailCampaign(
        user_id=request.user_id,
        subject=request.subject,
        sent_count=sent,
        skipped_count=skipped,
        delivered_count=sent,
        soft_bounce_count=0,
        hard_bounce_count=0,
        tracked_count=0,
    )

    try:
        db.add(campaign)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Error logging campaign: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to log campaign")

    return {
        "sent": sent,
        "skipped": skipped,
        "delivered": sent,
        "softBounces": 0,
        "hardBounces": 0,
        "tracked": 0,
    }


@router.get("/stats")
async def campaign_stats(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Campaign totals for the dashboard"""
    query = select(
        func.count(EmailCampaign.id),
        func.coalesce(func.sum(EmailCampaign.sent_count), 0),
        func.coalesce(func.sum(EmailCampaign.skipped_count), 0),
        func.coalesce(func.sum(EmailCampaign.delivered_count), 0),
        func.coalesce(func.sum(EmailCampaign.soft_bounce_count), 0),
        func.coalesce(func.sum(EmailCampaign.hard_bounce_count), 0),
        func.coalesce(func.sum(EmailCampaign.tracked_count), 0),
        func.max(EmailCampaign.created_at),
    )
    if user_id is not None:
        query = query.where(EmailCampaign.user_id == user_id)

    result = await db.execute(query)
    row = result.one()

    return {
        "totalCampaigns": row[0] or 0,
        "totalSent": int(row[1] or 0),
        "totalSkipped": int(row[2] or 0),
        "totalDelivered": int(row[3] or 0),
        "totalSoftBounces": int(row[4] or 0),
        "totalHardBounces": int(row[5] or 0),
        "totalTracked": int(row[6] or 0),
        "lastCampaignAt": row[7].isoformat() if row[7] else None,
    }


@router.get("/brevo-stats")
async def brevo_stats(
    days: int = Query(1, ge=1, le=90),
    service: BrevoEmailService = Depends(email_service_dependency)
):
    """Aggregated Brevo SMTP statistics"""
    try:
        return await service.fetch_aggregated_stats(days=days)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching Brevo stats: {str(e)}")
        raise HTTPException(status_code=502, detail="Failed to fetch Brevo stats")
