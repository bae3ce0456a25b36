"""
Lead Routes - manual lead/ICP entry and ICP matches
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
import logging

from leadgen.database import get_db
from leadgen.dependencies import get_orchestrator
from leadgen.icp_engine.core import IcpAnalysisOrchestrator
from leadgen.icp_engine.exceptions import DatasetLoadError
from leadgen.models import Lead
from leadgen.schemas.lead import LeadCreate
from leadgen.websocket import notify_new_lead

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/leads", tags=["Leads"])


@router.get("")
async def list_leads(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """List leads, newest first; optionally only one user's leads"""
    query = select(Lead)
    if user_id is not None:
        query = query.where(Lead.user_id == user_id)
    query = query.order_by(Lead.created_at.desc())

    result = await db.execute(query)
    return [lead.to_dict() for lead in result.scalars().all()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_lead(
    lead_data: LeadCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a lead / ICP and broadcast it"""
    new_lead = Lead(
        user_id=lead_data.user_id,
        profile_name=lead_data.profile_name,
        industry=lead_data.industry or "General",
        revenue=lead_data.revenue or "Unknown",
        location=lead_data.location or "Global",
        status="Active",
    )

    try:
        db.add(new_lead)
        await db.commit()
        await db.refresh(new_lead)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error creating lead: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to save lead")

    payload = new_lead.to_dict()
    await notify_new_lead(payload)
    return payload


@router.get("/{lead_id}/matches")
async def get_lead_matches(
    lead_id: int,
    db: AsyncSession = Depends(get_db),
    orchestrator: IcpAnalysisOrchestrator = Depends(get_orchestrator)
):
    """Top matching companies from the business dataset for a lead's ICP"""
    result = await db.execute(select(Lead).where(Lead.id == lead_id))
    lead = result.scalar_one_or_none()

    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")

    try:
        companies = await orchestrator.analyze_icp(db, lead)
    except DatasetLoadError as e:
        logger.error(f"Error building ICP matches for lead {lead_id}: {e}")
        raise HTTPException(status_code=500, detail="Business dataset unavailable")
    except Exception as e:
        logger.error(f"Error building ICP matches for lead {lead_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to build matches")

    return [company.model_dump(by_alias=True) for company in companies]
