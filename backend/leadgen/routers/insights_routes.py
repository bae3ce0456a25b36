"""
Persona Insight Routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from typing import Optional
import logging

from leadgen.database import get_db
from leadgen.models import PersonaInsight
from leadgen.schemas.insights import BulkStatusUpdate, CustomInsightCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/insights", tags=["Insights"])


# ============================================================================
# SPECIFIC ROUTES FIRST
# ============================================================================

@router.put("/bulk-status")
async def bulk_update_status(
    update_data: BulkStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Set the status of many insights at once"""
    result = await db.execute(
        update(PersonaInsight)
        .where(PersonaInsight.id.in_(update_data.ids))
        .values(status=update_data.status)
    )
    await db.commit()
    return {"success": True, "updated": result.rowcount}


@router.post("/custom", status_code=status.HTTP_201_CREATED)
async def create_custom_insight(
    insight_data: CustomInsightCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a user-authored insight; kept when the ICP is re-analyzed"""
    insight = PersonaInsight(**insight_data.model_dump(), is_custom=True)

    db.add(insight)
    await db.commit()
    await db.refresh(insight)
    return insight.to_dict()


# ============================================================================
# PARAMETERIZED ROUTES
# ============================================================================

@router.get("/{persona}")
async def list_persona_insights(
    persona: str,
    icp_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Insights for one persona, most relevant first"""
    query = select(PersonaInsight).where(PersonaInsight.persona == persona)
    if icp_id is not None:
        query = query.where(PersonaInsight.icp_id == icp_id)
    query = query.order_by(PersonaInsight.relevance_score.desc(), PersonaInsight.id)

    result = await db.execute(query)
    return [insight.to_dict() for insight in result.scalars().all()]


@router.delete("/{insight_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_insight(
    insight_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete an insight"""
    result = await db.execute(select(PersonaInsight).where(PersonaInsight.id == insight_id))
    insight = result.scalar_one_or_none()

    if not insight:
        raise HTTPException(status_code=404, detail="Insight not found")

    await db.delete(insight)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
