# backend/leadgen/models.py
"""
SQLAlchemy ORM models.

A lead row doubles as the ICP definition that gets matched against the
business dataset (industry / location / revenue).
"""

from sqlalchemy import (
    Column, String, Boolean, Integer, Text, DateTime, ForeignKey, Index
)
from sqlalchemy.sql import func
from leadgen.database import Base


# ============================================================================
# LEADS (ICP DEFINITIONS)
# ============================================================================

class Lead(Base):
    """Lead / Ideal Customer Profile entered manually or via webhook."""
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, index=True)

    profile_name = Column(String(255))
    industry = Column(String(255))
    revenue = Column(String(100))
    location = Column(String(255))

    # Webhook-sourced leads
    email = Column(String(255))
    raw_content = Column(Text)

    status = Column(String(50), default="Active")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "profile_name": self.profile_name,
            "industry": self.industry,
            "revenue": self.revenue,
            "location": self.location,
            "email": self.email,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


# ============================================================================
# PERSONA INSIGHTS
# ============================================================================

class PersonaInsight(Base):
    """Pain point or desired outcome for a persona, scoped to an ICP."""
    __tablename__ = "persona_insights"

    id = Column(Integer, primary_key=True, autoincrement=True)
    icp_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), index=True)

    industry = Column(String(255), default="General")
    persona = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    relevance_score = Column(Integer, default=8)
    type = Column(String(20), nullable=False)  # pain_point | outcome

    # Custom insights survive re-analysis of the ICP
    is_custom = Column(Boolean, default=False, nullable=False)
    status = Column(String(50), default="unassigned")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_persona_insights_icp_persona", "icp_id", "persona"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "icp_id": self.icp_id,
            "industry": self.industry,
            "persona": self.persona,
            "title": self.title,
            "description": self.description,
            "relevance_score": self.relevance_score,
            "type": self.type,
            "is_custom": self.is_custom,
            "status": self.status,
        }


# ============================================================================
# EMAIL CAMPAIGNS
# ============================================================================

class EmailCampaign(Base):
    """Logged email campaign counts for the dashboard."""
    __tablename__ = "email_campaigns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, index=True)
    subject = Column(String(500), nullable=False)

    sent_count = Column(Integer, default=0)
    skipped_count = Column(Integer, default=0)
    delivered_count = Column(Integer, default=0)
    soft_bounce_count = Column(Integer, default=0)
    hard_bounce_count = Column(Integer, default=0)
    tracked_count = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
