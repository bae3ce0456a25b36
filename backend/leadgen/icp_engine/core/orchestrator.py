"""
ICP analysis orchestrator.

Pipeline: select top candidates → project to public shape → refresh persona insights
"""
from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
import logging

from leadgen.models import Lead, PersonaInsight
from leadgen.icp_engine.core.selector import CandidateSelector
from leadgen.icp_engine.records import BusinessRecord, IcpDefinition
from leadgen.schemas.lead import CandidateCompany
from leadgen.services.persona_insights import DEFAULT_PERSONAS, PersonaInsightGenerator


logger = logging.getLogger(__name__)

DEFAULT_RELEVANCE = 8


def _value(value: str) -> Optional[str]:
    return value or None


def project_candidate(record: BusinessRecord) -> CandidateCompany:
    """Public shape of a matched record; absent fields become None."""
    return CandidateCompany(
        business_name=_value(record.business_name),
        email=_value(record.email.strip()),
        phone=_value(record.phone.strip()),
        mailing_address=_value(record.mailing_address),
        city=_value(record.city),
        state=_value(record.state),
        zip=_value(record.zip_code),
        sales_volume=_value(record.sales_volume),
        employees=_value(record.employees),
        public_private=_value(record.public_private),
        location_type=_value(record.location_type),
        sic_name=_value(record.sic_name),
        sic=_value(record.sic),
        naics=_value(record.naics),
        first_name=_value(record.first_name),
        last_name=_value(record.last_name),
        title=_value(record.title),
        web=_value(record.web),
    )


class IcpAnalysisOrchestrator:
    """
    Analyze an ICP against the business dataset.

    Steps:
    1. Select the top candidate pool for the ICP
    2. Keep the best `match_limit` and project them for the dashboard
    3. Regenerate persona insights for the ICP
    """

    def __init__(
        self,
        selector: CandidateSelector,
        insight_generator: PersonaInsightGenerator,
        candidate_pool: int = 300,
        match_limit: int = 100,
        personas: Optional[List[str]] = None
    ):
        """
        Args:
            selector: Candidate selector over the shared dataset cache
            insight_generator: Persona insight generator
            candidate_pool: Candidates scored into the pool
            match_limit: Candidates returned to the caller
            personas: Personas to generate insights for
        """
        self.selector = selector
        self.insight_generator = insight_generator
        self.candidate_pool = candidate_pool
        self.match_limit = match_limit
        self.personas = personas or DEFAULT_PERSONAS

    async def get_candidates(self, icp: IcpDefinition, limit: int) -> List[CandidateCompany]:
        """
        Top `limit` matches for an ICP in public shape (no score or index).

        Raises:
            DatasetLoadError: dataset unavailable
        """
        candidates = await self.selector.select_top_candidates(icp, limit)
        return [project_candidate(candidate.record) for candidate in candidates]

    async def analyze_icp(self, db: AsyncSession, lead: Lead) -> List[CandidateCompany]:
        """
        Run the full analysis for a stored lead/ICP.

        Args:
            db: Database session
            lead: Stored lead acting as the ICP

        Returns:
            Up to `match_limit` matched companies
        """
        icp = IcpDefinition.from_lead(lead)

        pool = await self.get_candidates(icp, self.candidate_pool)
        selected = pool[:self.match_limit]
        logger.info(f"ICP {lead.id}: selected {len(selected)} companies from a pool of {len(pool)}")

        await self.save_persona_insights(db, lead.id, lead.industry or "General")

        return selected

    async def save_persona_insights(self, db: AsyncSession, icp_id: Any, industry: str) -> int:
        """
        Replace the generated (non-custom) insights of an ICP.

        Runs as one transaction; custom insights are kept.

        Returns:
            Number of insights inserted
        """
        try:
            await db.execute(
                delete(PersonaInsight).where(
                    PersonaInsight.icp_id == icp_id,
                    PersonaInsight.is_custom == False  # noqa: E712
                )
            )

            rows = []
            for persona in self.personas:
                data = await self.insight_generator.generate(industry, persona)
                for insight_type, items in (
                    ("pain_point", data.get("pain_points") or []),
                    ("outcome", data.get("outcomes") or []),
                ):
                    for item in items:
                        if not item.get("title") or not item.get("description"):
                            continue
                        rows.append(PersonaInsight(
                            icp_id=icp_id,
                            industry=industry or "General",
                            persona=persona,
                            title=item["title"],
                            description=item["description"],
                            relevance_score=item.get("relevance") or DEFAULT_RELEVANCE,
                            type=insight_type,
                            is_custom=False,
                            status="unassigned",
                        ))

            if rows:
                db.add_all(rows)

            await db.commit()
            logger.info(f"Saved {len(rows)} persona insights for ICP {icp_id}")
            return len(rows)

        except Exception as e:
            await db.rollback()
            logger.error(f"Error saving persona insights for ICP {icp_id}: {str(e)}")
            raise
