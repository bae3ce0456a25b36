"""
Persona insight generator.

Builds pain points and desired outcomes for a buyer persona in an industry.
The default provider uses local templates; the "groq" provider asks the LLM
and falls back to the templates when the call fails.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from leadgen.config import settings
from leadgen.schemas.insights import PersonaInsights
from leadgen.services.groq_service import GroqService, GroqServiceError, get_groq_service

logger = logging.getLogger(__name__)


DEFAULT_PERSONAS = ["CTO", "Marketing Manager", "Sales Director"]

# Checked in order; first hit wins
SECTOR_KEYWORDS = [
    ("software", ["saas", "software"]),
    ("healthcare", ["health", "med"]),
    ("manufacturing", ["manufact"]),
    ("finance", ["finance", "fintech"]),
    ("retail", ["retail", "e-commerce"]),
]

PERSONA_PROMPT = """Industry: {industry}
Persona: {persona}

List the top business pain points this persona faces in this industry and the
outcomes they want. Return JSON:
{{"pain_points": [{{"title": str, "description": str, "relevance": 1-10}}],
  "outcomes": [{{"title": str, "description": str, "relevance": 1-10}}]}}"""


def _lower(value: Any) -> str:
    return (str(value) if value is not None else "").strip().lower()


def detect_sector(industry: Optional[str]) -> str:
    """Rough sector guess used to tailor template phrasing."""
    ind = _lower(industry)
    for sector, keywords in SECTOR_KEYWORDS:
        if any(keyword in ind for keyword in keywords):
            return sector
    return "general"


def _item(title: str, description: str, relevance: int) -> Dict[str, Any]:
    return {"title": title, "description": description, "relevance": relevance}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PERSONA TEMPLATES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

CTO_SECTOR_NOTES = {
    "healthcare": " while meeting strict security and compliance requirements",
    "finance": " while managing risk and regulatory requirements",
    "manufacturing": " while supporting legacy systems on the shop floor",
    "retail": " while handling seasonal demand spikes and omnichannel data",
}

MARKETING_SEGMENT_NOTES = {
    "software": " trial users, product engagement, and expansion opportunities",
    "retail": " high-value shoppers and repeat purchase behavior",
    "finance": " key customer segments and risk-adjusted profitability",
}

SALES_SECTOR_NOTES = {
    "software": " complex, multi-stakeholder SaaS deals",
    "manufacturing": " long-cycle capital equipment and services deals",
    "finance": " multi-product financial solutions and renewals",
}


def build_cto_insights(sector: str) -> Dict[str, List[Dict[str, Any]]]:
    note = CTO_SECTOR_NOTES.get(sector, "")
    return {
        "pain_points": [
            _item(
                "Fragmented Technology Stack",
                "Core systems are spread across multiple vendors and custom tools, creating data "
                "silos and fragile integrations. The team spends too much time firefighting "
                "integration issues instead of building new capabilities" + note + ".",
                9,
            ),
            _item(
                "Difficulty Scaling Infrastructure",
                "Traffic and data volumes are growing faster than expected. Capacity planning is "
                "manual, and scaling decisions are often reactive, leading to performance "
                "incidents and unplanned downtime.",
                9,
            ),
            _item(
                "Limited Visibility into System Health",
                "Monitoring and logging are inconsistent across services. The team lacks a single "
                "view of application health, making it hard to trace issues end-to-end and "
                "understand their business impact.",
                8,
            ),
            _item(
                "Talent and Knowledge Bottlenecks",
                "Critical systems are understood by only a few senior engineers. Knowledge is "
                "tribal, making onboarding slow and raising operational risk if key people leave.",
                7,
            ),
        ],
        "outcomes": [
            _item(
                "Unified, Well-Integrated Platform",
                "Critical systems share a consistent integration pattern with clear contracts and "
                "observability. Changes can be deployed safely without breaking upstream or "
                "downstream teams.",
                9,
            ),
            _item(
                "Predictable, Elastic Infrastructure",
                "Capacity scales automatically with demand, with clear SLOs and cost guardrails. "
                "Engineering leaders have confidence in performance during peak periods and "
                "product launches.",
                9,
            ),
            _item(
                "Single Pane of Glass for Observability",
                "Engineering and product teams share a unified view of system health, customer "
                "experience, and key business transactions, enabling faster troubleshooting and "
                "better prioritization.",
                8,
            ),
            _item(
                "Resilient, Well-Documented Architecture",
                "Critical services are documented, instrumented, and follow common standards so "
                "new engineers can contribute quickly and operational risk is reduced.",
                8,
            ),
        ],
    }


def build_marketing_manager_insights(sector: str) -> Dict[str, List[Dict[str, Any]]]:
    note = MARKETING_SEGMENT_NOTES.get(sector, "")
    return {
        "pain_points": [
            _item(
                "Fragmented Customer View Across Channels",
                "Campaign, website, product, and CRM data live in separate tools. It is difficult "
                "to see the full buyer journey, so targeting and messaging remain generic and "
                "under-performing" + note + ".",
                9,
            ),
            _item(
                "Difficulty Proving Marketing ROI",
                "Attribution models are inconsistent, and revenue data is delayed or incomplete. "
                "Marketing leaders struggle to clearly connect spend to pipeline and closed-won "
                "deals.",
                9,
            ),
            _item(
                "Manual Campaign Operations",
                "Audience building, list management, and reporting involve exports, spreadsheets, "
                "and one-off workflows, slowing down experimentation and time-to-market.",
                8,
            ),
        ],
        "outcomes": [
            _item(
                "Unified Revenue and Journey Analytics",
                "Marketing can see the full path from first touch to closed-won in a single "
                "workspace, sliced by segment, persona, and campaign. This enables confident "
                "budget allocation and smarter messaging.",
                9,
            ),
            _item(
                "Always-On, Persona-Based Campaigns",
                "Audiences are automatically refreshed based on behaviors and firmographics. "
                "Campaigns adapt in real time, personalizing content and offers to each segment.",
                8,
            ),
            _item(
                "Operational Efficiency in the Marketing Team",
                "Routine list building, lead routing, and reporting are automated so the team can "
                "focus on strategy, testing, and collaboration with sales rather than manual data "
                "work.",
                8,
            ),
        ],
    }


def build_sales_director_insights(sector: str) -> Dict[str, List[Dict[str, Any]]]:
    note = SALES_SECTOR_NOTES.get(sector, "")
    return {
        "pain_points": [
            _item(
                "Inconsistent Pipeline Quality",
                "Sales leaders see large swings in pipeline quality and deal velocity. Reps are "
                "often working poorly qualified opportunities that do not fit the ICP, leading to "
                "low win rates" + note + ".",
                9,
            ),
            _item(
                "Limited Visibility into Deal Health",
                "Notes, emails, and stakeholder data are scattered across systems. It is difficult "
                "to quickly understand which deals are truly at risk and where executive support "
                "is needed.",
                8,
            ),
            _item(
                "Onboarding New Reps Takes Too Long",
                "Playbooks, talk tracks, and objection handling are not consistently documented. "
                "New reps struggle to ramp quickly and repeat what top performers are doing.",
                8,
            ),
        ],
        "outcomes": [
            _item(
                "Consistent, ICP-Aligned Pipeline",
                "Most opportunities entering the pipeline match a clear ICP definition. Reps spend "
                "more time with accounts that have the right profile and intent, improving "
                "conversion rates.",
                9,
            ),
            _item(
                "Deal Rooms with Clear Stakeholder Maps",
                "Key contacts, engagement history, and risks are visible in one place so leaders "
                "can quickly understand which deals to support and how.",
                8,
            ),
            _item(
                "Codified, Data-Driven Sales Playbooks",
                "Winning behaviors and messaging are captured and shared so new reps can ramp "
                "faster and the team can run consistent plays across regions and segments.",
                8,
            ),
        ],
    }


def build_generic_persona_insights(sector: str) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "pain_points": [
            _item(
                "Disconnected Tools and Manual Reporting",
                "Teams rely on spreadsheets and exports from multiple systems to answer basic "
                "questions about performance. This slows decision-making and hides systemic issues.",
                9,
            ),
            _item(
                "Limited Insight into Customer Behavior",
                "Data about customers, orders, and revenue is spread across several tools, making "
                "it hard to see clear patterns and prioritize the right initiatives.",
                8,
            ),
        ],
        "outcomes": [
            _item(
                "Unified View of Operations and Customers",
                "Leaders can see up-to-date metrics about pipeline, revenue, and customer health in "
                "one place, segmented by ICP and persona.",
                9,
            ),
            _item(
                "Reduced Manual Work and Faster Decisions",
                "Data collection, cleansing, and basic reporting are automated so teams can focus on "
                "strategy and execution rather than spreadsheets.",
                8,
            ),
        ],
    }


def build_template_insights(industry: Optional[str], persona: Optional[str]) -> Dict[str, List[Dict[str, Any]]]:
    """Template insights for a persona, phrased for the industry's sector."""
    sector = detect_sector(industry)
    # Whole words only: "director" contains "cto"
    words = set(re.findall(r"[a-z0-9]+", _lower(persona)))

    if "cto" in words:
        return build_cto_insights(sector)
    if "marketing" in words:
        return build_marketing_manager_insights(sector)
    if "sales" in words:
        return build_sales_director_insights(sector)
    return build_generic_persona_insights(sector)


class PersonaInsightGenerator:
    """Generate persona pain points and outcomes."""

    PROVIDERS = ("local", "groq")

    def __init__(self, provider: str = "local", groq_service: Optional[GroqService] = None):
        if provider not in self.PROVIDERS:
            raise ValueError(f"Unknown insights provider: {provider}. Available: {list(self.PROVIDERS)}")
        if provider == "groq" and groq_service is None:
            raise ValueError("groq provider requires a GroqService")
        self.provider = provider
        self.groq_service = groq_service

    async def generate(self, industry: Optional[str], persona: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        Returns:
            {
                "pain_points": [{title, description, relevance}, ...],
                "outcomes": [{title, description, relevance}, ...]
            }
        """
        if self.provider == "groq":
            try:
                data = await self.groq_service.complete_json(
                    PERSONA_PROMPT.format(industry=industry or "General", persona=persona)
                )
                return PersonaInsights(**data).model_dump()
            except (GroqServiceError, ValidationError) as e:
                logger.warning(f"LLM insights failed for {persona} ({industry}), using templates: {e}")

        return build_template_insights(industry, persona)


def get_persona_insight_generator() -> PersonaInsightGenerator:
    """Generator configured from PERSONA_INSIGHTS_PROVIDER."""
    if settings.PERSONA_INSIGHTS_PROVIDER == "groq":
        return PersonaInsightGenerator("groq", get_groq_service())
    return PersonaInsightGenerator(settings.PERSONA_INSIGHTS_PROVIDER)
