# tests/services/test_persona_insights.py

import pytest
from unittest.mock import AsyncMock, Mock

from leadgen.services.groq_service import GroqServiceError
from leadgen.services.persona_insights import (
    PersonaInsightGenerator,
    build_cto_insights,
    build_generic_persona_insights,
    build_sales_director_insights,
    build_template_insights,
    detect_sector,
)


# ============================================================================
# TEST: Templates
# ============================================================================

class TestDetectSector:

    @pytest.mark.parametrize("industry,sector", [
        ("B2B SaaS", "software"),
        ("Medical Devices", "healthcare"),
        ("Manufacturing", "manufacturing"),
        ("Fintech", "finance"),
        ("E-commerce", "retail"),
        ("Construction", "general"),
        (None, "general"),
        ("Healthcare software", "software"),
    ])
    def test_sector(self, industry, sector):
        assert detect_sector(industry) == sector


class TestTemplateInsights:

    @pytest.mark.parametrize("persona,pains,outcomes", [
        ("CTO", 4, 4),
        ("Marketing Manager", 3, 3),
        ("Sales Director", 3, 3),
        ("Head of Finance", 2, 2),
    ])
    def test_persona_dispatch(self, persona, pains, outcomes):
        insights = build_template_insights("Software", persona)

        assert len(insights["pain_points"]) == pains
        assert len(insights["outcomes"]) == outcomes

    @pytest.mark.parametrize("persona", ["Sales Director", "sales director", "Director of Sales"])
    def test_director_is_not_cto(self, persona):
        assert build_template_insights("SaaS", persona) == build_sales_director_insights("software")

    @pytest.mark.parametrize("persona,builder", [
        ("CTO", build_cto_insights),
        ("Acting CTO", build_cto_insights),
        ("Cto/Founder", build_cto_insights),
        ("Director", build_generic_persona_insights),
        ("Doctor", build_generic_persona_insights),
    ])
    def test_persona_matched_on_whole_words(self, persona, builder):
        assert build_template_insights("Construction", persona) == builder("general")

    def test_items_are_complete(self):
        insights = build_template_insights("Retail", "Sales Director")

        for item in insights["pain_points"] + insights["outcomes"]:
            assert item["title"]
            assert item["description"]
            assert 1 <= item["relevance"] <= 10

    def test_sector_note_in_cto_pain_point(self):
        healthcare = build_template_insights("Healthcare", "CTO")["pain_points"][0]["description"]
        general = build_template_insights("Construction", "CTO")["pain_points"][0]["description"]

        assert "compliance" in healthcare
        assert "compliance" not in general
        assert general.endswith("capabilities.")


# ============================================================================
# TEST: Generator
# ============================================================================

class TestPersonaInsightGenerator:

    @pytest.mark.asyncio
    async def test_local_provider(self):
        insights = await PersonaInsightGenerator().generate("Software", "CTO")
        assert len(insights["pain_points"]) == 4

    @pytest.mark.asyncio
    async def test_groq_provider(self):
        groq = Mock()
        groq.complete_json = AsyncMock(return_value={
            "pain_points": [{"title": "Churn", "description": "Users leave", "relevance": 9}],
        })

        insights = await PersonaInsightGenerator("groq", groq).generate("Software", "CTO")

        assert insights == {
            "pain_points": [{"title": "Churn", "description": "Users leave", "relevance": 9}],
            "outcomes": [],
        }
        assert "Persona: CTO" in groq.complete_json.await_args.args[0]

    @pytest.mark.asyncio
    async def test_groq_failure_falls_back_to_templates(self):
        groq = Mock()
        groq.complete_json = AsyncMock(side_effect=GroqServiceError("rate limited"))

        insights = await PersonaInsightGenerator("groq", groq).generate("Software", "CTO")

        assert insights == build_template_insights("Software", "CTO")

    @pytest.mark.asyncio
    async def test_malformed_llm_output_falls_back(self):
        groq = Mock()
        groq.complete_json = AsyncMock(return_value={"pain_points": "not a list"})

        insights = await PersonaInsightGenerator("groq", groq).generate("Retail", "Sales Director")

        assert insights == build_template_insights("Retail", "Sales Director")

    @pytest.mark.asyncio
    async def test_llm_items_normalized(self):
        groq = Mock()
        groq.complete_json = AsyncMock(return_value={
            "outcomes": [{"title": "Faster quotes", "description": "Same-day pricing", "relevance": "7"}],
        })

        insights = await PersonaInsightGenerator("groq", groq).generate("Finance", "CTO")

        assert insights["pain_points"] == []
        assert insights["outcomes"][0]["relevance"] == 7

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            PersonaInsightGenerator("openai")

    def test_groq_provider_needs_service(self):
        with pytest.raises(ValueError):
            PersonaInsightGenerator("groq")
