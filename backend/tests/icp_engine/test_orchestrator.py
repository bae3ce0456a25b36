# tests/icp_engine/test_orchestrator.py
"""
Tests for IcpAnalysisOrchestrator

Coverage:
- Projection of records to the public company shape
- Pool selection and match limit
- Persona insight refresh (skip invalid items, default relevance, rollback)

Run with: pytest backend/tests/icp_engine/test_orchestrator.py -v
"""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

from leadgen.icp_engine.core.orchestrator import (
    DEFAULT_RELEVANCE,
    IcpAnalysisOrchestrator,
    project_candidate,
)
from leadgen.icp_engine.records import BusinessRecord, IcpDefinition, ScoredCandidate
from leadgen.models import PersonaInsight
from leadgen.services.persona_insights import PersonaInsightGenerator, build_sales_director_insights


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def scored_pool():
    return [
        ScoredCandidate(record=BusinessRecord(business_name=f"Company {i}"), index=i, score=10 - i)
        for i in range(5)
    ]


@pytest.fixture
def mock_selector(scored_pool):
    selector = Mock()
    selector.select_top_candidates = AsyncMock(return_value=scored_pool)
    return selector


@pytest.fixture
def mock_generator():
    generator = Mock()
    generator.generate = AsyncMock(return_value={
        "pain_points": [{"title": "Slow reporting", "description": "Manual exports", "relevance": 9}],
        "outcomes": [{"title": "Live dashboards", "description": "One view of pipeline"}],
    })
    return generator


@pytest.fixture
def stored_lead():
    return SimpleNamespace(id=42, industry="Software", location="Austin TX", revenue="$10M+")


def added_rows(mock_db):
    return mock_db.add_all.call_args[0][0]


# ============================================================================
# TEST: Projection
# ============================================================================

class TestProjectCandidate:

    def test_empty_fields_become_none(self):
        company = project_candidate(BusinessRecord(business_name="Acme", city=""))

        assert company.business_name == "Acme"
        assert company.city is None
        assert company.web is None

    def test_email_and_phone_trimmed(self):
        company = project_candidate(BusinessRecord(email=" ceo@acme.com ", phone="   "))

        assert company.email == "ceo@acme.com"
        assert company.phone is None

    def test_camel_case_serialization(self):
        record = BusinessRecord(business_name="Acme", sic_name="Software", zip_code="78701")

        data = project_candidate(record).model_dump(by_alias=True)

        assert data["businessName"] == "Acme"
        assert data["sicName"] == "Software"
        assert data["zip"] == "78701"
        assert "score" not in data
        assert "index" not in data


# ============================================================================
# TEST: Analysis
# ============================================================================

class TestAnalyzeIcp:

    @pytest.mark.asyncio
    async def test_selects_pool_and_limits_matches(self, mock_selector, mock_generator, mock_db, stored_lead):
        orchestrator = IcpAnalysisOrchestrator(
            mock_selector, mock_generator, candidate_pool=300, match_limit=3
        )

        matches = await orchestrator.analyze_icp(mock_db, stored_lead)

        mock_selector.select_top_candidates.assert_awaited_once_with(
            IcpDefinition(industry="Software", location="Austin TX", revenue="$10M+"), 300
        )
        assert [m.business_name for m in matches] == ["Company 0", "Company 1", "Company 2"]

    @pytest.mark.asyncio
    async def test_refreshes_insights_for_each_persona(self, mock_selector, mock_generator, mock_db, stored_lead):
        orchestrator = IcpAnalysisOrchestrator(mock_selector, mock_generator)

        await orchestrator.analyze_icp(mock_db, stored_lead)

        personas = [c.args[1] for c in mock_generator.generate.await_args_list]
        assert personas == ["CTO", "Marketing Manager", "Sales Director"]
        assert all(c.args[0] == "Software" for c in mock_generator.generate.await_args_list)

    @pytest.mark.asyncio
    async def test_missing_industry_defaults_to_general(self, mock_selector, mock_generator, mock_db):
        lead = SimpleNamespace(id=7, industry=None, location=None, revenue=None)
        orchestrator = IcpAnalysisOrchestrator(mock_selector, mock_generator, personas=["CTO"])

        await orchestrator.analyze_icp(mock_db, lead)

        mock_generator.generate.assert_awaited_once_with("General", "CTO")

    @pytest.mark.asyncio
    async def test_get_candidates_passes_limit(self, mock_selector, mock_generator):
        orchestrator = IcpAnalysisOrchestrator(mock_selector, mock_generator)

        companies = await orchestrator.get_candidates(IcpDefinition(industry="x"), 2)

        mock_selector.select_top_candidates.assert_awaited_once_with(IcpDefinition(industry="x"), 2)
        assert len(companies) == 5


# ============================================================================
# TEST: Persona insight persistence
# ============================================================================

class TestSavePersonaInsights:

    @pytest.mark.asyncio
    async def test_replaces_generated_insights(self, mock_selector, mock_generator, mock_db):
        orchestrator = IcpAnalysisOrchestrator(mock_selector, mock_generator, personas=["CTO"])

        count = await orchestrator.save_persona_insights(mock_db, 42, "Software")

        assert count == 2
        mock_db.execute.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

        rows = added_rows(mock_db)
        assert all(isinstance(row, PersonaInsight) for row in rows)
        assert [row.type for row in rows] == ["pain_point", "outcome"]
        assert rows[0].relevance_score == 9
        assert rows[1].relevance_score == DEFAULT_RELEVANCE
        assert all(row.icp_id == 42 and row.is_custom is False for row in rows)
        assert all(row.status == "unassigned" for row in rows)

    @pytest.mark.asyncio
    async def test_skips_items_without_title_or_description(self, mock_selector, mock_db):
        generator = Mock()
        generator.generate = AsyncMock(return_value={
            "pain_points": [
                {"title": "", "description": "no title"},
                {"title": "No description"},
                {"title": "Valid", "description": "Kept"},
            ],
            "outcomes": None,
        })
        orchestrator = IcpAnalysisOrchestrator(mock_selector, generator, personas=["CTO"])

        count = await orchestrator.save_persona_insights(mock_db, 1, "Retail")

        assert count == 1
        assert added_rows(mock_db)[0].title == "Valid"

    @pytest.mark.asyncio
    async def test_template_insights_for_default_personas(self, mock_selector, mock_db):
        orchestrator = IcpAnalysisOrchestrator(mock_selector, PersonaInsightGenerator())

        count = await orchestrator.save_persona_insights(mock_db, 3, "SaaS")

        # CTO 4+4, Marketing Manager 3+3, Sales Director 3+3
        assert count == 20

        rows = added_rows(mock_db)
        expected_sales = build_sales_director_insights("software")
        sales_titles = [row.title for row in rows if row.persona == "Sales Director"]
        assert sales_titles == [
            item["title"] for item in expected_sales["pain_points"] + expected_sales["outcomes"]
        ]

    @pytest.mark.asyncio
    async def test_nothing_generated_still_commits(self, mock_selector, mock_db):
        generator = Mock()
        generator.generate = AsyncMock(return_value={"pain_points": [], "outcomes": []})
        orchestrator = IcpAnalysisOrchestrator(mock_selector, generator)

        assert await orchestrator.save_persona_insights(mock_db, 3, "Retail") == 0
        mock_db.add_all.assert_not_called()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, mock_selector, mock_generator, mock_db):
        mock_db.commit.side_effect = RuntimeError("connection lost")
        orchestrator = IcpAnalysisOrchestrator(mock_selector, mock_generator)

        with pytest.raises(RuntimeError):
            await orchestrator.save_persona_insights(mock_db, 42, "Software")

        mock_db.rollback.assert_awaited_once()
