"""
FastAPI dependency providers for the ICP engine.

The dataset cache is created once per process and handed to the selector
and orchestrator explicitly.
"""
from functools import lru_cache

from leadgen.config import settings
from leadgen.icp_engine.core import BusinessDatasetCache, CandidateSelector, IcpAnalysisOrchestrator
from leadgen.services.persona_insights import get_persona_insight_generator


@lru_cache
def get_dataset_cache() -> BusinessDatasetCache:
    return BusinessDatasetCache(settings.DATASET_PATH)


def get_candidate_selector() -> CandidateSelector:
    return CandidateSelector(get_dataset_cache())


def get_orchestrator() -> IcpAnalysisOrchestrator:
    return IcpAnalysisOrchestrator(
        selector=get_candidate_selector(),
        insight_generator=get_persona_insight_generator(),
        candidate_pool=settings.ICP_CANDIDATE_POOL,
        match_limit=settings.ICP_MATCH_LIMIT,
    )
