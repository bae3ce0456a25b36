"""
ICP (Ideal Customer Profile) Engine.

Scores businesses from the static business dataset against an ICP and
returns the best-fitting candidates.

Main components:
- Adapters: Read the business dataset from storage (CSV)
- Scorers: Per-dimension fit scoring (industry, location, revenue)
- Core: Field mapping, dataset cache, candidate scoring, selection, orchestration

Usage:
    from leadgen.icp_engine.core import BusinessDatasetCache, CandidateSelector

    selector = CandidateSelector(BusinessDatasetCache("data/business_dataset.csv"))
    top = await selector.select_top_candidates(icp, candidate_count=100)
"""

__version__ = "1.0.0"
__all__ = ["adapters", "scorers", "core"]
