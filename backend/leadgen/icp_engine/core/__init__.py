"""
ICP Engine core components.
"""
from .field_mapper import FieldMapper, DEFAULT_COLUMN_MAPPINGS
from .dataset_cache import BusinessDatasetCache
from .scoring_engine import CandidateScorer
from .selector import CandidateSelector
from .orchestrator import IcpAnalysisOrchestrator, project_candidate


__all__ = [
    "FieldMapper",
    "DEFAULT_COLUMN_MAPPINGS",
    "BusinessDatasetCache",
    "CandidateScorer",
    "CandidateSelector",
    "IcpAnalysisOrchestrator",
    "project_candidate",
]
