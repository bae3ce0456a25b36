"""
Candidate selector: rank the whole dataset against an ICP and keep the top K.
"""
import logging
from typing import List, Optional

from leadgen.icp_engine.core.dataset_cache import BusinessDatasetCache
from leadgen.icp_engine.core.scoring_engine import CandidateScorer
from leadgen.icp_engine.records import IcpDefinition, ScoredCandidate


logger = logging.getLogger(__name__)


class CandidateSelector:
    """Selects the best-fitting businesses for an ICP."""

    def __init__(self, dataset: BusinessDatasetCache, scorer: Optional[CandidateScorer] = None):
        """
        Args:
            dataset: Shared dataset cache
            scorer: Fit scorer (defaults to the standard heuristic)
        """
        self.dataset = dataset
        self.scorer = scorer or CandidateScorer()

    async def select_top_candidates(
        self,
        icp: IcpDefinition,
        candidate_count: int = 200
    ) -> List[ScoredCandidate]:
        """
        Score every record and return the top `candidate_count`.

        Ordering is by descending score; records with equal scores keep
        their dataset order (the sort is stable).

        Raises:
            ValueError: candidate_count is negative
            DatasetLoadError: the dataset could not be loaded
        """
        if candidate_count < 0:
            raise ValueError(f"candidate_count must be >= 0, got {candidate_count}")

        records = await self.dataset.load()

        scored = [
            ScoredCandidate(record=record, index=idx, score=self.scorer.score(record, icp))
            for idx, record in enumerate(records)
        ]
        scored.sort(key=lambda candidate: candidate.score, reverse=True)

        top = scored[:candidate_count]
        logger.debug(
            f"Selected {len(top)} of {len(scored)} candidates "
            f"(best score {top[0].score if top else 'n/a'})"
        )
        return top
