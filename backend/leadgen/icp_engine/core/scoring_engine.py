"""
Scoring engine for candidate businesses.

Sums the industry, location and revenue dimensions into one integer fit
score. A record with no signal at all still scores 1, so a full ranking can
always be produced.
"""
from typing import Any, Dict, Optional, Sequence

from leadgen.icp_engine.records import BusinessRecord, IcpDefinition
from leadgen.icp_engine.scorers import BaseScorer, get_scorer


DEFAULT_DIMENSIONS = ("industry", "location", "revenue")

# Score given when no dimension matched
MIN_SCORE = 1


class CandidateScorer:
    """
    Heuristic ICP fit scorer.

    Pure and deterministic: no I/O, no state beyond the configured
    dimension scorers.
    """

    def __init__(
        self,
        dimensions: Sequence[str] = DEFAULT_DIMENSIONS,
        scorer_config: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """
        Args:
            dimensions: Registered scorer names to apply
            scorer_config: Optional per-dimension config, e.g.
                {"industry": {"weights": {"full_match": 6}}}
        """
        scorer_config = scorer_config or {}
        self.scorers: Dict[str, BaseScorer] = {
            name: get_scorer(name, scorer_config.get(name))
            for name in dimensions
        }

    def score(self, record: BusinessRecord, icp: IcpDefinition) -> int:
        """
        Calculate the fit score of one record against an ICP.

        Returns:
            Integer score >= 1
        """
        total = sum(scorer.calculate_score(record, icp) for scorer in self.scorers.values())
        return total or MIN_SCORE

    def explain(self, record: BusinessRecord, icp: IcpDefinition) -> Dict[str, Any]:
        """
        Per-dimension breakdown of a score, for debugging.

        Returns:
            dict: {
                "score": int,
                "dimensions": {name: {"points": int, "explanation": str}},
                "floored": bool
            }
        """
        dimensions = {}
        total = 0
        for name, scorer in self.scorers.items():
            points = scorer.calculate_score(record, icp)
            total += points
            dimensions[name] = {
                "points": points,
                "explanation": scorer.get_explanation(record, icp, points),
            }

        return {
            "score": total or MIN_SCORE,
            "dimensions": dimensions,
            "floored": total == 0,
        }
