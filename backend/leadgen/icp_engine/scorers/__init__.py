"""
Scorer factory and registry.
"""
from typing import Any, Dict, Optional

from .base import BaseScorer, normalize_text
from .industry_scorer import IndustryScorer
from .location_scorer import LocationScorer
from .revenue_scorer import RevenueScorer

# Registry of available scoring dimensions
SCORER_REGISTRY = {
    "industry": IndustryScorer,
    "location": LocationScorer,
    "revenue": RevenueScorer,
}


def get_scorer(scorer_type: str, config: Optional[Dict[str, Any]] = None) -> BaseScorer:
    """
    Factory function to create appropriate scorer.

    Args:
        scorer_type: Dimension name (industry, location, revenue)
        config: Scorer configuration

    Returns:
        Instantiated scorer

    Raises:
        ValueError: If scorer_type not found in registry
    """
    scorer_class = SCORER_REGISTRY.get(scorer_type)

    if not scorer_class:
        raise ValueError(
            f"Unknown scorer type: {scorer_type}. "
            f"Available: {list(SCORER_REGISTRY.keys())}"
        )

    return scorer_class(config)


__all__ = [
    "BaseScorer",
    "IndustryScorer",
    "LocationScorer",
    "RevenueScorer",
    "SCORER_REGISTRY",
    "get_scorer",
    "normalize_text",
]
