"""
Base scorer interface for ICP fit dimensions.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from leadgen.icp_engine.records import BusinessRecord, IcpDefinition


def normalize_text(value: Any) -> str:
    """Trim and lower-case free text; None becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip().lower()


class BaseScorer(ABC):
    """Abstract base for one scoring dimension."""

    # Points awarded per signal, overridable through config
    DEFAULT_WEIGHTS: Dict[str, int] = {}

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: {"weights": {...}} overriding DEFAULT_WEIGHTS
        """
        self.config = config or {}
        self.weights = {**self.DEFAULT_WEIGHTS, **self.config.get("weights", {})}

    @abstractmethod
    def calculate_score(self, record: BusinessRecord, icp: IcpDefinition) -> int:
        """
        Points this dimension awards to the record.

        Must never raise: absent or malformed fields count as no signal.
        """
        pass

    def get_explanation(self, record: BusinessRecord, icp: IcpDefinition, score: int) -> str:
        """Human-readable explanation of the points awarded."""
        return f"{self.__class__.__name__}: {score} point(s)"
