"""
Location fit: city, state and zip looked up inside the ICP location text.
"""
from typing import List

from leadgen.icp_engine.records import BusinessRecord, IcpDefinition
from .base import BaseScorer, normalize_text


class LocationScorer(BaseScorer):
    """
    The ICP location is one blob that may hold city, state and/or zip.
    Each of the record's non-empty city, state and zip found in it adds
    its own weight; the three stack.
    """

    DEFAULT_WEIGHTS = {"city": 4, "state": 2, "zip": 1}

    def _matched_parts(self, record: BusinessRecord, icp: IcpDefinition) -> List[str]:
        location = normalize_text(icp.location)
        if not location:
            return []

        parts = {
            "city": normalize_text(record.city),
            "state": normalize_text(record.state),
            "zip": normalize_text(record.zip_code),
        }
        return [name for name, value in parts.items() if value and value in location]

    def calculate_score(self, record: BusinessRecord, icp: IcpDefinition) -> int:
        return sum(self.weights[part] for part in self._matched_parts(record, icp))

    def get_explanation(self, record: BusinessRecord, icp: IcpDefinition, score: int) -> str:
        matched = self._matched_parts(record, icp)
        if not matched:
            return "No location match"
        return f"Location match on {', '.join(matched)}"
