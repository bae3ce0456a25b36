"""
Revenue band fit from the record's sales-volume text.
"""
from leadgen.icp_engine.records import BusinessRecord, IcpDefinition
from .base import BaseScorer, normalize_text


class RevenueScorer(BaseScorer):
    """
    "million" sales volume with an "m" in the ICP revenue scores `million`;
    "billion" with a "b" scores `billion`. The checks are independent.
    """

    DEFAULT_WEIGHTS = {"million": 2, "billion": 2}

    def calculate_score(self, record: BusinessRecord, icp: IcpDefinition) -> int:
        revenue = normalize_text(icp.revenue)
        sales_volume = normalize_text(record.sales_volume)
        if not revenue or not sales_volume:
            return 0

        score = 0
        if "million" in sales_volume and "m" in revenue:
            score += self.weights["million"]
        if "billion" in sales_volume and "b" in revenue:
            score += self.weights["billion"]
        return score

    def get_explanation(self, record: BusinessRecord, icp: IcpDefinition, score: int) -> str:
        if score:
            return f"Sales volume '{record.sales_volume}' fits revenue '{icp.revenue}'"
        return "No revenue match"
