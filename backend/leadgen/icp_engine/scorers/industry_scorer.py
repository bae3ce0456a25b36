"""
Industry fit against the record's SIC classifier name.
"""
from leadgen.icp_engine.records import BusinessRecord, IcpDefinition
from .base import BaseScorer, normalize_text


class IndustryScorer(BaseScorer):
    """
    Full ICP industry substring of the classifier scores `full_match`;
    otherwise any whitespace-delimited ICP token in the classifier scores
    `token_match`.
    """

    DEFAULT_WEIGHTS = {"full_match": 6, "token_match": 3}

    def calculate_score(self, record: BusinessRecord, icp: IcpDefinition) -> int:
        industry = normalize_text(icp.industry)
        if not industry:
            return 0

        sic_name = normalize_text(record.sic_name)
        if industry in sic_name:
            return self.weights["full_match"]

        if any(token in sic_name for token in industry.split()):
            return self.weights["token_match"]

        return 0

    def get_explanation(self, record: BusinessRecord, icp: IcpDefinition, score: int) -> str:
        if score == self.weights["full_match"]:
            return f"Industry '{icp.industry}' found in '{record.sic_name}'"
        elif score:
            return f"Industry keyword from '{icp.industry}' found in '{record.sic_name}'"
        return "No industry match"
