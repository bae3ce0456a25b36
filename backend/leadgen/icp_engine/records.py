"""
Typed records flowing through the ICP engine.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class BusinessRecord:
    """One row of the business dataset. Empty string means absent."""

    business_name: str = ""
    email: str = ""
    phone: str = ""
    mailing_address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    sales_volume: str = ""
    employees: str = ""
    public_private: str = ""
    location_type: str = ""
    sic_name: str = ""
    sic: str = ""
    naics: str = ""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    web: str = ""


@dataclass(frozen=True)
class IcpDefinition:
    """Targeting criteria authored by a user."""

    industry: Optional[str] = None
    location: Optional[str] = None
    revenue: Optional[str] = None

    @classmethod
    def from_lead(cls, lead: Any) -> "IcpDefinition":
        """Build criteria from a stored lead row (or anything with the same attributes)."""
        return cls(
            industry=getattr(lead, "industry", None),
            location=getattr(lead, "location", None),
            revenue=getattr(lead, "revenue", None),
        )


@dataclass(frozen=True)
class ScoredCandidate:
    """A record, its position in the dataset and its fit score."""

    record: BusinessRecord
    index: int
    score: int
