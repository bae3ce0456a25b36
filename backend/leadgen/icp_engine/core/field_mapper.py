"""
Field mapper for turning raw dataset rows into BusinessRecords.

Maps CSV columns to the typed record fields through an explicit mapping.
"""
from dataclasses import fields
from typing import Callable, Dict, Iterable, List, Optional
import logging

from leadgen.icp_engine.records import BusinessRecord


logger = logging.getLogger(__name__)


# record field -> "CSV COLUMN|transformations"
DEFAULT_COLUMN_MAPPINGS: Dict[str, str] = {
    "business_name": "BUSINESS NAME|trim",
    "email": "EMAIL|trim",
    "phone": "AREA CODE AND PHONE|trim",
    "mailing_address": "MAILING ADDRESS|trim",
    "city": "MAILING CITY|trim",
    "state": "MAILING STATE|trim",
    "zip_code": "MAILING ZIP|trim",
    "sales_volume": "SALES VOLUME|trim",
    "employees": "NUMBER OF EMPLOYEES|trim",
    "public_private": "PUBLIC PRIVATE COMPANY|trim",
    "location_type": "LOCATION TYPE|trim",
    "sic_name": "SIC NAME1|trim",
    "sic": "SIC|trim",
    "naics": "NAICS|trim",
    "first_name": "FIRSTNAME|trim",
    "last_name": "LASTNAME|trim",
    "title": "TITLE|trim",
    "web": "WEB ADDRESS|trim",
}


class FieldMapper:
    """
    Maps source columns to BusinessRecord fields with transformations.

    Supports:
    - Direct mapping: {"email": "EMAIL"}
    - Transformations: {"email": "EMAIL|trim|lowercase"}

    Columns missing from a row map to the empty string (absent).
    """

    def __init__(self, field_mappings: Optional[Dict[str, str]] = None):
        """
        Args:
            field_mappings: Dict mapping record_field -> source column
        """
        self.field_mappings = field_mappings or DEFAULT_COLUMN_MAPPINGS
        self.transformers: Dict[str, Callable[[str], str]] = {}
        self._register_default_transformers()

        record_fields = {f.name for f in fields(BusinessRecord)}
        unknown = set(self.field_mappings) - record_fields
        if unknown:
            raise ValueError(f"Unknown BusinessRecord fields in mapping: {sorted(unknown)}")

    def _register_default_transformers(self):
        """Register built-in transformation functions."""
        self.transformers["lowercase"] = lambda x: x.lower()
        self.transformers["trim"] = lambda x: x.strip()

    def register_transformer(self, name: str, func: Callable[[str], str]):
        """
        Register a custom transformer function.

        Args:
            name: Transformer name
            func: Function that takes a string and returns the transformed string
        """
        self.transformers[name] = func

    @staticmethod
    def _split(mapping: str):
        if "|" in mapping:
            column, transformations = mapping.split("|", 1)
            return column.strip(), transformations
        return mapping.strip(), None

    def _apply_transformations(self, value: str, transformations: Optional[str]) -> str:
        """Apply a pipe-separated transformation pipeline like "trim|lowercase"."""
        if not transformations or not value:
            return value

        result = value
        for transformer_name in transformations.split("|"):
            transformer = self.transformers.get(transformer_name.strip())
            if transformer:
                result = transformer(result)
        return result

    @property
    def source_columns(self) -> List[str]:
        return [self._split(mapping)[0] for mapping in self.field_mappings.values()]

    def missing_columns(self, header: Iterable[str]) -> List[str]:
        """Mapped columns that the dataset header does not contain."""
        present = set(header)
        return [column for column in self.source_columns if column not in present]

    def map_fields(self, row: Dict[str, Optional[str]]) -> BusinessRecord:
        """
        Map one raw row to a BusinessRecord.

        Args:
            row: Raw CSV row keyed by header column

        Returns:
            Immutable BusinessRecord
        """
        values = {}
        for record_field, mapping in self.field_mappings.items():
            column, transformations = self._split(mapping)
            value = row.get(column)
            if value is None:
                value = ""
            values[record_field] = self._apply_transformations(str(value), transformations)
        return BusinessRecord(**values)

    def map_batch(self, rows: Iterable[Dict[str, Optional[str]]]) -> List[BusinessRecord]:
        """Map a batch of raw rows, preserving order."""
        return [self.map_fields(row) for row in rows]
