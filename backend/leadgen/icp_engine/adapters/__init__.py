"""
Dataset adapters.
"""
from .csv_adapter import CSVDatasetAdapter


__all__ = ["CSVDatasetAdapter"]
