"""Exceptions raised by the ICP engine."""


class LeadgenError(Exception):
    """Base class for lead generation errors."""


class DatasetLoadError(LeadgenError):
    """Business dataset is missing, unreadable or not valid tabular data."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load business dataset '{path}': {reason}")
