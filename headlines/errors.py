from typing import Optional


class HeadlinesError(Exception):
    """Base exception for the headlines service"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProviderError(HeadlinesError):
    """Upstream news API failures (absorbed by the feeds)"""
    pass


class StoreError(HeadlinesError):
    """Key/value store I/O failures"""
    pass
