"""ERP backend: audited storage layer and HTTP API."""

__version__ = "1.0.0"
