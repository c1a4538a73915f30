"""Client for the api-colombia.com REST catalog."""

from .client import DEFAULT_BASE_URL, ApiColombiaClient, UpstreamClient, UpstreamError
from .operations import OPERATIONS, UpstreamOperation, get_operation

__all__ = [
    "DEFAULT_BASE_URL",
    "OPERATIONS",
    "ApiColombiaClient",
    "UpstreamClient",
    "UpstreamError",
    "UpstreamOperation",
    "get_operation",
]
