"""
Broken links component - outbound link checking for published posts.
"""

from ._impl import BrokenLinkScanner, extract_urls
from .models import NETWORK_ERROR_STATUS, BrokenLink, BrokenLinkValidationError, ScanResult
from .ports import BrokenLinkRepoPort

__all__ = [
    "NETWORK_ERROR_STATUS",
    "BrokenLink",
    "BrokenLinkRepoPort",
    "BrokenLinkScanner",
    "BrokenLinkValidationError",
    "ScanResult",
    "extract_urls",
]
