"""
Broken links component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# Status recorded when the request itself failed (DNS, refused, timeout)
NETWORK_ERROR_STATUS = 0


@dataclass(frozen=True)
class BrokenLink:
    link_url: str
    source_slug: str
    source_title: str
    status_code: int
    checked_at: datetime
    id: int | None = None


@dataclass(frozen=True)
class ScanResult:
    checked: int
    broken: tuple[BrokenLink, ...]

    @property
    def count(self) -> int:
        return len(self.broken)


@dataclass(frozen=True)
class BrokenLinkValidationError:
    code: str
    message: str
    field: str | None = None
