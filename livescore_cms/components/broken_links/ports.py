"""
Broken links component port definitions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import BrokenLink


class BrokenLinkRepoPort(Protocol):
    def list_all(self) -> list[BrokenLink]:
        """Report rows, most recently checked first."""
        ...

    def add(self, link: BrokenLink) -> BrokenLink:
        ...

    def replace_all(self, links: Sequence[BrokenLink]) -> None:
        """Drop the previous report and store this one."""
        ...
