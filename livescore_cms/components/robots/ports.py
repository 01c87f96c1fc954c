"""
Robots component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RobotsRepoPort(Protocol):
    """Singleton robots.txt storage."""

    def get_content(self) -> str | None:
        """Stored content, or None when never saved."""
        ...

    def save_content(self, content: str) -> None:
        """Upsert the singleton row."""
        ...
