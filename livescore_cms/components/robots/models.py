"""
Robots component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RobotsGroup:
    """One user-agent group of a robots.txt file."""

    user_agents: tuple[str, ...]
    allow: tuple[str, ...] = ()
    disallow: tuple[str, ...] = ()
    crawl_delay: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"user_agents": list(self.user_agents)}
        if self.allow:
            out["allow"] = list(self.allow)
        if self.disallow:
            out["disallow"] = list(self.disallow)
        if self.crawl_delay is not None:
            out["crawl_delay"] = self.crawl_delay
        return out


@dataclass(frozen=True)
class RobotsPolicy:
    """Parsed robots.txt."""

    groups: tuple[RobotsGroup, ...]
    sitemaps: tuple[str, ...] = ()
    host: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "sitemaps": list(self.sitemaps),
            "host": self.host,
        }


@dataclass(frozen=True)
class RobotsDocument:
    """Stored robots.txt content."""

    content: str
    is_default: bool = False
