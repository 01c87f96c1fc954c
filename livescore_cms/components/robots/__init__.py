"""
Robots component - robots.txt storage, parsing and rendering.
"""

from ._impl import (
    DEFAULT_DISALLOW,
    RobotsService,
    default_robots_txt,
    normalize_base_url,
    parse_robots_txt,
    render_robots_txt,
)
from .models import RobotsDocument, RobotsGroup, RobotsPolicy
from .ports import RobotsRepoPort

__all__ = [
    "DEFAULT_DISALLOW",
    "RobotsDocument",
    "RobotsGroup",
    "RobotsPolicy",
    "RobotsRepoPort",
    "RobotsService",
    "default_robots_txt",
    "normalize_base_url",
    "parse_robots_txt",
    "render_robots_txt",
]
