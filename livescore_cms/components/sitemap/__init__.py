"""
Sitemap component - sitemap settings, custom links and sitemap.xml generation.
"""

from ._impl import (
    DEFAULT_RESERVED_SLUGS,
    SitemapService,
    clamp_priority,
    dedupe,
    render_sitemap_xml,
    to_absolute,
)
from .models import (
    CHANGE_FREQUENCIES,
    SitemapEntry,
    SitemapLink,
    SitemapSettings,
    SitemapValidationError,
)
from .ports import SitemapRepoPort

__all__ = [
    "CHANGE_FREQUENCIES",
    "DEFAULT_RESERVED_SLUGS",
    "SitemapEntry",
    "SitemapLink",
    "SitemapRepoPort",
    "SitemapService",
    "SitemapSettings",
    "SitemapValidationError",
    "clamp_priority",
    "dedupe",
    "render_sitemap_xml",
    "to_absolute",
]
