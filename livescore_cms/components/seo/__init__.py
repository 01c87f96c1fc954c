"""
SEO component - layered SEO documents and meta text helpers.
"""

from ._impl import (
    SeoLimitsConfig,
    SeoService,
    deep_merge,
    fill_template,
    normalize_whitespace,
    truncate,
)
from .models import SeoDocument, SeoMeta, SeoValidationError
from .ports import SeoRepoPort
from .templates import TEMPLATES

__all__ = [
    "TEMPLATES",
    "SeoDocument",
    "SeoLimitsConfig",
    "SeoMeta",
    "SeoRepoPort",
    "SeoService",
    "SeoValidationError",
    "deep_merge",
    "fill_template",
    "normalize_whitespace",
    "truncate",
]
