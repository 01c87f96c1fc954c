"""
Redirects component - redirect rule administration and request-time resolution.
"""

from ._impl import (
    DEFAULT_CONFIG,
    RedirectConfig,
    RedirectService,
    create_redirect_service,
    is_absolute_url,
    normalize_destination,
    normalize_path,
    validate_redirect,
)
from .models import (
    REDIRECT_TYPES,
    TERMINAL_TYPES,
    ActionKind,
    RedirectAction,
    RedirectRule,
    RedirectValidationError,
)
from .ports import CacheInvalidatorPort, ClockPort, RedirectRepoPort
from .resolver import (
    CacheSnapshot,
    RedirectCache,
    RedirectResolver,
    candidate_paths,
    destination_location,
    is_self_loop,
    should_skip,
)

__all__ = [
    # Service
    "DEFAULT_CONFIG",
    "RedirectConfig",
    "RedirectService",
    "create_redirect_service",
    "validate_redirect",
    # Paths
    "is_absolute_url",
    "normalize_destination",
    "normalize_path",
    "candidate_paths",
    "should_skip",
    "destination_location",
    "is_self_loop",
    # Resolver
    "CacheSnapshot",
    "RedirectCache",
    "RedirectResolver",
    # Models
    "REDIRECT_TYPES",
    "TERMINAL_TYPES",
    "ActionKind",
    "RedirectAction",
    "RedirectRule",
    "RedirectValidationError",
    # Ports
    "CacheInvalidatorPort",
    "ClockPort",
    "RedirectRepoPort",
]
