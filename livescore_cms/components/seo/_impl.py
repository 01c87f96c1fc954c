"""
SeoService - layered SEO documents.

Each scope (global, match, league, player, page:<slug>) has a built-in template.
Admins store partial overrides; readers always get template <- override merged.

Key behaviors:
- Dicts merge recursively, lists and scalars are replaced
- A key missing from the override keeps the template value
- A key set to None in the override clears it
- Neither input is mutated
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .models import SeoDocument, SeoMeta, SeoValidationError
from .ports import SeoRepoPort
from .templates import TEMPLATES

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_ELLIPSIS = "…"


# --- Merge ---


def deep_merge(base: Any, override: Any) -> Any:
    """Return a new value with override layered over base."""
    if isinstance(base, Mapping) and isinstance(override, Mapping):
        out = {k: copy.deepcopy(v) for k, v in base.items()}
        for key, value in override.items():
            out[key] = deep_merge(base.get(key), value)
        return out
    return copy.deepcopy(override)


# --- Text Helpers ---


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, max_len: int) -> str:
    """Cut at a word boundary when one is reasonably close, then add an ellipsis."""
    text = normalize_whitespace(text)
    if len(text) <= max_len:
        return text
    sliced = text[: max_len - 1]
    last_space = sliced.rfind(" ")
    if last_space > 40:
        sliced = sliced[:last_space]
    return sliced.rstrip() + _ELLIPSIS


def fill_template(template: str, variables: Mapping[str, Any]) -> str:
    """Replace {name} placeholders; unknown placeholders are left in place."""
    out = template
    for key, value in variables.items():
        out = out.replace("{" + key + "}", str(value))
    return out


# --- Service ---


@dataclass(frozen=True)
class SeoLimitsConfig:
    title_max: int = 60
    description_max: int = 155


class SeoService:
    """Read/write layered SEO documents for one site."""

    def __init__(
        self,
        repo: SeoRepoPort,
        site_key: str = "livescore",
        scopes: Iterable[str] | None = None,
        limits: SeoLimitsConfig | None = None,
        templates: Mapping[str, dict[str, Any]] | None = None,
    ) -> None:
        self._repo = repo
        self._site_key = site_key
        self._templates = dict(templates if templates is not None else TEMPLATES)
        self._scopes = tuple(scopes) if scopes is not None else tuple(self._templates)
        self._limits = limits or SeoLimitsConfig()

    @property
    def scopes(self) -> tuple[str, ...]:
        return self._scopes

    def is_known_scope(self, scope: str) -> bool:
        return scope in self._scopes

    def get(self, scope: str) -> SeoDocument | None:
        """Template merged with the stored override; None for unknown scopes."""
        if not self.is_known_scope(scope):
            return None
        template = self._templates.get(scope, {})
        stored = self._repo.get(self._site_key, scope)
        data = deep_merge(template, stored) if stored else copy.deepcopy(template)
        return SeoDocument(scope=scope, data=data, is_default=not stored)

    def save(
        self,
        scope: str,
        data: Any,
    ) -> tuple[SeoDocument | None, list[SeoValidationError]]:
        if not self.is_known_scope(scope):
            return None, [
                SeoValidationError(code="unknown_scope", message=f"Unknown SEO scope: {scope}")
            ]
        if not isinstance(data, dict):
            return None, [
                SeoValidationError(code="invalid_body", message="SEO document must be a JSON object")
            ]

        self._repo.save(self._site_key, scope, data)
        logger.info("SEO document %s/%s saved", self._site_key, scope)
        return self.get(scope), []

    def build_meta(self, scope: str, section: str, variables: Mapping[str, Any]) -> SeoMeta | None:
        """Fill the scope's title/description/h1 patterns with page variables."""
        doc = self.get(scope)
        if doc is None:
            return None

        brand = self.get("global") if self.is_known_scope("global") else None
        brand_name = ""
        if brand is not None:
            brand_name = str((brand.data.get("brand") or {}).get("siteName", ""))

        values = {"brand": brand_name, **variables}
        patterns = doc.data.get(section) or {}
        title = fill_template(str(patterns.get("titlePattern", "")), values)
        description = fill_template(str(patterns.get("descriptionPattern", "")), values)
        h1 = fill_template(str(patterns.get("h1Pattern", "")), values)

        return SeoMeta(
            title=truncate(title, self._limits.title_max),
            description=truncate(description, self._limits.description_max),
            h1=normalize_whitespace(h1),
        )
