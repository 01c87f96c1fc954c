"""
RobotsService - robots.txt storage, parsing and rendering.

Key behaviors:
- Comments and blank lines are ignored; directive names are case-insensitive
- Consecutive User-agent lines share one group; a User-agent after a directive
  starts a new group
- A group without directives allows everything
- Sitemap and Host are global; without Sitemap lines the site sitemap is used
- Public output never fails: storage errors fall back to the default file
"""

from __future__ import annotations

import logging
import math

from .models import RobotsDocument, RobotsGroup, RobotsPolicy
from .ports import RobotsRepoPort

logger = logging.getLogger(__name__)

DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_DISALLOW = ("/api/", "/admin/")


def normalize_base_url(value: str | None) -> str:
    return (value or "").rstrip("/") or DEFAULT_SITE_URL


def _uniq(values: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(v for v in values if v))


def _clean_line(line: str) -> str:
    return line.split("#", 1)[0].strip()


def _split_directive(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition(":")
    if not sep:
        return None
    key = key.strip().lower()
    if not key:
        return None
    return key, value.strip()


def _make_group(
    agents: list[str],
    allow: list[str],
    disallow: list[str],
    crawl_delay: float | None,
) -> RobotsGroup | None:
    user_agents = _uniq(agents)
    if not user_agents:
        return None

    allow_t = _uniq(allow)
    disallow_t = _uniq(disallow)
    if not allow_t and not disallow_t and crawl_delay is None:
        allow_t = ("/",)

    return RobotsGroup(
        user_agents=user_agents,
        allow=allow_t,
        disallow=disallow_t,
        crawl_delay=crawl_delay,
    )


def parse_robots_txt(content: str, fallback_sitemap: str | None = None) -> RobotsPolicy:
    """Parse robots.txt content into a structured policy."""
    lines = [_clean_line(line) for line in content.replace("\r\n", "\n").split("\n")]

    groups: list[RobotsGroup] = []
    sitemaps: list[str] = []
    host: str | None = None

    agents: list[str] = []
    allow: list[str] = []
    disallow: list[str] = []
    crawl_delay: float | None = None
    seen_directive = False

    def flush() -> None:
        group = _make_group(agents, allow, disallow, crawl_delay)
        if group is not None:
            groups.append(group)

    for line in lines:
        if not line:
            continue
        directive = _split_directive(line)
        if directive is None:
            continue
        key, value = directive

        if key == "host":
            if value:
                host = value
        elif key == "sitemap":
            if value:
                sitemaps.append(value)
        elif key == "user-agent":
            if agents and seen_directive:
                flush()
                agents, allow, disallow = [], [], []
                crawl_delay = None
                seen_directive = False
            agents.append(value or "*")
        elif key == "allow":
            seen_directive = True
            allow.append(value)
        elif key == "disallow":
            seen_directive = True
            disallow.append(value)
        elif key == "crawl-delay":
            seen_directive = True
            try:
                delay = float(value)
            except ValueError:
                continue
            if math.isfinite(delay):
                crawl_delay = delay

    if agents:
        flush()

    if not groups:
        groups = [RobotsGroup(user_agents=("*",), allow=("/",))]

    sitemap_t = _uniq(sitemaps)
    if not sitemap_t and fallback_sitemap:
        sitemap_t = (fallback_sitemap,)

    return RobotsPolicy(groups=tuple(groups), sitemaps=sitemap_t, host=host)


def _format_delay(delay: float) -> str:
    return str(int(delay)) if delay.is_integer() else str(delay)


def render_robots_txt(policy: RobotsPolicy) -> str:
    """Render a policy back to robots.txt text."""
    blocks: list[str] = []
    for group in policy.groups:
        lines = [f"User-agent: {agent}" for agent in group.user_agents]
        lines += [f"Allow: {path}" for path in group.allow]
        lines += [f"Disallow: {path}" for path in group.disallow]
        if group.crawl_delay is not None:
            lines.append(f"Crawl-delay: {_format_delay(group.crawl_delay)}")
        blocks.append("\n".join(lines))

    tail: list[str] = []
    if policy.host:
        tail.append(f"Host: {policy.host}")
    tail += [f"Sitemap: {url}" for url in policy.sitemaps]
    if tail:
        blocks.append("\n".join(tail))

    return "\n\n".join(blocks) + "\n"


def default_robots_txt(site_url: str | None, disallow: tuple[str, ...] = DEFAULT_DISALLOW) -> str:
    base = normalize_base_url(site_url)
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in disallow]
    return "\n".join(lines) + f"\n\nSitemap: {base}/sitemap.xml"


class RobotsService:
    """Admin and public access to robots.txt."""

    def __init__(
        self,
        repo: RobotsRepoPort,
        site_url: str | None = None,
        default_disallow: tuple[str, ...] = DEFAULT_DISALLOW,
    ) -> None:
        self._repo = repo
        self._site_url = normalize_base_url(site_url)
        self._default_disallow = default_disallow

    @property
    def fallback_sitemap(self) -> str:
        return f"{self._site_url}/sitemap.xml"

    def get_document(self) -> RobotsDocument:
        content = self._repo.get_content()
        return RobotsDocument(content=content or "", is_default=not content)

    def save(self, content: str) -> RobotsDocument:
        self._repo.save_content(content)
        logger.info("robots.txt updated (%d bytes)", len(content))
        return RobotsDocument(content=content, is_default=not content)

    def default_content(self) -> str:
        return default_robots_txt(self._site_url, self._default_disallow)

    def public_policy(self) -> RobotsPolicy:
        try:
            content = (self._repo.get_content() or "").strip()
        except Exception:
            logger.exception("robots.txt lookup failed; serving default")
            content = ""

        return parse_robots_txt(content or self.default_content(), self.fallback_sitemap)

    def render_public(self) -> str:
        return render_robots_txt(self.public_policy())
