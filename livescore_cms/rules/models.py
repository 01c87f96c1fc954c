from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RedirectRules(BaseModel):
    cache_ttl_seconds: float = 30.0
    allowed_types: list[int] = Field(default_factory=lambda: [301, 302, 307, 308, 410, 451])
    skip_prefixes: list[str] = Field(
        default_factory=lambda: ["/_next", "/static", "/api", "/favicon"]
    )
    skip_exact: list[str] = Field(default_factory=lambda: ["/robots.txt", "/sitemap.xml"])


class RobotsRules(BaseModel):
    default_disallow: list[str] = Field(default_factory=lambda: ["/api/", "/admin/"])
    cache_max_age_seconds: int = 3600


class SitemapPriorities(BaseModel):
    home: float = 1.0
    post: float = 0.9
    page: float = 0.8


class SitemapRules(BaseModel):
    default_priorities: SitemapPriorities = Field(default_factory=SitemapPriorities)
    reserved_slugs: list[str]
    allowed_frequencies: list[str]


class BrokenLinkRules(BaseModel):
    timeout_seconds: float = 5.0
    max_concurrency: int = 8


class SeoLimits(BaseModel):
    title_max: int = 60
    description_max: int = 155


class SeoRules(BaseModel):
    site_key: str
    scopes: list[str]
    limits: SeoLimits = Field(default_factory=SeoLimits)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    redirects: RedirectRules
    robots: RobotsRules
    sitemap: SitemapRules
    broken_links: BrokenLinkRules
    seo: SeoRules
    ops: OpsRules
