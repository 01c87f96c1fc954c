"""Default SEO documents; stored documents are deep-merged over these."""

from __future__ import annotations

from typing import Any

GLOBAL_TEMPLATE: dict[str, Any] = {
    "schemaVersion": 1,
    "brand": {
        "siteName": "Live Score",
        "siteUrl": "",
        "tagline": "Scores. Right Now.",
        "logoUrl": "/brand/logo.svg",
        "titlePrefix": "",
        "titleSuffix": "",
        "defaultOgImage": "/og.png",
        "defaultMetaDescription": (
            "Live scores, results, fixtures and stats across football, basketball, "
            "NFL, hockey, rugby, volleyball and more."
        ),
        "locale": "en_US",
    },
    "labels": {
        "sportLabels": {
            "football": "Football",
            "basketball": "Basketball",
            "nfl": "NFL",
            "hockey": "Hockey",
            "baseball": "Baseball",
            "rugby": "Rugby",
            "volleyball": "Volleyball",
        },
    },
    "footer": {
        "aboutText": "{siteName} delivers fast, real-time scores, fixtures and results.",
        "socials": {"twitter": "#", "facebook": "#", "instagram": "#", "youtube": "#"},
    },
}

MATCH_TEMPLATE: dict[str, Any] = {
    "schemaVersion": 1,
    "match": {
        "primaryKeyword": "live score",
        "titlePattern": "{home} vs {away} Live Score",
        "descriptionPattern": (
            "Live score updates of {home} vs {away} with goals, lineups and match "
            "timeline. Fast updates on {brand}."
        ),
        "h1Pattern": "LIVE: {home} vs {away}",
        "og": {"bannerPath": "/og/match/{sport}/{id}", "fallbackImage": "/og.png"},
    },
}

LEAGUE_TEMPLATE: dict[str, Any] = {
    "schemaVersion": 1,
    "league": {
        "titlePattern": "{league} Scores, Fixtures & Standings",
        "descriptionPattern": "{league} live scores, fixtures, results and standings on {brand}.",
        "h1Pattern": "{league}",
    },
}

PLAYER_TEMPLATE: dict[str, Any] = {
    "schemaVersion": 1,
    "player": {
        "titlePattern": "{player} Stats & Profile",
        "descriptionPattern": "{player} profile, career stats and recent form on {brand}.",
        "h1Pattern": "{player}",
    },
}


def _page_template(slug: str, title: str, description: str) -> dict[str, Any]:
    return {
        "schemaVersion": 1,
        "slug": slug,
        "seo": {
            "title": title,
            "description": description,
            "h1": title,
            "canonical": f"/{slug}",
            "robots": {"index": True, "follow": True},
            "keywords": [],
            "ogImage": "/og.png",
        },
    }


TEMPLATES: dict[str, dict[str, Any]] = {
    "global": GLOBAL_TEMPLATE,
    "match": MATCH_TEMPLATE,
    "league": LEAGUE_TEMPLATE,
    "player": PLAYER_TEMPLATE,
    "page:contact": _page_template(
        "contact", "Contact Us", "Contact us for support, bug reports, and feedback."
    ),
    "page:privacy-policy": _page_template(
        "privacy-policy", "Privacy Policy", "How we collect, use and protect your data."
    ),
    "page:terms-of-service": _page_template(
        "terms-of-service", "Terms of Service", "The terms that govern use of this site."
    ),
}
