"""
Tests for redirect resolution and the rule cache.
"""

from __future__ import annotations

import pytest

from livescore_cms.components.redirects import (
    ActionKind,
    RedirectCache,
    RedirectConfig,
    RedirectResolver,
    candidate_paths,
    is_self_loop,
    normalize_path,
    should_skip,
)


@pytest.fixture
def cache(redirect_repo, clock) -> RedirectCache:
    return RedirectCache(repo=redirect_repo, ttl_seconds=30, clock=clock)


@pytest.fixture
def resolver(cache) -> RedirectResolver:
    return RedirectResolver(cache)


# --- Path Helpers ---


class TestPathHelpers:
    def test_normalize_path(self) -> None:
        assert normalize_path("") == "/"
        assert normalize_path("old") == "/old"
        assert normalize_path("//old") == "/old"
        assert normalize_path("/old/") == "/old/"

    def test_candidates_for_root(self) -> None:
        assert candidate_paths("/") == ["/"]

    def test_candidates_request_path_first(self) -> None:
        assert candidate_paths("/a") == ["/a", "/a/"]
        assert candidate_paths("/a/") == ["/a/", "/a"]

    @pytest.mark.parametrize(
        "path",
        [
            "/_next/static/chunk.js",
            "/static/logo",
            "/api/redirect-check",
            "/favicon.ico",
            "/favicon-32",
            "/robots.txt",
            "/sitemap.xml",
            "/old-page.json",
        ],
    )
    def test_skipped_paths(self, path: str) -> None:
        assert should_skip(path)

    def test_page_paths_not_skipped(self) -> None:
        assert not should_skip("/old-page")
        assert not should_skip("/blog/news/")

    def test_skip_list_from_config(self) -> None:
        config = RedirectConfig(skip_prefixes=("/internal",), skip_exact=())
        assert should_skip("/internal/x", config)
        assert not should_skip("/api/x", config)


# --- Resolution ---


class TestResolve:
    def test_redirect_example(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)

        action = resolver.apply("GET", "/old-page")
        assert action.kind is ActionKind.REDIRECT
        assert action.location == "/new-page"
        assert action.status == 301

    def test_trailing_slash_variant_matches(self, redirect_repo, resolver) -> None:
        rule = redirect_repo.add("/old-page", "/new-page", 301)

        action = resolver.apply("GET", "/old-page/")
        assert action.kind is ActionKind.REDIRECT
        assert action.rule == rule

    def test_rule_with_trailing_slash_matches_bare_request(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/promo/", "/offers", 302)

        action = resolver.apply("HEAD", "/promo")
        assert action.kind is ActionKind.REDIRECT
        assert action.status == 302

    def test_dotted_path_is_skipped(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)

        assert resolver.apply("GET", "/old-page.json").is_pass
        assert redirect_repo.list_active_calls == 0

    def test_skip_never_reads_cache(self, redirect_repo, resolver) -> None:
        for path in ["/_next/data", "/api/x", "/favicon.ico"]:
            assert resolver.apply("GET", path).is_pass
        assert redirect_repo.list_active_calls == 0

    def test_gone_example(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/gone", "", 410)

        action = resolver.apply("GET", "/gone")
        assert action.kind is ActionKind.TERMINAL
        assert action.status == 410
        assert action.body == ""
        assert action.location is None

    def test_legal_block_has_text_body(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/blocked", "", 451)

        action = resolver.apply("GET", "/blocked")
        assert action.status == 451
        assert action.body == "Unavailable For Legal Reasons"

    def test_unmapped_passes_through(self, resolver) -> None:
        assert resolver.apply("GET", "/unmapped").is_pass

    def test_non_get_methods_pass(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)

        for method in ["POST", "PUT", "DELETE", "PATCH"]:
            assert resolver.apply(method, "/old-page").is_pass

    def test_inactive_rules_ignored(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301, is_active=False)
        assert resolver.apply("GET", "/old-page").is_pass

    def test_exact_match_wins_over_variant(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/a", "/from-bare", 301)
        redirect_repo.add("/a/", "/from-slash", 301)

        assert resolver.apply("GET", "/a").location == "/from-bare"
        assert resolver.apply("GET", "/a/").location == "/from-slash"

    def test_absolute_destination_kept(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/partner", "https://partner.example.com/landing", 307)

        action = resolver.apply("GET", "/partner")
        assert action.location == "https://partner.example.com/landing"
        assert action.status == 307

    def test_unusable_type_passes(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/odd", "/target", 303)
        assert resolver.apply("GET", "/odd").is_pass


# --- Self Loops ---


class TestSelfLoop:
    def test_rule_to_itself_is_ignored(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/loop", "/loop", 301)
        assert resolver.apply("GET", "/loop").is_pass

    def test_slash_variant_loop_is_ignored(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/a", "/a/", 308)

        # /a -> /a/ is a real redirect; at /a/ the same rule would loop
        assert resolver.apply("GET", "/a").kind is ActionKind.REDIRECT
        assert resolver.apply("GET", "/a/").is_pass

    def test_absolute_url_same_host_is_loop(self, redirect_repo) -> None:
        rule = redirect_repo.add("/x", "https://www.example.com/x", 301)
        assert is_self_loop(rule, "/x", "www.example.com")
        assert is_self_loop(rule, "/x", "WWW.example.com:443")

    def test_absolute_url_other_host_is_not_loop(self, redirect_repo) -> None:
        rule = redirect_repo.add("/x", "https://other.example.com/x", 301)
        assert not is_self_loop(rule, "/x", "www.example.com")

    def test_empty_destination_is_not_loop(self, redirect_repo) -> None:
        rule = redirect_repo.add("/gone", "", 410)
        assert not is_self_loop(rule, "/gone")


# --- Cache ---


class TestRedirectCache:
    def test_built_lazily(self, redirect_repo, cache) -> None:
        assert cache.snapshot is None
        assert redirect_repo.list_active_calls == 0

        cache.rules()
        assert cache.snapshot is not None
        assert redirect_repo.list_active_calls == 1

    def test_reused_within_ttl(self, redirect_repo, cache, clock) -> None:
        cache.rules()
        clock.advance(29)
        cache.rules()
        assert redirect_repo.list_active_calls == 1

    def test_rebuilt_after_ttl(self, redirect_repo, resolver, cache, clock) -> None:
        assert resolver.apply("GET", "/new-rule").is_pass

        redirect_repo.add("/new-rule", "/target", 301)
        clock.advance(10)
        # Still the old snapshot
        assert resolver.apply("GET", "/new-rule").is_pass

        clock.advance(21)
        assert resolver.apply("GET", "/new-rule").kind is ActionKind.REDIRECT
        assert redirect_repo.list_active_calls == 2

    def test_invalidate_forces_rebuild(self, redirect_repo, cache) -> None:
        cache.rules()
        cache.invalidate()
        assert cache.snapshot is None
        cache.rules()
        assert redirect_repo.list_active_calls == 2

    def test_snapshot_is_read_only(self, redirect_repo, cache) -> None:
        redirect_repo.add("/a", "/b", 301)
        table = cache.rules()
        with pytest.raises(TypeError):
            table["/c"] = table["/a"]  # type: ignore[index]

    def test_failure_without_snapshot_passes_through(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        redirect_repo.fail_list_active = True

        assert resolver.apply("GET", "/old-page").is_pass

    def test_failure_serves_stale_snapshot(self, redirect_repo, resolver, cache, clock) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        resolver.apply("GET", "/old-page")

        redirect_repo.fail_list_active = True
        clock.advance(60)

        action = resolver.apply("GET", "/old-page")
        assert action.kind is ActionKind.REDIRECT
        assert action.location == "/new-page"

    def test_failure_retries_on_next_request(self, redirect_repo, resolver) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        redirect_repo.fail_list_active = True
        resolver.apply("GET", "/old-page")

        redirect_repo.fail_list_active = False
        assert resolver.apply("GET", "/old-page").kind is ActionKind.REDIRECT
        assert redirect_repo.list_active_calls == 2
