#!/usr/bin/env python3
"""Tests for the alias resolver."""

import pytest

from codebundle.path_resolver import (
    AliasConfig,
    PathMatchResult,
    PathResolver,
    glob_to_regex,
    is_glob_pattern,
    literal_prefix,
    normalize_pattern,
)


class TestNormalization:
    """Tests for pattern and separator normalization."""

    def test_trailing_stars_collapse(self):
        assert normalize_pattern("@/**") == "@/*"
        assert normalize_pattern("src/***") == "src/*"

    def test_separators_collapse(self):
        assert normalize_pattern("src//components\\ui") == "src/components/ui"

    def test_alias_config_normalizes_targets(self):
        alias = AliasConfig(pattern="@/**", targets=["src//**"])
        assert alias.pattern == "@/*"
        assert alias.targets == ["src/*"]

    def test_specifier_separators_normalized(self):
        resolver = PathResolver({"@/*": ["src/*"]})
        result = resolver.resolve("@//components\\Button")
        assert result.original_path == "@/components/Button"
        assert result.resolved == ["src/components/Button"]


class TestGlobHelpers:
    """Tests for glob classification and compilation."""

    @pytest.mark.parametrize("pattern", ["@/*", "file?.ts", "#{app,lib}/x", "~[ab]/x"])
    def test_glob_patterns(self, pattern):
        assert is_glob_pattern(pattern)

    def test_literal_pattern(self):
        assert not is_glob_pattern("@lib/")

    def test_literal_prefix(self):
        assert literal_prefix("@/*") == "@/"
        assert literal_prefix("#{app,lib}/*") == "#"
        assert literal_prefix("@lib/") == "@lib/"

    def test_brace_alternation(self):
        regex = glob_to_regex("#{app,lib}/*")
        assert regex.match("#app/x")
        assert regex.match("#lib/y/z")
        assert not regex.match("#core/x")

    def test_bracket_class(self):
        regex = glob_to_regex("~[ab]/*")
        assert regex.match("~a/foo")
        assert not regex.match("~c/foo")

    def test_question_mark(self):
        regex = glob_to_regex("v?/*")
        assert regex.match("v1/api")
        assert not regex.match("v12/api")

    def test_dots_are_literal(self):
        regex = glob_to_regex("*.css")
        assert regex.match("theme.css")
        assert not regex.match("themexcss")


class TestLiteralAliases:
    """Tests for literal (non-glob) alias resolution."""

    def test_prefix_substitution(self):
        resolver = PathResolver({"@lib/": ["lib/"]})
        result = resolver.resolve("@lib/utils/format")
        assert result.matched
        assert result.used_alias == "@lib/"
        assert result.resolved == ["lib/utils/format"]

    @pytest.mark.parametrize("suffix", ["", "x", "/deep/path", "-v2"])
    def test_substitution_preserves_suffix(self, suffix):
        resolver = PathResolver({"~shared": ["packages/shared"]})
        assert resolver.resolve("~shared" + suffix).resolved == ["packages/shared" + suffix]

    def test_longer_literal_wins(self):
        resolver = PathResolver({"@": ["root"], "@lib": ["lib"]})
        result = resolver.resolve("@lib/x")
        assert result.used_alias == "@lib"
        assert result.resolved == ["lib/x"]

    def test_literal_outranks_glob(self):
        resolver = PathResolver({"@/components/*": ["ui/*"], "@/": ["src/"]})
        result = resolver.resolve("@/components/Button")
        assert result.used_alias == "@/"
        assert result.resolved == ["src/components/Button"]

    def test_literal_outranks_glob_regardless_of_order(self):
        resolver = PathResolver()
        resolver.add_alias("@/*", ["src/*"])
        resolver.add_alias("@/lib", ["vendor/lib"])
        result = resolver.resolve("@/lib/x")
        assert result.used_alias == "@/lib"
        assert result.resolved == ["vendor/lib/x"]


class TestGlobAliases:
    """Tests for glob alias resolution."""

    def test_wildcard(self):
        resolver = PathResolver({"@/*": ["src/*"]})
        result = resolver.resolve("@/components/Button")
        assert result.matched
        assert result.resolved == ["src/components/Button"]

    def test_longer_glob_tried_first(self):
        resolver = PathResolver({"@/*": ["src/*"], "@/components/*": ["ui/*"]})
        assert resolver.resolve("@/components/Button").resolved == ["ui/Button"]

    def test_non_matching_glob_falls_through(self):
        resolver = PathResolver({"@/*.css": ["styles/*"], "@/*": ["src/*"]})
        assert resolver.resolve("@/theme.css").resolved == ["styles/theme.css"]
        assert resolver.resolve("@/button").resolved == ["src/button"]

    def test_brace_alias_swaps_only_prefix(self):
        resolver = PathResolver({"#{app,lib}/*": ["src/*"]})
        result = resolver.resolve("#app/x")
        assert result.matched
        assert result.resolved == ["src/app/x"]

    def test_multiple_targets_in_order(self):
        resolver = PathResolver({"#/*": ["src/*", "shared/*"]})
        assert resolver.resolve("#/types").resolved == ["src/types", "shared/types"]

    def test_ties_keep_declaration_order(self):
        first = PathResolver({"@/*x": ["a/*"], "@/x*": ["b/*"]})
        assert first.resolve("@/x-x").used_alias == "@/*x"
        assert first.resolve("@/x-x").resolved == ["a/x-x"]

        second = PathResolver({"@/x*": ["b/*"], "@/*x": ["a/*"]})
        assert second.resolve("@/x-x").used_alias == "@/x*"
        assert second.resolve("@/x-x").resolved == ["b/-x"]


class TestUnmatched:
    """Tests for passthrough behavior."""

    def test_no_match_returns_original(self):
        resolver = PathResolver({"@/*": ["src/*"]})
        result = resolver.resolve("react")
        assert result == PathMatchResult(original_path="react", matched=False, resolved=["react"])

    @pytest.mark.parametrize("alias_map", [None, {}])
    def test_missing_alias_map(self, alias_map):
        resolver = PathResolver(alias_map)
        result = resolver.resolve("@/x")
        assert not result.matched
        assert result.resolved == ["@/x"]

    def test_malformed_alias_map_does_not_raise(self, caplog):
        resolver = PathResolver(["@/*"])
        assert resolver.resolve("@/x").resolved == ["@/x"]
        assert "Ignoring alias map" in caplog.text

    def test_malformed_entry_skipped(self):
        resolver = PathResolver({"@/*": 42, "~/*": ["lib/*"]})
        assert len(resolver.aliases) == 1
        assert resolver.resolve("~/a").resolved == ["lib/a"]


class TestMutation:
    """Tests for add_alias and clear_aliases."""

    def test_add_alias_chaining(self):
        resolver = PathResolver().add_alias("@/*", "src/*").add_alias("~/", ["lib/"])
        assert len(resolver.aliases) == 2
        assert resolver.resolve("~/a").resolved == ["lib/a"]

    def test_add_alias_affects_later_calls(self):
        resolver = PathResolver({"@/*": ["src/*"]})
        assert resolver.resolve("@/components/A").resolved == ["src/components/A"]
        resolver.add_alias("@/components/*", ["ui/*"])
        assert resolver.resolve("@/components/A").resolved == ["ui/A"]

    def test_add_alias_replaces_existing_pattern(self):
        resolver = PathResolver({"@/*": ["src/*"]})
        resolver.add_alias("@/**", ["app/*"])
        assert len(resolver.aliases) == 1
        assert resolver.resolve("@/x").resolved == ["app/x"]

    def test_clear_aliases(self):
        resolver = PathResolver({"@/*": ["src/*"]}).clear_aliases()
        assert not resolver.resolve("@/x").matched

    def test_resolve_is_repeatable(self):
        resolver = PathResolver({"@/*": ["src/*"], "@lib/": ["lib/"]})
        assert resolver.resolve("@lib/a") == resolver.resolve("@lib/a")
