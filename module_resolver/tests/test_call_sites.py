from __future__ import annotations

import pytest

from module_resolver.core import constants as cs
from module_resolver.data_models.models import CallSite
from module_resolver.data_models.types_defs import LanguageQueries
from module_resolver.parsers.core.utils import run_query, safe_decode_text
from module_resolver.parsers.js_ts.call_sites import find_call_sites, stub_key_nodes
from module_resolver.parsers.js_ts.utils import (
    string_literal_quote,
    string_literal_value,
)


@pytest.fixture
def js_queries(
    language_queries: dict[cs.SupportedLanguage, LanguageQueries],
) -> LanguageQueries:
    return language_queries[cs.SupportedLanguage.JS]


def _sites(js_queries: LanguageQueries, code: str) -> list[CallSite]:
    tree = js_queries["parser"].parse(code.encode("utf-8"))
    return find_call_sites(tree.root_node, js_queries)


def _specifiers(sites: list[CallSite]) -> list[str | None]:
    return [string_literal_value(site.specifier_node) for site in sites]


class TestFindCallSites:
    @pytest.mark.parametrize(
        ("code", "kind"),
        [
            ('require("x");', cs.CallSiteKind.REQUIRE),
            ('require.resolve("x");', cs.CallSiteKind.REQUIRE),
            ('proxyquire("x");', cs.CallSiteKind.PROXYQUIRE),
            ('proxyquire("x", {});', cs.CallSiteKind.PROXYQUIRE),
            ('proxyquire.load("x");', cs.CallSiteKind.PROXYQUIRE),
            ('proxyquire.noCallThru().load("x");', cs.CallSiteKind.PROXYQUIRE),
            (
                'proxyquire.noCallThru().noPreserveCache().load("x");',
                cs.CallSiteKind.PROXYQUIRE,
            ),
            ('import something from "x";', cs.CallSiteKind.IMPORT),
            ('import { a, b } from "x";', cs.CallSiteKind.IMPORT),
            ('import "x";', cs.CallSiteKind.IMPORT),
        ],
    )
    def test_recognised_shapes(
        self, js_queries: LanguageQueries, code: str, kind: cs.CallSiteKind
    ) -> None:
        sites = _sites(js_queries, code)

        assert [site.kind for site in sites] == [kind]
        assert _specifiers(sites) == ["x"]

    @pytest.mark.parametrize(
        "code",
        [
            'norequire.load("x");',
            'foo.require("x");',
            'requireFoo("x");',
            'other.noCallThru().load("x");',
            "require(name);",
            "require(`x`);",
            'require("a" + "b");',
            "require();",
            'const x = "x";',
        ],
    )
    def test_ignored_shapes(self, js_queries: LanguageQueries, code: str) -> None:
        assert _sites(js_queries, code) == []

    def test_sites_are_in_source_order(self, js_queries: LanguageQueries) -> None:
        code = (
            'import a from "first";\n'
            'const b = require("second");\n'
            'const c = proxyquire("third", { "fourth": stub });\n'
        )

        sites = _sites(js_queries, code)

        assert _specifiers(sites) == ["first", "second", "third"]
        assert [site.line for site in sites] == [1, 2, 3]

    def test_nested_calls_are_found(self, js_queries: LanguageQueries) -> None:
        code = 'wrap(require("inner"), () => require("lazy"));'

        assert _specifiers(_sites(js_queries, code)) == ["inner", "lazy"]

    def test_comment_before_argument_is_skipped(
        self, js_queries: LanguageQueries
    ) -> None:
        assert _specifiers(_sites(js_queries, 'require(/* c */ "x");')) == ["x"]

    def test_proxyquire_stub_object(self, js_queries: LanguageQueries) -> None:
        code = 'proxyquire("x", { "a": 1, b: 2, "c/d": 3, ["e"]: 4 });'

        (site,) = _sites(js_queries, code)

        assert site.stubs_node is not None
        keys = [string_literal_value(key) for key in stub_key_nodes(site.stubs_node)]
        assert keys == ["a", "c/d"]

    def test_require_has_no_stub_object(self, js_queries: LanguageQueries) -> None:
        (site,) = _sites(js_queries, 'require("x", { "a": 1 });')

        assert site.stubs_node is None

    def test_non_object_stubs_are_ignored(self, js_queries: LanguageQueries) -> None:
        (site,) = _sites(js_queries, 'proxyquire("x", stubs);')

        assert site.stubs_node is None


class TestStringLiterals:
    def test_quote_style(self, js_queries: LanguageQueries) -> None:
        (double,) = _sites(js_queries, 'require("x");')
        (single,) = _sites(js_queries, "require('x');")

        assert string_literal_quote(double.specifier_node) == '"'
        assert string_literal_quote(single.specifier_node) == "'"

    def test_escaped_literal_has_no_value(self, js_queries: LanguageQueries) -> None:
        (site,) = _sites(js_queries, 'require("c\\u0031");')

        assert safe_decode_text(site.specifier_node) == '"c\\u0031"'
        assert string_literal_value(site.specifier_node) is None

    def test_empty_literal(self, js_queries: LanguageQueries) -> None:
        (site,) = _sites(js_queries, 'require("");')

        assert string_literal_value(site.specifier_node) == ""


class TestRunQuery:
    def test_groups_captures_by_name(self, js_queries: LanguageQueries) -> None:
        tree = js_queries["parser"].parse(b'import a from "a";\nimport "b";\n')

        captures = run_query(js_queries["imports"], tree.root_node)

        assert list(captures) == [cs.CAPTURE_IMPORT_SOURCE]
        assert sorted(
            safe_decode_text(node) for node in captures[cs.CAPTURE_IMPORT_SOURCE]
        ) == ['"a"', '"b"']

    def test_no_match_yields_empty_mapping(self, js_queries: LanguageQueries) -> None:
        tree = js_queries["parser"].parse(b"const x = 1;\n")

        assert run_query(js_queries["calls"], tree.root_node) == {}
