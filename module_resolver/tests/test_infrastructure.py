from __future__ import annotations

from pathlib import Path

import pytest

from module_resolver.core import constants as cs
from module_resolver.data_models.types_defs import LanguageQueries
from module_resolver.infrastructure.decorators import ensure_loaded, timing_decorator
from module_resolver.infrastructure.language_spec import (
    SOURCE_SUFFIXES,
    get_language_spec,
    get_language_spec_for_path,
)


class _Lazy:
    def __init__(self) -> None:
        self.loads = 0

    def _ensure_loaded(self) -> None:
        self.loads += 1

    @ensure_loaded
    def value(self, x: int) -> int:
        return x * 2


class TestDecorators:
    def test_ensure_loaded_runs_before_method(self) -> None:
        lazy = _Lazy()

        assert lazy.value(21) == 42
        assert lazy.loads == 1
        assert _Lazy.value.__name__ == "value"

    def test_timing_decorator_passes_through(self) -> None:
        @timing_decorator
        def add(a: int, b: int = 1) -> int:
            return a + b

        assert add(1, b=2) == 3

    def test_timing_decorator_propagates_errors(self) -> None:
        @timing_decorator
        def fail() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            fail()


class TestLanguageSpecs:
    @pytest.mark.parametrize(
        ("suffix", "language"),
        [
            (".js", cs.SupportedLanguage.JS),
            (".MJS", cs.SupportedLanguage.JS),
            (".es6", cs.SupportedLanguage.JS),
            (".ts", cs.SupportedLanguage.TS),
            (".tsx", cs.SupportedLanguage.TSX),
        ],
    )
    def test_suffix_lookup(self, suffix: str, language: cs.SupportedLanguage) -> None:
        spec = get_language_spec(suffix)

        assert spec is not None
        assert spec.language == language

    def test_unknown_suffix(self) -> None:
        assert get_language_spec(".py") is None
        assert get_language_spec_for_path(Path("style.css")) is None

    def test_source_suffixes(self) -> None:
        assert {".js", ".jsx", ".ts", ".tsx"} <= SOURCE_SUFFIXES


class TestParserLoader:
    def test_javascript_queries_are_built(
        self, language_queries: dict[cs.SupportedLanguage, LanguageQueries]
    ) -> None:
        js = language_queries[cs.SupportedLanguage.JS]

        assert js["calls"] is not None
        assert js["imports"] is not None
        assert js["config"].language == cs.SupportedLanguage.JS
        tree = js["parser"].parse(b'require("x");')
        assert not tree.root_node.has_error
