from __future__ import annotations

from pathlib import Path

import pytest

from module_resolver.core import constants as cs
from module_resolver.core.config import build_resolver_config
from module_resolver.data_models.models import ResolverConfig
from module_resolver.data_models.schemas import ResolverOptions
from module_resolver.data_models.types_defs import LanguageQueries
from module_resolver.infrastructure.parser_loader import load_parsers

EXAMPLE_FILES = (
    "test/examples/components/c1.js",
    "test/examples/components/c2.js",
    "test/examples/components/sub/sub1.js",
    "test/examples/components/sub/sub1.css",
    "test/examples/components/sub/custom.modernizr3.js",
    "test/examples/foo/bar.js",
    "test/examples/foo/bar/x.js",
    "test/examples/example-file.js",
)

ROOTS = ["./test/examples/components", "./test/examples/foo"]

ALIASES = {
    "utils": "./src/mylib/subfolder/utils",
    "awesome/components": "./src/components",
    "abstract": "npm:concrete",
    "underscore": "lodash",
}


@pytest.fixture
def example_project(tmp_path: Path) -> Path:
    for relative in EXAMPLE_FILES:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("module.exports = {};\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def from_file(example_project: Path) -> Path:
    return example_project / "index.js"


@pytest.fixture
def root_config(example_project: Path) -> ResolverConfig:
    return build_resolver_config(ResolverOptions(root=ROOTS), example_project)


@pytest.fixture
def glob_config(example_project: Path) -> ResolverConfig:
    return build_resolver_config(
        ResolverOptions(root=["./test/**/components"]), example_project
    )


@pytest.fixture
def alias_config(example_project: Path) -> ResolverConfig:
    return build_resolver_config(ResolverOptions(alias=ALIASES), example_project)


@pytest.fixture(scope="session")
def language_queries() -> dict[cs.SupportedLanguage, LanguageQueries]:
    pytest.importorskip("tree_sitter_javascript")
    return load_parsers()
