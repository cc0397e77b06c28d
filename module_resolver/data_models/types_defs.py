"""
This module defines shared type definitions and protocols used throughout the
application.

It centralizes type hints for tree-sitter objects, alias mappings and the
result shape of a resolution, so the resolver, the parsers and the CLI agree
on the same vocabulary.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, NamedTuple, Protocol, TypedDict

from module_resolver.core.constants import SupportedLanguage

if TYPE_CHECKING:
    from tree_sitter import Language, Node, Parser, Query

    from .models import LanguageSpec, ResolverConfig

# Basic type aliases
type LanguageLoader = Callable[[], object] | None
"""A callable that returns a tree-sitter language capsule, or None."""

type ASTNode = Node
"""An alias for a tree-sitter Node for clarity."""

type AliasMapping = Mapping[str, str]
"""A flat `{specifier_prefix: target}` alias mapping as written in options."""

type ResolutionResult = str | None
"""The rewritten specifier, or None when the specifier must be left untouched."""

type RootPatterns = Sequence[str]
"""Configured root directories, possibly containing glob syntax."""


class TreeSitterNodeProtocol(Protocol):
    """A protocol defining the essential properties of a tree-sitter Node."""

    @property
    def type(self) -> str: ...
    @property
    def children(self) -> list[TreeSitterNodeProtocol]: ...
    @property
    def text(self) -> bytes | None: ...


class LoadableProtocol(Protocol):
    """An object with a lazily loaded resource."""

    def _ensure_loaded(self) -> None: ...


class ResolutionRequest(NamedTuple):
    """One call site's worth of input to the resolver."""

    specifier: str
    from_file: str
    config: ResolverConfig


class AliasMatch(NamedTuple):
    """Result of a longest-prefix alias lookup."""

    key: str
    target: str
    remainder: str


class LanguageImport(NamedTuple):
    """Information needed to import a tree-sitter language grammar."""

    lang_key: SupportedLanguage
    module_path: str
    attr_name: str


class LanguageQueries(TypedDict):
    """The tree-sitter queries needed to find rewrite candidates in one language."""

    calls: Query | None
    imports: Query | None
    config: LanguageSpec
    language: Language
    parser: Parser
