"""
This module defines the core data models used throughout the application.

Using `dataclass`, it provides structured, type-hinted classes for the
immutable resolver configuration, the call sites found in a source file, the
edits applied to it and the outcome of a rewrite.

The models include:
-   `AppContext`: Holds the Rich console shared by the CLI.
-   `LanguageSpec`: Ties a tree-sitter grammar to the file suffixes it parses.
-   `ResolverConfig`: The frozen configuration consulted by every resolution.
-   `CallSite`, `SourceEdit` and `RewriteResult`: The host-side view of a
    rewrite, from discovery to the final source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from module_resolver.core import constants as cs

if TYPE_CHECKING:
    from tree_sitter import Node

    from module_resolver.resolution.alias_table import AliasTable


def _default_console() -> Console:
    """Creates a default Rich Console instance."""
    return Console(width=None)


@dataclass
class AppContext:
    """
    Holds the global application context.

    Attributes:
        console (Console): The Rich console instance for styled output.
    """

    console: Console = field(default_factory=_default_console)


@dataclass(frozen=True)
class LanguageSpec:
    """
    Defines which file suffixes a tree-sitter grammar handles.

    Attributes:
        language (SupportedLanguage): The name of the language.
        file_extensions (tuple[str, ...]): File suffixes parsed with this grammar.
        module_path (str): The Python module providing the grammar.
        attr_name (str): The attribute on that module returning the language.
    """

    language: cs.SupportedLanguage
    file_extensions: tuple[str, ...]
    module_path: str
    attr_name: str = cs.QUERY_LANGUAGE


@dataclass(frozen=True)
class ResolverConfig:
    """
    Immutable configuration for one compilation run.

    Built once by `build_resolver_config`, after glob expansion of the root
    patterns, and shared read-only by every resolution afterwards.

    Attributes:
        roots (tuple[Path, ...]): Search roots, earlier entries win.
        extensions (tuple[str, ...]): Extensions probed on disk, in order.
        alias_table (AliasTable): Static prefix rename table.
        cwd (Path): Base for relative roots, alias targets and file names.
    """

    roots: tuple[Path, ...]
    extensions: tuple[str, ...]
    alias_table: AliasTable
    cwd: Path


@dataclass(frozen=True)
class CallSite:
    """
    A module-loading call found in a syntax tree.

    Attributes:
        kind (CallSiteKind): Whether this is a require, proxyquire or import.
        specifier_node (Node): The string literal holding the specifier.
        stubs_node (Node | None): The proxyquire stub object, if any.
    """

    kind: cs.CallSiteKind
    specifier_node: Node
    stubs_node: Node | None = None

    @property
    def line(self) -> int:
        return self.specifier_node.start_point[0] + 1


@dataclass(frozen=True)
class SourceEdit:
    """A replacement of one string literal, addressed by byte offsets."""

    start_byte: int
    end_byte: int
    original: str
    rewritten: str
    quote: str
    line: int

    @property
    def replacement(self) -> bytes:
        return f"{self.quote}{self.rewritten}{self.quote}".encode(cs.ENCODING_UTF8)


@dataclass
class RewriteResult:
    """
    The outcome of rewriting one source file.

    Attributes:
        path (Path): The file that was processed.
        original_source (str): The source text before rewriting.
        rewritten_source (str): The source text after rewriting.
        edits (list[SourceEdit]): The literal replacements that were applied.
    """

    path: Path
    original_source: str
    rewritten_source: str
    edits: list[SourceEdit] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.rewritten_source != self.original_source


@dataclass
class RunSummary:
    """Aggregated counts for a multi-file rewrite run."""

    results: list[RewriteResult] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def changed(self) -> list[RewriteResult]:
        return [result for result in self.results if result.changed]

    @property
    def total(self) -> int:
        return len(self.results) + len(self.failed)
