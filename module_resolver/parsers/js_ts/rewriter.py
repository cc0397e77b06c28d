"""
This module defines the `SourceRewriter`, which applies specifier resolution
to whole JavaScript/TypeScript source files.

The rewriter parses a file with tree-sitter, asks the resolver for a rewrite
of every call site's specifier, and splices the results back into the
original bytes. Everything outside the rewritten string literals, including
formatting, comments and the literal's quote style, is preserved exactly.

For proxyquire calls whose module specifier was rewritten, each string key of
the stub object is resolved again from the location of the stubbed module.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from tree_sitter import Node

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.data_models.models import (
    CallSite,
    ResolverConfig,
    RewriteResult,
    RunSummary,
    SourceEdit,
)
from module_resolver.data_models.types_defs import LanguageQueries
from module_resolver.infrastructure import exceptions as ex
from module_resolver.infrastructure.decorators import ensure_loaded, timing_decorator
from module_resolver.infrastructure.language_spec import get_language_spec_for_path
from module_resolver.infrastructure.parser_loader import load_parsers
from module_resolver.resolution.resolver import resolve, resolve_stub

from .call_sites import find_call_sites, stub_key_nodes
from .utils import line_of, string_literal_quote, string_literal_value


def _edit_for(node: Node, original: str, rewritten: str) -> SourceEdit:
    return SourceEdit(
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        original=original,
        rewritten=rewritten,
        quote=string_literal_quote(node),
        line=line_of(node),
    )


def apply_edits(source: bytes, edits: Iterable[SourceEdit]) -> bytes:
    """
    Applies literal replacements to the source bytes.

    Edits are applied back to front so earlier offsets stay valid; a second
    edit for the same literal is ignored.
    """
    result = source
    seen: set[int] = set()
    for edit in sorted(edits, key=lambda e: e.start_byte, reverse=True):
        if edit.start_byte in seen:
            continue
        seen.add(edit.start_byte)
        result = result[: edit.start_byte] + edit.replacement + result[edit.end_byte :]
    return result


def format_diff(result: RewriteResult, base: Path | None = None) -> str:
    """Renders a unified diff between the original and rewritten source.

    File names are shown relative to `base` when the file lies under it.
    """
    path = result.path
    if base is not None and path.is_relative_to(base):
        path = path.relative_to(base)
    name = path.as_posix()
    return "".join(
        difflib.unified_diff(
            result.original_source.splitlines(keepends=True),
            result.rewritten_source.splitlines(keepends=True),
            fromfile=f"{cs.DIFF_FROM_PREFIX}{name}",
            tofile=f"{cs.DIFF_TO_PREFIX}{name}",
        )
    )


class SourceRewriter:
    """
    Rewrites module specifiers in source files against one `ResolverConfig`.

    Tree-sitter grammars are loaded lazily on first use unless `queries` is
    supplied, so the rewriter can be shared across many files.

    Attributes:
        config (ResolverConfig): The frozen resolver configuration.
        encoding (str): Encoding used to read and write source files.
    """

    def __init__(
        self,
        config: ResolverConfig,
        queries: dict[cs.SupportedLanguage, LanguageQueries] | None = None,
        encoding: str = cs.ENCODING_UTF8,
    ) -> None:
        self.config = config
        self.encoding = encoding
        self._queries = queries

    def _ensure_loaded(self) -> None:
        if self._queries is None:
            self._queries = load_parsers()

    @ensure_loaded
    def supports(self, path: Path) -> bool:
        spec = get_language_spec_for_path(path)
        return spec is not None and spec.language in (self._queries or {})

    def _queries_for(self, path: Path) -> LanguageQueries:
        spec = get_language_spec_for_path(path)
        queries = self._queries or {}
        if spec is None or spec.language not in queries:
            raise ex.UnsupportedSourceError(
                ex.UNSUPPORTED_SOURCE.format(path=path, suffix=path.suffix)
            )
        return queries[spec.language]

    def _stub_edits(
        self, stubs: Node, parent_rewritten: str, file_path: Path
    ) -> list[SourceEdit]:
        edits: list[SourceEdit] = []
        for key in stub_key_nodes(stubs):
            stub = string_literal_value(key)
            if stub is None:
                continue
            rewritten = resolve_stub(stub, parent_rewritten, file_path, self.config)
            if rewritten is not None and rewritten != stub:
                edits.append(_edit_for(key, stub, rewritten))
        return edits

    def _site_edits(self, site: CallSite, file_path: Path) -> list[SourceEdit]:
        specifier = string_literal_value(site.specifier_node)
        if specifier is None:
            return []

        rewritten = resolve(specifier, file_path, self.config)
        if rewritten is None:
            return []

        edits: list[SourceEdit] = []
        if rewritten != specifier:
            edits.append(_edit_for(site.specifier_node, specifier, rewritten))
        if site.stubs_node is not None:
            edits.extend(self._stub_edits(site.stubs_node, rewritten, file_path))
        return edits

    @ensure_loaded
    def collect_edits(self, source: str, file_path: Path) -> list[SourceEdit]:
        """
        Parses `source` and computes the edits needed for every call site.

        Args:
            source (str): The source text.
            file_path (Path): The file the source belongs to; selects the grammar
                and anchors relative specifiers.

        Raises:
            UnsupportedSourceError: If no grammar handles the file's suffix.

        Returns:
            list[SourceEdit]: The edits in source order.
        """
        lang_queries = self._queries_for(file_path)
        tree = lang_queries["parser"].parse(source.encode(cs.ENCODING_UTF8))

        edits: list[SourceEdit] = []
        for site in find_call_sites(tree.root_node, lang_queries):
            edits.extend(self._site_edits(site, file_path))
        return sorted(edits, key=lambda e: e.start_byte)

    def rewrite_source(self, source: str, file_path: Path) -> RewriteResult:
        """Rewrites the specifiers in `source`, which belongs to `file_path`."""
        edits = self.collect_edits(source, file_path)
        rewritten = apply_edits(source.encode(cs.ENCODING_UTF8), edits).decode(
            cs.ENCODING_UTF8
        )
        for edit in edits:
            logger.debug(
                ls.EDIT_APPLIED.format(
                    file=file_path,
                    line=edit.line,
                    original=edit.original,
                    rewritten=edit.rewritten,
                )
            )
        return RewriteResult(
            path=file_path,
            original_source=source,
            rewritten_source=rewritten,
            edits=edits,
        )

    def rewrite_file(self, path: Path) -> RewriteResult:
        result = self.rewrite_source(path.read_text(encoding=self.encoding), path)
        if result.changed:
            logger.info(ls.FILE_REWRITTEN.format(count=len(result.edits), file=path))
        else:
            logger.debug(ls.FILE_UNCHANGED.format(file=path))
        return result

    def write_result(self, result: RewriteResult, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result.rewritten_source, encoding=self.encoding)
        logger.info(ls.FILE_WRITTEN.format(file=destination))

    @timing_decorator
    def rewrite_files(
        self,
        files: Iterable[tuple[Path, Path]],
        write: bool = False,
        out_dir: Path | None = None,
    ) -> RunSummary:
        """
        Rewrites a batch of files.

        A file that cannot be read or parsed is logged and recorded as failed;
        the run continues with the next file.

        Args:
            files (Iterable[tuple[Path, Path]]): Pairs of (file, base directory);
                the base anchors the file's position under `out_dir`.
            write (bool): Rewrite changed files in place.
            out_dir (Path | None): Mirror every processed file into this directory.

        Returns:
            RunSummary: Per-file results plus the files that failed.
        """
        summary = RunSummary()
        for path, base in files:
            try:
                result = self.rewrite_file(path)
                if out_dir is not None:
                    self.write_result(result, out_dir / path.relative_to(base))
                elif write and result.changed:
                    self.write_result(result, path)
            except (OSError, UnicodeDecodeError, ex.ModuleResolverError) as e:
                logger.warning(ls.FILE_FAILED.format(file=path, error=e))
                summary.failed.append(path)
                continue
            summary.results.append(result)

        logger.info(
            ls.RUN_SUMMARY.format(
                changed=len(summary.changed),
                total=summary.total,
                failed=len(summary.failed),
            )
        )
        return summary
