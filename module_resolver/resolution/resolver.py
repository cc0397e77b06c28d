"""
This module implements the specifier resolution algorithm.

Given a raw module specifier, the file that contains it and a frozen
`ResolverConfig`, it decides whether the specifier should be rewritten and
what it should be rewritten to. Resolution runs in two ordered phases:

1.  Root directories: the specifier is looked up on disk under each root in
    configuration order. The first root containing it wins and the alias
    table is never consulted.
2.  Alias table: the longest configured prefix of the specifier is replaced
    by its target. Targets that are not relative paths are package renames
    and are returned verbatim.

Specifiers that already start with `.` are never touched, and anything that
matches neither phase is left as-is (`None`).
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.data_models.models import ResolverConfig
from module_resolver.data_models.types_defs import (
    ResolutionRequest,
    ResolutionResult,
)
from module_resolver.infrastructure import exceptions as ex
from module_resolver.utils.path_utils import (
    absolute_from,
    extension_of,
    relative_from,
    replace_extension,
    to_explicit_relative,
    to_posix,
)

from .alias_table import strip_legacy_marker
from .fs_probe import resolve_on_disk


def _to_specifier(relative_path: str) -> str:
    return to_explicit_relative(to_posix(relative_path))


def _rewrite_root_match(
    specifier: str, from_file: Path | str, resolved: Path, cwd: Path
) -> str:
    """
    Builds the rewritten specifier for a file found under a root.

    The resolved file's extension is kept only when the specifier spelled out
    exactly the same extension; otherwise it is dropped and left to the loader.
    """
    resolved_ext = extension_of(resolved.name)
    ext = resolved_ext if resolved_ext == extension_of(specifier) else ""
    relative = relative_from(from_file, resolved, cwd)
    return _to_specifier(replace_extension(relative, ext))


def _resolve_from_roots(
    specifier: str, from_file: Path | str, config: ResolverConfig
) -> ResolutionResult:
    request = f"{cs.EXPLICIT_CURRENT_PREFIX}{specifier}"
    for root in config.roots:
        basedir = absolute_from(root, config.cwd)
        try:
            resolved = resolve_on_disk(request, basedir, config.extensions)
        except ex.ModuleNotFound as e:
            logger.debug(
                ls.RESOLVE_ROOT_MISS.format(specifier=specifier, root=root, error=e)
            )
            continue

        rewritten = _rewrite_root_match(specifier, from_file, resolved, config.cwd)
        logger.debug(
            ls.RESOLVE_ROOT_MATCH.format(
                specifier=specifier, root=root, resolved=resolved, rewritten=rewritten
            )
        )
        return rewritten
    return None


def _resolve_from_alias(
    specifier: str, from_file: Path | str, config: ResolverConfig
) -> ResolutionResult:
    match = config.alias_table.lookup(specifier)
    if match is None:
        logger.debug(ls.RESOLVE_NO_MATCH.format(specifier=specifier, file=from_file))
        return None

    target = strip_legacy_marker(match.target)
    substituted = f"{target}{match.remainder}"

    # Only a leading "." marks a path alias; anything else is a package name.
    if not target.startswith(cs.RELATIVE_MARKER):
        rewritten = substituted
    else:
        rewritten = _to_specifier(relative_from(from_file, substituted, config.cwd))

    logger.debug(
        ls.RESOLVE_ALIAS_MATCH.format(
            key=match.key, target=target, specifier=specifier, rewritten=rewritten
        )
    )
    return rewritten


def resolve(
    specifier: str, from_file: Path | str, config: ResolverConfig
) -> ResolutionResult:
    """
    Resolves a module specifier relative to the file that imports it.

    Args:
        specifier (str): The specifier as written in the source.
        from_file (Path | str): The importing file; relative paths start at
            `config.cwd`.
        config (ResolverConfig): The frozen resolver configuration.

    Returns:
        ResolutionResult: The rewritten specifier, or None to leave it untouched.
    """
    if not specifier or specifier.startswith(cs.RELATIVE_MARKER):
        logger.debug(ls.RESOLVE_SKIP_RELATIVE.format(specifier=specifier))
        return None

    if (rewritten := _resolve_from_roots(specifier, from_file, config)) is not None:
        return rewritten
    return _resolve_from_alias(specifier, from_file, config)


map_module = resolve


def resolve_request(request: ResolutionRequest) -> ResolutionResult:
    return resolve(request.specifier, request.from_file, request.config)


def stub_base_file(parent_rewritten: str, from_file: Path | str) -> str:
    """
    Locates the module a proxyquire stub table belongs to.

    A relative rewritten parent is anchored at the importing file's directory;
    a bare package parent is used as-is.

    Args:
        parent_rewritten (str): The already-rewritten parent specifier.
        from_file (Path | str): The file containing the proxyquire call.

    Returns:
        str: The path stub specifiers should be resolved from.
    """
    if not parent_rewritten.startswith(cs.EXPLICIT_RELATIVE_PREFIXES):
        return parent_rewritten
    return os.path.normpath(
        os.path.join(os.path.dirname(os.fspath(from_file)), parent_rewritten)
    )


def resolve_stub(
    stub_specifier: str,
    parent_rewritten: str,
    from_file: Path | str,
    config: ResolverConfig,
) -> ResolutionResult:
    """Resolves a proxyquire stub key relative to the module being stubbed."""
    base = stub_base_file(parent_rewritten, from_file)
    rewritten = resolve(stub_specifier, base, config)
    if rewritten is not None:
        logger.debug(
            ls.STUB_REWRITTEN.format(
                stub=stub_specifier, rewritten=rewritten, base=base
            )
        )
    return rewritten
