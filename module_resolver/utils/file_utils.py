from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from module_resolver.core import logs as ls
from module_resolver.infrastructure.language_spec import SOURCE_SUFFIXES

from .path_utils import should_skip_path


def is_source_file(path: Path) -> bool:
    return path.suffix.lower() in SOURCE_SUFFIXES


def iter_source_files(paths: Iterable[Path]) -> Iterator[tuple[Path, Path]]:
    """
    Expands input paths into (source file, base directory) pairs.

    Files are yielded as given with their parent as base, whatever their
    suffix. Directories are walked recursively in sorted order, skipping
    dependency and VCS directories and files without a source suffix.
    """
    for path in paths:
        if path.is_dir():
            found = sorted(
                candidate
                for candidate in path.rglob("*")
                if candidate.is_file()
                and is_source_file(candidate)
                and not should_skip_path(candidate, path)
            )
            logger.debug(ls.FILES_DISCOVERED.format(count=len(found), path=path))
            yield from ((candidate, path) for candidate in found)
        else:
            yield path, path.parent
