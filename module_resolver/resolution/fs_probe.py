"""
Node-style on-disk module lookup.

Mirrors the synchronous lookup a CommonJS loader performs for a relative
request: the path as a file, then with each extension appended, then as a
directory (its `package.json` `main` entry, then its `index` file). A file
always wins over a directory of the same name.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.infrastructure import exceptions as ex
from module_resolver.utils.path_utils import absolute_from


def _load_as_file(candidate: Path, extensions: Sequence[str]) -> Path | None:
    if candidate.is_file():
        return candidate
    if not candidate.name:
        return None
    for ext in extensions:
        with_ext = candidate.with_name(f"{candidate.name}{ext}")
        if with_ext.is_file():
            return with_ext
    return None


def _read_package_main(package_json: Path) -> str | None:
    try:
        data = json.loads(package_json.read_text(encoding=cs.ENCODING_UTF8))
    except (OSError, ValueError) as e:
        logger.debug(ls.PROBE_PACKAGE_JSON_FAILED.format(path=package_json, error=e))
        return None
    main = data.get(cs.PACKAGE_JSON_MAIN) if isinstance(data, dict) else None
    if not isinstance(main, str) or not main:
        return None
    if main in (cs.PATH_CURRENT_DIR, cs.EXPLICIT_CURRENT_PREFIX):
        return cs.INDEX_BASENAME
    return main


def _load_as_directory(candidate: Path, extensions: Sequence[str]) -> Path | None:
    if not candidate.is_dir():
        return None

    package_json = candidate / cs.PACKAGE_JSON
    if package_json.is_file() and (main := _read_package_main(package_json)):
        main_path = Path(absolute_from(main, candidate))
        if found := _load_as_file(main_path, extensions):
            return found
        if main_path != candidate and (
            found := _load_as_directory(main_path, extensions)
        ):
            return found

    return _load_as_file(candidate / cs.INDEX_BASENAME, extensions)


def resolve_on_disk(
    request: str, basedir: Path | str, extensions: Sequence[str]
) -> Path:
    """
    Resolves a relative module request against `basedir`.

    Args:
        request (str): A request such as `./sub/sub1`, interpreted from `basedir`.
        basedir (Path | str): The directory the request is relative to.
        extensions (Sequence[str]): Extensions appended when probing files.

    Raises:
        ModuleNotFound: If neither a file nor a directory entry point exists.

    Returns:
        Path: The absolute path of the resolved file.
    """
    candidate = Path(absolute_from(request, basedir))

    if not request.endswith(cs.SEPARATOR_SLASH) and (
        found := _load_as_file(candidate, extensions)
    ):
        return found
    if found := _load_as_directory(candidate, extensions):
        return found

    raise ex.ModuleNotFound(
        ex.MODULE_NOT_FOUND.format(specifier=request, basedir=basedir)
    )
