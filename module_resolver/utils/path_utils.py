import os
from pathlib import Path

from ..core import constants as cs


def to_posix(path: Path | str) -> str:
    if isinstance(path, Path):
        return path.as_posix()
    return path.replace(os.sep, cs.SEPARATOR_SLASH)


def to_explicit_relative(path: str) -> str:
    """Prefixes `./` unless the path already starts with `./` or `../`.

    A relative path without an explicit marker is indistinguishable from a
    bare package name for a module loader.
    """
    if path.startswith(cs.EXPLICIT_RELATIVE_PREFIXES):
        return path
    return f"{cs.EXPLICIT_CURRENT_PREFIX}{path}"


def absolute_from(path: Path | str, cwd: Path | str | None = None) -> str:
    base = os.fspath(cwd) if cwd is not None else os.getcwd()
    return os.path.abspath(os.path.join(base, os.fspath(path)))


def relative_from(
    from_file: Path | str, to_file: Path | str, cwd: Path | str | None = None
) -> str:
    """
    Computes the relative path from the directory containing `from_file` to `to_file`.

    Both paths are made absolute against `cwd` first (the process working
    directory when omitted). No filesystem access takes place.

    Args:
        from_file (Path | str): The file the path should be relative to.
        to_file (Path | str): The target of the relative path.
        cwd (Path | str | None): Base directory for relative inputs.

    Returns:
        str: The relative path in OS form; empty when both point at the same place.
    """
    from_dir = os.path.dirname(absolute_from(from_file, cwd))
    target = absolute_from(to_file, cwd)
    relative = os.path.relpath(target, from_dir)
    return "" if relative == cs.PATH_CURRENT_DIR else relative


def replace_extension(path: str, ext: str) -> str:
    stem, _ = os.path.splitext(os.path.basename(path))
    return os.path.join(os.path.dirname(path), f"{stem}{ext}")


def extension_of(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[1]


def should_skip_path(path: Path, base_path: Path) -> bool:
    try:
        rel_path = path.relative_to(base_path)
    except ValueError:
        return False
    dir_parts = rel_path.parent.parts if path.is_file() else rel_path.parts
    return not cs.IGNORE_PATTERNS.isdisjoint(dir_parts)
