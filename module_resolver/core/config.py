from __future__ import annotations

import glob
import json
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from module_resolver.core import constants as cs
from module_resolver.core import logs
from module_resolver.data_models.models import ResolverConfig
from module_resolver.data_models.schemas import ResolverOptions
from module_resolver.data_models.types_defs import RootPatterns
from module_resolver.infrastructure import exceptions as ex
from module_resolver.resolution.alias_table import AliasTable

load_dotenv()


class AppConfig(BaseSettings):
    """Application settings, loaded from environment variables or a .env file.

    This class uses Pydantic's `BaseSettings` to automatically load and validate
    configuration from the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    MODULE_RESOLVER_CONFIG: str | None = None
    LOG_LEVEL: str = cs.DEFAULT_LOG_LEVEL
    SOURCE_ENCODING: str = cs.ENCODING_UTF8

    QUIET: bool = Field(False, validation_alias="MR_QUIET")


settings = AppConfig()


def has_glob_magic(pattern: str) -> bool:
    return not cs.GLOB_MAGIC_CHARS.isdisjoint(pattern)


def expand_root_patterns(
    patterns: RootPatterns, cwd: Path | str | None = None
) -> list[Path]:
    """Expands glob patterns in the configured roots into concrete directories.

    Plain entries are kept as-is, whether or not they exist. Each pattern
    expands in sorted order at its own position, so overall priority follows
    the configured order.

    Args:
        patterns (RootPatterns): The configured root entries.
        cwd (Path | str | None): Base directory for relative patterns.

    Returns:
        list[Path]: The expanded roots.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    roots: list[Path] = []
    for pattern in patterns:
        if not has_glob_magic(pattern):
            roots.append(Path(pattern))
            continue

        root_dir = None if os.path.isabs(pattern) else base
        matches = sorted(
            match
            for match in glob.glob(
                pattern, root_dir=root_dir, recursive=cs.GLOB_RECURSIVE in pattern
            )
            if (base / match).is_dir()
        )
        if matches:
            logger.debug(logs.GLOB_EXPANDED.format(pattern=pattern, count=len(matches)))
        else:
            logger.debug(logs.GLOB_NO_MATCH.format(pattern=pattern))
        roots.extend(Path(match) for match in matches)
    return roots


def build_resolver_config(
    options: ResolverOptions | None = None, cwd: Path | str | None = None
) -> ResolverConfig:
    """Freezes resolver options into a `ResolverConfig`.

    Glob expansion of the roots happens here, once, before any resolution.

    Args:
        options (ResolverOptions | None): The validated options.
        cwd (Path | str | None): The working directory of the run.

    Returns:
        ResolverConfig: The immutable configuration.
    """
    options = options or ResolverOptions()
    base = Path(cwd).absolute() if cwd is not None else Path.cwd()
    config = ResolverConfig(
        roots=tuple(expand_root_patterns(options.root, base)),
        extensions=tuple(
            options.extensions
            if options.extensions is not None
            else cs.DEFAULT_EXTENSIONS
        ),
        alias_table=AliasTable(options.alias),
        cwd=base,
    )
    logger.debug(
        logs.RESOLVER_CONFIG_BUILT.format(
            roots=len(config.roots),
            aliases=len(config.alias_table),
            extensions=", ".join(config.extensions),
        )
    )
    return config


def _validate_options(data: object, path: Path) -> ResolverOptions:
    try:
        return ResolverOptions.model_validate(data)
    except ValidationError as e:
        raise ex.ConfigurationError(
            ex.CONFIG_FILE_INVALID.format(path=path, error=e)
        ) from e


def _load_json_options(path: Path) -> ResolverOptions:
    try:
        data = json.loads(path.read_text(encoding=cs.ENCODING_UTF8))
    except (OSError, ValueError) as e:
        raise ex.ConfigurationError(
            ex.CONFIG_FILE_INVALID.format(path=path, error=e)
        ) from e
    return _validate_options(data, path)


def _load_pyproject_options(path: Path) -> ResolverOptions | None:
    try:
        data = tomllib.loads(path.read_text(encoding=cs.ENCODING_UTF8))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ex.ConfigurationError(
            ex.CONFIG_FILE_INVALID.format(path=path, error=e)
        ) from e

    section = data.get(cs.PYPROJECT_TOOL_SECTION, {}).get(cs.PYPROJECT_TOOL_KEY)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ex.ConfigurationError(
            ex.CONFIG_SECTION_INVALID.format(
                section=f"{cs.PYPROJECT_TOOL_SECTION}.{cs.PYPROJECT_TOOL_KEY}",
                path=path,
            )
        )
    return _validate_options(section, path)


def load_options_file(path: Path) -> ResolverOptions:
    """Loads resolver options from an explicit file.

    `.toml` files are read from their `[tool.module-resolver]` table; anything
    else is parsed as JSON.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ex.ConfigurationError(ex.CONFIG_FILE_MISSING.format(path=path))
    if path.suffix == ".toml":
        options = _load_pyproject_options(path) or ResolverOptions()
    else:
        options = _load_json_options(path)
    logger.info(logs.CONFIG_LOADED.format(path=path))
    return options


def discover_options(project_root: Path) -> ResolverOptions:
    """Finds resolver options in a project directory.

    Looks for `.moduleresolverrc.json` first, then a `[tool.module-resolver]`
    table in `pyproject.toml`. Returns empty options when neither exists.
    """
    rc_file = project_root / cs.CONFIG_FILENAME
    if rc_file.is_file():
        options = _load_json_options(rc_file)
        logger.info(logs.CONFIG_LOADED.format(path=rc_file))
        return options

    pyproject = project_root / cs.PYPROJECT_FILENAME
    if pyproject.is_file() and (options := _load_pyproject_options(pyproject)):
        logger.info(logs.CONFIG_LOADED.format(path=pyproject))
        return options

    logger.debug(logs.CONFIG_NOT_FOUND.format(path=project_root))
    return ResolverOptions()


def parse_alias_arguments(values: Iterable[str]) -> dict[str, str]:
    """Parses `KEY=TARGET` command-line alias arguments.

    Raises:
        ConfigurationError: If an argument has no `=` or an empty key.
    """
    aliases: dict[str, str] = {}
    for value in values:
        key, sep, target = value.partition(cs.ALIAS_CLI_SEPARATOR)
        if not sep or not key:
            raise ex.ConfigurationError(ex.ALIAS_CLI_INVALID.format(value=value))
        aliases[key] = target
    return aliases


def load_resolver_options(
    project_root: Path,
    config_file: Path | None = None,
    overrides: ResolverOptions | None = None,
) -> ResolverOptions:
    """Assembles resolver options from every source, lowest priority first.

    Order: discovered project config (or the explicit `config_file`, or the
    `MODULE_RESOLVER_CONFIG` setting), then `overrides` from the command line.
    """
    if config_file is None and settings.MODULE_RESOLVER_CONFIG:
        config_file = Path(settings.MODULE_RESOLVER_CONFIG)

    if config_file is not None:
        base = load_options_file(config_file)
    else:
        base = discover_options(project_root)

    return base.merged_with(overrides) if overrides else base
