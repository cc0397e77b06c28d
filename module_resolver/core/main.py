from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger
from rich.syntax import Syntax
from rich.table import Table

from module_resolver.data_models.models import AppContext, ResolverConfig, RunSummary
from module_resolver.data_models.schemas import ResolverOptions
from module_resolver.parsers.js_ts.rewriter import format_diff

from . import constants as cs
from .config import (
    build_resolver_config,
    load_resolver_options,
    parse_alias_arguments,
    settings,
)


def style(
    text: str, color: cs.Color, modifier: cs.StyleModifier = cs.StyleModifier.BOLD
) -> str:
    """Applies Rich styling to a text string.

    Args:
        text (str): The text to style.
        color (cs.Color): The color to apply.
        modifier (cs.StyleModifier): The style modifier (e.g., 'bold', 'dim').

    Returns:
        str: The Rich-formatted string.
    """
    if modifier == cs.StyleModifier.NONE:
        return f"[{color}]{text}[/{color}]"
    return f"[{modifier} {color}]{text}[/{modifier} {color}]"


def dim(text: str) -> str:
    """Applies a 'dim' style to the text."""
    return f"[{cs.StyleModifier.DIM}]{text}[/{cs.StyleModifier.DIM}]"


app_context = AppContext()


def configure_logging(level: str) -> None:
    """Replaces loguru's default sink with a stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, format=cs.LOG_FORMAT, level=level.upper())


def build_config_from_cli(
    project: Path,
    config_file: Path | None,
    roots: list[str] | None,
    aliases: list[str] | None,
    extensions: list[str] | None,
) -> ResolverConfig:
    """Merges file-based options with command-line flags and freezes the result.

    Raises:
        ConfigurationError: If the config file or an alias argument is invalid.
    """
    overrides = ResolverOptions(
        root=roots or [],
        alias=parse_alias_arguments(aliases or []),
        extensions=extensions or None,
    )
    options = load_resolver_options(project, config_file, overrides)
    return build_resolver_config(options, project)


def render_config_table(config: ResolverConfig) -> Table:
    table = Table(title=cs.CLI_TABLE_TITLE)
    table.add_column(cs.CLI_TABLE_SETTING, style=cs.Color.CYAN)
    table.add_column(cs.CLI_TABLE_VALUE)

    table.add_row(cs.CLI_TABLE_CWD, str(config.cwd))
    roots = "\n".join(str(root) for root in config.roots) or dim(cs.CLI_TABLE_NONE)
    table.add_row(cs.CLI_TABLE_ROOT, roots)
    table.add_row(cs.CLI_TABLE_EXTENSIONS, ", ".join(config.extensions))
    aliases = "\n".join(
        f"{key} -> {target}" for key, target in config.alias_table.items()
    )
    table.add_row(cs.CLI_TABLE_ALIAS, aliases or dim(cs.CLI_TABLE_NONE))
    return table


def print_diffs(summary: RunSummary) -> None:
    for result in summary.changed:
        app_context.console.print(Syntax(format_diff(result, Path.cwd()), "diff"))


def print_summary(summary: RunSummary, message: str) -> None:
    if not settings.QUIET:
        app_context.console.print(
            style(
                message.format(changed=len(summary.changed), total=summary.total),
                cs.Color.GREEN,
            )
        )
    if summary.failed:
        app_context.console.print(
            style(
                cs.CLI_MSG_FAILED_FILES.format(count=len(summary.failed)), cs.Color.RED
            )
        )
