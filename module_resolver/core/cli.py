from pathlib import Path

import typer
from rich.markup import escape

from module_resolver.core import cli_help as ch
from module_resolver.core import constants as cs
from module_resolver.data_models.models import ResolverConfig
from module_resolver.infrastructure import exceptions as ex
from module_resolver.parsers.js_ts.rewriter import SourceRewriter
from module_resolver.resolution.resolver import resolve as resolve_specifier
from module_resolver.utils.file_utils import iter_source_files

from .config import AppConfig, settings
from .main import (
    app_context,
    build_config_from_cli,
    configure_logging,
    print_diffs,
    print_summary,
    render_config_table,
    style,
)

app = typer.Typer(
    name=cs.APP_NAME,
    help=ch.APP_DESCRIPTION,
    no_args_is_help=True,
    add_completion=False,
)

RootOption = typer.Option(None, "--root", "-r", help=ch.HELP_ROOT)
AliasOption = typer.Option(None, "--alias", "-a", help=ch.HELP_ALIAS)
ExtensionOption = typer.Option(None, "--extension", "-e", help=ch.HELP_EXTENSION)
ConfigOption = typer.Option(None, "--config", "-c", help=ch.HELP_CONFIG)
ProjectOption = typer.Option(
    Path("."), "--project", "-p", file_okay=False, help=ch.HELP_PROJECT
)


@app.callback()
def _global_options(
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help=ch.HELP_QUIET, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=ch.HELP_VERBOSE),
) -> None:
    """
    Global CLI callback configuring log output.

    Args:
        quiet (bool): If True, only errors are logged and summaries are hidden.
        verbose (bool): If True, every resolution decision is logged.
    """
    settings.QUIET = quiet or AppConfig().QUIET
    if settings.QUIET:
        configure_logging(cs.QUIET_LOG_LEVEL)
    elif verbose:
        configure_logging(cs.VERBOSE_LOG_LEVEL)
    else:
        configure_logging(settings.LOG_LEVEL)


def _fail(message: str) -> typer.Exit:
    app_context.console.print(style(escape(message), cs.Color.RED))
    return typer.Exit(cs.EXIT_FAILURE)


def _load_config(
    project: Path,
    config_file: Path | None,
    root: list[str] | None,
    alias: list[str] | None,
    extension: list[str] | None,
) -> ResolverConfig:
    try:
        return build_config_from_cli(project, config_file, root, alias, extension)
    except ex.ConfigurationError as e:
        raise _fail(cs.CLI_ERR_CONFIG.format(error=e)) from e


@app.command(help=ch.CMD_RESOLVE)
def resolve(
    specifier: str = typer.Argument(..., help=ch.HELP_SPECIFIER),
    from_file: Path = typer.Option(..., "--from", "-f", help=ch.HELP_FROM_FILE),
    root: list[str] | None = RootOption,
    alias: list[str] | None = AliasOption,
    extension: list[str] | None = ExtensionOption,
    config_file: Path | None = ConfigOption,
    project: Path = ProjectOption,
) -> None:
    """Prints the rewritten specifier, or the specifier itself when no rule applies."""
    config = _load_config(project, config_file, root, alias, extension)
    rewritten = resolve_specifier(
        specifier, (project / from_file).absolute(), config
    )
    if rewritten is not None:
        typer.echo(rewritten)
        return
    typer.echo(specifier)
    if not settings.QUIET:
        app_context.console.print(
            style(
                escape(cs.CLI_MSG_NO_REWRITE.format(specifier=specifier)),
                cs.Color.YELLOW,
                cs.StyleModifier.DIM,
            )
        )


@app.command(help=ch.CMD_REWRITE)
def rewrite(
    paths: list[Path] = typer.Argument(..., help=ch.HELP_PATHS),
    write: bool = typer.Option(False, "--write", "-w", help=ch.HELP_WRITE),
    check: bool = typer.Option(False, "--check", help=ch.HELP_CHECK),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", "-o", file_okay=False, help=ch.HELP_OUT_DIR
    ),
    root: list[str] | None = RootOption,
    alias: list[str] | None = AliasOption,
    extension: list[str] | None = ExtensionOption,
    config_file: Path | None = ConfigOption,
    project: Path = ProjectOption,
) -> None:
    """
    Rewrites specifiers in the given files and directories.

    Without `--write` or `--out-dir` a unified diff of the pending changes is
    printed and nothing is written.
    """
    if sum((write, check, out_dir is not None)) > 1:
        raise _fail(ex.WRITE_MODES_EXCLUSIVE)
    for path in paths:
        if not path.exists():
            raise _fail(ex.PATH_NOT_FOUND.format(path=path))

    config = _load_config(project, config_file, root, alias, extension)
    rewriter = SourceRewriter(config, encoding=settings.SOURCE_ENCODING)
    files = iter_source_files([path.absolute() for path in paths])
    summary = rewriter.rewrite_files(files, write=write, out_dir=out_dir)

    if check:
        if not settings.QUIET:
            print_diffs(summary)
        if summary.changed:
            raise _fail(
                cs.CLI_MSG_REWRITE_CHECK_FAILED.format(count=len(summary.changed))
            )
        print_summary(summary, cs.CLI_MSG_REWRITE_CLEAN)
    elif write or out_dir is not None:
        print_summary(summary, cs.CLI_MSG_REWRITE_DONE)
    else:
        print_diffs(summary)
        print_summary(summary, cs.CLI_MSG_REWRITE_PREVIEW)

    if summary.failed:
        raise typer.Exit(cs.EXIT_FAILURE)


@app.command(name="show-config", help=ch.CMD_SHOW_CONFIG)
def show_config(
    root: list[str] | None = RootOption,
    alias: list[str] | None = AliasOption,
    extension: list[str] | None = ExtensionOption,
    config_file: Path | None = ConfigOption,
    project: Path = ProjectOption,
) -> None:
    config = _load_config(project, config_file, root, alias, extension)
    app_context.console.print(render_config_table(config))
