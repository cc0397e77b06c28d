from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from module_resolver.cli import app
from module_resolver.core import constants as cs
from module_resolver.core.config import settings
from module_resolver.core.main import configure_logging

C1 = "./test/examples/components/c1"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_cli_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(settings, "QUIET", False)
    monkeypatch.setattr(settings, "MODULE_RESOLVER_CONFIG", None)
    monkeypatch.delenv("MR_QUIET", raising=False)
    yield
    configure_logging(cs.DEFAULT_LOG_LEVEL)


@pytest.fixture
def app_file(example_project: Path) -> Path:
    src = example_project / "src"
    src.mkdir()
    path = src / "app.js"
    path.write_text('const c1 = require("c1");\n', encoding="utf-8")
    return path


def _root_args(project: Path) -> list[str]:
    return ["--root", "./test/examples/components", "--project", str(project)]


class TestResolveCommand:
    def test_prints_rewritten_specifier(
        self, example_project: Path, from_file: Path
    ) -> None:
        args = ["resolve", "c1", "--from", str(from_file)]
        result = runner.invoke(app, [*args, *_root_args(example_project)])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == C1

    def test_unmatched_specifier_is_echoed(
        self, example_project: Path, from_file: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "resolve",
                "other-lib",
                "--from",
                str(from_file),
                *_root_args(example_project),
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "other-lib"

    def test_alias_arguments(self, example_project: Path, from_file: Path) -> None:
        result = runner.invoke(
            app,
            [
                "resolve",
                "underscore/map",
                "--from",
                str(from_file),
                "--alias",
                "underscore=lodash",
                "--project",
                str(example_project),
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "lodash/map"

    def test_invalid_alias_argument(
        self, example_project: Path, from_file: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "resolve",
                "x",
                "--from",
                str(from_file),
                "--alias",
                "broken",
                "--project",
                str(example_project),
            ],
        )

        assert result.exit_code == cs.EXIT_FAILURE
        assert "Configuration error" in result.output

    def test_options_discovered_in_project(
        self, example_project: Path, from_file: Path
    ) -> None:
        (example_project / cs.CONFIG_FILENAME).write_text(
            json.dumps({"root": ["./test/**/components"]}), encoding="utf-8"
        )

        result = runner.invoke(
            app,
            [
                "--quiet",
                "resolve",
                "sub/sub1",
                "--from",
                str(from_file),
                "--project",
                str(example_project),
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "./test/examples/components/sub/sub1"

    def test_quiet_applies_to_one_invocation_only(
        self, example_project: Path, from_file: Path
    ) -> None:
        args = ["resolve", "other-lib", "--from", str(from_file)]
        args += _root_args(example_project)

        first = runner.invoke(app, args)
        quiet = runner.invoke(app, ["--quiet", *args])
        after = runner.invoke(app, args)

        assert quiet.output == "other-lib\n"
        assert "unchanged" in first.output
        assert after.output == first.output
        assert settings.QUIET is False

    def test_quiet_default_from_environment(
        self,
        example_project: Path,
        from_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("MR_QUIET", "true")
        args = ["resolve", "other-lib", "--from", str(from_file)]

        result = runner.invoke(app, [*args, *_root_args(example_project)])

        assert result.output == "other-lib\n"

    def test_relative_from_file_is_anchored_at_project(
        self, example_project: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        result = runner.invoke(
            app,
            ["resolve", "c1", "--from", "lib/index.js", *_root_args(example_project)],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "../test/examples/components/c1"


class TestRewriteCommand:
    def test_preview_leaves_files_alone(
        self, example_project: Path, app_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["rewrite", str(app_file.parent), *_root_args(example_project)]
        )

        assert result.exit_code == 0, result.output
        assert app_file.read_text(encoding="utf-8") == 'const c1 = require("c1");\n'

    def test_write(self, example_project: Path, app_file: Path) -> None:
        result = runner.invoke(
            app,
            ["rewrite", str(app_file), "--write", *_root_args(example_project)],
        )

        assert result.exit_code == 0, result.output
        assert app_file.read_text(encoding="utf-8") == (
            'const c1 = require("../test/examples/components/c1");\n'
        )

    def test_out_dir(
        self, example_project: Path, app_file: Path, tmp_path: Path
    ) -> None:
        out_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            [
                "rewrite",
                str(app_file.parent),
                "--out-dir",
                str(out_dir),
                *_root_args(example_project),
            ],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "app.js").read_text(encoding="utf-8") == (
            'const c1 = require("../test/examples/components/c1");\n'
        )

    def test_check_fails_when_rewrites_are_pending(
        self, example_project: Path, app_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["rewrite", str(app_file), "--check", *_root_args(example_project)]
        )

        assert result.exit_code == cs.EXIT_FAILURE
        assert app_file.read_text(encoding="utf-8") == 'const c1 = require("c1");\n'

    def test_check_passes_when_clean(
        self, example_project: Path, app_file: Path
    ) -> None:
        app_file.write_text('const c1 = require("./c1");\n', encoding="utf-8")

        result = runner.invoke(
            app, ["rewrite", str(app_file), "--check", *_root_args(example_project)]
        )

        assert result.exit_code == 0, result.output

    def test_modes_are_exclusive(self, example_project: Path, app_file: Path) -> None:
        result = runner.invoke(
            app,
            [
                "rewrite",
                str(app_file),
                "--write",
                "--check",
                *_root_args(example_project),
            ],
        )

        assert result.exit_code == cs.EXIT_FAILURE
        assert app_file.read_text(encoding="utf-8") == 'const c1 = require("c1");\n'

    def test_missing_path(self, example_project: Path) -> None:
        result = runner.invoke(
            app,
            ["rewrite", str(example_project / "nope"), *_root_args(example_project)],
        )

        assert result.exit_code == cs.EXIT_FAILURE

    def test_unreadable_file_fails_the_run(
        self, example_project: Path, app_file: Path
    ) -> None:
        (app_file.parent / "broken.js").write_bytes(b"\xff\xfe")

        result = runner.invoke(
            app,
            ["rewrite", str(app_file.parent), "--write", *_root_args(example_project)],
        )

        assert result.exit_code == cs.EXIT_FAILURE
        assert app_file.read_text(encoding="utf-8") == (
            'const c1 = require("../test/examples/components/c1");\n'
        )


class TestShowConfigCommand:
    def test_renders_table(self, example_project: Path) -> None:
        result = runner.invoke(
            app,
            [
                "show-config",
                "--alias",
                "underscore=lodash",
                *_root_args(example_project),
            ],
        )

        assert result.exit_code == 0, result.output
        assert cs.CLI_TABLE_TITLE in result.output
        assert "underscore -> lodash" in result.output
