"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from wrapgen.cli import _build_parser, main

COMPONENT = textwrap.dedent(
    """
    import { customElement, LitElement, property } from 'lit-element';

    @customElement('bx-thing')
    class BXThing extends LitElement {
      @property({ type: Number })
      size = 0;
    }

    export default BXThing;
    """
)


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_build_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["build", "src/components/thing", "--out-dir", "dist", "--non-upgradable", "--fail-fast", "--dry-run"]
    )
    assert args.paths == ["src/components/thing"]
    assert args.out_dir == "dist"
    assert args.non_upgradable is True
    assert args.fail_fast is True
    assert args.dry_run is True


def test_cli_requires_inspect_path() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["inspect"])


def _write_component(tmp_path: Path) -> Path:
    source = tmp_path / "src" / "components" / "thing" / "thing.ts"
    source.parent.mkdir(parents=True)
    source.write_text(COMPONENT, encoding="utf-8")
    return source


def test_main_build_writes_wrappers(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_component(tmp_path)

    main(["build", "--config", str(tmp_path), "--out-dir", str(tmp_path / "dist")])

    output = (tmp_path / "dist" / "thing" / "thing.js").read_text(encoding="utf-8")
    assert "import createReactCustomElementType, { numberSerializer } from " in output
    assert "Generated 1 wrapper module(s)" in capsys.readouterr().out


def test_main_build_dry_run_prints_modules(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_component(tmp_path)

    main(["build", "--config", str(tmp_path), "--out-dir", str(tmp_path / "dist"), "--non-upgradable", "--dry-run"])

    out = capsys.readouterr().out
    assert "export default Component;" in out
    assert "export { default as CustomElement }" not in out
    assert not (tmp_path / "dist").exists()


def test_main_build_exits_non_zero_on_failure(tmp_path: Path) -> None:
    source = _write_component(tmp_path)
    source.write_text("import { property } from 'lit-element';\n@property() class Foo {}\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["build", "--config", str(tmp_path), "--out-dir", str(tmp_path / "dist")])

    assert excinfo.value.code == 1


def test_main_inspect_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_component(tmp_path)

    main(["inspect", str(source), "--config", str(tmp_path)])

    summary = json.loads(capsys.readouterr().out)
    assert summary["customElementName"] == "'bx-thing'"
    assert summary["declaredProps"] == {"size": {"type": "Number", "attribute": None}}


def test_main_build_writes_debug_log_file(tmp_path: Path) -> None:
    _write_component(tmp_path)
    log_file = tmp_path / "logs" / "build.log"

    main(["build", "--config", str(tmp_path), "--out-dir", str(tmp_path / "dist"), "--log-file", str(log_file)])

    content = log_file.read_text(encoding="utf-8")
    assert "wrapgen.builder: Wrote " in content
    assert "thing.js" in content


def test_cli_accepts_log_file_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["inspect", "thing.ts", "--log-file", "build.log"])
    assert args.log_file == "build.log"


def test_main_inspect_rejects_non_utf8_source(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_component(tmp_path)
    source.write_bytes(b"\xff\xfeclass \x80 {}\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["inspect", str(source), "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "codec can't decode" in capsys.readouterr().err
