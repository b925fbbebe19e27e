"""Tests for wrapgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrapgen.config import ConfigError, SettingsImport, SourceRewrite, WrapGenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, WrapGenConfig)
    assert config.root == tmp_path.resolve()
    assert config.transform.components_root == tmp_path.resolve() / "src" / "components"
    assert config.transform.upgradable is True
    assert config.transform.template_literals == "concat"
    assert config.transform.property_decorator_sources == ["lit-element"]
    assert [item.binding for item in config.transform.settings] == ["prefix", "ddsPrefix"]
    assert config.build.out_dir is None
    assert config.build.include == ["*.ts"]
    assert "*.d.ts" in config.build.exclude


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".wrapgen.yml"
    config_file.write_text(
        """
components_root: "packages/web/src/components"
upgradable: false
template_literals: "preserve"
output_extension: ".mjs"
property_decorator_sources: ["lit-element", "lit/decorators.js"]
wrapper_module: "./wrappers/createReactCustomElementType.js"
settings:
  - local: "settings"
    source: "./settings.js"
    binding: "prefix"
    field: "prefix"
parent_source_rewrites:
  - pattern: "^@acme/elements/"
    replacement: "@acme/elements-react/"
build:
  out_dir: "dist/react"
  include: ["*.ts", "*.js"]
  exclude: []
  fail_fast: true
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    transform = config.transform
    assert transform.components_root == root / "packages/web/src/components"
    assert transform.upgradable is False
    assert transform.template_literals == "preserve"
    assert transform.output_extension == ".mjs"
    assert transform.property_decorator_sources == ["lit-element", "lit/decorators.js"]
    assert transform.wrapper_module == "./wrappers/createReactCustomElementType.js"
    assert transform.prop_types_module == "prop-types"
    assert transform.settings == [SettingsImport("settings", "./settings.js", "prefix", "prefix")]
    assert transform.parent_source_rewrites == [SourceRewrite("^@acme/elements/", "@acme/elements-react/")]
    assert config.build.out_dir == root / "dist/react"
    assert config.build.include == ["*.ts", "*.js"]
    assert config.build.exclude == []
    assert config.build.fail_fast is True


def test_load_config_accepts_file_path_in_directory(tmp_path: Path) -> None:
    (tmp_path / ".wrapgen.yml").write_text("upgradable: no\n", encoding="utf-8")

    config = load_config(tmp_path / "src")

    assert config.transform.upgradable is False


def test_load_config_allows_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".wrapgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.transform.components_root == tmp_path.resolve() / "src" / "components"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- not\n- a mapping\n", "must contain a mapping"),
        ("template_literals: babel\n", "template_literals must be one of"),
        ("output_extension: js\n", "output_extension must start with"),
        ("settings:\n  - local: settings\n", "settings\\[0\\] is missing source, binding, field"),
        ("parent_source_rewrites:\n  - pattern: '('\n    replacement: x\n", "invalid pattern"),
        ("components_root: [unclosed\n", "Failed to parse"),
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".wrapgen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
