"""Configuration loading for wrapgen (.wrapgen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".wrapgen.yml"

TEMPLATE_LITERAL_MODES = ("concat", "preserve")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SettingsImport:
    """A settings module imported by generated wrappers to expose one prefix field."""

    local: str
    source: str
    binding: str
    field: str


@dataclass
class SourceRewrite:
    """Regex substitution applied to a parent class import source."""

    pattern: str
    replacement: str

    def apply(self, source: str) -> str:
        return re.sub(self.pattern, self.replacement, source, count=1)


def _default_settings() -> List[SettingsImport]:
    return [
        SettingsImport(
            local="settings",
            source="carbon-components/es/globals/js/settings.js",
            binding="prefix",
            field="prefix",
        ),
        SettingsImport(
            local="ddsSettings",
            source="@carbon/ibmdotcom-utilities/es/utilities/settings/settings.js",
            binding="ddsPrefix",
            field="stablePrefix",
        ),
    ]


def _default_rewrites() -> List[SourceRewrite]:
    return [
        SourceRewrite(
            pattern=r"^carbon-web-components[\\/]es[\\/]components[\\/]",
            replacement="carbon-web-components/es/components-react/",
        )
    ]


@dataclass
class TransformConfig:
    """Fixed symbols and policies used while harvesting and synthesizing modules."""

    components_root: Path = Path("src/components")
    upgradable: bool = True
    template_literals: str = "concat"
    output_extension: str = ".js"
    property_decorator_sources: List[str] = field(default_factory=lambda: ["lit-element"])
    custom_element_decorator: str = "customElement"
    wrapper_module: str = "carbon-web-components/es/globals/wrappers/createReactCustomElementType.js"
    prop_types_module: str = "prop-types"
    custom_element_prefix: str = "../../components/"
    settings: List[SettingsImport] = field(default_factory=_default_settings)
    parent_source_rewrites: List[SourceRewrite] = field(default_factory=_default_rewrites)


@dataclass
class BuildConfig:
    """File discovery and output placement for batch builds."""

    out_dir: Optional[Path] = None
    include: List[str] = field(default_factory=lambda: ["*.ts"])
    exclude: List[str] = field(default_factory=lambda: ["*.d.ts", "*.test.ts", "*.stories.ts"])
    fail_fast: bool = False


@dataclass
class WrapGenConfig:
    """Represents the high-level settings defined in .wrapgen.yml."""

    root: Path
    transform: TransformConfig = field(default_factory=TransformConfig)
    build: BuildConfig = field(default_factory=BuildConfig)


def load_config(config_path: Path) -> WrapGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WrapGenConfig(root=root, transform=TransformConfig(components_root=root / "src" / "components"))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    transform = TransformConfig(components_root=root / _as_str(data.get("components_root"), "src/components"))

    upgradable = _as_bool(data.get("upgradable"))
    if upgradable is not None:
        transform.upgradable = upgradable

    mode = _as_str(data.get("template_literals"), transform.template_literals)
    if mode not in TEMPLATE_LITERAL_MODES:
        raise ConfigError(
            f"template_literals must be one of {', '.join(TEMPLATE_LITERAL_MODES)}, got {mode!r}"
        )
    transform.template_literals = mode

    extension = _as_str(data.get("output_extension"), transform.output_extension)
    if not extension.startswith("."):
        raise ConfigError(f"output_extension must start with '.', got {extension!r}")
    transform.output_extension = extension

    sources = _as_str_list(data.get("property_decorator_sources"))
    if sources:
        transform.property_decorator_sources = sources
    for key in ("custom_element_decorator", "wrapper_module", "prop_types_module", "custom_element_prefix"):
        value = _as_str(data.get(key))
        if value:
            setattr(transform, key, value)

    if "settings" in data:
        transform.settings = _parse_settings(data.get("settings"))
    if "parent_source_rewrites" in data:
        transform.parent_source_rewrites = _parse_rewrites(data.get("parent_source_rewrites"))

    build = BuildConfig()
    build_data = _as_dict(data.get("build"))
    if build_data:
        out_dir = _as_str(build_data.get("out_dir"))
        build.out_dir = root / out_dir if out_dir else None
        include = _as_str_list(build_data.get("include"))
        if include:
            build.include = include
        if "exclude" in build_data:
            build.exclude = _as_str_list(build_data.get("exclude"))
        build.fail_fast = _as_bool(build_data.get("fail_fast")) or False

    return WrapGenConfig(root=root, transform=transform, build=build)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in (".yml", ".yaml"):
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_settings(value: Any) -> List[SettingsImport]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("settings must be a list of mappings")
    result: List[SettingsImport] = []
    for index, item in enumerate(value):
        entry = _as_dict(item)
        missing = [key for key in ("local", "source", "binding", "field") if not _as_str(entry.get(key))]
        if missing:
            raise ConfigError(f"settings[{index}] is missing {', '.join(missing)}")
        result.append(
            SettingsImport(
                local=str(entry["local"]),
                source=str(entry["source"]),
                binding=str(entry["binding"]),
                field=str(entry["field"]),
            )
        )
    return result


def _parse_rewrites(value: Any) -> List[SourceRewrite]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("parent_source_rewrites must be a list of mappings")
    result: List[SourceRewrite] = []
    for index, item in enumerate(value):
        entry = _as_dict(item)
        pattern = _as_str(entry.get("pattern"))
        replacement = _as_str(entry.get("replacement"))
        if pattern is None or replacement is None:
            raise ConfigError(f"parent_source_rewrites[{index}] needs pattern and replacement")
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"parent_source_rewrites[{index}] has an invalid pattern: {exc}") from exc
        result.append(SourceRewrite(pattern=pattern, replacement=replacement))
    return result


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any, default: Optional[str] = None) -> Optional[str]:
    if isinstance(value, bool):
        return default
    return str(value) if isinstance(value, (str, int, float)) else default


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BuildConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "SettingsImport",
    "SourceRewrite",
    "TransformConfig",
    "WrapGenConfig",
    "load_config",
]
