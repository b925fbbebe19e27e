"""Batch driver: discover component modules, transform them, write wrappers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .ast.parser import ModuleParser
from .config import WrapGenConfig
from .errors import BuildError, TransformError
from .logging import get_logger
from .transform import inspect_source, transform_source

_EXCLUDED_DIRS = {
    "node_modules",
    "__pycache__",
}


@dataclass
class BuildResult:
    """Outcome of transforming one source file."""

    source: Path
    output: Optional[Path] = None
    code: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BuildReport:
    """Summary of a batch build."""

    results: List[BuildResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> List[BuildResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[BuildResult]:
        return [result for result in self.results if not result.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class Builder:
    """Transforms component modules into wrapper modules on disk."""

    def __init__(self, config: WrapGenConfig, parser: ModuleParser | None = None) -> None:
        self.config = config
        self.parser = parser or ModuleParser()
        self.logger = get_logger("builder")

    def discover(self, paths: Iterable[Path]) -> List[Path]:
        """Expand files and directories into the sorted list of modules to build."""
        found: Dict[Path, None] = {}
        for path in paths:
            path = Path(path)
            if path.is_file():
                found[path] = None
                continue
            if not path.is_dir():
                self.logger.warning("Skipping missing path %s", path)
                continue
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames[:] = sorted(
                    name for name in dirnames if name not in _EXCLUDED_DIRS and not name.startswith(".")
                )
                for filename in sorted(filenames):
                    if self._selected(filename):
                        found[Path(dirpath) / filename] = None
        return sorted(found)

    def _selected(self, filename: str) -> bool:
        build = self.config.build
        if not any(fnmatchcase(filename, pattern) for pattern in build.include):
            return False
        return not any(fnmatchcase(filename, pattern) for pattern in build.exclude)

    def output_path(self, path: Path) -> Path:
        """Where the wrapper generated from ``path`` is written."""
        extension = self.config.transform.output_extension
        out_dir = self.config.build.out_dir
        if out_dir is None:
            target = path
        else:
            try:
                relative = path.resolve().relative_to(self.config.transform.components_root.resolve())
            except ValueError:
                relative = Path(path.name)
            target = out_dir / relative
        target = target.with_suffix(extension)
        if target.resolve() == path.resolve():
            raise BuildError(f"Refusing to overwrite {path} with its own wrapper")
        return target

    def build_file(self, path: Path, *, dry_run: bool = False) -> BuildResult:
        """Transform one file; raises ``TransformError`` or ``BuildError`` on failure."""
        output = self.output_path(path)
        source = path.read_text(encoding="utf-8")
        code = transform_source(source, str(path), self.config.transform, self.parser)
        if not dry_run:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(code, encoding="utf-8")
            self.logger.info("Wrote %s", output)
        return BuildResult(source=path, output=output, code=code)

    def build(self, paths: Sequence[Path], *, dry_run: bool = False) -> BuildReport:
        """Build every discovered module, isolating failures per file."""
        report = BuildReport(dry_run=dry_run)
        files = self.discover(paths)
        self.logger.debug("Discovered %d component modules", len(files))
        for path in files:
            try:
                result = self.build_file(path, dry_run=dry_run)
            except (TransformError, BuildError, OSError, UnicodeDecodeError) as exc:
                self.logger.error("Failed to build %s: %s", path, exc)
                result = BuildResult(source=path, error=str(exc))
            report.results.append(result)
            if not result.ok and self.config.build.fail_fast:
                self.logger.info("Stopping after first failure (fail_fast)")
                break
        self.logger.info(
            "Built %d of %d modules%s",
            len(report.succeeded),
            len(files),
            " (dry-run)" if dry_run else "",
        )
        return report

    def inspect(self, path: Path) -> Dict[str, Any]:
        """Return the harvested metadata of ``path`` as a JSON-serialisable mapping."""
        source = path.read_text(encoding="utf-8")
        context = inspect_source(source, str(path), self.config.transform, self.parser)
        return context.summary()


__all__ = ["BuildReport", "BuildResult", "Builder"]
