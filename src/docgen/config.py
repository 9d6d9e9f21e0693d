# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Generator configuration and path conventions."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from docgen.declaration import PlatformVariant
from docgen.layout import DEFAULT_BANNER, DEFAULT_WRAP_WIDTH, artifact_file_name
from docgen.parser import ParseFailure

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_ROOT = Path("translations")
MIN_WRAP_WIDTH = 40


@dataclass(frozen=True)
class GeneratorConfig:
    """Describe one generation run.

    Attributes:
        source_roots: Directories containing ``src/<import-path>`` trees,
            searched in order (GOROOT first, then GOPATH entries).
        output_root: Root of the ``src/<import-path>`` artifact tree.
        max_workers: Worker threads for extraction and rendering.
        parse_timeout: Optional seconds allowed to parse one variant.
        wrap_width: Comment line width budget.
        banner: Header text of every artifact.
        exclude_patterns: Gitignore-style file name patterns to skip.
    """

    source_roots: tuple[Path, ...]
    output_root: Path = DEFAULT_OUTPUT_ROOT
    max_workers: int = 4
    parse_timeout: float | None = None
    wrap_width: int = DEFAULT_WRAP_WIDTH
    banner: str = DEFAULT_BANNER
    exclude_patterns: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        if self.parse_timeout is not None and self.parse_timeout <= 0:
            raise ValueError("parse_timeout must be > 0")
        if self.wrap_width < MIN_WRAP_WIDTH:
            raise ValueError(f"wrap_width must be >= {MIN_WRAP_WIDTH}")
        if not self.banner.strip():
            raise ValueError("banner must not be empty")

    @classmethod
    def from_environment(
        cls,
        goroot: str | None = None,
        gopath: str | None = None,
        **overrides: object,
    ) -> "GeneratorConfig":
        """Build a configuration using GOROOT/GOPATH when not given.

        Args:
            goroot: Go installation root; defaults to ``$GOROOT``.
            gopath: ``os.pathsep``-separated workspace list; defaults to
                ``$GOPATH`` or ``~/go``.
            **overrides: Remaining ``GeneratorConfig`` fields.

        Returns:
            Validated configuration.
        """
        roots: list[Path] = []
        goroot = goroot if goroot is not None else os.environ.get("GOROOT")
        if goroot:
            roots.append(Path(goroot))
        gopath = gopath if gopath is not None else os.environ.get("GOPATH")
        if gopath is None:
            gopath = str(Path.home() / "go")
        roots.extend(Path(entry) for entry in gopath.split(os.pathsep) if entry)
        return cls(source_roots=tuple(roots), **overrides)  # type: ignore[arg-type]

    def exclude_spec(self) -> pathspec.GitIgnoreSpec | None:
        """Compile exclude patterns, or ``None`` when there are none."""
        if not self.exclude_patterns:
            return None
        return pathspec.GitIgnoreSpec.from_lines(self.exclude_patterns)

    def locate_package(self, import_path: str) -> Path:
        """Return the source directory of ``import_path``.

        Raises:
            ParseFailure: If no source root contains the package.
        """
        relative = Path(*import_path.strip("/").split("/"))
        for root in self.source_roots:
            candidate = root / "src" / relative
            if candidate.is_dir():
                logger.debug(f"Located package (import_path={import_path} directory={candidate})")
                return candidate
        searched = ", ".join(str(root) for root in self.source_roots) or "<none>"
        raise ParseFailure(f"Cannot find package {import_path} (source_roots={searched})")

    def artifact_path(self, import_path: str, language: str, variant: PlatformVariant) -> Path:
        """Return ``<output_root>/src/<import-path>/doc_<lang>[_os][_arch].go``."""
        relative = Path(*import_path.strip("/").split("/"))
        return self.output_root / "src" / relative / artifact_file_name(language, variant)

    def artifact_chain(
        self, import_path: str, language: str, variant: PlatformVariant
    ) -> list[Path]:
        """Return the artifacts whose translations seed ``variant``, broadest first."""
        chain = [PlatformVariant()]
        if variant.os is not None:
            chain.append(PlatformVariant(os=variant.os))
        if variant not in chain:
            chain.append(variant)
        return [self.artifact_path(import_path, language, member) for member in chain]
