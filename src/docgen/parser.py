# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parser contracts and DTOs for Go compilation units."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from docgen.declaration import PlatformVariant

DeclKeyword = Literal["const", "var", "type", "func"]


class ParseFailure(RuntimeError):
    """Represent a compilation unit that could not be parsed."""


class NoBuildableFiles(ParseFailure):
    """Represent a package with no source files for one platform variant."""


@dataclass(frozen=True)
class CommentGroup:
    """Represent adjacent comment lines with no blank line between them.

    Attributes:
        text: Comment text with comment markers removed.
        line: First source line of the group (1-based).
        end_line: Last source line of the group (1-based).
    """

    text: str
    line: int
    end_line: int


@dataclass(frozen=True)
class ParsedSpec:
    """Represent one spec of a declaration.

    Attributes:
        names: Declared identifiers, in source order.
        text: Spec source text without trailing comments.
        leading: Comment groups between the previous token and the spec.
        line: Line of the spec's first token.
        receiver: Receiver type name for methods.
    """

    names: tuple[str, ...]
    text: str
    leading: tuple[CommentGroup, ...]
    line: int
    receiver: str | None = None


@dataclass(frozen=True)
class ParsedDecl:
    """Represent one top-level declaration.

    Attributes:
        keyword: Declaration keyword.
        file_name: Source file name.
        line: Line of the keyword.
        leading: Comment groups between the previous token and the keyword.
        parenthesized: Whether specs are enclosed in ``( ... )``.
        specs: Declared specs; functions carry exactly one.
    """

    keyword: DeclKeyword
    file_name: str
    line: int
    leading: tuple[CommentGroup, ...]
    parenthesized: bool
    specs: tuple[ParsedSpec, ...]


@dataclass(frozen=True)
class ParsedFile:
    """Represent one parsed Go source file."""

    file_name: str
    package_name: str
    package_line: int
    package_leading: tuple[CommentGroup, ...]
    decls: tuple[ParsedDecl, ...]


@dataclass(frozen=True)
class ParsedUnit:
    """Represent the merged files of one package under one variant."""

    package_name: str
    files: tuple[ParsedFile, ...]

    @property
    def decls(self) -> tuple[ParsedDecl, ...]:
        return tuple(decl for parsed in self.files for decl in parsed.decls)


class SourceParser(Protocol):
    """Language-specific parser contract."""

    def parse_package(self, directory: Path, variant: PlatformVariant) -> ParsedUnit:
        """Parse the files of ``directory`` that build under ``variant``.

        Raises:
            ParseFailure: If any selected file is malformed.
            NoBuildableFiles: If no file builds under ``variant``.
        """

    def parse_source(self, source: str, file_name: str) -> ParsedUnit:
        """Parse one source text without evaluating build constraints.

        Raises:
            ParseFailure: If the source is malformed.
        """
