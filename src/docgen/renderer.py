# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Render aligned declarations into the bilingual artifact layout."""

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from docgen.declaration import AlignedDeclaration
from docgen.layout import DEFAULT_BANNER, DEFAULT_WRAP_WIDTH, banner_lines, comment_block

logger = logging.getLogger(__name__)


class WriteFailure(RuntimeError):
    """Represent an artifact that could not be written."""


class Renderer:
    """Serialize aligned declarations with a fixed, diff-stable layout."""

    def __init__(self, banner: str = DEFAULT_BANNER, wrap_width: int = DEFAULT_WRAP_WIDTH) -> None:
        """Initialize renderer.

        Args:
            banner: Header text emitted verbatim at the top of each artifact.
            wrap_width: Comment line width budget.
        """
        self._banner = banner
        self._wrap_width = wrap_width

    def render(self, package_name: str, aligned: Sequence[AlignedDeclaration]) -> str:
        """Render one artifact.

        Order: banner, package doc and clause, const groups, var groups,
        functions by name, types by name each followed by its methods.

        Args:
            package_name: Go package name.
            aligned: Aligned declarations of one variant.

        Returns:
            Artifact text ending with a newline.
        """
        lines = banner_lines(self._banner)
        lines.append("")
        package_item = next(
            (item for item in aligned if item.declaration.kind == "package"), None
        )
        if package_item is not None:
            lines.extend(self._comments(package_item))
        lines.append(f"package {package_name}")

        for section in self._sections(aligned):
            lines.append("")
            lines.extend(section)
        return "\n".join(lines) + "\n"

    def _sections(self, aligned: Sequence[AlignedDeclaration]) -> list[list[str]]:
        groups: dict[tuple[str, str | None], list[AlignedDeclaration]] = {}
        functions: list[AlignedDeclaration] = []
        types: list[AlignedDeclaration] = []
        methods: dict[str, list[AlignedDeclaration]] = {}
        for item in sorted(aligned, key=lambda item: item.declaration.source_order):
            declaration = item.declaration
            if declaration.kind in ("const", "var"):
                groups.setdefault((declaration.kind, declaration.group_id), []).append(item)
            elif declaration.kind == "func":
                functions.append(item)
            elif declaration.kind == "type":
                types.append(item)
            elif declaration.kind == "method":
                methods.setdefault(declaration.receiver or "", []).append(item)

        sections: list[list[str]] = []
        for kind in ("const", "var"):
            for (group_kind, _), members in groups.items():
                if group_kind == kind:
                    sections.append(self._group_lines(members))
        for item in sorted(functions, key=lambda item: item.declaration.name):
            sections.append(self._item_lines(item))
        for item in sorted(types, key=lambda item: item.declaration.name):
            sections.append(self._item_lines(item))
            for method in self._sorted_methods(methods.pop(item.declaration.name, [])):
                sections.append(self._item_lines(method))
        for receiver in sorted(methods):
            for method in self._sorted_methods(methods[receiver]):
                sections.append(self._item_lines(method))
        return sections

    @staticmethod
    def _sorted_methods(methods: list[AlignedDeclaration]) -> list[AlignedDeclaration]:
        return sorted(methods, key=lambda item: item.declaration.name)

    def _group_lines(self, members: list[AlignedDeclaration]) -> list[str]:
        header = next((item for item in members if item.declaration.is_group_header), None)
        if header is None:
            return self._item_lines(members[0])
        lines = self._comments(header)
        lines.append(header.declaration.signature)
        specs = [item for item in members if item is not header]
        for index, item in enumerate(specs):
            comments = self._comments(item, indent="\t")
            if comments and index > 0:
                lines.append("")
            lines.extend(comments)
            lines.append(f"\t{item.declaration.signature}")
        lines.append(")")
        return lines

    def _item_lines(self, item: AlignedDeclaration) -> list[str]:
        lines = self._comments(item)
        lines.extend(item.declaration.signature.split("\n"))
        return lines

    def _comments(self, item: AlignedDeclaration, indent: str = "") -> list[str]:
        return comment_block(
            canonical=item.declaration.canonical_comment,
            translated=item.translated_comment,
            stale_digest=item.translation_digest if item.is_stale else None,
            indent=indent,
            width=self._wrap_width,
        )


class ArtifactWriter:
    """Write artifacts atomically through a temporary sibling file."""

    def write(self, path: Path, text: str) -> bool:
        """Write ``text`` to ``path`` unless the content is unchanged.

        Args:
            path: Target artifact path.
            text: Artifact text.

        Returns:
            True when the file was written, False when it was already current.

        Raises:
            WriteFailure: If the directory or file cannot be written.
        """
        if self._is_current(path, text):
            logger.debug(f"Artifact unchanged (path={path})")
            return False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
        except OSError as exc:
            raise WriteFailure(f"Cannot prepare {path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(temp_name)
            raise WriteFailure(f"Cannot write {path}: {exc}") from exc
        logger.info(f"Wrote artifact (path={path} bytes={len(text.encode('utf-8'))})")
        return True

    @staticmethod
    def _is_current(path: Path, text: str) -> bool:
        try:
            return path.read_text(encoding="utf-8") == text
        except FileNotFoundError:
            return False
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug(f"Cannot compare existing artifact (path={path} error={exc})")
            return False
