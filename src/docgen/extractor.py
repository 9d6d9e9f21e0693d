# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Build declaration records from parsed Go compilation units."""

import logging
from pathlib import Path

from docgen.declaration import (
    Declaration,
    DeclKey,
    DeclKind,
    PlatformVariant,
    VariantSnapshot,
)
from docgen.layout import doc_comment
from docgen.parser import CommentGroup, ParsedDecl, ParsedUnit, ParseFailure, SourceParser

logger = logging.getLogger(__name__)

ExtractedItem = tuple[Declaration, tuple[CommentGroup, ...], int]


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


class DeclarationExtractor:
    """Extract exported declarations from a parsed compilation unit."""

    def __init__(self, parser: SourceParser) -> None:
        """Initialize extractor.

        Args:
            parser: Source parser collaborator.
        """
        self._parser = parser

    def extract(
        self, import_path: str, directory: Path, variant: PlatformVariant
    ) -> VariantSnapshot:
        """Extract the declarations visible under one platform variant.

        Args:
            import_path: Import path of the compilation unit.
            directory: Directory holding the unit's source files.
            variant: Platform variant selecting source files.

        Returns:
            Declarations in source order.

        Raises:
            ParseFailure: If the unit cannot be parsed or has duplicate
                declaration identities.
        """
        unit = self._parser.parse_package(directory, variant)
        declarations = self.build(unit)
        logger.debug(
            f"Extracted declarations (import_path={import_path} variant={variant.label} "
            f"declarations={len(declarations)})"
        )
        return VariantSnapshot(
            import_path=import_path,
            variant=variant,
            package_name=unit.package_name,
            declarations=tuple(declarations),
        )

    def build(self, unit: ParsedUnit) -> list[Declaration]:
        """Return declarations with canonical comments taken from ``unit``."""
        return [declaration for declaration, _, _ in self.collect(unit)]

    def collect(self, unit: ParsedUnit) -> list[ExtractedItem]:
        """Walk ``unit`` and pair each declaration with its leading comments.

        The canonical comment of each declaration is its adjacent doc comment.
        Callers reading an artifact reinterpret the leading groups themselves.

        Returns:
            Tuples of declaration, leading comment groups and declaration line.

        Raises:
            ParseFailure: If two declarations share an identity.
        """
        items: list[ExtractedItem] = []
        package_leading, package_line = self._package_comments(unit)
        items.append(
            (
                self._declaration(
                    kind="package",
                    name=unit.package_name,
                    signature=f"package {unit.package_name}",
                    leading=package_leading,
                    line=package_line,
                    order=0,
                ),
                package_leading,
                package_line,
            )
        )

        for parsed in unit.decls:
            if parsed.keyword in ("const", "var"):
                items.extend(self._group_items(parsed, first_order=len(items)))
            elif parsed.keyword == "type":
                items.extend(self._type_items(parsed, first_order=len(items)))
            else:
                item = self._func_item(parsed, order=len(items))
                if item is not None:
                    items.append(item)

        seen: set[DeclKey] = set()
        for declaration, _, _ in items:
            if declaration.key in seen:
                raise ParseFailure(
                    f"Duplicate declaration {declaration.kind} {declaration.name or declaration.group_id}"
                )
            seen.add(declaration.key)
        return items

    def _package_comments(self, unit: ParsedUnit) -> tuple[tuple[CommentGroup, ...], int]:
        documented = [
            parsed
            for parsed in unit.files
            if doc_comment(parsed.package_leading, parsed.package_line)
        ]
        documented.sort(key=lambda parsed: parsed.file_name != "doc.go")
        chosen = documented[0] if documented else unit.files[0]
        return chosen.package_leading, chosen.package_line

    def _group_items(self, parsed: ParsedDecl, first_order: int) -> list[ExtractedItem]:
        kind: DeclKind = parsed.keyword  # type: ignore[assignment]
        exported_specs = [
            (spec, next(name for name in spec.names if is_exported(name)))
            for spec in parsed.specs
            if any(is_exported(name) for name in spec.names)
        ]
        if not exported_specs:
            return []
        group_id = exported_specs[0][1]
        items: list[ExtractedItem] = []
        if parsed.parenthesized:
            items.append(
                (
                    self._declaration(
                        kind=kind,
                        name="",
                        group_id=group_id,
                        signature=f"{parsed.keyword} (",
                        leading=parsed.leading,
                        line=parsed.line,
                        order=first_order,
                    ),
                    parsed.leading,
                    parsed.line,
                )
            )
            for spec, name in exported_specs:
                items.append(
                    (
                        self._declaration(
                            kind=kind,
                            name=name,
                            group_id=group_id,
                            signature=spec.text,
                            leading=spec.leading,
                            line=spec.line,
                            order=first_order + len(items),
                        ),
                        spec.leading,
                        spec.line,
                    )
                )
            return items

        spec, name = exported_specs[0]
        return [
            (
                self._declaration(
                    kind=kind,
                    name=name,
                    group_id=group_id,
                    signature=f"{parsed.keyword} {spec.text}",
                    leading=parsed.leading,
                    line=parsed.line,
                    order=first_order,
                ),
                parsed.leading,
                parsed.line,
            )
        ]

    def _type_items(self, parsed: ParsedDecl, first_order: int) -> list[ExtractedItem]:
        items: list[ExtractedItem] = []
        for spec in parsed.specs:
            name = spec.names[0]
            if not is_exported(name):
                continue
            # A lone spec in a parenthesized block inherits the block's doc.
            if parsed.parenthesized and not (len(parsed.specs) == 1 and not spec.leading):
                leading, line = spec.leading, spec.line
            else:
                leading, line = parsed.leading, parsed.line
            items.append(
                (
                    self._declaration(
                        kind="type",
                        name=name,
                        signature=f"type {spec.text}",
                        leading=leading,
                        line=line,
                        order=first_order + len(items),
                    ),
                    leading,
                    line,
                )
            )
        return items

    def _func_item(self, parsed: ParsedDecl, order: int) -> ExtractedItem | None:
        spec = parsed.specs[0]
        name = spec.names[0]
        if not is_exported(name):
            return None
        if spec.receiver is not None:
            if not is_exported(spec.receiver):
                return None
            declaration = self._declaration(
                kind="method",
                name=f"{spec.receiver}.{name}",
                receiver=spec.receiver,
                signature=spec.text,
                leading=parsed.leading,
                line=parsed.line,
                order=order,
            )
        else:
            declaration = self._declaration(
                kind="func",
                name=name,
                signature=spec.text,
                leading=parsed.leading,
                line=parsed.line,
                order=order,
            )
        return declaration, parsed.leading, parsed.line

    @staticmethod
    def _declaration(
        kind: DeclKind,
        name: str,
        signature: str,
        leading: tuple[CommentGroup, ...],
        line: int,
        order: int,
        receiver: str | None = None,
        group_id: str | None = None,
    ) -> Declaration:
        return Declaration(
            kind=kind,
            name=name,
            receiver=receiver,
            group_id=group_id,
            signature=signature,
            canonical_comment=doc_comment(leading, line),
            source_order=order,
        )
