# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration, variant and translation DTOs shared by the generator."""

import hashlib
from dataclasses import dataclass, field
from typing import Literal, Mapping

DeclKind = Literal["package", "const", "var", "func", "type", "method"]


@dataclass(frozen=True, order=True)
class DeclKey:
    """Identity of one documented declaration.

    Attributes:
        kind: Declaration category.
        name: Symbol name; ``Receiver.Method`` for methods, empty for the
            header of a parenthesized const/var block.
        receiver: Owning type name for methods, ``None`` otherwise.
        group_id: First exported name of the enclosing const/var block.
    """

    kind: DeclKind
    name: str
    receiver: str | None = None
    group_id: str | None = None


@dataclass(frozen=True)
class Declaration:
    """Represent one exported declaration of a compilation unit.

    Attributes:
        kind: Declaration category.
        name: Qualified symbol name.
        receiver: Owning type name for methods.
        group_id: Enclosing const/var block identity.
        signature: Printed declaration text, compared verbatim only.
        canonical_comment: Source-language doc comment text.
        source_order: Position in source order across the unit.
    """

    kind: DeclKind
    name: str
    receiver: str | None
    group_id: str | None
    signature: str
    canonical_comment: str
    source_order: int

    @property
    def key(self) -> DeclKey:
        return DeclKey(
            kind=self.kind,
            name=self.name,
            receiver=self.receiver,
            group_id=self.group_id,
        )

    @property
    def is_group_header(self) -> bool:
        return self.kind in ("const", "var") and self.name == ""


@dataclass(frozen=True)
class PlatformVariant:
    """Represent one (OS, architecture) build configuration.

    ``PlatformVariant()`` is the platform-independent variant.
    """

    os: str | None = None
    arch: str | None = None

    @property
    def specificity(self) -> int:
        return int(self.os is not None) + int(self.arch is not None)

    @property
    def suffix(self) -> str:
        """Return the artifact file name suffix, e.g. ``_windows_amd64``."""
        return "".join(f"_{part}" for part in (self.os, self.arch) if part)

    @property
    def label(self) -> str:
        if self.specificity == 0:
            return "default"
        return "/".join(part or "*" for part in (self.os, self.arch))

    def sort_key(self) -> tuple[int, str, str]:
        """Order variants from broadest to most specific, then lexically."""
        return (self.specificity, self.os or "", self.arch or "")


def signature_digest(signature: str) -> str:
    """Return the digest used to detect signature drift."""
    return hashlib.md5(signature.encode("utf-8")).hexdigest()  # noqa: S324


@dataclass(frozen=True)
class VariantSnapshot:
    """Declarations of one compilation unit visible under one variant."""

    import_path: str
    variant: PlatformVariant
    package_name: str
    declarations: tuple[Declaration, ...]

    @property
    def fingerprint(self) -> str:
        """Return a structural digest over keys, signatures and comments."""
        digest = hashlib.md5()  # noqa: S324
        for declaration in self.declarations:
            key = declaration.key
            for part in (
                key.kind,
                key.name,
                key.receiver or "",
                key.group_id or "",
                declaration.signature,
                declaration.canonical_comment,
            ):
                digest.update(part.encode("utf-8"))
                digest.update(b"\x00")
            digest.update(b"\x01")
        return digest.hexdigest()


@dataclass(frozen=True)
class PackageSnapshot:
    """Per-variant declarations of one compilation unit."""

    import_path: str
    variants: Mapping[PlatformVariant, VariantSnapshot] = field(default_factory=dict)


@dataclass(frozen=True)
class TranslationEntry:
    """Represent one previously produced translated comment.

    Attributes:
        key: Identity of the declaration the translation belongs to.
        language: Target language code.
        translated_comment: Translated doc comment text.
        signature_digest: Digest of the signature the translation was
            written against.
    """

    key: DeclKey
    language: str
    translated_comment: str
    signature_digest: str


@dataclass(frozen=True)
class AlignedDeclaration:
    """Represent a declaration paired with its optional translation."""

    declaration: Declaration
    translated_comment: str | None = None
    is_stale: bool = False
    translation_digest: str | None = None
