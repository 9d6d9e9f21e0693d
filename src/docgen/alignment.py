# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Pair extracted declarations with stored translations."""

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from docgen.declaration import (
    AlignedDeclaration,
    Declaration,
    DeclKey,
    TranslationEntry,
    signature_digest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentResult:
    """Represent the outcome of aligning one variant.

    Attributes:
        aligned: Declarations with their optional translations, in input order.
        untranslated: Documented declarations without a translation.
        stale: Declarations whose translation targets a different signature.
        dropped: Number of translations with no matching declaration.
    """

    aligned: tuple[AlignedDeclaration, ...]
    untranslated: tuple[DeclKey, ...]
    stale: tuple[DeclKey, ...]
    dropped: int

    @property
    def translated_count(self) -> int:
        return sum(1 for item in self.aligned if item.translated_comment is not None)


class AlignmentEngine:
    """Match declarations to translations by exact identity key."""

    def align(
        self,
        declarations: Sequence[Declaration],
        translations: Mapping[DeclKey, TranslationEntry],
    ) -> AlignmentResult:
        """Align declarations with translations.

        Args:
            declarations: Current declarations of one variant.
            translations: Stored translations keyed by identity.

        Returns:
            Alignment result. A translation whose recorded signature digest
            differs from the current signature is reused and flagged stale.
        """
        aligned: list[AlignedDeclaration] = []
        untranslated: list[DeclKey] = []
        stale: list[DeclKey] = []
        matched = 0
        for declaration in declarations:
            entry = translations.get(declaration.key)
            if entry is None:
                if declaration.canonical_comment:
                    untranslated.append(declaration.key)
                aligned.append(AlignedDeclaration(declaration=declaration))
                continue
            matched += 1
            is_stale = entry.signature_digest != signature_digest(declaration.signature)
            if is_stale:
                stale.append(declaration.key)
            aligned.append(
                AlignedDeclaration(
                    declaration=declaration,
                    translated_comment=entry.translated_comment,
                    is_stale=is_stale,
                    translation_digest=entry.signature_digest,
                )
            )

        dropped = len(translations) - matched
        if dropped:
            logger.debug(f"Dropped translations without declaration (count={dropped})")
        return AlignmentResult(
            aligned=tuple(aligned),
            untranslated=tuple(untranslated),
            stale=tuple(stale),
            dropped=dropped,
        )
