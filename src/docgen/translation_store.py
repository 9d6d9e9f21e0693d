# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Recover translated comments from previously rendered artifacts."""

import logging
from pathlib import Path
from typing import Sequence

from docgen.declaration import DeclKey, TranslationEntry, signature_digest
from docgen.extractor import DeclarationExtractor
from docgen.layout import DEFAULT_BANNER, banner_line_count, read_comment_pair
from docgen.parser import ParseFailure, SourceParser

logger = logging.getLogger(__name__)

TranslationMap = dict[DeclKey, TranslationEntry]


class StorePartialFailure(RuntimeError):
    """Represent a prior artifact that could not be read back."""


class TranslationStore:
    """Load translations by re-parsing the artifacts of a previous run."""

    def __init__(
        self,
        parser: SourceParser,
        extractor: DeclarationExtractor,
        banner: str = DEFAULT_BANNER,
    ) -> None:
        """Initialize store.

        Args:
            parser: Parser able to read artifact text.
            extractor: Extractor shared with source extraction.
            banner: Banner text the artifacts start with.
        """
        self._parser = parser
        self._extractor = extractor
        self._banner_lines = banner_line_count(banner)

    def load(self, path: Path, language: str) -> TranslationMap:
        """Load translations from one artifact.

        A missing artifact yields an empty map. An unreadable artifact is
        logged as a warning and also yields an empty map.

        Args:
            path: Artifact path.
            language: Language code of the artifact.

        Returns:
            Translations keyed by declaration identity.
        """
        if not path.exists():
            logger.debug(f"No prior artifact (path={path})")
            return {}
        try:
            return self.read_artifact(path=path, language=language)
        except StorePartialFailure as exc:
            logger.warning(
                f"Ignoring unreadable prior artifact; translations are not reused (path={path} error={exc})"
            )
            return {}

    def load_chain(self, paths: Sequence[Path], language: str) -> TranslationMap:
        """Merge translations from broadest to most specific artifact.

        Args:
            paths: Artifact paths ordered from broadest to most specific.
            language: Language code of the artifacts.

        Returns:
            Merged translations; later paths override earlier ones.
        """
        merged: TranslationMap = {}
        for path in paths:
            merged.update(self.load(path=path, language=language))
        return merged

    def read_artifact(self, path: Path, language: str) -> TranslationMap:
        """Parse one artifact and harvest its translated comments.

        Raises:
            StorePartialFailure: If the artifact cannot be read or parsed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorePartialFailure(str(exc)) from exc
        return self.read_text(text=text, language=language, file_name=path.name)

    def read_text(self, text: str, language: str, file_name: str) -> TranslationMap:
        """Harvest translated comments from artifact text.

        Raises:
            StorePartialFailure: If the text cannot be parsed.
        """
        try:
            unit = self._parser.parse_source(text, file_name)
            items = self._extractor.collect(unit)
        except ParseFailure as exc:
            raise StorePartialFailure(str(exc)) from exc

        translations: TranslationMap = {}
        for declaration, leading, line in items:
            pair = read_comment_pair(
                leading,
                line,
                min_line=self._banner_lines if declaration.kind == "package" else 0,
            )
            if pair.translated is None:
                continue
            translations[declaration.key] = TranslationEntry(
                key=declaration.key,
                language=language,
                translated_comment=pair.translated,
                signature_digest=pair.stale_digest
                or signature_digest(declaration.signature),
            )
        logger.debug(
            f"Recovered translations (file_name={file_name} language={language} "
            f"translations={len(translations)})"
        )
        return translations
