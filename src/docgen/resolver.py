# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Collapse platform variants with identical declaration sets."""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from docgen.declaration import PackageSnapshot, PlatformVariant, VariantSnapshot
from docgen.parser import NoBuildableFiles, ParseFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantFailure:
    """Represent one requested variant that could not be extracted."""

    variant: PlatformVariant
    message: str


@dataclass(frozen=True)
class VariantResolution:
    """Represent the variants of one unit that need an artifact.

    Attributes:
        snapshot: Successfully extracted variants.
        representatives: Variants to render, broadest first.
        reuse: Requested variant mapped to the representative covering it.
        failures: Requested variants that failed to parse.
        inapplicable: Requested variants with no source files to build.
    """

    snapshot: PackageSnapshot
    representatives: tuple[PlatformVariant, ...]
    reuse: dict[PlatformVariant, PlatformVariant] = field(default_factory=dict)
    failures: tuple[VariantFailure, ...] = ()
    inapplicable: tuple[PlatformVariant, ...] = ()

    def covered_by(self, representative: PlatformVariant) -> tuple[PlatformVariant, ...]:
        """Return the requested variants served by ``representative``."""
        return tuple(
            sorted(
                (
                    variant
                    for variant, chosen in self.reuse.items()
                    if chosen == representative and variant != representative
                ),
                key=PlatformVariant.sort_key,
            )
        )


class VariantResolver:
    """Partition requested variants into declaration-equivalent classes."""

    def __init__(self, load: Callable[[PlatformVariant], VariantSnapshot]) -> None:
        """Initialize resolver.

        Args:
            load: Callable extracting the snapshot of one variant; may raise
                ``ParseFailure``.
        """
        self._load = load

    def resolve(
        self,
        import_path: str,
        requested: Sequence[PlatformVariant],
        executor: concurrent.futures.Executor | None = None,
    ) -> VariantResolution:
        """Extract every requested variant and choose representatives.

        Variants without buildable files are set aside as inapplicable.
        Two variants are equivalent when their snapshots have the same
        structural fingerprint. Each class is represented by its broadest
        member: fewest qualifiers first, then lexical order.

        Args:
            import_path: Import path of the unit.
            requested: Variants to consider.
            executor: Optional executor for parallel extraction.

        Returns:
            Resolution with representatives and reuse mapping.
        """
        unique = sorted(set(requested), key=PlatformVariant.sort_key)
        snapshots: dict[PlatformVariant, VariantSnapshot] = {}
        failures: list[VariantFailure] = []
        inapplicable: list[PlatformVariant] = []
        for variant, outcome in zip(unique, self._extract_all(unique, executor)):
            if isinstance(outcome, NoBuildableFiles):
                logger.debug(
                    f"Variant does not apply (import_path={import_path} variant={variant.label})"
                )
                inapplicable.append(variant)
            elif isinstance(outcome, ParseFailure):
                logger.warning(
                    f"Variant failed to parse (import_path={import_path} variant={variant.label} error={outcome})"
                )
                failures.append(VariantFailure(variant=variant, message=str(outcome)))
            else:
                snapshots[variant] = outcome

        classes: dict[str, list[PlatformVariant]] = {}
        for variant in unique:
            if variant in snapshots:
                classes.setdefault(snapshots[variant].fingerprint, []).append(variant)

        reuse: dict[PlatformVariant, PlatformVariant] = {}
        representatives: list[PlatformVariant] = []
        for members in classes.values():
            representative = min(members, key=PlatformVariant.sort_key)
            representatives.append(representative)
            for member in members:
                reuse[member] = representative

        representatives.sort(key=PlatformVariant.sort_key)
        logger.info(
            f"Resolved variants (import_path={import_path} requested={len(unique)} "
            f"distinct={len(representatives)} failed={len(failures)} inapplicable={len(inapplicable)})"
        )
        return VariantResolution(
            snapshot=PackageSnapshot(import_path=import_path, variants=snapshots),
            representatives=tuple(representatives),
            reuse=reuse,
            failures=tuple(failures),
            inapplicable=tuple(inapplicable),
        )

    def _extract_all(
        self,
        variants: list[PlatformVariant],
        executor: concurrent.futures.Executor | None,
    ) -> list[VariantSnapshot | ParseFailure]:
        if executor is None:
            return [self._extract_one(variant) for variant in variants]
        return list(executor.map(self._extract_one, variants))

    def _extract_one(self, variant: PlatformVariant) -> VariantSnapshot | ParseFailure:
        try:
            return self._load(variant)
        except ParseFailure as exc:
            return exc
