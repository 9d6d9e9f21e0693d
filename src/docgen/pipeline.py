# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Orchestrate extraction, alignment and rendering across combinations."""

import concurrent.futures
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Sequence

from docgen.alignment import AlignmentEngine
from docgen.config import GeneratorConfig
from docgen.declaration import PlatformVariant, VariantSnapshot
from docgen.extractor import DeclarationExtractor
from docgen.parser import NoBuildableFiles, ParseFailure, SourceParser
from docgen.parsers.golang import GoSourceParser
from docgen.platforms import requested_variants
from docgen.renderer import ArtifactWriter, Renderer, WriteFailure
from docgen.resolver import VariantResolution, VariantResolver
from docgen.snapshot_cache import SingleFlightCache
from docgen.translation_store import TranslationStore

logger = logging.getLogger(__name__)

CombinationStatus = Literal["written", "unchanged", "failed", "cancelled"]


@dataclass(frozen=True)
class GenerationRequest:
    """Describe one compilation unit to document.

    Attributes:
        import_path: Go import path.
        languages: Target language codes.
        os: Restrict variants to one operating system.
        arch: Restrict variants to one architecture.
    """

    import_path: str
    languages: tuple[str, ...]
    os: str | None = None
    arch: str | None = None


@dataclass(frozen=True)
class CombinationResult:
    """Represent the outcome of one (unit, language, variant) combination."""

    import_path: str
    language: str
    variant: PlatformVariant
    status: CombinationStatus
    output_path: str | None = None
    declaration_count: int = 0
    translated_count: int = 0
    untranslated_count: int = 0
    stale_count: int = 0
    covers: tuple[PlatformVariant, ...] = ()
    error_type: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class SkippedVariant:
    """Represent a requested variant served by another variant's artifact."""

    import_path: str
    variant: PlatformVariant
    representative: PlatformVariant


@dataclass(frozen=True)
class InapplicableVariant:
    """Represent a requested variant with no source files to build."""

    import_path: str
    variant: PlatformVariant


@dataclass(frozen=True)
class RunReport:
    """Represent the aggregated outcome of one run."""

    results: tuple[CombinationResult, ...] = ()
    skipped: tuple[SkippedVariant, ...] = ()
    inapplicable: tuple[InapplicableVariant, ...] = ()
    cancelled: bool = False

    @property
    def failures(self) -> tuple[CombinationResult, ...]:
        return tuple(result for result in self.results if result.status == "failed")

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0


@dataclass
class _UnitPlan:
    request: GenerationRequest
    resolution: VariantResolution | None = None
    results: list[CombinationResult] = field(default_factory=list)


class DocGenerator:
    """Generate bilingual documentation artifacts on a bounded worker pool."""

    def __init__(
        self,
        config: GeneratorConfig,
        parser: SourceParser | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            config: Run configuration.
            parser: Source parser; defaults to ``GoSourceParser``.
            cancel_event: Event that stops scheduling new combinations.
        """
        self._config = config
        self._parser = parser or GoSourceParser(exclude=config.exclude_spec())
        self._extractor = DeclarationExtractor(parser=self._parser)
        self._store = TranslationStore(
            parser=self._parser, extractor=self._extractor, banner=config.banner
        )
        self._aligner = AlignmentEngine()
        self._renderer = Renderer(banner=config.banner, wrap_width=config.wrap_width)
        self._writer = ArtifactWriter()
        self._snapshots: SingleFlightCache[tuple[str, PlatformVariant], VariantSnapshot] = (
            SingleFlightCache()
        )
        self._cancel_event = cancel_event or threading.Event()

    def cancel(self) -> None:
        """Stop scheduling new combinations; in-flight ones finish."""
        self._cancel_event.set()

    def run(self, requests: Sequence[GenerationRequest]) -> RunReport:
        """Generate artifacts for every request.

        Failures are scoped to the combination that caused them and collected
        in the report; they never stop other combinations.

        Args:
            requests: Units and languages to document.

        Returns:
            Aggregated run report.

        Raises:
            ValueError: If a request names an unknown OS or architecture.
        """
        plans = [_UnitPlan(request=request) for request in requests]
        requested = {
            id(plan): requested_variants(plan.request.os, plan.request.arch) for plan in plans
        }
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="docgen"
        )
        try:
            for plan in plans:
                if self._cancel_event.is_set():
                    break
                self._resolve(plan, requested[id(plan)], executor)

            futures: dict[concurrent.futures.Future[CombinationResult], _UnitPlan] = {}
            for plan in plans:
                if plan.resolution is None:
                    continue
                for language in plan.request.languages:
                    for variant in plan.resolution.representatives:
                        if self._cancel_event.is_set():
                            break
                        future = executor.submit(
                            self._generate, plan.request.import_path, language, variant, plan.resolution
                        )
                        futures[future] = plan
            for future in concurrent.futures.as_completed(futures):
                futures[future].results.append(future.result())
        except KeyboardInterrupt:
            logger.warning("Interrupted; waiting for in-flight combinations to finish")
            self._cancel_event.set()
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        finally:
            executor.shutdown(wait=True)

        results: list[CombinationResult] = []
        skipped: list[SkippedVariant] = []
        inapplicable: list[InapplicableVariant] = []
        for plan in plans:
            results.extend(
                sorted(
                    plan.results,
                    key=lambda result: (result.language, result.variant.sort_key()),
                )
            )
            if plan.resolution is None:
                continue
            inapplicable.extend(
                InapplicableVariant(import_path=plan.request.import_path, variant=variant)
                for variant in plan.resolution.inapplicable
            )
            for variant, representative in sorted(
                plan.resolution.reuse.items(), key=lambda item: item[0].sort_key()
            ):
                if variant != representative:
                    skipped.append(
                        SkippedVariant(
                            import_path=plan.request.import_path,
                            variant=variant,
                            representative=representative,
                        )
                    )
        report = RunReport(
            results=tuple(results),
            skipped=tuple(skipped),
            cancelled=self._cancel_event.is_set(),
            inapplicable=tuple(inapplicable),
        )
        logger.info(
            f"Generation completed (results={len(report.results)} failed={len(report.failures)} "
            f"skipped={len(report.skipped)} inapplicable={len(report.inapplicable)} "
            f"cancelled={report.cancelled})"
        )
        return report

    def _resolve(
        self,
        plan: _UnitPlan,
        requested: list[PlatformVariant],
        executor: concurrent.futures.Executor,
    ) -> None:
        import_path = plan.request.import_path
        try:
            directory = self._config.locate_package(import_path)
        except ParseFailure as exc:
            logger.warning(f"Package not found (import_path={import_path} error={exc})")
            plan.results.extend(
                self._failure(import_path, language, PlatformVariant(), exc)
                for language in plan.request.languages or ("",)
            )
            return

        resolver = VariantResolver(
            load=lambda variant: self.snapshot(import_path, directory, variant)
        )
        plan.resolution = resolver.resolve(import_path, requested, executor=executor)
        if not plan.resolution.snapshot.variants and not plan.resolution.failures:
            exc = NoBuildableFiles(
                f"No buildable Go source files for any requested variant (import_path={import_path})"
            )
            logger.warning(f"Package has nothing to document (import_path={import_path})")
            plan.results.extend(
                self._failure(import_path, language, PlatformVariant(), exc)
                for language in plan.request.languages or ("",)
            )
            return
        for failure in plan.resolution.failures:
            plan.results.extend(
                CombinationResult(
                    import_path=import_path,
                    language=language,
                    variant=failure.variant,
                    status="failed",
                    error_type="ParseFailure",
                    error=failure.message,
                )
                for language in plan.request.languages or ("",)
            )

    def snapshot(
        self, import_path: str, directory: Path, variant: PlatformVariant
    ) -> VariantSnapshot:
        """Return the cached declarations of one variant, extracting once.

        Raises:
            ParseFailure: If extraction fails or exceeds the parse timeout.
        """
        try:
            return self._snapshots.get(
                (import_path, variant),
                lambda: self._extractor.extract(import_path, directory, variant),
                timeout=self._config.parse_timeout,
            )
        except concurrent.futures.TimeoutError as exc:
            raise ParseFailure(
                f"Parsing exceeded {self._config.parse_timeout}s (variant={variant.label})"
            ) from exc

    def _generate(
        self,
        import_path: str,
        language: str,
        variant: PlatformVariant,
        resolution: VariantResolution,
    ) -> CombinationResult:
        if self._cancel_event.is_set():
            return CombinationResult(
                import_path=import_path, language=language, variant=variant, status="cancelled"
            )
        snapshot = resolution.snapshot.variants[variant]
        output_path = self._config.artifact_path(import_path, language, variant)
        translations = self._store.load_chain(
            self._config.artifact_chain(import_path, language, variant), language
        )
        alignment = self._aligner.align(snapshot.declarations, translations)
        text = self._renderer.render(snapshot.package_name, alignment.aligned)
        try:
            written = self._writer.write(output_path, text)
        except WriteFailure as exc:
            logger.warning(
                f"Artifact write failed (import_path={import_path} language={language} "
                f"variant={variant.label} error={exc})"
            )
            return self._failure(import_path, language, variant, exc, output_path)

        if alignment.stale:
            logger.warning(
                f"Stale translations flagged (output_path={output_path} count={len(alignment.stale)})"
            )
        return CombinationResult(
            import_path=import_path,
            language=language,
            variant=variant,
            status="written" if written else "unchanged",
            output_path=str(output_path),
            declaration_count=len(snapshot.declarations),
            translated_count=alignment.translated_count,
            untranslated_count=len(alignment.untranslated),
            stale_count=len(alignment.stale),
            covers=resolution.covered_by(variant),
        )

    @staticmethod
    def _failure(
        import_path: str,
        language: str,
        variant: PlatformVariant,
        exc: Exception,
        output_path: Path | None = None,
    ) -> CombinationResult:
        return CombinationResult(
            import_path=import_path,
            language=language,
            variant=variant,
            status="failed",
            output_path=str(output_path) if output_path is not None else None,
            error_type=type(exc).__name__,
            error=str(exc),
        )
