# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line entry point for bilingual documentation generation."""

import argparse
import json
import logging
import re
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from docgen.config import DEFAULT_OUTPUT_ROOT, GeneratorConfig
from docgen.layout import DEFAULT_WRAP_WIDTH
from docgen.pipeline import DocGenerator, GenerationRequest, RunReport

logger = logging.getLogger(__name__)

_LANGUAGE_RE = re.compile(r"^[A-Za-z]{2,3}([_-][A-Za-z0-9]{2,8})*$")

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "language": 1,
    "variant": 2,
    "status": 1,
    "output_path": 5,
    "declarations": 1,
    "translated": 1,
    "untranslated": 1,
    "stale": 1,
}
NUMERIC_COLUMNS = frozenset({"declarations", "translated", "untranslated", "stale"})


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(
        prog="docgen",
        description="Generate Go package documentation for translation.",
    )
    parser.add_argument("import_path", help="Import path of the package, e.g. bufio.")
    parser.add_argument(
        "languages", nargs="*", help="Target language codes, e.g. zh_CN zh_TW."
    )
    parser.add_argument(
        "--os", "--goos", "-GOOS", dest="os", help="Only resolve this operating system."
    )
    parser.add_argument(
        "--arch", "--goarch", "-GOARCH", dest="arch", help="Only resolve this architecture."
    )
    parser.add_argument("--goroot", help="Go installation root. Defaults to $GOROOT.")
    parser.add_argument("--gopath", help="Go workspaces. Defaults to $GOPATH.")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT_ROOT),
        help="Root of the translations tree.",
    )
    parser.add_argument(
        "--workers", type=int, default=4, help="Maximum number of worker threads."
    )
    parser.add_argument(
        "--parse-timeout",
        type=float,
        default=None,
        help="Seconds allowed to parse one platform variant.",
    )
    parser.add_argument(
        "--wrap-width",
        type=int,
        default=DEFAULT_WRAP_WIDTH,
        help="Comment line width.",
    )
    parser.add_argument("--banner", help="File holding the artifact header banner.")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern of source files to skip. Repeatable.",
    )
    parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Report format.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run docgen command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    invalid = [language for language in args.languages if not _LANGUAGE_RE.match(language)]
    if invalid:
        logger.warning(f"Invalid language codes (languages={invalid})")
        stderr.write(f"Invalid language code: {', '.join(invalid)}\n")
        return 2

    try:
        config = build_config(args)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Cannot read banner file (banner={args.banner} error={exc})")
        stderr.write(f"Cannot read banner file: {args.banner}\n")
        return 2
    except ValueError as exc:
        logger.warning(f"Invalid configuration (error={exc})")
        stderr.write(f"Invalid configuration: {exc}\n")
        return 2

    request = GenerationRequest(
        import_path=args.import_path,
        languages=tuple(dict.fromkeys(args.languages)),
        os=args.os,
        arch=args.arch,
    )
    generator = DocGenerator(config=config)
    try:
        report = generator.run([request])
    except ValueError as exc:
        logger.warning(f"Invalid platform restriction (os={args.os} arch={args.arch} error={exc})")
        stderr.write(f"Invalid platform: {exc}\n")
        return 2
    except KeyboardInterrupt:
        stderr.write("Interrupted\n")
        return 130

    _write_failures(report=report, stderr=stderr)
    if args.format == "json":
        _write_json(report=report, stdout=stdout)
    else:
        _write_table(report=report, stdout=stdout)
    return report.exit_code


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Create the run configuration from parsed arguments.

    Raises:
        OSError: If the banner file cannot be read.
        ValueError: If a setting is out of range.
    """
    overrides: dict[str, object] = {
        "output_root": Path(args.output),
        "max_workers": args.workers,
        "parse_timeout": args.parse_timeout,
        "wrap_width": args.wrap_width,
        "exclude_patterns": tuple(args.exclude),
    }
    if args.banner:
        overrides["banner"] = Path(args.banner).read_text(encoding="utf-8")
    return GeneratorConfig.from_environment(
        goroot=args.goroot, gopath=args.gopath, **overrides
    )


def _write_failures(report: RunReport, stderr: TextIO) -> None:
    """Write one line per failed combination to stderr.

    Args:
        report: Run report.
        stderr: Standard error stream.
    """
    for failure in report.failures:
        stderr.write(
            f"generation_error: {failure.import_path} {failure.language} "
            f"{failure.variant.label} {failure.error_type}: {failure.error}\n"
        )


def _write_json(report: RunReport, stdout: TextIO) -> None:
    """Write the run report in JSON format.

    Args:
        report: Run report.
        stdout: Standard output stream.
    """
    payload = {
        "results": [asdict(result) for result in report.results],
        "skipped": [asdict(skipped) for skipped in report.skipped],
        "inapplicable": [asdict(item) for item in report.inapplicable],
        "cancelled": report.cancelled,
        "exit_code": report.exit_code,
    }
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_table(report: RunReport, stdout: TextIO) -> None:
    """Write the run report as tables grouped by import path.

    Args:
        report: Run report.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    import_paths = list(
        dict.fromkeys(
            [result.import_path for result in report.results]
            + [skipped.import_path for skipped in report.skipped]
        )
    )
    for import_path in import_paths:
        console.rule(import_path, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, show_lines=False, expand=True)
        for column, ratio in TABLE_COLUMN_RATIOS.items():
            justify = "right" if column in NUMERIC_COLUMNS else "left"
            table.add_column(column, ratio=ratio, justify=justify, overflow="fold")
        for result in report.results:
            if result.import_path != import_path:
                continue
            table.add_row(
                result.language,
                result.variant.label,
                result.status,
                result.output_path or str(result.error),
                str(result.declaration_count),
                str(result.translated_count),
                str(result.untranslated_count),
                str(result.stale_count),
            )
        console.print(table)
        skipped = [item for item in report.skipped if item.import_path == import_path]
        for item in skipped:
            console.print(
                f"skipped {item.variant.label}: same declarations as {item.representative.label}",
                markup=False,
                highlight=False,
            )
        inapplicable = [
            item.variant.label for item in report.inapplicable if item.import_path == import_path
        ]
        if inapplicable:
            console.print(
                f"not applicable (no buildable files): {', '.join(inapplicable)}",
                markup=False,
                highlight=False,
            )


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
