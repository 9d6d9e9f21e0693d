# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for declaration extraction."""

from pathlib import Path

import pytest

from docgen.declaration import DeclKey, PlatformVariant
from docgen.extractor import DeclarationExtractor, is_exported
from docgen.parser import ParsedUnit, ParseFailure
from docgen.parsers import GoSourceParser
from docgen.parsers.golang import parse_go_source

DEMO_SOURCE = "\n".join(
    [
        "// Package demo adds numbers.",
        "package demo",
        "",
        "// Modes of operation.",
        "const (",
        "\t// A is first.",
        "\tA = iota",
        "\tb",
        "\tC",
        ")",
        "",
        "// Limit caps values.",
        "var Limit = 10",
        "",
        "var hidden = 1",
        "",
        "// Add returns a+b.",
        "func Add(a, b int) int { return a + b }",
        "",
        "func helper() {}",
        "",
        "// Counter counts.",
        "type Counter struct {",
        "\tn int",
        "}",
        "",
        "// Inc increments.",
        "func (c *Counter) Inc() { c.n++ }",
        "",
        "func (c *Counter) reset() {}",
        "",
        "func (c *counter) Skip() {}",
        "",
    ]
)


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _extractor() -> DeclarationExtractor:
    return DeclarationExtractor(parser=GoSourceParser())


def test_ph2_ext_001_is_exported_checks_first_letter() -> None:
    assert is_exported("Add") is True
    assert is_exported("add") is False
    assert is_exported("_") is False
    assert is_exported("") is False


def test_ph2_ext_002_build_returns_exported_declarations_in_source_order() -> None:
    unit = GoSourceParser().parse_source(DEMO_SOURCE, "demo.go")

    declarations = _extractor().build(unit)

    assert [declaration.key for declaration in declarations] == [
        DeclKey(kind="package", name="demo"),
        DeclKey(kind="const", name="", group_id="A"),
        DeclKey(kind="const", name="A", group_id="A"),
        DeclKey(kind="const", name="C", group_id="A"),
        DeclKey(kind="var", name="Limit", group_id="Limit"),
        DeclKey(kind="func", name="Add"),
        DeclKey(kind="type", name="Counter"),
        DeclKey(kind="method", name="Counter.Inc", receiver="Counter"),
    ]
    assert [declaration.source_order for declaration in declarations] == list(range(8))


def test_ph2_ext_003_build_attaches_adjacent_doc_comments_and_signatures() -> None:
    unit = GoSourceParser().parse_source(DEMO_SOURCE, "demo.go")

    by_name = {declaration.name: declaration for declaration in _extractor().build(unit)}

    assert by_name["demo"].canonical_comment == "Package demo adds numbers."
    assert by_name["demo"].signature == "package demo"
    assert by_name[""].is_group_header is True
    assert by_name[""].signature == "const ("
    assert by_name[""].canonical_comment == "Modes of operation."
    assert by_name["A"].canonical_comment == "A is first."
    assert by_name["A"].signature == "A = iota"
    assert by_name["C"].canonical_comment == ""
    assert by_name["Limit"].signature == "var Limit = 10"
    assert by_name["Add"].signature == "func Add(a, b int) int"
    assert by_name["Counter"].signature == "type Counter struct {\n}"
    assert by_name["Counter.Inc"].signature == "func (c *Counter) Inc()"
    assert by_name["Counter.Inc"].canonical_comment == "Inc increments."


def test_ph2_ext_004_package_doc_prefers_doc_go() -> None:
    unit = ParsedUnit(
        package_name="demo",
        files=(
            parse_go_source("// Package demo from a.\npackage demo\n", "a.go"),
            parse_go_source("// Package demo is documented here.\npackage demo\n", "doc.go"),
        ),
    )

    (package,) = _extractor().build(unit)

    assert package.canonical_comment == "Package demo is documented here."


def test_ph2_ext_005_lone_type_in_block_inherits_block_doc() -> None:
    source = "\n".join(
        [
            "package demo",
            "",
            "// Point is a point.",
            "type (",
            "\tPoint struct{ X int }",
            ")",
            "",
            "// Shapes.",
            "type (",
            "\t// Circle is round.",
            "\tCircle struct{}",
            "\tSquare struct{}",
            ")",
        ]
    )
    unit = GoSourceParser().parse_source(source, "shapes.go")

    comments = {
        declaration.name: declaration.canonical_comment
        for declaration in _extractor().build(unit)
    }

    assert comments == {
        "demo": "",
        "Point": "Point is a point.",
        "Circle": "Circle is round.",
        "Square": "",
    }


def test_ph2_ext_006_duplicate_identities_fail_the_unit() -> None:
    unit = ParsedUnit(
        package_name="demo",
        files=(
            parse_go_source("package demo\n\nfunc A() {}\n", "a.go"),
            parse_go_source("package demo\n\nfunc A() int { return 1 }\n", "b.go"),
        ),
    )

    with pytest.raises(ParseFailure, match="Duplicate declaration"):
        _extractor().build(unit)


def test_ph2_ext_007_extract_returns_variant_snapshot(tmp_path: Path) -> None:
    package_dir = tmp_path / "src" / "demo"
    _write_file(package_dir / "demo.go", DEMO_SOURCE)
    variant = PlatformVariant(os="windows")

    snapshot = _extractor().extract("demo", package_dir, variant)

    assert snapshot.import_path == "demo"
    assert snapshot.variant == variant
    assert snapshot.package_name == "demo"
    assert len(snapshot.declarations) == 8
