# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the Go declaration parser and build constraints."""

from pathlib import Path

import pathspec
import pytest

from docgen.declaration import PlatformVariant
from docgen.parser import NoBuildableFiles, ParseFailure
from docgen.parsers import GoSourceParser
from docgen.parsers.constraints import (
    ConstraintError,
    build_tags,
    eval_go_build,
    eval_plus_build,
    header_constraints,
    match_file_name,
    match_source,
)
from docgen.parsers.golang import parse_go_source


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_ph1_par_001_parser_extracts_functions_without_bodies() -> None:
    parsed = parse_go_source(
        "\n".join(
            [
                "package demo",
                "",
                'import "fmt"',
                "",
                "// Add returns a+b.",
                "func Add(a, b int) int {",
                '\tfmt.Println("{")',
                "\treturn a + b",
                "}",
                "",
                "func Sum[T int | float64](values ...T) (total T) {",
                "\tfor _, v := range values {",
                "\t\ttotal += v",
                "\t}",
                "\treturn",
                "}",
            ]
        ),
        "demo.go",
    )

    assert parsed.package_name == "demo"
    assert [decl.keyword for decl in parsed.decls] == ["func", "func"]
    add, total = parsed.decls
    assert add.specs[0].text == "func Add(a, b int) int"
    assert add.leading[-1].text == "Add returns a+b."
    assert add.leading[-1].end_line == add.line - 1
    assert total.specs[0].text == "func Sum[T int | float64](values ...T) (total T)"


def test_ph1_par_002_parser_records_method_receiver_without_pointer() -> None:
    parsed = parse_go_source(
        "\n".join(
            [
                "package demo",
                "",
                "type Set[K comparable] struct {",
                "\titems map[K]struct{}",
                "}",
                "",
                "func (s *Set[K]) Add(item K) {",
                "\ts.items[item] = struct{}{}",
                "}",
                "",
                "func (Set[K]) Len() int { return 0 }",
            ]
        ),
        "set.go",
    )

    type_decl, add, length = parsed.decls
    assert type_decl.specs[0].text == "Set[K comparable] struct {\n}"
    assert add.specs[0].receiver == "Set"
    assert add.specs[0].names == ("Add",)
    assert add.specs[0].text == "func (s *Set[K]) Add(item K)"
    assert length.specs[0].receiver == "Set"
    assert length.specs[0].text == "func (Set[K]) Len() int"


def test_ph1_par_003_parser_splits_const_block_specs_on_line_ends() -> None:
    parsed = parse_go_source(
        "\n".join(
            [
                "package demo",
                "",
                "// Modes of operation.",
                "const (",
                "\tA = iota // first",
                "\t// B is documented.",
                "\tB",
                "\tc, D",
                "\tE = `multi",
                "line`",
                ")",
            ]
        ),
        "modes.go",
    )

    (decl,) = parsed.decls
    assert decl.keyword == "const"
    assert decl.parenthesized is True
    assert decl.leading[-1].text == "Modes of operation."
    assert [spec.names for spec in decl.specs] == [("A",), ("B",), ("c", "D"), ("E",)]
    assert decl.specs[0].text == "A = iota"
    assert decl.specs[0].leading == ()
    assert decl.specs[1].leading[-1].text == "B is documented."
    assert decl.specs[3].text == "E = `multi\nline`"


def test_ph1_par_004_parser_dedents_type_specs_taken_from_a_block() -> None:
    parsed = parse_go_source(
        "\n".join(
            [
                "package demo",
                "",
                "type (",
                "\t// Point is a point.",
                "\tPoint struct {",
                "\t\tX, Y int",
                "\t}",
                "\tID string",
                ")",
            ]
        ),
        "types.go",
    )

    (decl,) = parsed.decls
    assert [spec.text for spec in decl.specs] == [
        "Point struct {\n\tX, Y int\n}",
        "ID string",
    ]


def test_ph1_par_005_parser_drops_directives_from_comment_text() -> None:
    parsed = parse_go_source(
        "\n".join(
            [
                "package demo",
                "",
                "// Fast does it fast.",
                "//",
                "//go:noinline",
                "func Fast() {}",
            ]
        ),
        "fast.go",
    )

    assert parsed.decls[0].leading[-1].text == "Fast does it fast."


def test_ph1_par_006_parser_keeps_preformatted_comment_lines() -> None:
    parsed = parse_go_source(
        "package demo\n\n// Usage:\n//\n//\tdocgen bufio zh_CN\n//   indented\nfunc Run() {}\n",
        "run.go",
    )

    assert parsed.decls[0].leading[-1].text == "Usage:\n\n\tdocgen bufio zh_CN\n  indented"


@pytest.mark.parametrize(
    "source",
    [
        "func Missing() {}\n",
        "package demo\n\nfunc Broken( {\n",
        'package demo\n\nvar s = "unterminated\n',
        "package demo\n\n/* never closed\n",
        "package demo\n\nfunc Bad() { ) }\n",
        "package demo\n\nreturn 1\n",
    ],
)
def test_ph1_par_007_parser_rejects_malformed_sources(source: str) -> None:
    with pytest.raises(ParseFailure):
        parse_go_source(source, "broken.go")


def test_ph1_par_008_file_name_suffixes_select_platform_files() -> None:
    linux = build_tags("linux", "amd64")
    windows = build_tags("windows", "386")

    assert match_file_name("file.go", linux) is True
    assert match_file_name("file_linux.go", linux) is True
    assert match_file_name("file_windows.go", linux) is False
    assert match_file_name("file_windows_386.go", windows) is True
    assert match_file_name("file_windows_amd64.go", windows) is False
    assert match_file_name("file_amd64.go", linux) is True
    assert match_file_name("file_linux.go", build_tags("android", "arm")) is True
    assert match_file_name("my_helper.go", windows) is True


def test_ph1_par_009_build_lines_follow_go_semantics() -> None:
    linux = build_tags("linux", "amd64")

    assert eval_plus_build("linux darwin", linux) is True
    assert eval_plus_build("linux,386", linux) is False
    assert eval_plus_build("!windows", linux) is True
    assert eval_go_build("unix && !(386 || arm)", linux) is True
    assert eval_go_build("windows || (linux && go1.18)", linux) is True
    assert eval_go_build("ignore", linux) is False
    with pytest.raises(ConstraintError):
        eval_go_build("linux &&", linux)


def test_ph1_par_010_header_constraints_require_blank_line_before_package() -> None:
    with_blank = "// +build windows\n\n// Package demo.\npackage demo\n"
    as_doc = "// +build windows\npackage demo\n"

    assert header_constraints(with_blank) == (None, ["windows"])
    assert header_constraints(as_doc) == (None, [])
    assert match_source(with_blank, build_tags("linux", "amd64")) is False
    assert match_source("//go:build linux\n\npackage demo\n", build_tags("linux", "arm")) is True


def test_ph1_par_011_parse_package_selects_files_per_variant(tmp_path: Path) -> None:
    package_dir = tmp_path / "demo"
    _write_file(package_dir / "demo.go", "package demo\n\nfunc Common() {}\n")
    _write_file(package_dir / "demo_windows.go", "package demo\n\nfunc Win() {}\n")
    _write_file(
        package_dir / "unix.go",
        "//go:build unix\n\npackage demo\n\nfunc Unix() {}\n",
    )
    _write_file(package_dir / "demo_test.go", "package demo\n\nfunc TestX() {}\n")

    parser = GoSourceParser()
    linux = parser.parse_package(package_dir, PlatformVariant())
    windows = parser.parse_package(package_dir, PlatformVariant(os="windows"))

    assert [parsed.file_name for parsed in linux.files] == ["demo.go", "unix.go"]
    assert [parsed.file_name for parsed in windows.files] == ["demo.go", "demo_windows.go"]


def test_ph1_par_012_parse_package_honors_exclude_patterns(tmp_path: Path) -> None:
    package_dir = tmp_path / "demo"
    _write_file(package_dir / "demo.go", "package demo\n\nfunc Common() {}\n")
    _write_file(package_dir / "zz_generated.go", "package demo\n\nfunc Gen() {}\n")

    parser = GoSourceParser(exclude=pathspec.GitIgnoreSpec.from_lines(["zz_*.go"]))
    unit = parser.parse_package(package_dir, PlatformVariant())

    assert [parsed.file_name for parsed in unit.files] == ["demo.go"]


def test_ph1_par_013_parse_package_fails_on_mixed_or_missing_packages(
    tmp_path: Path,
) -> None:
    package_dir = tmp_path / "demo"
    _write_file(package_dir / "a.go", "package demo\n")
    _write_file(package_dir / "b.go", "package other\n")
    parser = GoSourceParser()

    with pytest.raises(ParseFailure, match="multiple packages"):
        parser.parse_package(package_dir, PlatformVariant())
    with pytest.raises(ParseFailure, match="does not exist"):
        parser.parse_package(tmp_path / "missing", PlatformVariant())


def test_ph1_par_014_type_signatures_drop_unexported_members() -> None:
    source = "\n".join(
        [
            "package list",
            "",
            "type List struct { // secret internal root",
            "\troot Element",
            "\tlen  int",
            "\t// Len is public.",
            "\tLen int // count",
            "\ta, B string",
            "\t*Element",
            "\tsync.Mutex",
            "\tcache",
            "}",
            "",
            "type Small struct { // secret",
            "\troot int; Len int }",
            "",
            "type Hidden struct {",
            "\tn int",
            "}",
            "",
            "type Reader interface {",
            "\t// Read reads.",
            "\tRead(p []byte) (int, error)",
            "\tclose() error",
            "\tio.Closer",
            "\tcomparable",
            "}",
            "",
            "type Number interface {",
            "\t~int | ~float64",
            "}",
            "",
            "type Point struct {",
            "\tX, Y int",
            "}",
            "",
        ]
    )

    parsed = parse_go_source(source, "list.go")
    texts = {decl.specs[0].names[0]: decl.specs[0].text for decl in parsed.decls}

    assert texts["List"] == (
        "List struct {\n\t// Len is public.\n\tLen int // count\n\tB string\n"
        "\t*Element\n\tsync.Mutex\n}"
    )
    assert texts["Small"] == "Small struct {\n\tLen int\n}"
    assert texts["Hidden"] == "Hidden struct {\n}"
    assert texts["Reader"] == (
        "Reader interface {\n\t// Read reads.\n\tRead(p []byte) (int, error)\n"
        "\tio.Closer\n\tcomparable\n}"
    )
    assert texts["Number"] == "Number interface {\n\t~int | ~float64\n}"
    assert texts["Point"] == "Point struct {\n\tX, Y int\n}"


def test_ph1_par_015_native_ports_satisfy_cgo_constraints() -> None:
    assert "cgo" in build_tags("linux", "amd64")
    assert "cgo" in build_tags("windows", "amd64")
    assert "cgo" not in build_tags("js", "wasm")
    assert "cgo" not in build_tags("linux", "ppc64")
    assert match_source("//go:build cgo\n\npackage demo\n", build_tags("linux", "amd64")) is True
    assert match_source("//go:build cgo\n\npackage demo\n", build_tags("js", "wasm")) is False


def test_ph1_par_016_parse_package_reports_variants_without_files(tmp_path: Path) -> None:
    package_dir = tmp_path / "demo"
    _write_file(package_dir / "lx_linux.go", "package demo\n\nfunc Linux() {}\n")
    parser = GoSourceParser()

    with pytest.raises(NoBuildableFiles, match="No buildable Go source files"):
        parser.parse_package(package_dir, PlatformVariant(os="windows"))
    assert [
        parsed.file_name for parsed in parser.parse_package(package_dir, PlatformVariant()).files
    ] == ["lx_linux.go"]
