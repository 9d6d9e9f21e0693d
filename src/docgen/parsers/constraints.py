# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Go build constraint evaluation for file selection."""

import re

from docgen.platforms import CGO_PORTS, KNOWN_ARCH, KNOWN_OS, UNIX_OS

# Release tags satisfied by every supported toolchain.
RELEASE_TAGS: tuple[str, ...] = tuple(f"go1.{minor}" for minor in range(1, 23))

_GO_BUILD_RE = re.compile(r"^//go:build\s+(?P<expr>.+)$")
_PLUS_BUILD_RE = re.compile(r"^//\s*\+build\s+(?P<expr>.+)$")
_PACKAGE_RE = re.compile(r"^package\s")
_TAG_RE = re.compile(r"[A-Za-z0-9_.]+")


class ConstraintError(ValueError):
    """Represent a malformed build constraint expression."""


def build_tags(goos: str, goarch: str) -> frozenset[str]:
    """Return the tags satisfied when building for ``goos``/``goarch``."""
    tags = {goos, goarch, "gc", *RELEASE_TAGS}
    if goos in UNIX_OS:
        tags.add("unix")
    if (goos, goarch) in CGO_PORTS:
        tags.add("cgo")
    if goos == "android":
        tags.add("linux")
    if goos == "illumos":
        tags.add("solaris")
    if goos == "ios":
        tags.add("darwin")
    return frozenset(tags)


def is_test_file(file_name: str) -> bool:
    return file_name.endswith("_test.go")


def match_file_name(file_name: str, tags: frozenset[str]) -> bool:
    """Check the ``_GOOS``/``_GOARCH`` suffix convention of a Go file name.

    Args:
        file_name: Base file name, e.g. ``zerrors_linux_amd64.go``.
        tags: Satisfied build tags.

    Returns:
        True when the file name does not exclude the file.
    """
    stem = file_name[:-3] if file_name.endswith(".go") else file_name
    if stem.endswith("_test"):
        stem = stem[: -len("_test")]
    index = stem.find("_")
    if index < 0:
        return True
    parts = stem[index:].split("_")
    if len(parts) >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
        return parts[-2] in tags and parts[-1] in tags
    if parts[-1] in KNOWN_OS or parts[-1] in KNOWN_ARCH:
        return parts[-1] in tags
    return True


def header_constraints(source: str) -> tuple[str | None, list[str]]:
    """Collect the build constraint lines of a file header.

    Only comment lines above the last blank line before the package clause
    are considered, as the go tool does.

    Returns:
        The ``//go:build`` expression, if any, and the ``// +build`` lines.
    """
    header: list[str] = []
    in_block_comment = False
    for line in source.splitlines():
        stripped = line.strip()
        if in_block_comment:
            header.append("/*")
            if "*/" in stripped:
                in_block_comment = False
            continue
        if _PACKAGE_RE.match(stripped):
            break
        if stripped.startswith("/*"):
            header.append("/*")
            in_block_comment = "*/" not in stripped
            continue
        if stripped and not stripped.startswith("//"):
            break
        header.append(stripped)

    last_blank = max(
        (index for index, line in enumerate(header) if not line), default=-1
    )
    go_build: str | None = None
    plus_build: list[str] = []
    for line in header[: last_blank + 1]:
        go_match = _GO_BUILD_RE.match(line)
        if go_match and go_build is None:
            go_build = go_match.group("expr").strip()
            continue
        plus_match = _PLUS_BUILD_RE.match(line)
        if plus_match:
            plus_build.append(plus_match.group("expr").strip())
    return go_build, plus_build


def match_source(source: str, tags: frozenset[str]) -> bool:
    """Evaluate the header build constraints of ``source`` against ``tags``.

    Raises:
        ConstraintError: If a ``//go:build`` expression is malformed.
    """
    go_build, plus_build = header_constraints(source)
    if go_build is not None:
        return eval_go_build(go_build, tags)
    return all(eval_plus_build(line, tags) for line in plus_build)


def eval_plus_build(line: str, tags: frozenset[str]) -> bool:
    """Evaluate one ``// +build`` line: spaces are OR, commas are AND."""
    for option in line.split():
        terms = option.split(",")
        if all(_match_term(term, tags) for term in terms):
            return True
    return False


def _match_term(term: str, tags: frozenset[str]) -> bool:
    negated = term.startswith("!")
    name = term.lstrip("!")
    if not name or not _TAG_RE.fullmatch(name):
        return False
    return (name in tags) != negated


def eval_go_build(expr: str, tags: frozenset[str]) -> bool:
    """Evaluate a ``//go:build`` boolean expression.

    Raises:
        ConstraintError: If the expression is malformed.
    """
    tokens = re.findall(r"\|\||&&|!|\(|\)|[A-Za-z0-9_.]+|\S", expr)
    parser = _ExprParser(tokens=tokens, tags=tags)
    value = parser.parse_or()
    if parser.position != len(tokens):
        raise ConstraintError(f"Unexpected token in build constraint: {expr}")
    return value


class _ExprParser:
    def __init__(self, tokens: list[str], tags: frozenset[str]) -> None:
        self._tokens = tokens
        self._tags = tags
        self.position = 0

    def _peek(self) -> str | None:
        if self.position < len(self._tokens):
            return self._tokens[self.position]
        return None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise ConstraintError("Unexpected end of build constraint")
        self.position += 1
        return token

    def parse_or(self) -> bool:
        value = self.parse_and()
        while self._peek() == "||":
            self._take()
            right = self.parse_and()
            value = value or right
        return value

    def parse_and(self) -> bool:
        value = self.parse_not()
        while self._peek() == "&&":
            self._take()
            right = self.parse_not()
            value = value and right
        return value

    def parse_not(self) -> bool:
        token = self._take()
        if token == "!":
            return not self.parse_not()
        if token == "(":
            value = self.parse_or()
            if self._take() != ")":
                raise ConstraintError("Missing ')' in build constraint")
            return value
        if not _TAG_RE.fullmatch(token):
            raise ConstraintError(f"Invalid build tag: {token}")
        return token in self._tags
