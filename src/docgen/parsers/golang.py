# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Go source parser extracting top-level declarations and doc comments.

Only the declaration level of the grammar is recognized: function bodies are
skipped by bracket matching and spec boundaries follow Go's automatic
semicolon insertion rule.
"""

import bisect
import logging
import re
from dataclasses import dataclass
from pathlib import Path

import pathspec

from docgen.declaration import PlatformVariant
from docgen.parser import (
    CommentGroup,
    DeclKeyword,
    ParsedDecl,
    ParsedFile,
    ParsedSpec,
    ParsedUnit,
    NoBuildableFiles,
    ParseFailure,
)
from docgen.parsers.constraints import (
    ConstraintError,
    build_tags,
    is_test_file,
    match_file_name,
    match_source,
)
from docgen.platforms import build_context
from docgen.snapshot_cache import SingleFlightCache

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^//(line |extern |export |[a-z0-9]+:[a-z0-9])")
_OPERATORS_3 = frozenset({"...", "<<=", ">>=", "&^="})
_OPERATORS_2 = frozenset(
    {
        "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
        "<<", ">>", "&^", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=",
    }
)
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer",
        "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
        "interface", "map", "package", "range", "return", "select", "struct",
        "switch", "type", "var",
    }
)
_LINE_ENDING_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_IGNORED_PACKAGES = frozenset({"documentation"})
_PREDECLARED_TYPES = frozenset(
    {
        "any", "bool", "byte", "comparable", "complex64", "complex128", "error",
        "float32", "float64", "int", "int8", "int16", "int32", "int64", "rune",
        "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    }
)


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int
    end: int
    line: int
    end_line: int

    def is_op(self, text: str) -> bool:
        return self.kind == "op" and self.text == text


@dataclass(frozen=True)
class _Comment:
    raw: str
    start: int
    end: int
    line: int
    end_line: int


@dataclass(frozen=True)
class _Group:
    group: CommentGroup
    start: int
    end: int


def _scan(source: str, file_name: str) -> tuple[list[_Token], list[_Comment]]:
    """Split Go source into tokens and comments."""
    tokens: list[_Token] = []
    comments: list[_Comment] = []
    length = len(source)
    index = 0
    line = 1
    while index < length:
        char = source[index]
        if char == "\n":
            line += 1
            index += 1
            continue
        if char in " \t\r\f\ufeff":
            index += 1
            continue
        if source.startswith("//", index):
            end = source.find("\n", index)
            end = length if end < 0 else end
            comments.append(_Comment(source[index:end], index, end, line, line))
            index = end
            continue
        if source.startswith("/*", index):
            end = source.find("*/", index + 2)
            if end < 0:
                raise ParseFailure(f"{file_name}:{line}: comment not terminated")
            raw = source[index : end + 2]
            end_line = line + raw.count("\n")
            comments.append(_Comment(raw, index, end + 2, line, end_line))
            line = end_line
            index = end + 2
            continue
        if char in "\"'":
            end = index + 1
            while True:
                if end >= length or source[end] == "\n":
                    raise ParseFailure(f"{file_name}:{line}: literal not terminated")
                if source[end] == "\\":
                    end += 2
                    continue
                if source[end] == char:
                    break
                end += 1
            tokens.append(
                _Token("literal", source[index : end + 1], index, end + 1, line, line)
            )
            index = end + 1
            continue
        if char == "`":
            end = source.find("`", index + 1)
            if end < 0:
                raise ParseFailure(f"{file_name}:{line}: raw string not terminated")
            raw = source[index : end + 1]
            end_line = line + raw.count("\n")
            tokens.append(_Token("literal", raw, index, end + 1, line, end_line))
            line = end_line
            index = end + 1
            continue
        if char == "_" or char.isalpha():
            end = index + 1
            while end < length and (source[end] == "_" or source[end].isalnum()):
                end += 1
            tokens.append(_Token("ident", source[index:end], index, end, line, line))
            index = end
            continue
        if char.isdigit() or (
            char == "." and index + 1 < length and source[index + 1].isdigit()
        ):
            end = _scan_number(source, index)
            tokens.append(_Token("literal", source[index:end], index, end, line, line))
            index = end
            continue
        for width, operators in ((3, _OPERATORS_3), (2, _OPERATORS_2)):
            if source[index : index + width] in operators:
                break
        else:
            width = 1
        tokens.append(
            _Token("op", source[index : index + width], index, index + width, line, line)
        )
        index += width
    return tokens, comments


def _scan_number(source: str, index: int) -> int:
    is_hex = source[index : index + 2].lower() == "0x"
    end = index + 1
    while end < len(source):
        char = source[end]
        if char.isalnum() or char in "_.":
            end += 1
        elif char in "+-" and (
            source[end - 1] in "pP" or (not is_hex and source[end - 1] in "eE")
        ):
            end += 1
        else:
            break
    return end


def _comment_text(comments: list[_Comment]) -> str:
    """Return doc text for a comment group, as go/ast CommentGroup.Text does."""
    lines: list[str] = []
    for comment in comments:
        if comment.raw.startswith("//"):
            if _DIRECTIVE_RE.match(comment.raw):
                continue
            body = comment.raw[2:]
            if body.startswith(" "):
                body = body[1:]
            lines.append(body.rstrip())
        else:
            lines.extend(part.rstrip() for part in comment.raw[2:-2].split("\n"))

    text_lines: list[str] = []
    for line in lines:
        if not line and (not text_lines or not text_lines[-1]):
            continue
        text_lines.append(line)
    while text_lines and not text_lines[-1]:
        text_lines.pop()
    return "\n".join(text_lines)


def _group_comments(comments: list[_Comment], tokens: list[_Token]) -> list[_Group]:
    token_starts = [token.start for token in tokens]
    grouped: list[list[_Comment]] = []
    trailing: list[bool] = []
    for comment in comments:
        if grouped:
            previous = grouped[-1][-1]
            next_token = bisect.bisect_left(token_starts, previous.end)
            token_between = (
                next_token < len(tokens) and tokens[next_token].start < comment.start
            )
            # A comment trailing code only groups with comments on its own line.
            same_line_only = trailing[-1] and comment.line > grouped[-1][0].line
            if (
                not token_between
                and not same_line_only
                and comment.line <= previous.end_line + 1
            ):
                grouped[-1].append(comment)
                continue
        before = bisect.bisect_left(token_starts, comment.start) - 1
        grouped.append([comment])
        trailing.append(before >= 0 and tokens[before].end_line == comment.line)
    return [
        _Group(
            group=CommentGroup(
                text=_comment_text(members),
                line=members[0].line,
                end_line=members[-1].end_line,
            ),
            start=members[0].start,
            end=members[-1].end,
        )
        for members in grouped
    ]


class _FileParser:
    """Parse the top-level declarations of one Go source file."""

    def __init__(self, source: str, file_name: str) -> None:
        self._source = source
        self._file_name = file_name
        self._tokens, comments = _scan(source, file_name)
        self._groups = _group_comments(comments, self._tokens)
        self._group_starts = [group.start for group in self._groups]
        self._pos = 0

    def parse(self) -> ParsedFile:
        tokens = self._tokens
        if not tokens or not (tokens[0].kind == "ident" and tokens[0].text == "package"):
            raise self._error(tokens[0] if tokens else None, "expected 'package'")
        if len(tokens) < 2 or tokens[1].kind != "ident":
            raise self._error(tokens[0], "expected package name")
        package_leading = self._leading(0)
        package_name = tokens[1].text
        self._pos = 2

        decls: list[ParsedDecl] = []
        while self._pos < len(tokens):
            token = tokens[self._pos]
            if token.is_op(";"):
                self._pos += 1
            elif token.kind == "ident" and token.text == "import":
                self._skip_import()
            elif token.kind == "ident" and token.text in ("const", "var", "type"):
                decls.append(self._parse_gen_decl())
            elif token.kind == "ident" and token.text == "func":
                decls.append(self._parse_func())
            else:
                raise self._error(token, f"unexpected {token.text!r} at top level")
        return ParsedFile(
            file_name=self._file_name,
            package_name=package_name,
            package_line=tokens[0].line,
            package_leading=package_leading,
            decls=tuple(decls),
        )

    def _error(self, token: _Token | None, message: str) -> ParseFailure:
        line = token.line if token is not None else 1
        return ParseFailure(f"{self._file_name}:{line}: {message}")

    def _token(self, index: int) -> _Token:
        if index >= len(self._tokens):
            raise self._error(self._tokens[-1], "unexpected end of file")
        return self._tokens[index]

    def _leading(self, index: int) -> tuple[CommentGroup, ...]:
        """Return comment groups between the previous token and ``index``."""
        return tuple(group.group for group in self._leading_groups(index))

    def _leading_groups(self, index: int) -> list[_Group]:
        token = self._tokens[index]
        if index > 0:
            previous_end = self._tokens[index - 1].end
            previous_line = self._tokens[index - 1].end_line
        else:
            previous_end, previous_line = 0, 0
        position = bisect.bisect_left(self._group_starts, previous_end)
        leading: list[_Group] = []
        while position < len(self._groups) and self._groups[position].end <= token.start:
            group = self._groups[position]
            if group.group.line > previous_line:
                leading.append(group)
            position += 1
        return leading

    def _trailing(self, index: int) -> str | None:
        """Return the raw comment that follows ``index`` on the same line."""
        token = self._tokens[index]
        position = bisect.bisect_left(self._group_starts, token.end)
        if position >= len(self._groups) or index + 1 >= len(self._tokens):
            return None
        group = self._groups[position]
        if group.start < self._tokens[index + 1].start and group.group.line == token.end_line:
            return self._source[group.start : group.end]
        return None

    def _ends_line(self, index: int) -> bool:
        """Report whether a semicolon is inserted after token ``index``."""
        token = self._tokens[index]
        if index + 1 < len(self._tokens) and self._tokens[index + 1].line <= token.end_line:
            return False
        if token.kind == "literal":
            return True
        if token.kind == "ident":
            return token.text not in _KEYWORDS or token.text in _LINE_ENDING_KEYWORDS
        return token.text in (")", "]", "}", "++", "--")

    def _match(self, index: int) -> int:
        """Return the index of the bracket closing the one at ``index``."""
        stack: list[str] = []
        position = index
        while True:
            token = self._token(position)
            if token.kind == "op" and token.text in _OPENERS:
                stack.append(_OPENERS[token.text])
            elif token.kind == "op" and token.text in _CLOSERS:
                if not stack or stack.pop() != token.text:
                    raise self._error(token, f"unbalanced {token.text!r}")
                if not stack:
                    return position
            position += 1

    def _statement_end(self, index: int, in_block: bool) -> int:
        """Return the last token index of the spec starting at ``index``."""
        stack: list[str] = []
        position = index
        while position < len(self._tokens):
            token = self._tokens[position]
            if not stack and token.kind == "op":
                if token.text == ";" or (in_block and token.text == ")"):
                    return position - 1
            if token.kind == "op" and token.text in _OPENERS:
                stack.append(_OPENERS[token.text])
            elif token.kind == "op" and token.text in _CLOSERS:
                if not stack or stack.pop() != token.text:
                    raise self._error(token, f"unbalanced {token.text!r}")
            if not stack and self._ends_line(position):
                return position
            position += 1
        if stack or in_block:
            raise self._error(self._tokens[-1], "unexpected end of file")
        return len(self._tokens) - 1

    def _skip_import(self) -> None:
        start = self._pos + 1
        if self._token(start).is_op("("):
            self._pos = self._match(start) + 1
            return
        self._pos = self._statement_end(start, in_block=False) + 1

    def _parse_gen_decl(self) -> ParsedDecl:
        keyword_index = self._pos
        keyword = self._tokens[keyword_index]
        kind: DeclKeyword = keyword.text  # type: ignore[assignment]
        specs: list[ParsedSpec] = []
        parenthesized = self._token(keyword_index + 1).is_op("(")
        if parenthesized:
            position = keyword_index + 2
            while not self._token(position).is_op(")"):
                if self._tokens[position].is_op(";"):
                    position += 1
                    continue
                end = self._statement_end(position, in_block=True)
                if end < position:
                    raise self._error(self._tokens[position], "empty declaration")
                specs.append(self._make_spec(kind, position, end, parenthesized=True))
                position = end + 1
            self._pos = position + 1
        else:
            start = keyword_index + 1
            self._token(start)
            end = self._statement_end(start, in_block=False)
            if end < start:
                raise self._error(keyword, "empty declaration")
            specs.append(self._make_spec(kind, start, end, parenthesized=False))
            self._pos = end + 1
        return ParsedDecl(
            keyword=kind,
            file_name=self._file_name,
            line=keyword.line,
            leading=self._leading(keyword_index),
            parenthesized=parenthesized,
            specs=tuple(specs),
        )

    def _make_spec(
        self, kind: DeclKeyword, start: int, end: int, parenthesized: bool
    ) -> ParsedSpec:
        first = self._tokens[start]
        if first.kind != "ident":
            raise self._error(first, f"expected identifier, found {first.text!r}")
        names = [first.text]
        if kind != "type":
            position = start + 1
            while (
                position + 1 <= end
                and self._tokens[position].is_op(",")
                and self._tokens[position + 1].kind == "ident"
            ):
                names.append(self._tokens[position + 1].text)
                position += 2
        text = self._source[first.start : self._tokens[end].end]
        if kind == "type":
            exported = self._exported_type(start, end)
            if exported is not None:
                text = exported
            elif parenthesized:
                text = _dedent_continuation(text)
        return ParsedSpec(
            names=tuple(names),
            text=text,
            leading=self._leading(start),
            line=first.line,
        )

    def _parse_func(self) -> ParsedDecl:
        keyword_index = self._pos
        keyword = self._tokens[keyword_index]
        position = keyword_index + 1
        receiver: str | None = None
        if self._token(position).is_op("("):
            close = self._match(position)
            receiver = self._receiver_name(position + 1, close)
            position = close + 1
        name = self._token(position)
        if name.kind != "ident":
            raise self._error(name, f"expected function name, found {name.text!r}")
        position += 1

        stack: list[str] = []
        body_start: int | None = None
        end = len(self._tokens) - 1
        while position < len(self._tokens):
            token = self._tokens[position]
            if not stack and token.is_op("{"):
                before = self._tokens[position - 1]
                if not (before.kind == "ident" and before.text in ("struct", "interface")):
                    body_start = position
                    break
            if not stack and token.is_op(";"):
                end = position - 1
                break
            if token.kind == "op" and token.text in _OPENERS:
                stack.append(_OPENERS[token.text])
            elif token.kind == "op" and token.text in _CLOSERS:
                if not stack or stack.pop() != token.text:
                    raise self._error(token, f"unbalanced {token.text!r}")
            if not stack and self._ends_line(position):
                end = position
                break
            position += 1
        else:
            if stack:
                raise self._error(self._tokens[-1], "unexpected end of file")

        if body_start is not None:
            end = body_start - 1
            self._pos = self._match(body_start) + 1
        else:
            self._pos = end + 1
        text = self._source[keyword.start : self._tokens[end].end].rstrip()
        spec = ParsedSpec(
            names=(name.text,),
            text=text,
            leading=(),
            line=keyword.line,
            receiver=receiver,
        )
        return ParsedDecl(
            keyword="func",
            file_name=self._file_name,
            line=keyword.line,
            leading=self._leading(keyword_index),
            parenthesized=False,
            specs=(spec,),
        )

    def _exported_type(self, start: int, end: int) -> str | None:
        """Rebuild a struct or interface type spec without unexported members.

        Only the outermost body is filtered; nested struct types keep their
        fields. Returns ``None`` when the spec has no such body or every
        member is exported.
        """
        open_index = self._type_body(start, end)
        if open_index is None:
            return None
        close_index = self._match(open_index)
        is_struct = self._tokens[open_index - 1].text == "struct"
        kept: list[tuple[int, int, str]] = []
        filtered = False
        position = open_index + 1
        while position < close_index:
            if self._tokens[position].is_op(";"):
                position += 1
                continue
            last = self._member_end(position, close_index)
            raw = self._member_text(position, last)
            text = self._exported_member(position, last, is_struct)
            if text is None:
                filtered = True
            else:
                filtered = filtered or text != raw
                kept.append((position, last, text))
            position = last + 1
        if not filtered:
            return None

        lines = [self._source[self._tokens[start].start : self._tokens[open_index].end]]
        for first, last, text in kept:
            for group in self._leading_groups(first):
                raw_group = self._source[group.start : group.end]
                lines.extend(f"\t{line.strip()}" for line in raw_group.split("\n"))
            member_lines = text.split("\n")
            trailing = self._trailing(last)
            if trailing is not None:
                member_lines[-1] = f"{member_lines[-1]} {trailing}"
            lines.extend(f"\t{line}" for line in member_lines)
        tail = self._source[self._tokens[close_index].start : self._tokens[end].end]
        lines.append(tail)
        return "\n".join(lines)

    def _type_body(self, start: int, end: int) -> int | None:
        """Return the index of the ``{`` opening the spec's struct or interface."""
        depth = 0
        for position in range(start + 1, end):
            token = self._tokens[position]
            if token.kind == "op" and token.text in _OPENERS:
                depth += 1
            elif token.kind == "op" and token.text in _CLOSERS:
                depth -= 1
            elif (
                depth == 0
                and token.text in ("struct", "interface")
                and self._tokens[position + 1].is_op("{")
            ):
                return position + 1
        return None

    def _member_end(self, index: int, close_index: int) -> int:
        depth = 0
        position = index
        while position < close_index:
            token = self._tokens[position]
            if token.kind == "op" and token.text in _OPENERS:
                depth += 1
            elif token.kind == "op" and token.text in _CLOSERS:
                depth -= 1
            elif depth == 0 and token.is_op(";"):
                return position - 1
            if depth == 0 and self._ends_line(position):
                return position
            position += 1
        return close_index - 1

    def _member_text(self, first: int, last: int, start: int | None = None) -> str:
        """Return member source from ``start`` with continuation lines re-indented."""
        token = self._tokens[first]
        line_start = self._source.rfind("\n", 0, token.start) + 1
        indent = self._source[line_start : token.start]
        if indent.strip():
            indent = ""
        begin = self._tokens[start if start is not None else first].start
        head, *rest = self._source[begin : self._tokens[last].end].split("\n")
        return "\n".join(
            [head, *(line[len(indent) :] if line.startswith(indent) else line for line in rest)]
        )

    def _exported_member(self, first: int, last: int, is_struct: bool) -> str | None:
        """Return member text restricted to exported names, or ``None`` to drop it."""
        tokens = self._tokens[first : last + 1]
        text = self._member_text(first, last)
        if not is_struct:
            if any(token.is_op("|") or token.is_op("~") for token in tokens):
                return text
            if len(tokens) > 1 and tokens[1].is_op("("):
                return text if _is_exported(tokens[0].text) else None
            name = _embedded_name(tokens)
            return text if _is_exported(name) or name in _PREDECLARED_TYPES else None
        if _is_embedded_field(tokens):
            return text if _is_exported(_embedded_name(tokens)) else None

        names = [tokens[0].text]
        position = 0
        while position + 2 < len(tokens) and tokens[position + 1].is_op(","):
            names.append(tokens[position + 2].text)
            position += 2
        exported = [name for name in names if _is_exported(name)]
        if not exported:
            return None
        if len(exported) == len(names):
            return text
        field_type = self._member_text(first, last, start=first + position + 1)
        return f"{', '.join(exported)} {field_type}"

    def _receiver_name(self, start: int, close: int) -> str:
        depth = 0
        name: str | None = None
        for token in self._tokens[start:close]:
            if token.kind == "op" and token.text in _OPENERS:
                depth += 1
            elif token.kind == "op" and token.text in _CLOSERS:
                depth -= 1
            elif depth == 0 and token.kind == "ident":
                name = token.text
        if name is None:
            raise self._error(self._tokens[start - 1], "malformed receiver")
        return name


def _is_exported(name: str) -> bool:
    return name[:1].isupper()


def _embedded_name(tokens: list[_Token]) -> str:
    """Return the type name of an embedded field such as `*pkg.Name[T]`."""
    position = 1 if tokens[0].is_op("*") else 0
    name = tokens[position].text
    if position + 2 < len(tokens) and tokens[position + 1].is_op("."):
        name = tokens[position + 2].text
    return name


def _is_embedded_field(tokens: list[_Token]) -> bool:
    head = tokens[0]
    if head.is_op("*"):
        return True
    if head.kind != "ident":
        return False
    if len(tokens) == 1 or tokens[1].kind == "literal" or tokens[1].is_op("."):
        return True
    if tokens[1].is_op("["):
        body = [token for token in tokens if token.kind != "literal"]
        return body[-1].is_op("]")
    return False


def _dedent_continuation(text: str) -> str:
    """Remove one indentation level from the continuation lines of a spec."""
    first, *rest = text.split("\n")
    return "\n".join([first, *(line[1:] if line.startswith("\t") else line for line in rest)])


def parse_go_source(source: str, file_name: str) -> ParsedFile:
    """Parse one Go source text.

    Raises:
        ParseFailure: If the source is malformed at declaration level.
    """
    return _FileParser(source=source, file_name=file_name).parse()


class GoSourceParser:
    """Parse Go package directories under a platform variant."""

    def __init__(self, exclude: pathspec.PathSpec | None = None) -> None:
        """Initialize parser.

        Args:
            exclude: Optional file name patterns to skip in package directories.
        """
        self._exclude = exclude
        self._sources: SingleFlightCache[tuple[str, int, int], str] = SingleFlightCache()
        self._files: SingleFlightCache[tuple[str, int, int], ParsedFile] = SingleFlightCache()

    def parse_package(self, directory: Path, variant: PlatformVariant) -> ParsedUnit:
        """Parse the files of ``directory`` that build under ``variant``.

        Args:
            directory: Package directory.
            variant: Platform variant selecting files by build constraints.

        Returns:
            Merged parsed unit.

        Raises:
            ParseFailure: If the directory is missing or a selected file is
                malformed.
            NoBuildableFiles: If no file builds under the variant.
        """
        if not directory.is_dir():
            raise ParseFailure(f"Package directory does not exist: {directory}")
        goos, goarch = build_context(variant)
        tags = build_tags(goos, goarch)

        selected: list[ParsedFile] = []
        for path in sorted(directory.glob("*.go")):
            if is_test_file(path.name) or not match_file_name(path.name, tags):
                continue
            if self._exclude is not None and self._exclude.match_file(path.name):
                logger.debug(f"Skipping excluded file (file_path={path})")
                continue
            cache_key = self._cache_key(path)
            source = self._sources.get(cache_key, lambda path=path: self._read(path))
            try:
                if not match_source(source, tags):
                    continue
            except ConstraintError as exc:
                raise ParseFailure(f"{path.name}: {exc}") from exc
            parsed = self._files.get(
                cache_key,
                lambda path=path, source=source: parse_go_source(source, path.name),
            )
            if parsed.package_name in _IGNORED_PACKAGES:
                continue
            selected.append(parsed)

        if not selected:
            raise NoBuildableFiles(
                f"No buildable Go source files (directory={directory} variant={variant.label})"
            )
        package_names = sorted({parsed.package_name for parsed in selected})
        if len(package_names) > 1:
            raise ParseFailure(
                f"Found multiple packages {', '.join(package_names)} in {directory}"
            )
        logger.debug(
            f"Parsed package (directory={directory} variant={variant.label} files={len(selected)})"
        )
        return ParsedUnit(package_name=package_names[0], files=tuple(selected))

    def parse_source(self, source: str, file_name: str) -> ParsedUnit:
        """Parse one source text without evaluating build constraints."""
        parsed = parse_go_source(source, file_name)
        return ParsedUnit(package_name=parsed.package_name, files=(parsed,))

    @staticmethod
    def _cache_key(path: Path) -> tuple[str, int, int]:
        try:
            stat = path.stat()
        except OSError as exc:
            raise ParseFailure(f"Cannot stat {path}: {exc}") from exc
        return str(path), stat.st_mtime_ns, stat.st_size

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseFailure(f"Cannot read {path}: {exc}") from exc
