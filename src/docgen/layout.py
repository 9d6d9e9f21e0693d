# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Artifact layout contract shared by rendering and translation recovery.

An artifact documents every declaration as::

    // canonical comment

    // DOCGEN-STALE md5:<digest> signature changed since translation
    // translated comment
    signature

The marker line is present only for stale translations. The translated group
is the one directly above the signature; the canonical group precedes it
after one blank line. A missing canonical comment with a translation is
written as a bare ``//`` line.
"""

import re
import textwrap
import unicodedata
from dataclasses import dataclass

from docgen.declaration import PlatformVariant
from docgen.parser import CommentGroup

DEFAULT_BANNER = (
    "// Copyright The Go Authors. All rights reserved.\n"
    "// Use of this source code is governed by a BSD-style\n"
    "// license that can be found in the LICENSE file.\n"
    "\n"
    "// +build ignore\n"
)
DEFAULT_WRAP_WIDTH = 80
TAB_WIDTH = 4

STALE_MARKER = "DOCGEN-STALE"
_STALE_RE = re.compile(rf"^{STALE_MARKER} md5:(?P<digest>[0-9a-f]{{32}})(\s|$)")


@dataclass(frozen=True)
class CommentPair:
    """Comments recovered from an artifact for one declaration."""

    canonical: str
    translated: str | None
    stale_digest: str | None = None


def artifact_file_name(language: str, variant: PlatformVariant) -> str:
    """Return ``doc_<lang>[_<os>][_<arch>].go``."""
    return f"doc_{language}{variant.suffix}.go"


def banner_lines(banner: str) -> list[str]:
    """Return the banner lines written at the top of an artifact."""
    return banner.rstrip("\n").split("\n")


def banner_line_count(banner: str) -> int:
    return len(banner_lines(banner))


def stale_marker_line(digest: str) -> str:
    return f"{STALE_MARKER} md5:{digest} signature changed since translation"


def doc_comment(leading: tuple[CommentGroup, ...], line: int) -> str:
    """Return the doc comment of a source declaration starting at ``line``."""
    if leading and leading[-1].end_line == line - 1:
        return leading[-1].text
    return ""


def read_comment_pair(
    leading: tuple[CommentGroup, ...], line: int, min_line: int = 0
) -> CommentPair:
    """Recover the canonical/translated comment pair from artifact groups.

    Args:
        leading: Comment groups preceding the declaration.
        line: Line of the declaration.
        min_line: Groups starting at or above this line are ignored.

    Returns:
        The recovered comment pair.
    """
    groups = [group for group in leading if group.line > min_line]
    if not groups or groups[-1].end_line != line - 1:
        return CommentPair(canonical="", translated=None)
    if len(groups) == 1:
        return CommentPair(canonical=groups[0].text, translated=None)

    translated_lines = groups[-1].text.split("\n")
    stale_digest: str | None = None
    match = _STALE_RE.match(translated_lines[0])
    if match:
        stale_digest = match.group("digest")
        translated_lines = translated_lines[1:]
    translated = "\n".join(translated_lines).strip("\n")
    return CommentPair(
        canonical=groups[-2].text,
        translated=translated or None,
        stale_digest=stale_digest,
    )


def comment_block(
    canonical: str,
    translated: str | None,
    stale_digest: str | None = None,
    indent: str = "",
    width: int = DEFAULT_WRAP_WIDTH,
) -> list[str]:
    """Render the comment lines placed above one declaration.

    Args:
        canonical: Canonical comment text.
        translated: Translated comment text, if any.
        stale_digest: Digest to announce in a stale marker line.
        indent: Prefix for every line.
        width: Total line width budget.

    Returns:
        Output lines without trailing newlines.
    """
    lines = format_comment(canonical, indent=indent, width=width)
    if not translated:
        return lines
    if not lines:
        lines = [f"{indent}//"]
    lines.append("")
    if stale_digest is not None:
        lines.append(f"{indent}// {stale_marker_line(stale_digest)}")
    lines.extend(format_comment(translated, indent=indent, width=width))
    return lines


def format_comment(text: str, indent: str = "", width: int = DEFAULT_WRAP_WIDTH) -> list[str]:
    """Render comment text as wrapped ``//`` lines.

    Latin paragraphs are reflowed, paragraphs with East Asian wide characters
    are only split at spaces, indented lines are kept verbatim.
    """
    text_width = max(20, width - len(indent.expandtabs(TAB_WIDTH)) - 3)
    body = wrap_text(text, text_width)
    lines: list[str] = []
    for line in body:
        if not line:
            lines.append(f"{indent}//")
        elif line.startswith("\t"):
            lines.append(f"{indent}//{line}")
        else:
            lines.append(f"{indent}// {line}")
    return lines


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap comment text to ``width`` columns; idempotent on its own output."""
    output: list[str] = []
    paragraph: list[str] = []

    def flush() -> None:
        if paragraph:
            output.extend(_wrap_paragraph(paragraph, width))
            paragraph.clear()

    for raw_line in text.split("\n"):
        line = raw_line.rstrip()
        if not line:
            flush()
            if output and output[-1]:
                output.append("")
        elif line[0] in " \t":
            flush()
            output.append(line)
        else:
            paragraph.append(line)
    flush()
    while output and not output[-1]:
        output.pop()
    return output


def _wrap_paragraph(lines: list[str], width: int) -> list[str]:
    if any(_is_wide(line) for line in lines):
        wrapped: list[str] = []
        for line in lines:
            if len(line) <= width:
                wrapped.append(line)
            else:
                wrapped.extend(_wrap(line, width))
        return wrapped
    return _wrap(" ".join(" ".join(lines).split()), width)


def _wrap(text: str, width: int) -> list[str]:
    return textwrap.wrap(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [text]


def _is_wide(text: str) -> bool:
    return any(unicodedata.east_asian_width(char) in ("W", "F") for char in text)
