# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for declaration/translation alignment."""

from docgen.alignment import AlignmentEngine
from docgen.declaration import (
    Declaration,
    DeclKey,
    DeclKind,
    TranslationEntry,
    signature_digest,
)


def _declaration(
    kind: DeclKind,
    name: str,
    signature: str,
    comment: str = "",
    receiver: str | None = None,
    order: int = 0,
) -> Declaration:
    return Declaration(
        kind=kind,
        name=name,
        receiver=receiver,
        group_id=None,
        signature=signature,
        canonical_comment=comment,
        source_order=order,
    )


def _entry(key: DeclKey, text: str, signature: str) -> TranslationEntry:
    return TranslationEntry(
        key=key,
        language="zh_CN",
        translated_comment=text,
        signature_digest=signature_digest(signature),
    )


def test_ph3_ali_001_matching_signature_is_translated_and_fresh() -> None:
    add = _declaration("func", "Add", "func Add(a, b int) int", "Add returns a+b.")

    result = AlignmentEngine().align(
        [add], {add.key: _entry(add.key, "返回a+b的和。", add.signature)}
    )

    (aligned,) = result.aligned
    assert aligned.translated_comment == "返回a+b的和。"
    assert aligned.is_stale is False
    assert result.translated_count == 1
    assert result.untranslated == ()
    assert result.stale == ()
    assert result.dropped == 0


def test_ph3_ali_002_changed_signature_keeps_translation_flagged_stale() -> None:
    add = _declaration("func", "Add", "func Add(a, b int64) int64", "Add returns a+b.")
    entry = _entry(add.key, "返回a+b的和。", "func Add(a, b int) int")

    result = AlignmentEngine().align([add], {add.key: entry})

    (aligned,) = result.aligned
    assert aligned.translated_comment == "返回a+b的和。"
    assert aligned.is_stale is True
    assert aligned.translation_digest == entry.signature_digest
    assert result.stale == (add.key,)


def test_ph3_ali_003_identity_match_is_exact_across_kinds() -> None:
    function = _declaration("func", "Foo", "func Foo()", "Foo does it.")
    method = _declaration(
        "method", "Bar.Foo", "func (b *Bar) Foo()", "Foo does it.", receiver="Bar", order=1
    )
    translations = {function.key: _entry(function.key, "函数。", function.signature)}

    result = AlignmentEngine().align([method], translations)

    (aligned,) = result.aligned
    assert aligned.translated_comment is None
    assert result.untranslated == (method.key,)
    assert result.dropped == 1


def test_ph3_ali_004_undocumented_declarations_are_not_reported_untranslated() -> None:
    bare = _declaration("type", "Point", "type Point struct{}")
    documented = _declaration("type", "Line", "type Line struct{}", "Line joins points.", order=1)

    result = AlignmentEngine().align([bare, documented], {})

    assert [item.declaration for item in result.aligned] == [bare, documented]
    assert result.untranslated == (documented.key,)
    assert result.translated_count == 0
