from __future__ import annotations

import pytest

from utils.string_utils import StringUtils


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        (" text ", " text "),
        (123, "123"),
    ],
)
def test_ensure_str(value: object, expected: str) -> None:
    assert StringUtils.ensure_str(value) == expected  # type: ignore[arg-type]


def test_compress_blanks_collapses_whitespace() -> None:
    assert StringUtils.compress_blanks("  hello \t  world\n ") == "hello world"


def test_translation_hash_key_is_deterministic() -> None:
    first: str = StringUtils.generate_translation_hash_key("hi", "auto", "fr")
    second: str = StringUtils.generate_translation_hash_key("hi", "auto", "fr")

    assert first == second
    assert len(first) == 64


def test_translation_hash_key_ignores_language_case() -> None:
    assert StringUtils.generate_translation_hash_key("hi", "EN", "FR") == StringUtils.generate_translation_hash_key(
        "hi", "en", "fr"
    )


def test_translation_hash_key_normalizes_unicode() -> None:
    composed: str = "café"
    decomposed: str = "cafe\u0301"

    assert StringUtils.generate_translation_hash_key(composed, "fr", "en") == (
        StringUtils.generate_translation_hash_key(decomposed, "fr", "en")
    )


def test_translation_hash_key_differs_per_pair() -> None:
    assert StringUtils.generate_translation_hash_key("hi", "en", "fr") != StringUtils.generate_translation_hash_key(
        "hi", "en", "de"
    )


def test_count_phrase_hits_respects_word_boundaries() -> None:
    assert StringUtils.count_phrase_hits("This is super", ("sup",)) == 0
    assert StringUtils.count_phrase_hits("sup, bro?", ("sup", "bro")) == 2


def test_count_phrase_hits_counts_distinct_phrases_once() -> None:
    assert StringUtils.count_phrase_hits("bro bro bro", ("bro",)) == 1


def test_count_phrase_hits_handles_multi_word_phrases() -> None:
    assert StringUtils.count_phrase_hits("Sin embargo, no obstante", ("sin embargo", "no obstante")) == 2


def test_count_phrase_hits_is_case_insensitive() -> None:
    assert StringUtils.contains_phrase("FURTHERMORE we agree", "furthermore") is True


def test_count_words() -> None:
    assert StringUtils.count_words("  one two   three ") == 3
    assert StringUtils.count_words("") == 0
