# -*- coding: utf-8 -*-

import pytest

from sharefs.languages import (
    LANGUAGES,
    PLAINTEXT,
    find_language,
    language_name,
    match_language,
)


def test_languages_unique():
    assert len(set(LANGUAGES)) == len(LANGUAGES)


def test_languages_fit_type_tag():
    assert len(LANGUAGES) < 2 ** 24


@pytest.mark.parametrize("text,expected", [
    ("python", "python"),
    ("Python", "python"),
    ("  rust\n", "rust"),
    ("py", "python"),
    ("JS", "javascript"),
    ("c++", "cpp"),
    ("txt", PLAINTEXT),
    ("klingon", None),
])
def test_find_language(text, expected):
    assert find_language(text) == expected


def test_match_language():
    assert match_language("python") == LANGUAGES.index("python")
    assert LANGUAGES[match_language("sh")] == "bash"


@pytest.mark.parametrize("text", [PLAINTEXT, "text", "klingon", ""])
def test_match_language_none(text):
    assert match_language(text) is None


def test_language_name():
    assert language_name(LANGUAGES.index("go")) == "go"
    assert language_name(len(LANGUAGES)) is None
    assert language_name(0xFFFFFF) is None
    assert language_name(-1) is None
