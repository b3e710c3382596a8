# -*- coding: utf-8 -*-

import pytest

from hashlink import ids


def test_generate_defaults():
    token = ids.generate()

    assert len(token) == ids.DEFAULT_LENGTH
    assert set(token) <= set(ids.DEFAULT_ALPHABET)


@pytest.mark.parametrize("alphabet,length", [
    ("0123456789abcdef", 4),
    ("ab", 32),
    ("x", 5),
])
def test_generate_alphabet_and_length(alphabet, length):
    token = ids.generate(alphabet, length)

    assert len(token) == length
    assert set(token) <= set(alphabet)


def test_generate_single_character_alphabet():
    assert ids.generate("x", 5) == "xxxxx"


def test_default_alphabet_excludes_ambiguous_characters():
    assert len(ids.DEFAULT_ALPHABET) == 59
    assert not set("lIO") & set(ids.DEFAULT_ALPHABET)


@pytest.mark.parametrize("alphabet,length", [("", 12), ("abc", 0), ("abc", -1)])
def test_generate_error(alphabet, length):
    with pytest.raises(ValueError):
        ids.generate(alphabet, length)


def test_generate_is_random():
    tokens = set(ids.generate() for _ in range(1000))
    assert len(tokens) == 1000


def test_generate_uses_secrets(monkeypatch):
    picks = iter("abcd")
    monkeypatch.setattr(ids.secrets, "choice", lambda alphabet: next(picks))

    assert ids.generate("abcd", 4) == "abcd"


def test_collision_probability():
    # N**2 / (2 * A**L)
    assert ids.collision_probability(100, 16, 8) == pytest.approx(
        100 ** 2 / (2.0 * 16 ** 8)
    )
    assert ids.collision_probability(0, 59, 12) == 0.0


def test_collision_probability_default_space_is_negligible():
    assert ids.collision_probability(10 ** 6, 59, 12) < 1e-9


def test_collision_probability_capped():
    assert ids.collision_probability(1000, 16, 4) == 1.0
