from __future__ import annotations

import pytest

from dexquiz.aliases import SPECIAL_VARIATIONS
from dexquiz.answer import Verdict, check_guess, is_correct, normalize, similarity, variations_for


def test_normalize_ignores_case_whitespace_and_punctuation():
    assert normalize("Mr. Mime") == normalize("mr-mime") == normalize("MRMIME") == "mrmime"
    assert normalize("  Farfetch'd  ") == "farfetchd"
    assert normalize("Type: Null") == "typenull"
    assert normalize("under_score") == "underscore"


@pytest.mark.parametrize("raw", ["Mr. Mime", "  ho - oh ", "NIDORAN♀", "", "Porygon-Z!!", "a\tb\nc"])
def test_normalize_is_idempotent(raw):
    assert normalize(normalize(raw)) == normalize(raw)


def test_variations_for_hyphenated_name():
    assert variations_for("tapu-koko") == ["tapu-koko", "tapukoko", "tapu koko", "tapu"]


def test_variations_for_plain_name_is_just_the_name():
    assert variations_for("pikachu") == ["pikachu"]


def test_variations_include_curated_spellings():
    variations = variations_for("nidoran-f")
    assert variations[0] == "nidoran-f"
    for alt in SPECIAL_VARIATIONS["nidoran-f"]:
        assert alt in variations
    assert len(variations) == len(set(variations))


@pytest.mark.parametrize("name", ["pikachu", "mr-mime", "ho-oh", "type-null", "kommo-o", "farfetchd"])
def test_canonical_name_is_always_correct(name):
    assert is_correct(name, name)


@pytest.mark.parametrize(
    "guess, canonical",
    [
        ("nidoran female", "nidoran-f"),
        ("Nidoran♂", "nidoran-m"),
        ("hooh", "ho-oh"),
        ("farfetch'd", "farfetchd"),
        ("Mr. Mime", "mr-mime"),
        ("mime jr.", "mime-jr"),
        ("Type: Null", "type-null"),
        ("porygon z", "porygon-z"),
        ("Jangmo O", "jangmo-o"),
        ("tapu", "tapu-koko"),
    ],
)
def test_alias_matches(guess, canonical):
    assert check_guess(guess, canonical) is Verdict.CORRECT


def test_empty_guess_is_cleared_not_incorrect():
    assert check_guess("", "pikachu") is Verdict.CLEARED
    assert check_guess("  '-. ", "pikachu") is Verdict.CLEARED
    assert is_correct("", "pikachu") is False


def test_wrong_guess_is_incorrect():
    assert check_guess("raichu", "pikachu") is Verdict.INCORRECT
    assert check_guess("koko", "tapu-koko") is Verdict.INCORRECT


def test_similarity_hints_near_misses_only():
    assert similarity("pikachoo", "pikachu") >= 0.7
    assert similarity("charizard", "pikachu") < 0.5
    assert similarity("", "pikachu") == 0.0
