from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from thefuzz import fuzz

from .aliases import SPECIAL_VARIATIONS

PUNCTUATION = re.compile(r"[^\w\s]|_")
WHITESPACE = re.compile(r"\s+")


class Verdict(str, Enum):
    """Result of a guess.

    ``check_guess`` only returns CLEARED, CORRECT or INCORRECT. LOCKED is
    returned by ``QuizSession.submit_guess`` for a slot that is already guessed.
    """

    CLEARED = "cleared"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    LOCKED = "locked"


@dataclass(frozen=True)
class GuessOutcome:
    verdict: Verdict
    similarity: float = 0.0


def normalize(text: str) -> str:
    text = text.lower()
    text = PUNCTUATION.sub("", text)
    text = WHITESPACE.sub("", text)
    return text.strip()


def variations_for(canonical: str) -> list[str]:
    """Accepted spellings for a catalog name, canonical name first."""
    results = [canonical]

    parts = canonical.split("-")
    if len(parts) >= 2:
        results.append("".join(parts))
        results.append(" ".join(parts))
        results.append(parts[0])

    results.extend(SPECIAL_VARIATIONS.get(canonical, []))

    seen: set[str] = set()
    unique = []
    for variant in results:
        if variant not in seen:
            seen.add(variant)
            unique.append(variant)
    return unique


def check_guess(user_guess: str, canonical: str) -> Verdict:
    guess_norm = normalize(user_guess)
    if not guess_norm:
        return Verdict.CLEARED

    if guess_norm == normalize(canonical):
        return Verdict.CORRECT

    for variant in variations_for(canonical):
        if normalize(variant) == guess_norm:
            return Verdict.CORRECT

    return Verdict.INCORRECT


def is_correct(user_guess: str, canonical: str) -> bool:
    return check_guess(user_guess, canonical) is Verdict.CORRECT


def similarity(user_guess: str, canonical: str) -> float:
    """Best fuzzy ratio against any accepted spelling, in [0, 1].

    Only used as a "close" hint for wrong answers; it never decides correctness.
    """
    guess_norm = normalize(user_guess)
    if not guess_norm:
        return 0.0
    best = 0.0
    for variant in variations_for(canonical):
        variant_norm = normalize(variant)
        if not variant_norm:
            continue
        best = max(best, fuzz.ratio(guess_norm, variant_norm) / 100.0)
    return best
