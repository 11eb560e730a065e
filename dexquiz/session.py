from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .answer import GuessOutcome, Verdict, check_guess, similarity
from .catalog import CatalogClient, Record
from .regions import ids_for, is_known_region, region_display_name

LOAD_ERROR_MESSAGE = "Failed to load, please retry"
COMPLETION_MESSAGE = "Congratulations! You identified them all in {region}!"

logger = logging.getLogger(__name__)

CompletionHook = Callable[[dict[str, Any]], None]
FeedbackHook = Callable[[Verdict], None]


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    COMPLETE = "complete"
    ERROR = "error"


class UnknownRegionError(ValueError):
    pass


class SessionStateError(RuntimeError):
    pass


@dataclass
class RecordSlot:
    record: Record
    guessed: bool = False
    scored_once: bool = False


class QuizSession:
    """Slots, score and lifecycle for one quiz page.

    Every load is tagged with a generation number. A load that finishes after a
    newer ``select_region`` call is thrown away instead of replacing the slots.
    """

    def __init__(
        self,
        catalog: CatalogClient,
        *,
        rng: random.Random | None = None,
        on_complete: CompletionHook | None = None,
        on_feedback: FeedbackHook | None = None,
    ):
        self._catalog = catalog
        self._rng = rng
        self._on_complete = on_complete
        self._on_feedback = on_feedback
        self._generation = 0
        self.state = SessionState.IDLE
        self.region_key: str | None = None
        self.slots: list[RecordSlot] = []
        self.score = 0
        self.total = 0
        self.loading: dict[str, int] | None = None
        self.completion: dict[str, Any] | None = None
        self.error: str | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def _clear(self) -> None:
        self.slots = []
        self.score = 0
        self.total = 0
        self.loading = None
        self.completion = None
        self.error = None

    def begin_region(self, key: str) -> int:
        """Reset to LOADING for ``key`` and return the new generation."""
        if not is_known_region(key):
            raise UnknownRegionError(f"Unknown region: {key}")
        self._generation += 1
        self._clear()
        self.region_key = key
        self.state = SessionState.LOADING
        logger.info("Session loading region %s (generation=%s)", key, self._generation)
        return self._generation

    async def load(self, generation: int) -> None:
        key = self.region_key
        ids = ids_for(key, self._rng)

        def on_progress(batch: int, total_batches: int) -> None:
            if generation == self._generation:
                self.loading = {"batch": batch, "total_batches": total_batches}

        try:
            records = await self._catalog.fetch_all(ids, on_progress=on_progress)
        except Exception:
            if generation != self._generation:
                logger.info("Discarding failed stale load (generation=%s)", generation)
                return
            logger.exception("Session load failed for region %s", key)
            self.state = SessionState.ERROR
            self.error = LOAD_ERROR_MESSAGE
            self.loading = None
            return

        if generation != self._generation:
            logger.info(
                "Discarding stale load (generation=%s, current=%s)",
                generation,
                self._generation,
            )
            return

        self.slots = [RecordSlot(record=record) for record in records]
        self.score = 0
        self.total = len(self.slots)
        self.loading = None
        self.state = SessionState.READY
        logger.info("Session ready for region %s (%s records)", key, self.total)

    async def select_region(self, key: str) -> None:
        generation = self.begin_region(key)
        await self.load(generation)

    async def reset(self) -> None:
        if self.region_key is None:
            self._generation += 1
            self._clear()
            self.state = SessionState.IDLE
            return
        await self.select_region(self.region_key)

    def submit_guess(self, slot_index: int, raw_text: str) -> GuessOutcome:
        if self.state not in (SessionState.READY, SessionState.COMPLETE):
            raise SessionStateError(f"Session is {self.state.value}; guesses are not accepted")
        if not 0 <= slot_index < len(self.slots):
            raise IndexError(f"No slot at index {slot_index}")

        slot = self.slots[slot_index]
        if slot.guessed:
            return GuessOutcome(Verdict.LOCKED)

        verdict = check_guess(raw_text, slot.record.name)
        if verdict is Verdict.CLEARED:
            return GuessOutcome(verdict)

        self._feedback(verdict)
        if verdict is Verdict.INCORRECT:
            return GuessOutcome(verdict, similarity(raw_text, slot.record.name))

        slot.guessed = True
        if not slot.scored_once:
            slot.scored_once = True
            self.score += 1
            self._check_complete()
        return GuessOutcome(verdict, 1.0)

    def _feedback(self, verdict: Verdict) -> None:
        if self._on_feedback is None:
            return
        try:
            self._on_feedback(verdict)
        except Exception:
            logger.warning("Feedback hook failed", exc_info=True)

    def _check_complete(self) -> None:
        if self.state is not SessionState.READY:
            return
        if self.total == 0 or self.score != self.total:
            return
        display_name = region_display_name(self.region_key) or self.region_key
        self.state = SessionState.COMPLETE
        self.completion = {
            "region": self.region_key,
            "display_name": display_name,
            "score": self.score,
            "total": self.total,
            "message": COMPLETION_MESSAGE.format(region=display_name),
        }
        logger.info("Session complete for region %s (%s/%s)", self.region_key, self.score, self.total)
        if self._on_complete is not None:
            try:
                self._on_complete(dict(self.completion))
            except Exception:
                logger.warning("Completion hook failed", exc_info=True)

    def progress(self) -> dict[str, Any]:
        percentage = round(self.score * 100.0 / self.total, 1) if self.total else 0.0
        return {"score": self.score, "total": self.total, "percentage": percentage}

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "region": self.region_key,
            "display_name": region_display_name(self.region_key) if self.region_key else None,
            **self.progress(),
            "loading": self.loading,
            "error": self.error,
            "completion": self.completion,
            "slots": [
                {
                    "index": index,
                    "id": slot.record.id,
                    "sprite": slot.record.sprite,
                    "guessed": slot.guessed,
                    "name": slot.record.name if slot.guessed else None,
                }
                for index, slot in enumerate(self.slots)
            ],
        }
