from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

import httpx

PLACEHOLDER_NAME = "pokemon-{id}"
PLACEHOLDER_SPRITE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
Sleep = Callable[[float], Awaitable[Any]]


class CatalogUnavailableError(RuntimeError):
    """Every requested record fell back to a placeholder."""


@dataclass(frozen=True)
class Record:
    id: int
    name: str
    sprite: str | None
    placeholder: bool = False


def placeholder_record(record_id: int) -> Record:
    return Record(
        id=record_id,
        name=PLACEHOLDER_NAME.format(id=record_id),
        sprite=PLACEHOLDER_SPRITE.format(id=record_id),
        placeholder=True,
    )


def _pick_sprite(sprites: Any) -> str | None:
    if not isinstance(sprites, dict):
        return None
    if isinstance(sprites.get("front_default"), str) and sprites["front_default"]:
        return sprites["front_default"]
    other = sprites.get("other")
    artwork = other.get("official-artwork") if isinstance(other, dict) else None
    if not isinstance(artwork, dict):
        return None
    front = artwork.get("front_default")
    return front if isinstance(front, str) and front else None


def record_from_payload(payload: Any, record_id: int) -> Record:
    """Build a Record, raising ValueError for payloads that do not describe ``record_id``."""
    if not isinstance(payload, dict):
        raise ValueError(f"Catalog payload is not an object (id={record_id})")
    if payload.get("id") != record_id:
        raise ValueError(f"Catalog returned id {payload.get('id')!r} for {record_id}")
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Catalog payload has no usable name (id={record_id})")
    return Record(
        id=record_id,
        name=name,
        sprite=_pick_sprite(payload.get("sprites")),
    )


class CatalogClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        batch_threshold: int = 50,
        batch_size: int = 50,
        batch_delay: float = 0.1,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._client = client
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.batch_threshold = batch_threshold
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._sleep = sleep

    async def fetch_one(self, record_id: int) -> Record:
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await self._client.get(f"/pokemon/{record_id}")
                response.raise_for_status()
                return record_from_payload(response.json(), record_id)
            except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
                logger.warning(
                    "Catalog fetch failed (id=%s, attempt=%s/%s): %s",
                    record_id,
                    attempt,
                    self.max_attempts,
                    type(exc).__name__,
                )
            if attempt < self.max_attempts:
                await self._sleep(self.retry_delay)

        logger.error("Catalog fetch exhausted retries; using placeholder (id=%s)", record_id)
        return placeholder_record(record_id)

    async def fetch_all(
        self,
        ids: Sequence[int],
        on_progress: ProgressCallback | None = None,
    ) -> list[Record]:
        ids = list(ids)
        if not ids:
            return []

        if len(ids) <= self.batch_threshold:
            batches = [ids]
        else:
            batches = [
                ids[start : start + self.batch_size]
                for start in range(0, len(ids), self.batch_size)
            ]

        records: list[Record] = []
        for index, batch in enumerate(batches, start=1):
            # gather keeps input order regardless of completion order
            records.extend(await asyncio.gather(*(self.fetch_one(i) for i in batch)))
            logger.info("Catalog batch %s/%s fetched (%s records)", index, len(batches), len(batch))
            if on_progress is not None:
                on_progress(index, len(batches))
            if index < len(batches):
                await self._sleep(self.batch_delay)

        if all(record.placeholder for record in records):
            raise CatalogUnavailableError(
                f"Catalog unreachable: all {len(records)} records fell back to placeholders"
            )
        return records
