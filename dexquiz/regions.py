from __future__ import annotations

import random
from dataclasses import dataclass

N_MAX = 1025
RANDOM_SAMPLE_SIZE = 100

RANDOM_KEY = "random"
ALL_KEY = "all"


@dataclass(frozen=True)
class Region:
    key: str
    display_name: str
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1


REGIONS: dict[str, Region] = {
    region.key: region
    for region in (
        Region("kanto", "Kanto", 1, 151),
        Region("johto", "Johto", 152, 251),
        Region("hoenn", "Hoenn", 252, 386),
        Region("sinnoh", "Sinnoh", 387, 493),
        Region("unova", "Unova", 494, 649),
        Region("kalos", "Kalos", 650, 721),
        Region("alola", "Alola", 722, 809),
        Region("galar", "Galar", 810, 898),
        Region("hisui", "Hisui", 899, 905),
        Region("paldea", "Paldea", 906, 1025),
    )
}

SYNTHETIC_DISPLAY_NAMES = {
    RANDOM_KEY: "Random",
    ALL_KEY: "National",
}


def _validate_regions(regions: dict[str, Region]) -> None:
    previous_end = 0
    for region in regions.values():
        if region.key in SYNTHETIC_DISPLAY_NAMES:
            raise ValueError(f"Region key {region.key!r} is reserved")
        if region.start > region.end:
            raise ValueError(f"Region {region.key!r} range is not ascending")
        if region.start <= previous_end:
            raise ValueError(f"Region {region.key!r} overlaps or is out of order")
        if region.start < 1 or region.end > N_MAX:
            raise ValueError(f"Region {region.key!r} is outside [1, {N_MAX}]")
        previous_end = region.end


_validate_regions(REGIONS)


def is_known_region(key: str) -> bool:
    return key in REGIONS or key in SYNTHETIC_DISPLAY_NAMES


def region_display_name(key: str) -> str | None:
    if key in REGIONS:
        return REGIONS[key].display_name
    return SYNTHETIC_DISPLAY_NAMES.get(key)


def list_regions() -> list[dict]:
    items = [
        {"key": r.key, "display_name": r.display_name, "size": r.size}
        for r in REGIONS.values()
    ]
    items.append({"key": RANDOM_KEY, "display_name": SYNTHETIC_DISPLAY_NAMES[RANDOM_KEY], "size": RANDOM_SAMPLE_SIZE})
    items.append({"key": ALL_KEY, "display_name": SYNTHETIC_DISPLAY_NAMES[ALL_KEY], "size": N_MAX})
    return items


def ids_for(key: str, rng: random.Random | None = None) -> list[int]:
    if key in REGIONS:
        region = REGIONS[key]
        return list(range(region.start, region.end + 1))

    if key == RANDOM_KEY:
        universe = list(range(1, N_MAX + 1))
        # random.shuffle is an in-place Fisher-Yates shuffle
        (rng or random).shuffle(universe)
        return universe[:RANDOM_SAMPLE_SIZE]

    if key == ALL_KEY:
        return list(range(1, N_MAX + 1))

    return []
