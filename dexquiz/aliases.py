from __future__ import annotations

import re

CANONICAL_NAME = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Hand-curated spellings accepted on top of the hyphen-derived variants.
SPECIAL_VARIATIONS: dict[str, list[str]] = {
    "nidoran-f": ["nidoran♀", "nidoran female", "nidoran f", "nidoranf", "female nidoran"],
    "nidoran-m": ["nidoran♂", "nidoran male", "nidoran m", "nidoranm", "male nidoran"],
    "mr-mime": ["mr. mime", "mr mime", "mrmime", "mister mime"],
    "farfetchd": ["farfetch'd", "farfetch d", "farfetched"],
    "ho-oh": ["ho oh", "hooh", "ho-oh"],
    "porygon-z": ["porygon z", "porygonz", "porygon-z"],
    "mime-jr": ["mime jr.", "mime jr", "mimejr", "mime junior"],
    "type-null": ["type: null", "type null", "typenull"],
    "jangmo-o": ["jangmo o", "jangmoo"],
    "hakamo-o": ["hakamo o", "hakamoo"],
    "kommo-o": ["kommo o", "kommoo"],
}


def _validate_variations(table: dict[str, list[str]]) -> None:
    for name, alternates in table.items():
        if not CANONICAL_NAME.match(name):
            raise ValueError(f"Alias key is not a catalog name: {name!r}")
        if not alternates:
            raise ValueError(f"No alternate spellings listed for {name!r}")
        for alt in alternates:
            if not re.sub(r"[\W_]+", "", alt):
                raise ValueError(f"Empty alternate spelling for {name!r}: {alt!r}")


_validate_variations(SPECIAL_VARIATIONS)
