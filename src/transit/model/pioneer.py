from __future__ import annotations

from dataclasses import dataclass
import random

from transit.config.balance import Balance

RANKS = ("Drifter", "Technician", "Navigator", "Salvager", "Engineer", "Scout")

STAT_NAMES = ("perception", "salvage", "engineering")

_RANK_BONUSES: dict[str, dict[str, int]] = {
    "Navigator": {"perception": 3},
    "Salvager": {"salvage": 3},
    "Engineer": {"engineering": 3},
    "Technician": {"engineering": 2, "salvage": 1},
    "Scout": {"perception": 2, "salvage": 1},
    "Drifter": {"perception": 1, "salvage": 1, "engineering": 1},
}


@dataclass(slots=True)
class PioneerStats:
    perception: int  # time dilatation efficiency
    salvage: int     # mining yield
    engineering: int  # repair efficiency

    def total(self) -> int:
        return self.perception + self.salvage + self.engineering


@dataclass(slots=True)
class PioneerManifest:
    pioneer_id: str
    pioneer_number: int
    rank: str
    stats: PioneerStats
    generation: int = 0

    @property
    def favored(self) -> bool:
        return is_favored_serial(self.pioneer_number)


def is_favored_serial(pioneer_number: int) -> bool:
    return 1 <= pioneer_number <= Balance.FAVORED_SERIAL_MAX


def _fit_total(values: dict[str, int], lo: int, hi: int, rng: random.Random) -> None:
    # Walk the total into [lo, hi] one point at a time, never below the stat floor.
    total = sum(values.values())
    while total < lo:
        name = rng.choice(STAT_NAMES)
        values[name] += 1
        total += 1
    while total > hi:
        candidates = [n for n in STAT_NAMES if values[n] > Balance.PIONEER_MIN_STAT]
        name = rng.choice(candidates)
        values[name] -= 1
        total -= 1


def generate_manifest(
    pioneer_number: int,
    rng: random.Random | None = None,
    generation: int = 0,
) -> PioneerManifest:
    if not 1 <= pioneer_number <= Balance.PIONEER_COUNT:
        raise ValueError(f"pioneer_number must be in 1..{Balance.PIONEER_COUNT}")
    rng = rng or random.Random()
    rank = rng.choice(RANKS)
    values = {name: Balance.PIONEER_BASE_STAT for name in STAT_NAMES}
    for name, bonus in _RANK_BONUSES[rank].items():
        values[name] += bonus
    for name in STAT_NAMES:
        values[name] = max(Balance.PIONEER_MIN_STAT, values[name] + rng.randint(-1, 1))

    if is_favored_serial(pioneer_number):
        lo, hi = Balance.FAVORED_STAT_TOTAL
        _fit_total(values, lo, hi, rng)

    return PioneerManifest(
        pioneer_id=f"PIONEER-{pioneer_number:04d}",
        pioneer_number=pioneer_number,
        rank=rank,
        stats=PioneerStats(**values),
        generation=generation,
    )
