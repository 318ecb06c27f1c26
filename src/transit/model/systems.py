from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum

from transit.config.balance import Balance

# Order matters: reports and alerts walk systems in this order.
BOUNDED_SYSTEMS: tuple[str, ...] = ("power", "oxygen", "hull", "cryo")


class SystemBand(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


def clamp(value: float, lo: float = Balance.SYSTEM_MIN, hi: float = Balance.SYSTEM_MAX) -> float:
    if math.isnan(value):
        return lo
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def band_for(value: float) -> SystemBand:
    if value < Balance.CRITICAL_THRESHOLD:
        return SystemBand.CRITICAL
    if value < Balance.DANGER_THRESHOLD:
        return SystemBand.WARNING
    return SystemBand.GOOD


@dataclass(slots=True)
class ShipSystems:
    power: float = 100.0
    oxygen: float = 100.0
    hull: float = 100.0
    cryo: float = 100.0
    # $SCRAP, unbounded
    scrap: float = 0.0

    def __post_init__(self) -> None:
        for name in BOUNDED_SYSTEMS:
            setattr(self, name, clamp(float(getattr(self, name))))

    def get(self, name: str) -> float:
        if name not in BOUNDED_SYSTEMS:
            raise KeyError(name)
        return getattr(self, name)

    def set(self, name: str, value: float) -> None:
        if name not in BOUNDED_SYSTEMS:
            raise KeyError(name)
        setattr(self, name, clamp(value))

    def bounded(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in BOUNDED_SYSTEMS}

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
