from __future__ import annotations

from dataclasses import asdict, dataclass

from transit.config.balance import Balance


@dataclass(slots=True)
class TimeDilatationState:
    subjective_time: float = Balance.SUBJECTIVE_TIME_MAX
    time_scale: float = Balance.TIME_SCALE_NEUTRAL  # 0.5 slow, 1.0 normal, 2.0 fast
    max_subjective_time: float = Balance.SUBJECTIVE_TIME_MAX

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
