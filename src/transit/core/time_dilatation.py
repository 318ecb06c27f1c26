from __future__ import annotations

import logging
import math
import threading
from dataclasses import replace

from transit.config.balance import Balance
from transit.model.timedil import TimeDilatationState

logger = logging.getLogger(__name__)


class TimeDilatationManager:
    """Subjective time as a finite, rechargeable resource.

    Running off-neutral (slow or fast) drains the reserve; at neutral it
    recharges. The scale falls back to 1.0 in the same step that empties the
    reserve, so a non-neutral scale never coexists with an empty reserve.
    """

    def __init__(
        self,
        state: TimeDilatationState | None = None,
        decay_rate: float = Balance.TIME_DECAY_RATE,
        recharge_rate: float = Balance.TIME_RECHARGE_RATE,
        lock: threading.RLock | None = None,
    ) -> None:
        self.state = state if state is not None else TimeDilatationState()
        if not math.isfinite(self.state.max_subjective_time) or self.state.max_subjective_time <= 0:
            raise ValueError("max_subjective_time must be > 0")
        if decay_rate < 0 or recharge_rate < 0:
            raise ValueError("decay_rate and recharge_rate must be >= 0")
        self.decay_rate = decay_rate
        self.recharge_rate = recharge_rate
        self._lock = lock or threading.RLock()
        self._normalize()

    def tick(self, delta_time: float = 1.0) -> None:
        if not math.isfinite(delta_time) or delta_time <= 0:
            return
        with self._lock:
            s = self.state
            if s.time_scale != Balance.TIME_SCALE_NEUTRAL:
                drain = self.decay_rate * abs(s.time_scale - Balance.TIME_SCALE_NEUTRAL) * delta_time
                s.subjective_time = max(0.0, s.subjective_time - drain)
                if s.subjective_time <= 0:
                    s.time_scale = Balance.TIME_SCALE_NEUTRAL
                    logger.debug("subjective time depleted; scale reverted to neutral")
            else:
                s.subjective_time = min(
                    s.max_subjective_time,
                    s.subjective_time + self.recharge_rate * delta_time,
                )

    def set_time_scale(self, scale: float) -> bool:
        if not math.isfinite(scale) or not Balance.TIME_SCALE_MIN <= scale <= Balance.TIME_SCALE_MAX:
            return False
        with self._lock:
            if scale != Balance.TIME_SCALE_NEUTRAL and self.state.subjective_time <= 0:
                return False
            self.state.time_scale = scale
        logger.debug("time scale set to %.2f", scale)
        return True

    def spend(self, amount: float) -> bool:
        if not math.isfinite(amount) or amount < 0:
            return False
        with self._lock:
            s = self.state
            if amount > s.subjective_time:
                return False
            s.subjective_time = max(0.0, s.subjective_time - amount)
            if s.subjective_time <= 0:
                s.time_scale = Balance.TIME_SCALE_NEUTRAL
        return True

    def get_state(self) -> TimeDilatationState:
        return replace(self.state)

    def get_effective_multiplier(self) -> float:
        return self.state.time_scale

    def can_manipulate_time(self) -> bool:
        return self.state.subjective_time > 0

    def get_subjective_time_percent(self) -> float:
        return (self.state.subjective_time / self.state.max_subjective_time) * 100.0

    def _normalize(self) -> None:
        # Restored snapshots may come from anywhere; bring them back inside the invariants.
        s = self.state
        if not math.isfinite(s.subjective_time):
            s.subjective_time = 0.0
        if not math.isfinite(s.time_scale):
            s.time_scale = Balance.TIME_SCALE_NEUTRAL
        s.subjective_time = min(max(0.0, s.subjective_time), s.max_subjective_time)
        s.time_scale = min(max(Balance.TIME_SCALE_MIN, s.time_scale), Balance.TIME_SCALE_MAX)
        if s.subjective_time <= 0:
            s.time_scale = Balance.TIME_SCALE_NEUTRAL
