from __future__ import annotations

import logging
import math
import threading
from typing import Callable

from transit.config.balance import Balance
from transit.model.systems import BOUNDED_SYSTEMS, ShipSystems, clamp

logger = logging.getLogger(__name__)

TickCallback = Callable[[dict[str, float], list[str]], None]

DEFAULT_DECAY: dict[str, float] = {
    "power": Balance.DECAY_POWER,
    "oxygen": Balance.DECAY_OXYGEN,
    "hull": Balance.DECAY_HULL,
    "cryo": Balance.DECAY_CRYO,
}


class ShipHeartbeat:
    """Tick-based degradation of the ship systems.

    The heartbeat mutates the ``ShipSystems`` it was given in place, so the
    session and every command handler see the same live values. All mutators
    take ``lock``; pass the session lock to serialize ticks with commands.
    """

    def __init__(
        self,
        systems: ShipSystems | None = None,
        decay: dict[str, float] | None = None,
        tick_s: float = Balance.TICK_S,
        lock: threading.RLock | None = None,
    ) -> None:
        self.systems = systems if systems is not None else ShipSystems()
        self.decay = dict(DEFAULT_DECAY)
        if decay:
            unknown = set(decay) - set(BOUNDED_SYSTEMS)
            if unknown:
                raise ValueError(f"unknown systems in decay table: {sorted(unknown)}")
            self.decay.update(decay)
        if any(rate < 0 for rate in self.decay.values()):
            raise ValueError("decay rates must be >= 0")
        if tick_s <= 0:
            raise ValueError("tick_s must be > 0")
        self.tick_s = tick_s
        self._lock = lock or threading.RLock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self, callback: TickCallback, multiplier: Callable[[], float] | None = None) -> None:
        if self.is_active:
            return
        # Fresh event per run: a thread left over from a previous run keeps its own (set) flag.
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop, callback, multiplier),
            name="ship-heartbeat",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=self.tick_s * 2)

    def tick(self, multiplier: float = 1.0) -> None:
        if not math.isfinite(multiplier) or multiplier <= 0:
            return
        with self._lock:
            s = self.systems
            for name in BOUNDED_SYSTEMS:
                s.set(name, s.get(name) - self.decay[name] * multiplier)

            # Coupling: both penalties can land on oxygen in the same tick.
            if s.power < Balance.CRITICAL_THRESHOLD:
                s.oxygen = clamp(s.oxygen - Balance.LOW_POWER_OXYGEN_DRAIN * multiplier)
            if s.hull < Balance.CRITICAL_THRESHOLD:
                s.oxygen = clamp(s.oxygen - Balance.HULL_BREACH_OXYGEN_DRAIN * multiplier)

    def repair(self, system: str, amount: float = Balance.REPAIR_DEFAULT_AMOUNT) -> bool:
        if system not in BOUNDED_SYSTEMS or not math.isfinite(amount) or amount < 0:
            return False
        with self._lock:
            self.systems.set(system, self.systems.get(system) + amount)
        logger.debug("repair %s +%.1f -> %.2f", system, amount, self.systems.get(system))
        return True

    def add_scrap(self, amount: float) -> bool:
        if not math.isfinite(amount) or amount < 0:
            return False
        with self._lock:
            self.systems.scrap += amount
        return True

    def check_alerts(self) -> list[str]:
        alerts: list[str] = []
        for name, value in self.systems.bounded().items():
            label = name.upper()
            if value <= 0:
                alerts.append(f"CRITICAL: {label} FAILURE!")
            elif value < Balance.CRITICAL_THRESHOLD:
                alerts.append(f"CRITICAL: {label} at {value:.1f}%")
            elif value < Balance.DANGER_THRESHOLD:
                alerts.append(f"WARNING: {label} at {value:.1f}%")
        return alerts

    def get_systems(self) -> dict[str, float]:
        return self.systems.to_dict()

    def get_status_report(self) -> str:
        lines = []
        for name, value in self.systems.bounded().items():
            lines.append(f"{name.upper():<8}: {self._bar(value)} {value:.1f}%")
        return "\n".join(lines)

    def is_critical(self) -> bool:
        return any(value <= 0 for value in self.systems.bounded().values())

    def get_overall_health(self) -> float:
        values = self.systems.bounded().values()
        return sum(values) / len(values)

    def _bar(self, value: float, length: int = Balance.STATUS_BAR_CELLS) -> str:
        filled = int((value / Balance.SYSTEM_MAX) * length)
        return "[" + "█" * filled + " " * (length - filled) + "]"

    def _run(self, stop: threading.Event, callback: TickCallback, multiplier: Callable[[], float] | None) -> None:
        while not stop.wait(self.tick_s):
            with self._lock:
                if stop.is_set():
                    break
                self.tick(multiplier() if multiplier else 1.0)
                snapshot = self.get_systems()
                alerts = self.check_alerts()
                try:
                    callback(snapshot, alerts)
                except Exception:
                    logger.exception("heartbeat callback failed")
