from __future__ import annotations

import logging
import os
import random
import threading
from contextlib import contextmanager
from dataclasses import fields
from typing import Any, Callable, Iterable

from transit.config.balance import Balance
from transit.core.commands import Command, CommandContext, CommandResult
from transit.core.content import ContentProvider, DefaultContent
from transit.core.dispatcher import CommandDispatcher
from transit.core.gamestate import GameState, MetaState
from transit.core.handlers.navigation import format_choice
from transit.core.heartbeat import ShipHeartbeat
from transit.core.registry import DEFAULT_COMMANDS
from transit.core.time_dilatation import TimeDilatationManager
from transit.model.accomplishments import AccomplishmentState
from transit.model.inventory import InventoryState, item_from_dict, item_to_dict
from transit.model.pioneer import PioneerManifest, generate_manifest
from transit.model.systems import ShipSystems
from transit.model.timedil import TimeDilatationState
from transit.runtime.data_loader import load_ship_map

logger = logging.getLogger(__name__)

TickListener = Callable[[dict[str, float], list[str]], None]

_SNAPSHOT_KEYS = frozenset(
    {
        "systems",
        "time_dilatation",
        "location",
        "game_time",
        "alignment",
        "conversations",
        "inventory",
        "accomplishments",
        "pioneer_number",
    }
)
_STATE_FIELDS = frozenset(f.name for f in fields(GameState))


def _clamp_axis(value: Any) -> int:
    return max(Balance.ALIGNMENT_MIN, min(Balance.ALIGNMENT_MAX, int(value)))


def _restore_inventory(raw: list[dict[str, Any]]) -> InventoryState:
    try:
        items = [item_from_dict(entry) for entry in raw]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"bad inventory in snapshot: {exc}") from exc
    inventory = InventoryState()
    if len(items) > inventory.max_slots:
        raise ValueError(f"snapshot inventory holds {len(items)} stacks, limit is {inventory.max_slots}")
    for item in items:
        if item.quantity < 1:
            raise ValueError(f"bad quantity for {item.item_id!r}: {item.quantity}")
        inventory.add(item)
    return inventory


class EngineSession:
    """One running game: state, heartbeat, time dilatation and dispatcher.

    A single RLock is shared by the heartbeat thread and ``submit`` so a tick
    never lands in the middle of a command handler.
    """

    def __init__(
        self,
        seed: int | None = None,
        start: str | None = None,
        restore: dict[str, Any] | None = None,
        content: ContentProvider | None = None,
        commands: Iterable[Command] = DEFAULT_COMMANDS,
        decay: dict[str, float] | None = None,
        tick_s: float = Balance.TICK_S,
        pioneer_number: int | None = None,
    ) -> None:
        seed = Balance.DEFAULT_RNG_SEED if seed is None else seed
        self._lock = threading.RLock()
        self._rng = random.Random(seed)
        self.ship_map = load_ship_map()
        self.state = GameState(meta=MetaState(rng_seed=seed))

        if start is not None:
            if start not in self.ship_map.locations:
                raise ValueError(f"unknown start location: {start!r}")
            self.state.current_location = start
        if restore is not None:
            self._restore(restore)
        if self.state.pioneer is None:
            number = pioneer_number or self._rng.randint(1, Balance.PIONEER_COUNT)
            self.state.pioneer = self._manifest(number)

        self.heartbeat = ShipHeartbeat(self.state.ship, decay=decay, tick_s=tick_s, lock=self._lock)
        self.time = TimeDilatationManager(self.state.time_dilatation, lock=self._lock)
        self.content = content if content is not None else DefaultContent(random.Random(seed))
        self.dispatcher = CommandDispatcher(commands)
        self.context = CommandContext(
            state=self.state,
            heartbeat=self.heartbeat,
            time=self.time,
            content=self.content,
            ship_map=self.ship_map,
            commands=self.dispatcher.commands,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "EngineSession":
        seed = os.environ.get("TRANSIT_SEED")
        if seed is not None and "seed" not in kwargs:
            kwargs["seed"] = int(seed)
        start = os.environ.get("TRANSIT_START")
        if start and "start" not in kwargs:
            kwargs["start"] = start.lower()
        return cls(**kwargs)

    # heartbeat

    @property
    def is_running(self) -> bool:
        return self.heartbeat.is_active

    def start(self, on_tick: TickListener | None = None) -> None:
        def _on_heartbeat(systems: dict[str, float], alerts: list[str]) -> None:
            self._advance()
            if on_tick is not None:
                on_tick(systems, alerts)

        self.heartbeat.start(_on_heartbeat, multiplier=self.time.get_effective_multiplier)

    def stop(self) -> None:
        self.heartbeat.stop()

    def step(self, ticks: int = 1) -> list[str]:
        """Run ``ticks`` heartbeat periods synchronously and return the last alerts."""
        alerts: list[str] = []
        for _ in range(ticks):
            with self._lock:
                self.heartbeat.tick(self.time.get_effective_multiplier())
                self._advance()
                alerts = self.heartbeat.check_alerts()
        return alerts

    def _advance(self) -> None:
        # caller holds the lock
        self.time.tick(1.0)
        self.state.clock.game_time += 1

    # commands

    def submit(self, text: str) -> CommandResult:
        with self._lock:
            pending = self.state.pending_choice
            if pending is not None:
                tokens = text.split()
                command = self.dispatcher.resolve(tokens[0]) if tokens else None
                if command is None or not command.resolves_choice:
                    return CommandResult.fail(f"A decision is waiting.\n\n{format_choice(pending)}")
            result = self.dispatcher.parse(text, self.context)
            self._apply(result)
            return result

    def _apply(self, result: CommandResult) -> None:
        if result.updates:
            for name, value in result.updates.items():
                if name not in _STATE_FIELDS:
                    logger.warning("ignoring update to unknown state field %r", name)
                    continue
                setattr(self.state, name, value)
        if result.binary_choice is not None:
            self.state.pending_choice = result.binary_choice

    @contextmanager
    def with_lock(self):
        self._lock.acquire()
        try:
            yield self.state
        finally:
            self._lock.release()

    # snapshots

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            s = self.state
            return {
                "systems": s.ship.to_dict(),
                "time_dilatation": s.time_dilatation.to_dict(),
                "location": s.current_location,
                "game_time": s.clock.game_time,
                "alignment": {"law_chaos": s.alignment.law_chaos, "good_evil": s.alignment.good_evil},
                "conversations": dict(s.conversations),
                "inventory": [item_to_dict(item) for item in s.inventory.items],
                "accomplishments": s.accomplishments.to_dict(),
                "pioneer_number": s.pioneer.pioneer_number if s.pioneer else None,
            }

    def _restore(self, data: dict[str, Any]) -> None:
        unknown = set(data) - _SNAPSHOT_KEYS
        if unknown:
            raise ValueError(f"unknown snapshot fields: {sorted(unknown)}")
        s = self.state
        try:
            if "systems" in data:
                s.ship = ShipSystems(**data["systems"])
            if "time_dilatation" in data:
                s.time_dilatation = TimeDilatationState(**data["time_dilatation"])
        except TypeError as exc:
            raise ValueError(f"bad snapshot: {exc}") from exc
        if "location" in data:
            if data["location"] not in self.ship_map.locations:
                raise ValueError(f"unknown location in snapshot: {data['location']!r}")
            s.current_location = data["location"]
        if "game_time" in data:
            s.clock.game_time = int(data["game_time"])
        if "alignment" in data:
            s.alignment.law_chaos = _clamp_axis(data["alignment"].get("law_chaos", 0))
            s.alignment.good_evil = _clamp_axis(data["alignment"].get("good_evil", 0))
        if "conversations" in data:
            s.conversations = {str(k): int(v) for k, v in data["conversations"].items()}
        if "inventory" in data:
            s.inventory = _restore_inventory(data["inventory"])
        if "accomplishments" in data:
            raw = data["accomplishments"]
            s.accomplishments = AccomplishmentState(
                progress={str(k): int(v) for k, v in raw.get("progress", {}).items()},
                unlocked={str(k): int(v) for k, v in raw.get("unlocked", {}).items()},
            )
        if data.get("pioneer_number"):
            s.pioneer = self._manifest(int(data["pioneer_number"]))

    def _manifest(self, number: int) -> PioneerManifest:
        # same seed and serial always give the same manifest
        return generate_manifest(number, random.Random(self.state.meta.rng_seed * 10_000 + number))
