from __future__ import annotations

from dataclasses import dataclass, field

from transit.config.balance import Balance
from transit.model.accomplishments import AccomplishmentState
from transit.model.alignment import AlignmentState
from transit.model.choices import BinaryChoice
from transit.model.inventory import InventoryState
from transit.model.pioneer import PioneerManifest
from transit.model.systems import ShipSystems
from transit.model.timedil import TimeDilatationState


@dataclass(slots=True)
class MetaState:
    session_id: str = "local"
    rng_seed: int = Balance.DEFAULT_RNG_SEED


@dataclass(slots=True)
class ClockState:
    game_time: int = 0  # heartbeat ticks since session start


@dataclass(slots=True)
class GameState:
    meta: MetaState = field(default_factory=MetaState)
    clock: ClockState = field(default_factory=ClockState)
    ship: ShipSystems = field(default_factory=ShipSystems)
    time_dilatation: TimeDilatationState = field(default_factory=TimeDilatationState)
    current_location: str = Balance.START_LOCATION
    inventory: InventoryState = field(default_factory=InventoryState)
    alignment: AlignmentState = field(default_factory=AlignmentState)
    pioneer: PioneerManifest | None = None
    pending_choice: BinaryChoice | None = None
    # npc_id -> times talked to
    conversations: dict[str, int] = field(default_factory=dict)
    accomplishments: AccomplishmentState = field(default_factory=AccomplishmentState)
