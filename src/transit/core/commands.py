from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Sequence

from transit.core.gamestate import GameState
from transit.model.choices import BinaryChoice
from transit.model.world import ShipMap

if TYPE_CHECKING:
    from transit.core.content import ContentProvider
    from transit.core.heartbeat import ShipHeartbeat
    from transit.core.time_dilatation import TimeDilatationManager


class CommandCategory(str, Enum):
    SYSTEM = "system"
    NAVIGATION = "navigation"
    SHIP = "ship"
    TIME = "time"
    INVENTORY = "inventory"
    CREW = "crew"
    UTILITY = "utility"


@dataclass(slots=True)
class CommandResult:
    success: bool
    message: str
    # partial GameState patch: field name -> new value
    updates: dict[str, Any] | None = None
    binary_choice: BinaryChoice | None = None

    @classmethod
    def ok(cls, message: str, **kwargs: Any) -> "CommandResult":
        return cls(True, message, **kwargs)

    @classmethod
    def fail(cls, message: str) -> "CommandResult":
        return cls(False, message)


@dataclass(slots=True)
class CommandContext:
    """Live handle into one session. Handlers mutate ship systems and
    subjective time only through ``heartbeat`` and ``time``."""

    state: GameState
    heartbeat: "ShipHeartbeat"
    time: "TimeDilatationManager"
    content: "ContentProvider"
    ship_map: ShipMap
    commands: Sequence["Command"] = ()


Handler = Callable[[list[str], CommandContext], CommandResult]


@dataclass(slots=True, frozen=True)
class Command:
    name: str
    handler: Handler
    aliases: tuple[str, ...] = ()
    description: str = ""
    usage: str = ""
    category: CommandCategory = CommandCategory.UTILITY
    # Still accepted while a binary choice is pending.
    resolves_choice: bool = False

    def keys(self) -> list[str]:
        return [self.name.lower(), *(alias.lower() for alias in self.aliases)]
