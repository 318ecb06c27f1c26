from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from transit.model.inventory import InventoryItem, ItemType


@dataclass(slots=True, frozen=True)
class Accomplishment:
    accomplishment_id: str
    name: str
    description: str
    trigger: str  # "<verb>:<target>", e.g. "talk:briggs"
    required: int
    reward_description: str
    reward_type: ItemType
    reward_pool: tuple[str, ...]
    reaction: str = ""


@dataclass(slots=True)
class AccomplishmentState:
    progress: dict[str, int] = field(default_factory=dict)
    # accomplishment id -> game_time at unlock
    unlocked: dict[str, int] = field(default_factory=dict)

    def is_unlocked(self, accomplishment_id: str) -> bool:
        return accomplishment_id in self.unlocked

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"progress": dict(self.progress), "unlocked": dict(self.unlocked)}


def accomplishment_from_dict(accomplishment_id: str, data: dict[str, Any]) -> Accomplishment:
    reward = data["reward"]
    required = int(data["required"])
    if required < 1:
        raise ValueError(f"accomplishment {accomplishment_id}: required must be >= 1")
    return Accomplishment(
        accomplishment_id=accomplishment_id,
        name=data["name"],
        description=data["description"],
        trigger=data["trigger"],
        required=required,
        reward_description=reward["description"],
        reward_type=ItemType(reward.get("type", ItemType.MATERIAL.value)),
        reward_pool=tuple(reward["pool"]),
        reaction=data.get("reaction", ""),
    )


def record_progress(state: AccomplishmentState, accomplishment: Accomplishment, game_time: int) -> bool:
    """Count one step toward ``accomplishment``. True only on the step that unlocks it."""
    key = accomplishment.accomplishment_id
    if key in state.unlocked:
        return False
    count = state.progress.get(key, 0) + 1
    state.progress[key] = count
    if count < accomplishment.required:
        return False
    state.unlocked[key] = game_time
    return True


def reward_item(accomplishment: Accomplishment, name: str) -> InventoryItem:
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
    return InventoryItem(
        item_id=slug,
        name=name,
        item_type=accomplishment.reward_type,
        description=accomplishment.reward_description,
    )


def unlock_message(accomplishment: Accomplishment) -> str:
    return "\n".join(
        [
            "=== HIDDEN ACCOMPLISHMENT UNLOCKED! ===",
            "",
            f'"{accomplishment.name}"',
            accomplishment.description,
            "",
            f"REWARD: {accomplishment.reward_description}",
            "",
            "Achievement logged to your Pioneer profile.",
        ]
    )
