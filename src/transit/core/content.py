from __future__ import annotations

import random
from typing import Protocol

from transit.config.balance import Balance
from transit.model.accomplishments import Accomplishment, accomplishment_from_dict, reward_item
from transit.model.choices import BinaryChoice, choice_from_dict
from transit.model.decision_tree import DecisionTree, tree_from_dict
from transit.model.inventory import InventoryItem
from transit.runtime.data_loader import (
    load_accomplishments,
    load_choices,
    load_decision_trees,
    load_lore,
    load_npcs,
)


class ContentProvider(Protocol):
    """Flavor content the handlers ask for. Nothing here touches session state."""

    def location_choice(self, location_id: str) -> BinaryChoice | None: ...

    def mining_yield(self) -> int: ...

    def mining_narrative(self, amount: int) -> str: ...

    def lore_fragment(self) -> str | None: ...

    def npc_name(self, npc_id: str) -> str | None: ...

    def npc_line(self, npc_id: str, times_talked: int) -> str | None: ...

    def decision_tree(self, location_id: str, target: str) -> DecisionTree | None: ...

    def tree_node(self, tree_id: str, node_id: str) -> BinaryChoice | None: ...

    def accomplishments_for(self, trigger: str) -> list[Accomplishment]: ...

    def accomplishment(self, accomplishment_id: str) -> Accomplishment | None: ...

    def accomplishment_reward(self, accomplishment: Accomplishment) -> InventoryItem: ...


class DefaultContent:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random(Balance.DEFAULT_RNG_SEED)
        self._trees = {tree_id: tree_from_dict(tree_id, raw) for tree_id, raw in load_decision_trees().items()}
        self._accomplishments = {
            key: accomplishment_from_dict(key, raw) for key, raw in load_accomplishments().items()
        }

    def location_choice(self, location_id: str) -> BinaryChoice | None:
        if self.rng.random() >= Balance.LOOK_CHOICE_P:
            return None
        candidates = load_choices().get(location_id, [])
        if not candidates:
            return None
        return choice_from_dict(self.rng.choice(candidates), location_id)

    def mining_yield(self) -> int:
        return self.rng.randint(Balance.MINE_SCRAP_MIN, Balance.MINE_SCRAP_MAX)

    def mining_narrative(self, amount: int) -> str:
        lines = load_lore()["mining"]
        if amount >= Balance.MINE_SCRAP_MAX:
            return lines["max"]
        if amount >= 3:
            return lines["good"]
        return lines["poor"]

    def lore_fragment(self) -> str | None:
        if self.rng.random() >= Balance.MINE_LORE_P:
            return None
        return self.rng.choice(load_lore()["fragments"])

    def npc_name(self, npc_id: str) -> str | None:
        npc = load_npcs().get(npc_id)
        return npc["name"] if npc else None

    def npc_line(self, npc_id: str, times_talked: int) -> str | None:
        npc = load_npcs().get(npc_id)
        if not npc:
            return None
        if times_talked == 0:
            return npc["greeting"]
        repeats = npc.get("repeats", [])
        line = repeats[(times_talked - 1) % len(repeats)] if repeats else npc["greeting"]
        sayings = npc.get("sayings", [])
        if sayings:
            line += f'\n\n"{self.rng.choice(sayings)}"'
        return line

    def decision_tree(self, location_id: str, target: str) -> DecisionTree | None:
        for tree in self._trees.values():
            if tree.location == location_id and tree.target == target:
                return tree
        return None

    def tree_node(self, tree_id: str, node_id: str) -> BinaryChoice | None:
        tree = self._trees.get(tree_id)
        return tree.node(node_id) if tree else None

    def accomplishments_for(self, trigger: str) -> list[Accomplishment]:
        return [a for a in self._accomplishments.values() if a.trigger == trigger]

    def accomplishment(self, accomplishment_id: str) -> Accomplishment | None:
        return self._accomplishments.get(accomplishment_id)

    def accomplishment_reward(self, accomplishment: Accomplishment) -> InventoryItem:
        return reward_item(accomplishment, self.rng.choice(accomplishment.reward_pool))
