from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from transit.config.balance import Balance


class ItemType(str, Enum):
    SEED = "seed"
    MATERIAL = "material"
    TOOL = "tool"
    COMPONENT = "component"
    APPAREL = "apparel"


@dataclass(slots=True)
class InventoryItem:
    item_id: str
    name: str
    item_type: ItemType
    quantity: int = 1
    description: str = ""


@dataclass(slots=True)
class InventoryState:
    items: list[InventoryItem] = field(default_factory=list)
    max_slots: int = Balance.INVENTORY_MAX_SLOTS

    def add(self, item: InventoryItem) -> bool:
        for existing in self.items:
            if existing.item_id == item.item_id:
                existing.quantity += item.quantity
                return True
        if len(self.items) >= self.max_slots:
            return False
        self.items.append(replace(item))
        return True


def item_from_dict(data: dict[str, Any]) -> InventoryItem:
    return InventoryItem(
        item_id=data["id"],
        name=data["name"],
        item_type=ItemType(data.get("type", ItemType.MATERIAL.value)),
        quantity=int(data.get("quantity", 1)),
        description=data.get("description", ""),
    )


def item_to_dict(item: InventoryItem) -> dict[str, Any]:
    return {
        "id": item.item_id,
        "name": item.name,
        "type": item.item_type.value,
        "quantity": item.quantity,
        "description": item.description,
    }
