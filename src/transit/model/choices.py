from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from transit.model.inventory import InventoryItem, item_from_dict


@dataclass(slots=True, frozen=True)
class ChoiceOption:
    letter: str  # "A" | "B"
    text: str
    law_chaos: int
    good_evil: int
    result_text: str
    grants: tuple[InventoryItem, ...] = ()
    # decision trees: node to open after this option
    next_node: str | None = None


@dataclass(slots=True, frozen=True)
class BinaryChoice:
    choice_id: str
    frame_text: str
    option_a: ChoiceOption
    option_b: ChoiceOption
    location: str
    tree_id: str | None = None

    def option(self, letter: str) -> ChoiceOption | None:
        letter = letter.strip().upper()
        if letter == "A":
            return self.option_a
        if letter == "B":
            return self.option_b
        return None


def choice_from_dict(
    data: dict[str, Any], location: str, tree_id: str | None = None, default_result: str = ""
) -> BinaryChoice:
    def _option(letter: str, raw: dict[str, Any]) -> ChoiceOption:
        impact = raw.get("alignment_impact", {})
        grants = tuple(item_from_dict(g) for g in raw.get("grants", []))
        return ChoiceOption(
            letter=letter,
            text=raw["text"],
            law_chaos=int(impact.get("law_chaos", 0)),
            good_evil=int(impact.get("good_evil", 0)),
            result_text=raw.get("result_text") or default_result,
            grants=grants,
            next_node=raw.get("next"),
        )

    return BinaryChoice(
        choice_id=data["id"],
        frame_text=data.get("frame_text", ""),
        option_a=_option("A", data["option_a"]),
        option_b=_option("B", data["option_b"]),
        location=location,
        tree_id=tree_id,
    )
