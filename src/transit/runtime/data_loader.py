from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from transit.model.world import ShipMap, ship_map_from_dict

_DATA_ROOT = Path(__file__).resolve().parents[1] / "data"


def _load_json(name: str) -> dict:
    path = _DATA_ROOT / name
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


@lru_cache(maxsize=None)
def load_locations() -> dict:
    return _load_json("locations.json")


def load_ship_map() -> ShipMap:
    # fresh object per call; sessions never share a map
    return ship_map_from_dict(load_locations())


@lru_cache(maxsize=None)
def load_choices() -> dict[str, list[dict]]:
    return _load_json("choices.json")


@lru_cache(maxsize=None)
def load_lore() -> dict:
    return _load_json("lore.json")


@lru_cache(maxsize=None)
def load_npcs() -> dict[str, dict]:
    return _load_json("npcs.json")


@lru_cache(maxsize=None)
def load_decision_trees() -> dict[str, dict]:
    return _load_json("decision_trees.json")


@lru_cache(maxsize=None)
def load_accomplishments() -> dict[str, dict]:
    return _load_json("accomplishments.json")
