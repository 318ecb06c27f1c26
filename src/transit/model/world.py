from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Location:
    location_id: str
    name: str
    description: str = ""
    lore: str = ""
    npcs: list[str] = field(default_factory=list)
    inspectables: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ShipMap:
    locations: dict[str, Location] = field(default_factory=dict)
    edges: dict[str, list[str]] = field(default_factory=dict)  # directed adjacency
    # player shorthand -> location_id ("cargo", "e", "command", ...)
    aliases: dict[str, str] = field(default_factory=dict)

    def exits(self, location_id: str) -> list[str]:
        return list(self.edges.get(location_id, []))

    def can_move(self, from_id: str, to_id: str) -> bool:
        return to_id in self.edges.get(from_id, [])

    def resolve(self, token: str) -> str | None:
        key = token.lower().replace("-", "").replace("_", "").replace(" ", "")
        if key in self.aliases:
            return self.aliases[key]
        for location_id in self.locations:
            if location_id.replace("_", "") == key:
                return location_id
        return None

    def name_of(self, location_id: str) -> str:
        location = self.locations.get(location_id)
        return location.name if location else location_id


def ship_map_from_dict(data: dict) -> ShipMap:
    ship_map = ShipMap()
    for raw in data.get("locations", []):
        location = Location(
            location_id=raw["id"],
            name=raw.get("name", raw["id"]),
            description=raw.get("description", ""),
            lore=raw.get("lore", ""),
            npcs=list(raw.get("npcs", [])),
            inspectables=dict(raw.get("inspectables", {})),
        )
        ship_map.locations[location.location_id] = location
        ship_map.edges[location.location_id] = list(raw.get("exits", []))
        for alias in raw.get("aliases", []):
            ship_map.aliases[alias.lower()] = location.location_id
    for from_id, targets in ship_map.edges.items():
        for to_id in targets:
            if to_id not in ship_map.locations:
                raise ValueError(f"exit {from_id} -> {to_id} points to an unknown location")
    return ship_map
