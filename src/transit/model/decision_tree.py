from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from transit.model.choices import BinaryChoice, choice_from_dict

SETTLED_TEXT = "The thought settles into your consciousness."


@dataclass(slots=True, frozen=True)
class DecisionTree:
    """Chain of binary choices opened by inspecting one target in one location."""

    tree_id: str
    name: str
    location: str
    target: str
    root: str
    nodes: Mapping[str, BinaryChoice]

    def start(self) -> BinaryChoice:
        return self.nodes[self.root]

    def node(self, node_id: str) -> BinaryChoice | None:
        return self.nodes.get(node_id)


def tree_from_dict(tree_id: str, data: dict[str, Any]) -> DecisionTree:
    location = data["location"]
    nodes = {
        node_id: choice_from_dict({"id": node_id, **raw}, location, tree_id=tree_id, default_result=SETTLED_TEXT)
        for node_id, raw in data["nodes"].items()
    }
    if data["root"] not in nodes:
        raise ValueError(f"tree {tree_id}: unknown root node {data['root']!r}")
    for node in nodes.values():
        for option in (node.option_a, node.option_b):
            if option.next_node is not None and option.next_node not in nodes:
                raise ValueError(f"tree {tree_id}: {node.choice_id} links to unknown node {option.next_node!r}")
    return DecisionTree(
        tree_id=tree_id,
        name=data["name"],
        location=location,
        target=data["target"],
        root=data["root"],
        nodes=MappingProxyType(nodes),
    )
