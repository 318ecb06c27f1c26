from __future__ import annotations

import logging

from transit.config.balance import Balance
from transit.core.commands import CommandContext, CommandResult
from transit.model.choices import BinaryChoice

logger = logging.getLogger(__name__)


def _exits_line(ctx: CommandContext, location_id: str) -> str:
    exits = ctx.ship_map.exits(location_id)
    if not exits:
        return "exits: (none)"
    return "exits: " + ", ".join(f"{ctx.ship_map.name_of(e)} ({e})" for e in exits)


def format_choice(choice: BinaryChoice) -> str:
    return "\n".join(
        [
            "=== DECISION ===",
            choice.frame_text,
            "",
            f"[A] {choice.option_a.text}",
            f"[B] {choice.option_b.text}",
            "",
            "choose a | choose b",
        ]
    )


def handle_move(args: list[str], ctx: CommandContext) -> CommandResult:
    here = ctx.state.current_location
    if not args:
        return CommandResult.fail(f"Usage: move <location>\n{_exits_line(ctx, here)}")

    target = ctx.ship_map.resolve(" ".join(args))
    if target is None:
        return CommandResult.fail(f"Unknown location: '{' '.join(args)}'.\n{_exits_line(ctx, here)}")
    if target == here:
        return CommandResult.fail(f"You are already in {ctx.ship_map.name_of(here)}.")
    if not ctx.ship_map.can_move(here, target):
        return CommandResult.fail(
            f"No direct route from {ctx.ship_map.name_of(here)} to {ctx.ship_map.name_of(target)}.\n"
            f"{_exits_line(ctx, here)}"
        )
    if not ctx.time.spend(Balance.MOVE_COST):
        return CommandResult.fail(
            "INSUFFICIENT SUBJECTIVE TIME\n"
            f"Moving costs {Balance.MOVE_COST:.0f} unit. Available: {ctx.time.get_state().subjective_time:.1f}."
        )

    ctx.state.current_location = target
    logger.debug("moved %s -> %s", here, target)
    location = ctx.ship_map.locations[target]
    return CommandResult.ok(
        f"You make your way to {location.name}.\n\n{location.description}\n\n{_exits_line(ctx, target)}"
    )


def handle_look(args: list[str], ctx: CommandContext) -> CommandResult:
    here = ctx.state.current_location
    location = ctx.ship_map.locations.get(here)
    if location is None:
        return CommandResult.fail(f"You are nowhere the ship's map knows about ({here}).")

    lines = [f"=== {location.name.upper()} ===", "", location.description, ""]
    if location.npcs:
        names = [ctx.content.npc_name(npc) or npc for npc in location.npcs]
        lines.append("present: " + ", ".join(names))
    if location.inspectables:
        lines.append("you notice: " + ", ".join(location.inspectables))
    lines.append(_exits_line(ctx, here))
    if location.lore:
        lines += ["", f"[{location.lore}]"]

    choice = ctx.content.location_choice(here)
    if choice is None:
        return CommandResult.ok("\n".join(lines))
    lines += ["", format_choice(choice)]
    return CommandResult.ok("\n".join(lines), binary_choice=choice)


def handle_inspect(args: list[str], ctx: CommandContext) -> CommandResult:
    location = ctx.ship_map.locations.get(ctx.state.current_location)
    targets = ", ".join(location.inspectables) if location else ""
    if not args:
        return CommandResult.fail(f"Usage: inspect <target>\nTry: {targets or 'look around first'}")

    target = " ".join(args)
    detail = location.inspectables.get(target) if location else None
    if detail is None:
        return CommandResult.fail(f"Nothing notable about '{target}' here. Try: {targets or '(nothing)'}")

    tree = ctx.content.decision_tree(ctx.state.current_location, target)
    if tree is None:
        return CommandResult.ok(detail)
    choice = tree.start()
    logger.debug("opened decision tree %s at %s", tree.tree_id, choice.choice_id)
    message = f"{detail}\n\n=== {tree.name.upper()} ===\n\n{format_choice(choice)}"
    return CommandResult.ok(message, binary_choice=choice)
