from __future__ import annotations

import logging

from transit.core.commands import CommandContext, CommandResult
from transit.core.handlers.navigation import format_choice
from transit.model.accomplishments import record_progress, unlock_message
from transit.model.alignment import ALIGNMENT_DESCRIPTIONS, apply_shift

logger = logging.getLogger(__name__)


def _find_npc(token: str, ctx: CommandContext, present: list[str]) -> str | None:
    for npc_id in present:
        if token == npc_id:
            return npc_id
        name = (ctx.content.npc_name(npc_id) or "").lower()
        if token in name.split():
            return npc_id
    return None


def handle_talk(args: list[str], ctx: CommandContext) -> CommandResult:
    location = ctx.ship_map.locations.get(ctx.state.current_location)
    present = list(location.npcs) if location else []
    if not present:
        return CommandResult.fail("There is no one here to talk to. Only the hum of the ship answers.")
    if not args:
        names = ", ".join(ctx.content.npc_name(n) or n for n in present)
        return CommandResult.fail(f"Usage: talk <name>\npresent: {names}")

    npc_id = _find_npc(" ".join(args), ctx, present)
    if npc_id is None:
        return CommandResult.fail(f"'{' '.join(args)}' is not here.")

    times = ctx.state.conversations.get(npc_id, 0)
    line = ctx.content.npc_line(npc_id, times)
    if line is None:
        return CommandResult.fail(f"{ctx.content.npc_name(npc_id) or npc_id} has nothing to say.")
    ctx.state.conversations[npc_id] = times + 1

    lines = [line]
    for accomplishment in ctx.content.accomplishments_for(f"talk:{npc_id}"):
        if not record_progress(ctx.state.accomplishments, accomplishment, ctx.state.clock.game_time):
            continue
        logger.info("accomplishment unlocked: %s", accomplishment.accomplishment_id)
        item = ctx.content.accomplishment_reward(accomplishment)
        lines += ["", unlock_message(accomplishment), ""]
        if ctx.state.inventory.add(item):
            lines.append(f"[You received: {item.name}]")
        else:
            lines.append(f"No room for {item.name}. Inventory full.")
        if accomplishment.reaction:
            lines += ["", accomplishment.reaction]
    return CommandResult.ok("\n".join(lines))


def handle_choose(args: list[str], ctx: CommandContext) -> CommandResult:
    choice = ctx.state.pending_choice
    if choice is None:
        return CommandResult.fail("There is no decision waiting for you.")
    if not args:
        return CommandResult.fail("Usage: choose <a|b>")
    option = choice.option(args[0])
    if option is None:
        return CommandResult.fail(f"Invalid option: '{args[0]}'. Choose a or b.")

    shift = apply_shift(
        ctx.state.alignment,
        f"{choice.choice_id}:{option.letter}",
        option.law_chaos,
        option.good_evil,
        game_time=ctx.state.clock.game_time,
    )
    logger.debug("choice %s -> %s (%s)", choice.choice_id, option.letter, shift.current)

    lines = [option.result_text]
    for item in option.grants:
        if ctx.state.inventory.add(item):
            lines.append(f"+ {item.name}")
        else:
            lines.append(f"No room for {item.name}. Inventory full.")
    if shift.previous != shift.current:
        lines += ["", f"Your alignment shifts: {shift.previous} -> {shift.current}"]

    follow_up = None
    if choice.tree_id is not None and option.next_node is not None:
        follow_up = ctx.content.tree_node(choice.tree_id, option.next_node)
        if follow_up is None:
            logger.warning("tree %s has no node %r", choice.tree_id, option.next_node)
        else:
            lines += ["", format_choice(follow_up)]
    return CommandResult.ok("\n".join(lines), updates={"pending_choice": None}, binary_choice=follow_up)


def handle_alignment(args: list[str], ctx: CommandContext) -> CommandResult:
    a = ctx.state.alignment
    label = a.label
    lines = [
        "=== MORAL COMPASS ===",
        "",
        f"law/chaos:  {a.law_chaos:+d}",
        f"good/evil:  {a.good_evil:+d}",
        "",
        f"{label}: {ALIGNMENT_DESCRIPTIONS[label]}",
    ]
    if a.history:
        lines += ["", "recent decisions:"]
        for s in a.history[-5:]:
            lines.append(f" - {s.choice} (L/C {s.law_chaos_shift:+d}, G/E {s.good_evil_shift:+d})")
    return CommandResult.ok("\n".join(lines))


def handle_profile(args: list[str], ctx: CommandContext) -> CommandResult:
    p = ctx.state.pioneer
    if p is None:
        return CommandResult.fail("No Pioneer manifest on record.")
    lines = [
        f"=== {p.pioneer_id} ===",
        f"rank: {p.rank}",
        f"generation: {p.generation}",
        "",
        f"perception:  {p.stats.perception}",
        f"salvage:     {p.stats.salvage}",
        f"engineering: {p.stats.engineering}",
        f"total:       {p.stats.total()}",
    ]
    if p.favored:
        lines += ["", "FAVOURED SERIAL: one of the first hundred."]
    unlocked = ctx.state.accomplishments.unlocked
    if unlocked:
        lines += ["", "accomplishments:"]
        for key in unlocked:
            accomplishment = ctx.content.accomplishment(key)
            lines.append(f" - {accomplishment.name if accomplishment else key}")
    return CommandResult.ok("\n".join(lines))
