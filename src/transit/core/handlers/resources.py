from __future__ import annotations

from transit.config.balance import Balance
from transit.core.commands import CommandContext, CommandResult


def handle_mine(args: list[str], ctx: CommandContext) -> CommandResult:
    cost = Balance.MINE_COST
    available = ctx.time.get_state().subjective_time
    if available < cost:
        return CommandResult.fail(
            "INSUFFICIENT SUBJECTIVE TIME\n"
            f"Mining costs {cost:.0f} units. Available: {available:.1f}.\n"
            "Hold at normal time scale to recharge."
        )

    amount = ctx.content.mining_yield()
    ctx.time.spend(cost)
    ctx.heartbeat.add_scrap(amount)
    lines = [
        "=== VOID SALVAGE ===",
        "",
        ctx.content.mining_narrative(amount),
        "",
        f"+{amount} scrap (total {ctx.state.ship.scrap:.0f})",
        f"subjective time consumed: {cost:.0f} (remaining {ctx.time.get_state().subjective_time:.1f})",
    ]
    fragment = ctx.content.lore_fragment()
    if fragment:
        lines += ["", "Something else drifts into the collector...", fragment]
    return CommandResult.ok("\n".join(lines))


def handle_inventory(args: list[str], ctx: CommandContext) -> CommandResult:
    inv = ctx.state.inventory
    lines = ["=== INVENTORY ===", ""]
    if not inv.items:
        lines.append("(empty)")
    for item in inv.items:
        qty = f" x{item.quantity}" if item.quantity > 1 else ""
        lines.append(f"- {item.name}{qty} [{item.item_type.value}]")
        if item.description:
            lines.append(f"    {item.description}")
    lines += [
        "",
        f"slots: {len(inv.items)}/{inv.max_slots}",
        f"scrap: {ctx.state.ship.scrap:.0f}",
    ]
    return CommandResult.ok("\n".join(lines))
