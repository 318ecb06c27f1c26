from __future__ import annotations

import logging

from transit.config.balance import Balance
from transit.core.commands import CommandContext, CommandResult
from transit.model.systems import BOUNDED_SYSTEMS, band_for
from transit.util.timefmt import format_game_time

logger = logging.getLogger(__name__)

_SYSTEM_LIST = ", ".join(BOUNDED_SYSTEMS)


def _health_label(health: float) -> str:
    if health > Balance.HEALTH_NOMINAL:
        return "NOMINAL"
    if health > Balance.HEALTH_DEGRADED:
        return "DEGRADED"
    if health > Balance.HEALTH_CRITICAL:
        return "CRITICAL"
    return "EMERGENCY"


def handle_status(args: list[str], ctx: CommandContext) -> CommandResult:
    report = ctx.heartbeat.get_status_report()
    td = ctx.time.get_state()
    health = ctx.heartbeat.get_overall_health()
    lines = [
        "=== SHIP STATUS ===",
        "",
        report,
        "",
        "time dilatation:",
        f"  scale: {td.time_scale}x",
        f"  subjective time: {td.subjective_time:.1f}/{td.max_subjective_time:.0f}",
        "",
        f"scrap: {ctx.state.ship.scrap:.0f}",
        f"location: {ctx.ship_map.name_of(ctx.state.current_location)}",
        f"game time: {format_game_time(ctx.state.clock.game_time)} ({ctx.state.clock.game_time} ticks)",
        f"overall health: {health:.1f}% [{_health_label(health)}]",
    ]
    alerts = ctx.heartbeat.check_alerts()
    if alerts:
        lines.append("")
        lines.append("alerts:")
        lines.extend(f" - {a}" for a in alerts)
    return CommandResult.ok("\n".join(lines))


def handle_check(args: list[str], ctx: CommandContext) -> CommandResult:
    if not args:
        return handle_status(args, ctx)
    system = args[0]
    if system not in BOUNDED_SYSTEMS:
        return CommandResult.fail(f"Invalid system: '{system}'. Valid systems: {_SYSTEM_LIST}")
    value = ctx.heartbeat.get_systems()[system]
    return CommandResult.ok(f"{system.upper()}: {value:.1f}% [{band_for(value).value.upper()}]")


def handle_repair(args: list[str], ctx: CommandContext) -> CommandResult:
    cost = Balance.REPAIR_COST
    amount = Balance.REPAIR_AMOUNT
    if not args:
        return CommandResult.fail(
            f"Usage: repair <system>\nSystems: {_SYSTEM_LIST}\n"
            f"Cost: {cost:.0f} subjective time. Restores {amount:.0f}% integrity."
        )
    system = args[0]
    if system not in BOUNDED_SYSTEMS:
        return CommandResult.fail(f"Invalid system: '{system}'. Valid systems: {_SYSTEM_LIST}")

    available = ctx.time.get_state().subjective_time
    if available < cost:
        return CommandResult.fail(
            "INSUFFICIENT SUBJECTIVE TIME\n"
            f"Required: {cost:.0f} units. Available: {available:.1f} units.\n"
            "Hold at normal time scale to recharge ('time normal')."
        )

    # Both guards passed: the system name is valid and the balance covers the cost.
    ctx.time.spend(cost)
    ctx.heartbeat.repair(system, amount)
    current = ctx.heartbeat.get_systems()[system]
    remaining = ctx.time.get_state().subjective_time
    logger.debug("repaired %s to %.1f, subjective time left %.1f", system, current, remaining)
    return CommandResult.ok(
        f"REPAIR: {system.upper()}\n"
        f"subjective time consumed: {cost:.0f} (remaining {remaining:.1f})\n"
        f"{system.upper()} restored +{amount:.0f}% -> {current:.1f}%"
    )
