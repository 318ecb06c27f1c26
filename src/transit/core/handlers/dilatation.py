from __future__ import annotations

from transit.config.balance import Balance
from transit.core.commands import CommandContext, CommandResult

_MODES = "|".join(Balance.TIME_MODES)


def handle_time(args: list[str], ctx: CommandContext) -> CommandResult:
    if not args:
        td = ctx.time.get_state()
        return CommandResult.ok(
            f"time scale: {td.time_scale}x\n"
            f"subjective time: {td.subjective_time:.1f}/{td.max_subjective_time:.0f} "
            f"({ctx.time.get_subjective_time_percent():.0f}%)\n\n"
            f"Usage: time <{_MODES}>"
        )

    mode = args[0]
    scale = Balance.TIME_MODES.get(mode)
    if scale is None:
        return CommandResult.fail(f"Invalid time mode: '{mode}'. Use: {', '.join(Balance.TIME_MODES)}")

    if not ctx.time.set_time_scale(scale):
        return CommandResult.fail("Insufficient subjective time. Time scale remains at normal.")
    return CommandResult.ok(f"Time scale set to {scale}x ({mode})")
