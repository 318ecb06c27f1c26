from __future__ import annotations

from transit.core.commands import CommandCategory, CommandContext, CommandResult


def handle_help(args: list[str], ctx: CommandContext) -> CommandResult:
    if args:
        verb = args[0]
        # later registrations own shared aliases
        for command in reversed(ctx.commands):
            if verb in command.keys():
                aliases = ", ".join(command.aliases) or "-"
                return CommandResult.ok(
                    f"{command.usage or command.name}\n  {command.description}\n  aliases: {aliases}"
                )
        return CommandResult.fail(f"No help for '{verb}'.")

    lines = ["=== AVAILABLE COMMANDS ==="]
    for category in CommandCategory:
        group = [c for c in ctx.commands if c.category is category]
        if not group:
            continue
        lines += ["", f"{category.value.upper()}:"]
        for command in group:
            lines.append(f"  {(command.usage or command.name):<24} - {command.description}")
    lines += ["", "help <command> for details"]
    return CommandResult.ok("\n".join(lines))
