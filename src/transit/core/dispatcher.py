from __future__ import annotations

import difflib
import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from transit.core.commands import Command, CommandContext, CommandResult

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Resolves a verb (or alias) to a Command and runs it.

    Registration order is significant: when two commands claim the same
    alias, the one registered later owns it.
    """

    def __init__(self, commands: Iterable[Command]) -> None:
        self._registry: dict[str, Command] = {}
        self._commands: list[Command] = []
        self.register_all(commands)
        self.registry: Mapping[str, Command] = MappingProxyType(self._registry)

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    def register_all(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self._commands.append(command)
            for key in command.keys():
                previous = self._registry.get(key)
                if previous is not None and previous is not command:
                    logger.debug("alias %r moves from %s to %s", key, previous.name, command.name)
                self._registry[key] = command

    def resolve(self, verb: str) -> Command | None:
        return self._registry.get(verb.strip().lower())

    def parse(self, text: str, context: CommandContext) -> CommandResult:
        line = text.strip().lower()
        if not line:
            return CommandResult.fail("Please enter a command. Type 'help' for available commands.")

        tokens = line.split()
        verb, args = tokens[0], tokens[1:]
        command = self._registry.get(verb)
        if command is None:
            return CommandResult.fail(self._unknown_message(verb))

        try:
            result = command.handler(args, context)
        except Exception:
            logger.exception("command %r failed", command.name)
            return CommandResult.fail(f"SYSTEM FAULT: '{verb}' could not be completed.")
        if not isinstance(result, CommandResult):
            logger.error("command %r returned %r instead of a CommandResult", command.name, type(result))
            return CommandResult.fail(f"SYSTEM FAULT: '{verb}' could not be completed.")
        return result

    def _unknown_message(self, verb: str) -> str:
        matches = difflib.get_close_matches(verb, list(self._registry), n=1, cutoff=0.6)
        if matches:
            return f"Unknown command: '{verb}'. Did you mean: {matches[0]}? Type 'help' for available commands."
        return f"Unknown command: '{verb}'. Type 'help' for available commands."
