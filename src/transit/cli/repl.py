from __future__ import annotations

import readline
import sys

from transit.core.commands import CommandResult
from transit.model.systems import BOUNDED_SYSTEMS
from transit.runtime.logsetup import configure_logging
from transit.runtime.session import EngineSession

BANNER = """\
=== THE GREAT TRANSIT ===
Cryo-sleep terminated. You are the first Pioneer awake.
Type 'help' for commands, 'quit' to leave.
"""


def render_result(result: CommandResult) -> None:
    prefix = "" if result.success else "[!] "
    lines = result.message.splitlines() or [""]
    print(prefix + lines[0])
    for line in lines[1:]:
        print(line)


class AlertPrinter:
    """Heartbeat listener that prints an alert only when the set changes."""

    def __init__(self, out=None) -> None:
        self.out = out or sys.stdout
        self._last: tuple[str, ...] = ()

    def __call__(self, systems: dict[str, float], alerts: list[str]) -> None:
        current = tuple(alerts)
        if current == self._last:
            return
        fresh = [a for a in current if a not in self._last]
        self._last = current
        for alert in fresh:
            self.out.write(f"\n[HEARTBEAT] {alert}\n")
        if fresh:
            self.out.flush()


def _install_completer(session: EngineSession) -> None:
    def _completer(text: str, state_idx: int) -> str | None:
        buf = readline.get_line_buffer()
        tokens = buf.split()
        if buf.endswith(" "):
            tokens.append("")
        if len(tokens) <= 1:
            candidates = sorted(session.dispatcher.registry)
        else:
            command = session.dispatcher.resolve(tokens[0])
            name = command.name if command else ""
            with session.with_lock() as locked_state:
                here = locked_state.current_location
                location = session.ship_map.locations.get(here)
                if name in {"repair", "check"}:
                    candidates = list(BOUNDED_SYSTEMS)
                elif name == "move":
                    candidates = session.ship_map.exits(here)
                elif name == "inspect":
                    candidates = list(location.inspectables) if location else []
                elif name == "talk":
                    candidates = list(location.npcs) if location else []
                elif name == "time":
                    candidates = ["slow", "normal", "fast"]
                elif name == "choose":
                    candidates = ["a", "b"]
                else:
                    candidates = []
        matches = [c for c in candidates if c.startswith(text)]
        if state_idx < len(matches):
            return matches[state_idx]
        return None

    readline.set_completer_delims(" \t\n")
    readline.set_completer(_completer)
    readline.parse_and_bind("tab: complete")


def main() -> None:
    configure_logging()
    session = EngineSession.from_env()
    _install_completer(session)
    print(BANNER)
    render_result(session.submit("look"))
    session.start(AlertPrinter())

    try:
        while True:
            try:
                line = input("> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            text = line.strip()
            if text.lower() in {"quit", "exit"}:
                break
            if not text:
                continue
            render_result(session.submit(text))
    finally:
        session.stop()
    print("Session ended. The ship drifts on.")


if __name__ == "__main__":
    main()
