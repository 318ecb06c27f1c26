from __future__ import annotations

from transit.core.gamestate import GameState
from transit.model.systems import band_for
from transit.runtime.session import EngineSession
from transit.util.timefmt import format_game_time


def build_header(session: EngineSession, state: GameState) -> str:
    td = state.time_dilatation
    loc = session.ship_map.name_of(state.current_location)
    elapsed = format_game_time(state.clock.game_time)
    return f"{elapsed} | {loc} | time x{td.time_scale} | subjective {td.subjective_time:.1f}/{td.max_subjective_time:.0f}"


def build_status_lines(session: EngineSession, state: GameState) -> list[str]:
    lines = session.heartbeat.get_status_report().splitlines()
    lines.append("")
    for name, value in state.ship.bounded().items():
        lines.append(f"{name}: {band_for(value).value}")
    lines += ["", f"scrap: {state.ship.scrap:.0f}", f"health: {session.heartbeat.get_overall_health():.1f}%"]
    return lines


def build_alerts_lines(alerts: list[str]) -> list[str]:
    return list(alerts) if alerts else ["(no alerts)"]


def build_footer(state: GameState) -> str:
    p = state.pioneer
    who = f"{p.pioneer_id} {p.rank}" if p else "unregistered"
    pending = " | DECISION PENDING" if state.pending_choice is not None else ""
    return f"{who} | alignment {state.alignment.label}{pending}"


def result_lines(text: str, message: str) -> list[str]:
    return [f"> {text}", *message.splitlines()]
