from __future__ import annotations

from transit.config.balance import Balance


def _split_time(seconds: float) -> tuple[int, int, int, int]:
    s = int(seconds)
    days = s // 86400
    hours = (s % 86400) // 3600
    mins = (s % 3600) // 60
    secs = s % 60
    return days, hours, mins, secs


def format_game_time(ticks: int, tick_s: float = Balance.TICK_S) -> str:
    days, hours, mins, secs = _split_time(ticks * tick_s)
    return f"T+D{days + 1} {hours:02d}:{mins:02d}:{secs:02d}"
