from __future__ import annotations

from dataclasses import dataclass, field

from transit.config.balance import Balance

ALIGNMENT_DESCRIPTIONS = {
    "Lawful-Good": "The Paladin - order and compassion. Justice through structure.",
    "Lawful-Neutral": "The Judge - rules without moral bias. Order is absolute.",
    "Lawful-Evil": "The Tyrant - law as a tool to dominate.",
    "Neutral-Good": "The Benefactor - pragmatic compassion without dogma.",
    "True-Neutral": "The Wanderer - balance. Neither chaos nor order defines you.",
    "Neutral-Evil": "The Opportunist - morality is a tool for gain.",
    "Chaotic-Good": "The Rebel - freedom against tyranny. Justice without chains.",
    "Chaotic-Neutral": "The Free Spirit - whim and instinct.",
    "Chaotic-Evil": "The Destroyer - chaos for its own sake.",
}


@dataclass(slots=True)
class AlignmentShift:
    game_time: int
    choice: str
    law_chaos_shift: int
    good_evil_shift: int
    previous: str
    current: str


@dataclass(slots=True)
class AlignmentState:
    # -100 pure chaos .. +100 pure law
    law_chaos: int = 0
    # -100 pure evil .. +100 pure good
    good_evil: int = 0
    history: list[AlignmentShift] = field(default_factory=list)

    @property
    def label(self) -> str:
        return calculate_alignment(self.law_chaos, self.good_evil)


def _axis(value: int, positive: str, negative: str) -> str:
    if value > Balance.ALIGNMENT_AXIS_THRESHOLD:
        return positive
    if value < -Balance.ALIGNMENT_AXIS_THRESHOLD:
        return negative
    return "Neutral"


def calculate_alignment(law_chaos: int, good_evil: int) -> str:
    law = _axis(law_chaos, "Lawful", "Chaotic")
    moral = _axis(good_evil, "Good", "Evil")
    if law == "Neutral" and moral == "Neutral":
        return "True-Neutral"
    return f"{law}-{moral}"


def apply_shift(
    state: AlignmentState,
    choice: str,
    law_chaos_shift: int,
    good_evil_shift: int,
    game_time: int = 0,
) -> AlignmentShift:
    lo, hi = Balance.ALIGNMENT_MIN, Balance.ALIGNMENT_MAX
    previous = state.label
    state.law_chaos = max(lo, min(hi, state.law_chaos + law_chaos_shift))
    state.good_evil = max(lo, min(hi, state.good_evil + good_evil_shift))
    shift = AlignmentShift(
        game_time=game_time,
        choice=choice,
        law_chaos_shift=law_chaos_shift,
        good_evil_shift=good_evil_shift,
        previous=previous,
        current=state.label,
    )
    state.history.append(shift)
    return shift
