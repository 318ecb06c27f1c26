from __future__ import annotations

import pytest

from transit.core.content import DefaultContent
from transit.model.choices import choice_from_dict
from transit.model.inventory import ItemType
from transit.runtime.data_loader import load_choices
from transit.runtime.session import EngineSession


class ScriptedContent(DefaultContent):
    """Default content with the random parts pinned."""

    def __init__(self, choice=None, amount: int = 3, lore: str | None = None) -> None:
        super().__init__()
        self.choice = choice
        self.amount = amount
        self.lore = lore

    def location_choice(self, location_id):
        return self.choice

    def mining_yield(self):
        return self.amount

    def lore_fragment(self):
        return self.lore


def _fresh_session(start: str | None = None, **content_kwargs) -> EngineSession:
    return EngineSession(seed=1, start=start, content=ScriptedContent(**content_kwargs))


def _choice(location_id: str):
    return choice_from_dict(load_choices()[location_id][0], location_id)


def _subjective(session: EngineSession) -> float:
    return session.time.get_state().subjective_time


# movement


def test_move_without_edge_changes_nothing():
    session = _fresh_session(start="bridge")
    result = session.dispatcher.parse("move engineering", session.context)
    assert result.success is False
    assert session.state.current_location == "bridge"
    assert _subjective(session) == 100.0


def test_move_along_edge_costs_one_unit():
    session = _fresh_session()
    result = session.submit("go cargo")
    assert result.success
    assert session.state.current_location == "cargo_hold"
    assert _subjective(session) == pytest.approx(99.0)
    assert "Cargo Hold" in result.message


def test_move_rejects_unknown_same_and_unaffordable():
    session = _fresh_session()
    assert session.submit("move").success is False
    assert session.submit("move nowhere").success is False
    assert session.submit("move cryo").success is False

    session.time.state.subjective_time = 0.5
    result = session.submit("walk bridge")
    assert result.success is False
    assert session.state.current_location == "cryo_bay"
    assert _subjective(session) == 0.5


# ship


def test_repair_debits_and_restores():
    session = _fresh_session()
    session.state.ship.power = 40.0
    result = session.submit("repair power")
    assert result.success
    assert session.state.ship.power == pytest.approx(55.0)
    assert _subjective(session) == pytest.approx(90.0)


def test_repair_caps_at_hundred():
    session = _fresh_session()
    session.state.ship.hull = 95.0
    assert session.submit("fix hull").success
    assert session.state.ship.hull == 100.0


def test_repair_guards_leave_state_untouched():
    session = _fresh_session()
    session.state.ship.power = 40.0
    assert session.submit("repair").success is False
    assert session.submit("repair warpdrive").success is False
    assert _subjective(session) == 100.0

    session.time.state.subjective_time = 9.0
    result = session.submit("repair power")
    assert result.success is False
    assert "INSUFFICIENT" in result.message
    assert session.state.ship.power == 40.0
    assert _subjective(session) == 9.0


def test_check_single_system_and_invalid():
    session = _fresh_session()
    session.state.ship.oxygen = 30.0
    result = session.submit("check oxygen")
    assert result.success
    assert "OXYGEN: 30.0%" in result.message
    assert "WARNING" in result.message
    assert session.submit("check warp").success is False


def test_status_lists_alerts_and_location():
    session = _fresh_session()
    session.state.ship.cryo = 10.0
    result = session.submit("systems")
    assert result.success
    assert "CRITICAL: CRYO at 10.0%" in result.message
    assert "The Cryo-Bay" in result.message


# time


def test_time_modes():
    session = _fresh_session()
    assert session.submit("time fast").success
    assert session.time.get_state().time_scale == 2.0
    assert session.submit("speed slow").success
    assert session.time.get_state().time_scale == 0.5
    assert session.submit("time warp").success is False
    assert session.time.get_state().time_scale == 0.5
    assert "Usage" in session.submit("time").message


def test_time_mode_refused_when_reserve_empty():
    session = _fresh_session()
    session.time.state.subjective_time = 0.0
    result = session.submit("time fast")
    assert result.success is False
    assert session.time.get_state().time_scale == 1.0


# resources


def test_mine_adds_scrap_and_costs_twenty():
    session = _fresh_session(amount=4, lore="[ECHO]")
    result = session.submit("dig")
    assert result.success
    assert session.state.ship.scrap == 4
    assert _subjective(session) == pytest.approx(80.0)
    assert "[ECHO]" in result.message


def test_mine_refused_below_cost():
    session = _fresh_session()
    session.time.state.subjective_time = 19.9
    assert session.submit("mine").success is False
    assert session.state.ship.scrap == 0
    assert _subjective(session) == 19.9


def test_inventory_starts_empty():
    result = _fresh_session().submit("inv")
    assert result.success
    assert "(empty)" in result.message
    assert "slots: 0/20" in result.message


# exploration


def test_look_without_choice():
    session = _fresh_session()
    result = session.submit("look")
    assert result.success
    assert result.binary_choice is None
    assert session.state.pending_choice is None
    assert "THE CRYO-BAY" in result.message


def test_inspect_via_shared_alias():
    session = _fresh_session()
    result = session.submit("examine frost")
    assert result.success
    assert "Frost patterns" in result.message
    assert result.binary_choice is None
    assert session.submit("inspect toaster").success is False
    assert session.submit("study").success is False


# choices


def test_pending_choice_blocks_other_commands():
    session = _fresh_session(choice=_choice("cryo_bay"))
    result = session.submit("look")
    assert result.binary_choice is not None
    assert session.state.pending_choice is result.binary_choice

    before = session.snapshot()
    for text in ("status", "move bridge", "repair power", "", "nonsense"):
        blocked = session.submit(text)
        assert blocked.success is False
        assert "choose a" in blocked.message
    assert session.snapshot() == before

    resolved = session.submit("choose a")
    assert resolved.success
    assert session.state.pending_choice is None
    assert session.state.alignment.law_chaos == 5
    assert session.state.alignment.good_evil == 10
    assert len(session.state.alignment.history) == 1

    assert session.submit("status").success


def test_choose_rejects_bad_letter_and_keeps_choice():
    session = _fresh_session(choice=_choice("bridge"), start="bridge")
    session.submit("look")
    assert session.submit("decide c").success is False
    assert session.submit("pick").success is False
    assert session.state.pending_choice is not None
    assert session.submit("PICK B").success
    assert session.state.alignment.law_chaos == 7


def test_choose_without_pending_choice():
    session = _fresh_session()
    assert session.submit("choose a").success is False


def test_choice_grants_items():
    session = _fresh_session(choice=_choice("cargo_hold"), start="cargo_hold")
    session.submit("look")
    result = session.submit("choose a")
    assert "+ Emergency Rations" in result.message
    items = session.state.inventory.items
    assert [i.item_id for i in items] == ["emergency_rations"]
    assert "Emergency Rations" in session.submit("inventory").message


def test_console_tree_walks_to_a_reward():
    session = _fresh_session(start="bridge")
    opened = session.submit("inspect console")
    assert opened.success
    assert "THE CAPTAIN'S LEGACY" in opened.message
    assert session.state.pending_choice.choice_id == "console-01"

    first = session.submit("choose a")
    assert first.message.startswith("The thought settles into your consciousness.")
    assert "stranger in the void" in first.message
    assert session.state.pending_choice.choice_id == "console-02-law"
    assert session.submit("move cryo").success is False

    last = session.submit("choose b")
    assert "HIDDEN SECTOR BETA coordinates" in last.message
    assert session.state.pending_choice is None
    assert session.state.alignment.law_chaos == 8
    assert session.state.alignment.good_evil == -3
    assert [s.choice for s in session.state.alignment.history] == ["console-01:A", "console-02-law:B"]
    assert session.submit("status").success


def test_pod_tree_takes_the_sacred_branch():
    session = _fresh_session()
    session.submit("inspect pod")
    session.submit("pick b")
    assert session.state.pending_choice.choice_id == "pod-02-sacred"
    result = session.submit("pick a")
    assert "VOID MEDITATION techniques" in result.message
    assert session.state.pending_choice is None
    assert session.state.alignment.good_evil == 6


def test_trees_are_bound_to_their_location():
    session = _fresh_session()
    result = session.submit("inspect console")
    assert "2,847 frozen Pioneers" in result.message
    assert result.binary_choice is None
    assert session.state.pending_choice is None


def test_alignment_report():
    session = _fresh_session()
    result = session.submit("align")
    assert result.success
    assert "True-Neutral" in result.message


# crew


def test_talk_rotates_lines_and_counts():
    session = _fresh_session(start="cargo_hold")
    first = session.submit("talk briggs")
    assert first.success
    assert "Name's Briggs" in first.message
    second = session.submit("speak quartermaster")
    assert "Year 47" in second.message
    assert session.state.conversations["briggs"] == 2


def test_talk_needs_someone_present():
    session = _fresh_session()
    assert session.submit("talk briggs").success is False
    session2 = _fresh_session(start="cargo_hold")
    assert session2.submit("talk ghost").success is False
    assert session2.state.conversations == {}


def test_profile_shows_manifest():
    session = EngineSession(seed=3, pioneer_number=42, content=ScriptedContent())
    result = session.submit("whoami")
    assert result.success
    assert "PIONEER-0042" in result.message
    assert "FAVOURED" in result.message


def test_tenth_talk_with_briggs_unlocks_chatty_pioneer():
    session = _fresh_session(start="cargo_hold")
    for _ in range(9):
        assert "UNLOCKED" not in session.submit("talk briggs").message
    assert not session.state.accomplishments.is_unlocked("chattypioneer")

    tenth = session.submit("talk briggs")
    assert "HIDDEN ACCOMPLISHMENT UNLOCKED!" in tenth.message
    assert "The Chatty Pioneer" in tenth.message
    assert "REWARD: Pity Drop" in tenth.message
    assert "lost & found" in tenth.message
    assert session.state.accomplishments.is_unlocked("chattypioneer")

    items = session.state.inventory.items
    assert len(items) == 1
    assert items[0].item_type is ItemType.APPAREL
    assert f"[You received: {items[0].name}]" in tenth.message
    assert items[0].name in {
        "Starfarer Tunic",
        "Void Walker Shirt",
        "Pioneer Jacket",
        "Cryo Survivor Vest",
        "Quartermaster's Gift",
    }

    assert "UNLOCKED" not in session.submit("talk briggs").message
    assert len(session.state.inventory.items) == 1
    assert "The Chatty Pioneer" in session.submit("profile").message


# help


def test_help_lists_commands_and_details():
    session = _fresh_session()
    result = session.submit("?")
    assert result.success
    for name in ("status", "move", "mine", "choose", "help"):
        assert name in result.message
    assert "inspect <target>" in session.submit("help examine").message
    assert session.submit("help frobnicate").success is False
