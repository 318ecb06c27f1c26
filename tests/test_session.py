from __future__ import annotations

import logging
import threading

import pytest

from transit.model.inventory import InventoryItem, ItemType
from transit.runtime.logsetup import configure_logging
from transit.runtime.session import EngineSession


def _fresh_session(**kwargs) -> EngineSession:
    return EngineSession(seed=5, **kwargs)


def test_step_ticks_everything_once():
    session = _fresh_session()
    session.submit("time fast")
    alerts = session.step()
    assert alerts == []
    assert session.state.clock.game_time == 1
    # fast doubles decay and drains the reserve
    assert session.state.ship.power == pytest.approx(99.9)
    assert session.time.get_state().subjective_time == pytest.approx(99.9)


def test_heartbeat_thread_advances_clock_and_stops():
    session = _fresh_session(tick_s=0.01)
    ticks = []
    seen = threading.Event()

    def on_tick(systems, alerts):
        ticks.append(systems)
        if len(ticks) >= 3:
            seen.set()

    session.start(on_tick)
    assert session.is_running
    assert seen.wait(2.0)
    session.stop()
    assert not session.is_running

    with session.with_lock() as state:
        game_time = state.clock.game_time
        count = len(ticks)
    assert game_time >= 3
    threading.Event().wait(0.05)
    assert len(ticks) == count
    assert session.state.clock.game_time == game_time


def test_commands_and_ticks_interleave_safely():
    session = _fresh_session(tick_s=0.005)
    session.start()
    try:
        for _ in range(50):
            assert session.submit("status").success
            session.submit("time slow")
            session.submit("time normal")
    finally:
        session.stop()
    for value in session.state.ship.bounded().values():
        assert 0.0 <= value <= 100.0


def test_sessions_do_not_share_state():
    a = _fresh_session(start="cargo_hold")
    b = _fresh_session(start="cargo_hold")
    a.submit("talk briggs")
    a.state.ship.power = 10.0
    assert b.state.conversations == {}
    assert b.state.ship.power == 100.0


def test_snapshot_restore_round_trip():
    session = _fresh_session(start="cargo_hold")
    for _ in range(10):
        session.submit("talk briggs")
    session.state.inventory.add(InventoryItem("scrap_coil", "Scrap Coil", ItemType.MATERIAL, quantity=4))
    session.submit("move engineering")
    session.state.ship.hull = 42.0
    session.heartbeat.add_scrap(7)
    session.step(3)

    snap = session.snapshot()
    restored = EngineSession(seed=5, restore=snap)
    assert restored.snapshot() == snap
    assert restored.state.current_location == "engineering"
    assert restored.state.pioneer == session.state.pioneer
    assert restored.state.inventory.items == session.state.inventory.items
    assert [i.item_id for i in restored.state.inventory.items][1] == "scrap_coil"
    assert restored.state.accomplishments.is_unlocked("chattypioneer")


def test_restore_normalizes_values():
    session = EngineSession(
        restore={
            "systems": {"power": 150.0, "oxygen": -3.0},
            "time_dilatation": {"subjective_time": 0.0, "time_scale": 2.0},
            "alignment": {"law_chaos": 400, "good_evil": -400},
        }
    )
    assert session.state.ship.power == 100.0
    assert session.state.ship.oxygen == 0.0
    assert session.time.get_state().time_scale == 1.0
    assert session.state.alignment.law_chaos == 100
    assert session.state.alignment.good_evil == -100


@pytest.mark.parametrize(
    "snapshot",
    [
        {"warp": 1},
        {"location": "holodeck"},
        {"systems": {"shields": 50.0}},
        {"time_dilatation": {"speed": 2.0}},
        {"inventory": [{"name": "Scrap Coil"}]},
        {"inventory": [{"id": "coil", "name": "Coil", "type": "plasma"}]},
        {"inventory": [{"id": "coil", "name": "Coil", "quantity": 0}]},
        {"inventory": [{"id": f"item{n}", "name": "x"} for n in range(21)]},
    ],
)
def test_restore_rejects_bad_snapshots(snapshot):
    with pytest.raises(ValueError):
        EngineSession(restore=snapshot)


def test_unknown_start_location_rejected():
    with pytest.raises(ValueError):
        EngineSession(start="holodeck")


def test_from_env(monkeypatch):
    monkeypatch.setenv("TRANSIT_SEED", "99")
    monkeypatch.setenv("TRANSIT_START", "Bridge")
    session = EngineSession.from_env()
    assert session.state.meta.rng_seed == 99
    assert session.state.current_location == "bridge"


def test_same_seed_same_pioneer():
    a = EngineSession(seed=12)
    b = EngineSession(seed=12)
    assert a.state.pioneer == b.state.pioneer


def test_configure_logging_is_idempotent(monkeypatch):
    monkeypatch.setenv("TRANSIT_LOG_LEVEL", "debug")
    configure_logging()
    configure_logging()
    logger = logging.getLogger("transit")
    assert logger.level == logging.DEBUG
    assert sum(1 for h in logger.handlers if getattr(h, "_transit", False)) == 1
    configure_logging("nonsense")
    assert logger.level == logging.WARNING


def test_nan_time_scale_cannot_poison_the_ship():
    session = _fresh_session()
    assert session.time.set_time_scale(float("nan")) is False
    session.step(3)
    for value in session.state.ship.bounded().values():
        assert 0.0 <= value <= 100.0


def test_restore_drops_non_finite_values():
    nan = float("nan")
    session = EngineSession(
        restore={
            "systems": {"power": nan, "hull": float("inf")},
            "time_dilatation": {"subjective_time": nan, "time_scale": nan},
        }
    )
    assert session.state.ship.power == 0.0
    assert session.state.ship.hull == 100.0
    state = session.time.get_state()
    assert state.subjective_time == 0.0
    assert state.time_scale == 1.0
    session.step(2)
    for value in session.state.ship.bounded().values():
        assert 0.0 <= value <= 100.0


def test_configure_logging_swaps_in_a_given_handler():
    logger = logging.getLogger("transit")
    custom = logging.NullHandler()
    configure_logging("info", handler=custom)
    try:
        ours = [h for h in logger.handlers if getattr(h, "_transit", False)]
        assert ours == [custom]
        configure_logging()
        assert [h for h in logger.handlers if getattr(h, "_transit", False)] == [custom]
    finally:
        logger.removeHandler(custom)
