from __future__ import annotations


class Balance:
    DEFAULT_RNG_SEED = 2847

    # Heartbeat
    # Wall-clock seconds between heartbeat ticks.
    TICK_S = 1.0
    # Base decay per tick at multiplier 1.0.
    DECAY_POWER = 0.05
    DECAY_OXYGEN = 0.03
    DECAY_HULL = 0.02
    DECAY_CRYO = 0.01
    # Extra oxygen drain per tick while power / hull sit below CRITICAL_THRESHOLD.
    # Both apply in the same tick when both conditions hold.
    LOW_POWER_OXYGEN_DRAIN = 0.1
    HULL_BREACH_OXYGEN_DRAIN = 0.15

    # Alert bands (percent)
    CRITICAL_THRESHOLD = 20.0
    DANGER_THRESHOLD = 50.0
    SYSTEM_MAX = 100.0
    SYSTEM_MIN = 0.0
    STATUS_BAR_CELLS = 20

    # Time dilatation
    SUBJECTIVE_TIME_MAX = 100.0
    # Subjective time drained per tick per unit of |scale - 1|.
    TIME_DECAY_RATE = 0.1
    # Subjective time regained per tick at neutral scale.
    TIME_RECHARGE_RATE = 0.05
    TIME_SCALE_MIN = 0.5
    TIME_SCALE_MAX = 2.0
    TIME_SCALE_NEUTRAL = 1.0
    TIME_MODES = {"slow": 0.5, "normal": 1.0, "fast": 2.0}

    # Action costs (subjective time units)
    MOVE_COST = 1.0
    REPAIR_COST = 10.0
    MINE_COST = 20.0
    # Integrity restored by one repair action.
    REPAIR_AMOUNT = 15.0
    # Default amount for a bare repair() call.
    REPAIR_DEFAULT_AMOUNT = 10.0

    # Mining
    MINE_SCRAP_MIN = 1
    MINE_SCRAP_MAX = 5
    MINE_LORE_P = 0.15

    # Narrative triggers
    LOOK_CHOICE_P = 0.30

    # Alignment
    ALIGNMENT_MIN = -100
    ALIGNMENT_MAX = 100
    ALIGNMENT_AXIS_THRESHOLD = 30

    # Inventory
    INVENTORY_MAX_SLOTS = 20

    # Pioneer manifest
    PIONEER_COUNT = 2847
    # Serial numbers at or below this value are "favoured".
    FAVORED_SERIAL_MAX = 100
    # Inclusive stat total range for favoured serials.
    FAVORED_STAT_TOTAL = (18, 21)
    PIONEER_BASE_STAT = 5
    PIONEER_MIN_STAT = 1

    # Overall health labels (status report)
    HEALTH_NOMINAL = 75.0
    HEALTH_DEGRADED = 50.0
    HEALTH_CRITICAL = 25.0

    START_LOCATION = "cryo_bay"
