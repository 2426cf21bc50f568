GRID_ROWS = 12
GRID_COLS = 6

# Upcoming pieces kept visible after the active one.
QUEUE_DEPTH = 4

# Connected same-colored cells needed before a group pops.
MIN_GROUP_SIZE = 4
# Score for each popped cell, multiplied by (chain index + 1).
POINTS_PER_CELL = 10

# Presentation hint between the match/clear/gravity phases of a chain pass (seconds).
CHAIN_SETTLE_DELAY = 0.25

# Caller-owned fall cadence: start interval, speed-up factor and period (seconds).
FALL_INTERVAL_INITIAL = 1.0
FALL_SPEEDUP_FACTOR = 1.1
FALL_SPEEDUP_PERIOD = 10.0
FALL_INTERVAL_FLOOR = 0.05
