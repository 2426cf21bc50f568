from __future__ import annotations

from dataclasses import dataclass, field

from chainfall.constants import (
    FALL_INTERVAL_FLOOR,
    FALL_INTERVAL_INITIAL,
    FALL_SPEEDUP_FACTOR,
    FALL_SPEEDUP_PERIOD,
)


@dataclass(slots=True)
class FallCadence:
    """Caller-side timer deciding when the active pair should fall one row.

    The engine never reads the clock. A driver feeds elapsed running time into
    ``update`` and calls ``GameFlowSystem.tick`` once per step it reports. Every
    ``speedup_period`` seconds the interval is divided by ``speedup_factor``,
    bottoming out at ``min_interval``.
    """

    initial_interval: float = FALL_INTERVAL_INITIAL
    speedup_factor: float = FALL_SPEEDUP_FACTOR
    speedup_period: float = FALL_SPEEDUP_PERIOD
    min_interval: float = FALL_INTERVAL_FLOOR

    interval: float = field(init=False)
    _since_fall: float = field(init=False, default=0.0, repr=False)
    _since_speedup: float = field(init=False, default=0.0, repr=False)

    def __post_init__(self) -> None:
        if self.min_interval <= 0.0:
            raise ValueError("min_interval must be positive")
        if self.speedup_factor < 1.0:
            raise ValueError("speedup_factor must be >= 1.0")
        if self.speedup_period <= 0.0:
            raise ValueError("speedup_period must be positive")
        self.interval = max(self.min_interval, float(self.initial_interval))

    def update(self, dt: float) -> int:
        """Advance by ``dt`` seconds of running time; return fall steps due."""
        if dt <= 0.0:
            return 0
        self._since_speedup += dt
        while self._since_speedup >= self.speedup_period:
            self._since_speedup -= self.speedup_period
            self.interval = max(self.min_interval, self.interval / self.speedup_factor)
        self._since_fall += dt
        steps = 0
        while self._since_fall >= self.interval:
            self._since_fall -= self.interval
            steps += 1
        return steps

    def reset(self) -> None:
        self.interval = max(self.min_interval, float(self.initial_interval))
        self._since_fall = 0.0
        self._since_speedup = 0.0
