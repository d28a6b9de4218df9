"""Axis mappers translating domain values into pixel coordinates.

Both scales interpolate linearly between ``range_start`` and ``range_end``.
The time scale measures distance in elapsed seconds, so it is linear in
wall-clock time and ignores calendar irregularities. Values outside the
domain are not clamped.

A degenerate domain (minimum equal to maximum) maps every value to
``range_start`` and produces a single tick.
"""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, Iterator, List, Tuple, TypeVar

from services.extent import Extent

D = TypeVar("D")

DEFAULT_TICK_COUNT = 10


@dataclass(frozen=True)
class Tick:
    """A labeled reference mark along an axis."""

    value: Any
    position: float
    label: str


class _Scale(Generic[D]):

    def __init__(self, domain_min: D, domain_max: D, range_start: float, range_end: float) -> None:
        self.domain_min = domain_min
        self.domain_max = domain_max
        self.range_start = float(range_start)
        self.range_end = float(range_end)
        self._span = self._offset(domain_max)

    @classmethod
    def from_extent(cls, extent: Extent[D], range_start: float, range_end: float):
        return cls(extent.minimum, extent.maximum, range_start, range_end)

    @property
    def domain(self) -> Tuple[D, D]:
        return self.domain_min, self.domain_max

    @property
    def range(self) -> Tuple[float, float]:
        return self.range_start, self.range_end

    @property
    def is_degenerate(self) -> bool:
        return self._span == 0

    def map(self, value: D) -> float:
        if self._span == 0:
            return self.range_start
        t = self._offset(value) / self._span
        # Weighted form keeps both domain endpoints exact.
        return self.range_start * (1 - t) + self.range_end * t

    __call__ = map

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> List[Tick]:
        raise NotImplementedError

    def _offset(self, value: D) -> float:
        raise NotImplementedError

    def _bounds(self) -> Tuple[D, D]:
        if self._span < 0:
            return self.domain_max, self.domain_min
        return self.domain_min, self.domain_max


def tick_step(start: float, stop: float, count: int) -> float:
    """Return a step of 1, 2 or 5 times a power of ten yielding ~``count`` ticks."""
    span = stop - start
    step = 10 ** math.floor(math.log10(span / count))
    error = count / span * step
    if error <= 0.15:
        step *= 10
    elif error <= 0.35:
        step *= 5
    elif error <= 0.75:
        step *= 2
    return step


def _step_precision(step: float) -> int:
    return max(0, -math.floor(math.log10(step) + 0.01))


class LinearScale(_Scale[float]):

    def __init__(self, domain_min: float, domain_max: float, range_start: float, range_end: float) -> None:
        super().__init__(float(domain_min), float(domain_max), range_start, range_end)

    def _offset(self, value: float) -> float:
        return value - self.domain_min

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> List[Tick]:
        if self.is_degenerate:
            return [Tick(self.domain_min, self.range_start, f"{self.domain_min:,g}")]
        low, high = self._bounds()
        step = tick_step(low, high, count)
        precision = _step_precision(step)
        first = math.ceil(low / step)
        last = math.floor(high / step)
        ticks = []
        for index in range(first, last + 1):
            value = round(index * step, precision)
            ticks.append(Tick(value, self.map(value), f"{value:,.{precision}f}"))
        return ticks


_SECOND = 1
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# (approximate duration in seconds, unit, step)
_TIME_INTERVALS: List[Tuple[int, str, int]] = [
    (1 * _SECOND, "second", 1),
    (5 * _SECOND, "second", 5),
    (15 * _SECOND, "second", 15),
    (30 * _SECOND, "second", 30),
    (1 * _MINUTE, "minute", 1),
    (5 * _MINUTE, "minute", 5),
    (15 * _MINUTE, "minute", 15),
    (30 * _MINUTE, "minute", 30),
    (1 * _HOUR, "hour", 1),
    (3 * _HOUR, "hour", 3),
    (6 * _HOUR, "hour", 6),
    (12 * _HOUR, "hour", 12),
    (1 * _DAY, "day", 1),
    (2 * _DAY, "day", 2),
    (1 * _WEEK, "week", 1),
    (1 * _MONTH, "month", 1),
    (3 * _MONTH, "month", 3),
    (1 * _YEAR, "year", 1),
]
_INTERVAL_DURATIONS = [duration for duration, _, _ in _TIME_INTERVALS]
_FIXED_UNITS = {"second": _SECOND, "minute": _MINUTE, "hour": _HOUR}


def _ceil_midnight(value: datetime) -> datetime:
    midnight = value.replace(hour=0, minute=0, second=0, microsecond=0)
    if midnight < value:
        midnight += timedelta(days=1)
    return midnight


def _add_months(value: datetime, months: int) -> datetime:
    index = value.year * 12 + value.month - 1 + months
    return value.replace(year=index // 12, month=index % 12 + 1)


def choose_interval(span_seconds: float, count: int) -> Tuple[str, int]:
    """Pick the calendar interval whose duration is closest to ``span / count``."""
    target = span_seconds / count
    index = bisect.bisect_right(_INTERVAL_DURATIONS, target)
    if index == len(_TIME_INTERVALS):
        step = max(1, int(round(tick_step(0, span_seconds / _YEAR, count))))
        return "year", step
    if index == 0:
        return "second", 1
    lower, upper = _INTERVAL_DURATIONS[index - 1], _INTERVAL_DURATIONS[index]
    chosen = index - 1 if target / lower < upper / target else index
    _, unit, step = _TIME_INTERVALS[chosen]
    return unit, step


def iter_time_ticks(start: datetime, stop: datetime, unit: str, step: int) -> Iterator[datetime]:
    """Yield aligned instants of ``unit * step`` within ``[start, stop]``."""
    if unit in _FIXED_UNITS:
        size = timedelta(seconds=_FIXED_UNITS[unit] * step)
        base = start.replace(hour=0, minute=0, second=0, microsecond=0)
        current = base + size * math.ceil((start - base) / size)
        while current <= stop:
            yield current
            current += size
    elif unit == "day":
        current = _ceil_midnight(start)
        while current <= stop:
            if (current.day - 1) % step == 0:
                yield current
            current += timedelta(days=1)
    elif unit == "week":
        current = _ceil_midnight(start)
        current += timedelta(days=(6 - current.weekday()) % 7)
        while current <= stop:
            yield current
            current += timedelta(weeks=step)
    elif unit == "month":
        current = start.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if current < start:
            current = _add_months(current, 1)
        while current <= stop:
            if (current.month - 1) % step == 0:
                yield current
            current = _add_months(current, 1)
    elif unit == "year":
        year = start.year if start == datetime(start.year, 1, 1, tzinfo=start.tzinfo) else start.year + 1
        year = -(-year // step) * step
        while year <= stop.year:
            yield datetime(year, 1, 1, tzinfo=start.tzinfo)
            year += step
    else:
        raise ValueError(f"Unknown time interval unit {unit!r}")


def format_time_tick(value: datetime) -> str:
    """Label a tick with the coarsest calendar field that is not at its start."""
    if value.second:
        return value.strftime(":%S")
    if value.minute:
        return value.strftime("%I:%M")
    if value.hour:
        return value.strftime("%I %p")
    if value.day != 1:
        return value.strftime("%b %d" if value.weekday() == 6 else "%a %d")
    if value.month != 1:
        return value.strftime("%B")
    return value.strftime("%Y")


class TimeScale(_Scale[datetime]):

    def _offset(self, value: datetime) -> float:
        return (value - self.domain_min).total_seconds()

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> List[Tick]:
        if self.is_degenerate:
            return [Tick(self.domain_min, self.range_start, format_time_tick(self.domain_min))]
        start, stop = self._bounds()
        unit, step = choose_interval(abs(self._span), count)
        return [
            Tick(value, self.map(value), format_time_tick(value))
            for value in iter_time_ticks(start, stop, unit, step)
        ]
