"""Train load factors along a run and the peak sections they reveal."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time

from railflow.records import TrafficRecord

DEFAULT_CAPACITY = 1000
DEFAULT_THRESHOLD = 80.0
DEFAULT_TOP_COUNT = 10


@dataclass
class LoadFactorResult:
    """The load of one train on one day as it leaves one station."""

    train_code: int
    train_name: str
    date: date | None
    station_id: int
    station_name: str
    current_load: int
    capacity: int
    load_factor: float
    boarding: int
    alighting: int


@dataclass
class PeakSection:
    """A run of consecutive stations where a train's load factor stays high."""

    train_code: int
    route_name: str
    from_station_id: int
    to_station_id: int
    from_station_name: str
    to_station_name: str
    max_load_factor: float
    peak_time: time
    date: date | None


def _run_key(train_code: int, day: date | None) -> str:
    return f"{train_code}_{day.strftime('%Y%m%d') if day else ''}"


def _in_range(day: date | None, start: date | None, end: date | None) -> bool:
    if start is not None and (day is None or day < start):
        return False
    if end is not None and day is not None and day > end:
        return False
    return True


def calculate_load_factor(
    records: Iterable[TrafficRecord],
    capacities: Mapping[int, int],
    start: date | None = None,
    end: date | None = None,
) -> list[LoadFactorResult]:
    """Load and load factor of every train run at each of its stops.

    Runs are grouped by train and day and walked in stop order; a train
    missing from ``capacities`` is assumed to carry 1000 passengers.
    """
    runs: defaultdict[str, list[TrafficRecord]] = defaultdict(list)
    for record in records:
        if _in_range(record.run_date, start, end):
            runs[_run_key(record.train_code, record.run_date)].append(record)

    results = []
    for key in sorted(runs):
        stops = sorted(runs[key], key=lambda record: record.order)
        train_code = stops[0].train_code
        capacity = capacities.get(train_code, DEFAULT_CAPACITY)
        load = 0
        for record in stops:
            if record.is_start == 1:
                load = record.boarding
            else:
                load = load + record.boarding - record.alighting
            load = max(0, load)
            factor = load / capacity * 100.0 if capacity > 0 else 0.0
            results.append(
                LoadFactorResult(
                    train_code=train_code,
                    train_name=f"列车{train_code}",
                    date=record.run_date,
                    station_id=record.station_id,
                    station_name=record.start_station_name,
                    current_load=load,
                    capacity=capacity,
                    load_factor=factor,
                    boarding=record.boarding,
                    alighting=record.alighting,
                )
            )
    return results


def _section(first: LoadFactorResult, last: LoadFactorResult, peak: float) -> PeakSection:
    return PeakSection(
        train_code=first.train_code,
        route_name=f"线路{first.train_code}",
        from_station_id=first.station_id,
        to_station_id=last.station_id,
        from_station_name=first.station_name,
        to_station_name=last.station_name,
        max_load_factor=peak,
        peak_time=datetime.now().time(),
        date=first.date,
    )


def find_peak_sections(
    results: Iterable[LoadFactorResult], threshold: float = DEFAULT_THRESHOLD
) -> list[PeakSection]:
    """Stretches of each train run whose load factor is at least ``threshold``.

    Runs with fewer than two results are ignored.
    """
    runs: defaultdict[str, list[LoadFactorResult]] = defaultdict(list)
    for result in results:
        runs[_run_key(result.train_code, result.date)].append(result)

    sections = []
    for key in sorted(runs):
        run = runs[key]
        if len(run) < 2:
            continue
        current: list[LoadFactorResult] = []
        for result in run:
            if result.load_factor >= threshold:
                current.append(result)
            elif current:
                peak = max(0.0, *(item.load_factor for item in current))
                sections.append(_section(current[0], current[-1], peak))
                current = []
        if current:
            peak = max(0.0, *(item.load_factor for item in current))
            sections.append(_section(current[0], run[-1], peak))
    return sections


def top_trains(
    results: Iterable[LoadFactorResult], count: int = DEFAULT_TOP_COUNT
) -> list[LoadFactorResult]:
    """The ``count`` results with the highest load factor, highest first."""
    ranked = sorted(results, key=lambda result: result.load_factor, reverse=True)
    return ranked[: max(count, 0)]