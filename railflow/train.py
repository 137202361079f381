"""Train records, their CSV store and an in-memory timetable book."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

HEADER = "lcbm,lcdm,lcyn"
HEADER_LOCAL = "列车编码,列车代码,列车运量"
MISSING_CAPACITY = "#N/A"

_INT = re.compile(r"[+-]?\d+")


def _parse_int(text: str) -> int | None:
    text = text.strip()
    return int(text) if _INT.fullmatch(text) else None


def _data_lines(path: PathLike, header_lines: int) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle):
            if number < header_lines:
                continue
            line = raw.strip()
            if line:
                yield line


@dataclass
class Train:
    """A train: its numeric code, its name and its capacity (0 when unknown)."""

    code: int = 0
    name: str = ""
    capacity: int = 0

    def to_csv_row(self) -> str:
        capacity = MISSING_CAPACITY if self.capacity == 0 else str(self.capacity)
        return f"{self.code},{self.name},{capacity}"


@dataclass
class TrainSchedule:
    """One stop of a train's timetable."""

    station_id: int
    station_name: str
    arrival: time | None
    departure: time | None
    stop_duration: int = 2


class ScheduleBook:
    """Timetables kept in memory, keyed by train code and route id."""

    def __init__(self) -> None:
        self._schedules: dict[tuple[int, int], list[TrainSchedule]] = {}

    def get(self, train_code: int, route_id: int) -> list[TrainSchedule]:
        """The timetable of a train on a route, empty if none is stored."""
        return list(self._schedules.get((train_code, route_id), []))

    def update(self, train_code: int, route_id: int, schedule: list[TrainSchedule]) -> None:
        """Store the timetable of a train on a route, replacing any earlier one."""
        self._schedules[(train_code, route_id)] = list(schedule)

    def discard_train(self, train_code: int) -> None:
        """Forget every timetable of the given train."""
        for key in [key for key in self._schedules if key[0] == train_code]:
            del self._schedules[key]

    def __len__(self) -> int:
        return len(self._schedules)


def load_trains(path: PathLike) -> list[Train]:
    """Read trains from a CSV file with two header lines.

    Lines with fewer than three fields or a non-numeric code are skipped;
    a capacity of ``#N/A`` or one that is not a number reads as 0.
    """
    trains = []
    for line in _data_lines(path, header_lines=2):
        fields = line.split(",")
        if len(fields) < 3:
            continue
        code = _parse_int(fields[0])
        if code is None:
            continue
        capacity = 0
        if fields[2] != MISSING_CAPACITY:
            capacity = _parse_int(fields[2]) or 0
        trains.append(Train(code, fields[1], capacity))
    return trains


def save_trains(trains: list[Train], path: PathLike) -> None:
    """Write trains to a CSV file, both header lines first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        handle.write(HEADER_LOCAL + "\n")
        for train in trains:
            handle.write(train.to_csv_row() + "\n")


def add_train(trains: list[Train], train: Train, path: PathLike) -> None:
    """Append a train whose code is new and save the list.

    Raises ValueError if a train with the same code already exists.
    """
    if any(existing.code == train.code for existing in trains):
        raise ValueError(f"train with code {train.code} already exists")
    trains.append(train)
    save_trains(trains, path)


def delete_train(
    trains: list[Train],
    train_code: int,
    path: PathLike,
    schedules: ScheduleBook | None = None,
) -> None:
    """Remove every train with the given code, drop its timetables and save.

    Raises LookupError if no train has that code.
    """
    remaining = [train for train in trains if train.code != train_code]
    if len(remaining) == len(trains):
        raise LookupError(f"train with code {train_code} not found")
    trains[:] = remaining
    if schedules is not None:
        schedules.discard_train(train_code)
    save_trains(trains, path)


def update_train(trains: list[Train], train: Train, path: PathLike) -> None:
    """Replace the first train with the same code and save the list.

    Raises LookupError if no train has that code.
    """
    for index, existing in enumerate(trains):
        if existing.code == train.code:
            trains[index] = train
            save_trains(trains, path)
            return
    raise LookupError(f"train with code {train.code} not found for update")


def filter_trains(trains: list[Train], text: str) -> list[Train]:
    """Trains whose name contains ``text`` (any case) or whose code or capacity contains it."""
    needle = text.lower()
    return [
        train
        for train in trains
        if needle in train.name.lower()
        or text in str(train.code)
        or text in str(train.capacity)
    ]


def next_train_id(trains: list[Train]) -> int:
    """One more than the largest code in use, and at least 1."""
    return max([0, *(train.code for train in trains)]) + 1


def find_train(trains: list[Train], train_code: int) -> Train | None:
    """The first train with the given code, or None."""
    return next((train for train in trains if train.code == train_code), None)