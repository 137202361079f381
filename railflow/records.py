"""Passenger traffic records read from the ticketing CSV export."""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, time
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

MIN_FIELDS = 18
START_NAME_FIELD = 19
END_NAME_FIELD = 21
UNLIMITED = -1

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_DATE = re.compile(r"(\d{4})(\d{2})(\d{2})")
_TIME = re.compile(r"(\d{2})(\d{2})")


def _parse_int(text: str) -> int | None:
    text = text.strip()
    return int(text) if _INT.fullmatch(text) else None


def _parse_float(text: str) -> float | None:
    text = text.strip()
    return float(text) if _FLOAT.fullmatch(text) else None


def _parse_date(text: str) -> date | None:
    """A ``yyyyMMdd`` date, or None when the text is not one."""
    match = _DATE.fullmatch(text)
    if match is None:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def _parse_time(text: str) -> time | None:
    """An ``hhmm`` time, or None when the text is not one."""
    match = _TIME.fullmatch(text)
    if match is None:
        return None
    try:
        return time(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def _data_lines(path: PathLike, header_lines: int) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle):
            if number < header_lines:
                continue
            line = raw.strip()
            if line:
                yield line


@dataclass
class TrafficRecord:
    """One train's stop at one station on one day, with its passenger counts."""

    seq: int = 0
    line_code: int = 0
    train_code: int = 0
    station_id: int = 0
    run_date: date | None = None
    run_time: time | None = None
    order: int = 0
    is_start: int = 0
    is_end: int = 0
    arrival: time | None = None
    departure: time | None = None
    boarding: int = 0
    alighting: int = 0
    ticket_type: int = 0
    ticket_price: float = 0.0
    seat_type: str = ""
    start_station_name: str = ""
    end_station_name: str = ""

    @property
    def total_flow(self) -> int:
        """Passengers boarding plus passengers alighting."""
        return self.boarding + self.alighting


def _parse_record(fields: list[str]) -> TrafficRecord | None:
    required = {}
    for name, index in (
        ("seq", 0),
        ("line_code", 1),
        ("train_code", 2),
        ("station_id", 3),
        ("order", 6),
        ("is_start", 7),
        ("is_end", 8),
        ("ticket_type", 13),
    ):
        value = _parse_int(fields[index])
        if value is None:
            return None
        required[name] = value
    ticket_price = _parse_float(fields[14])
    if ticket_price is None:
        return None
    return TrafficRecord(
        run_date=_parse_date(fields[4]),
        run_time=_parse_time(fields[5]),
        arrival=_parse_time(fields[9]),
        departure=_parse_time(fields[10]),
        boarding=_parse_int(fields[11]) or 0,
        alighting=_parse_int(fields[12]) or 0,
        ticket_price=ticket_price,
        seat_type=fields[15].strip(),
        start_station_name=(
            fields[START_NAME_FIELD].strip() if len(fields) > START_NAME_FIELD else ""
        ),
        end_station_name=(
            fields[END_NAME_FIELD].strip() if len(fields) > END_NAME_FIELD else ""
        ),
        **required,
    )


def load_traffic(path: PathLike, max_records: int | None = None) -> list[TrafficRecord]:
    """Read traffic records from a CSV file with two header lines.

    Lines with fewer than eighteen fields or a malformed required field are
    skipped; unparsable boarding or alighting counts read as 0. Reading stops
    after ``max_records`` records unless it is None or -1.
    """
    unlimited = max_records is None or max_records == UNLIMITED
    records: list[TrafficRecord] = []
    if not unlimited and max_records <= 0:
        return records
    for line in _data_lines(path, header_lines=2):
        fields = line.split(",")
        if len(fields) < MIN_FIELDS:
            continue
        record = _parse_record(fields)
        if record is None:
            continue
        records.append(record)
        if not unlimited and len(records) >= max_records:
            break
    return records


def _group_key(record: TrafficRecord, group_by: str) -> str:
    if group_by == "station":
        return str(record.station_id)
    if group_by == "date":
        return record.run_date.isoformat() if record.run_date else ""
    if group_by == "train":
        return str(record.train_code)
    return "default"


def aggregate_flow(
    records: Iterable[TrafficRecord], group_by: str
) -> dict[str, list[TrafficRecord]]:
    """Group records by ``"station"``, ``"date"`` or ``"train"``, keys in sorted order.

    Any other grouping puts every record under the key ``"default"``.
    """
    groups: defaultdict[str, list[TrafficRecord]] = defaultdict(list)
    for record in records:
        groups[_group_key(record, group_by)].append(record)
    return dict(sorted(groups.items()))