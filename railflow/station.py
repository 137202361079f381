"""Station records, their CSV store and the Chengdu/Chongqing direction rule."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

HEADER = "zdid,zdmc,station_code,station_telecode,station_shortname"

CHENGDU_TO_CHONGQING = "成都→重庆"
CHONGQING_TO_CHENGDU = "重庆→成都"
WITHIN_CHENGDU = "成都内部"
WITHIN_CHONGQING = "重庆内部"

# Station ids below this value lie in the Chengdu area, the rest in Chongqing.
CHONGQING_ID_START = 6000

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
class Station:
    """A railway station."""

    station_id: int = 0
    name: str = ""
    code: str = ""
    telecode: str = ""
    shortname: str = ""

    def to_csv_row(self) -> str:
        return ",".join(
            [str(self.station_id), self.name, self.code, self.telecode, self.shortname]
        )


def load_stations(path: PathLike) -> list[Station]:
    """Read stations from a CSV file with one header line.

    Lines with fewer than five fields or a non-numeric id are skipped.
    """
    stations = []
    for line in _data_lines(path, header_lines=1):
        fields = line.split(",")
        if len(fields) < 5:
            continue
        station_id = _parse_int(fields[0])
        if station_id is None:
            continue
        name, code, telecode, shortname = (field.strip() for field in fields[1:5])
        stations.append(Station(station_id, name, code, telecode, shortname))
    return stations


def save_stations(stations: list[Station], path: PathLike) -> None:
    """Write stations to a CSV file, header first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        for station in stations:
            handle.write(station.to_csv_row() + "\n")


def add_station(stations: list[Station], station: Station, path: PathLike) -> None:
    """Append a station whose id is new and save the list.

    Raises ValueError if a station with the same id already exists.
    """
    if any(existing.station_id == station.station_id for existing in stations):
        raise ValueError(f"station with id {station.station_id} already exists")
    stations.append(station)
    save_stations(stations, path)


def delete_station(stations: list[Station], station_id: int, path: PathLike) -> None:
    """Remove every station with the given id and save the list.

    Raises LookupError if no station has that id.
    """
    remaining = [station for station in stations if station.station_id != station_id]
    if len(remaining) == len(stations):
        raise LookupError(f"station with id {station_id} not found")
    stations[:] = remaining
    save_stations(stations, path)


def update_station(stations: list[Station], station: Station, path: PathLike) -> None:
    """Replace the first station with the same id and save the list.

    Raises LookupError if no station has that id.
    """
    for index, existing in enumerate(stations):
        if existing.station_id == station.station_id:
            stations[index] = station
            save_stations(stations, path)
            return
    raise LookupError(f"station with id {station.station_id} not found for update")


def filter_stations(stations: list[Station], text: str) -> list[Station]:
    """Stations whose text fields contain ``text`` (any case) or whose id contains it."""
    needle = text.lower()
    return [
        station
        for station in stations
        if any(
            needle in field.lower()
            for field in (station.name, station.code, station.telecode, station.shortname)
        )
        or text in str(station.station_id)
    ]


def next_station_id(stations: list[Station]) -> int:
    """One more than the largest id in use, and at least 1."""
    return max([0, *(station.station_id for station in stations)]) + 1


def find_station(stations: list[Station], station_id: int) -> Station | None:
    """The first station with the given id, or None."""
    return next((station for station in stations if station.station_id == station_id), None)


def direction(from_station_id: int, to_station_id: int) -> str:
    """Name the direction of travel between two stations by their id ranges."""
    from_chengdu = from_station_id < CHONGQING_ID_START
    to_chengdu = to_station_id < CHONGQING_ID_START
    if from_chengdu and not to_chengdu:
        return CHENGDU_TO_CHONGQING
    if not from_chengdu and to_chengdu:
        return CHONGQING_TO_CHENGDU
    if from_chengdu:
        return WITHIN_CHENGDU
    return WITHIN_CHONGQING