"""Line segments of operating routes and their CSV store."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

HEADER = "yyxlbm,zdid,xlzdid,Q_zdid,yqzdjjl,H_zdid,sfqszd,sfzdzd,ysjl,xldm,sfytk"
HEADER_LOCAL = (
    "运营线路编码,站点id,线路站点id,上一站id,运营线路站间距离 ,下一站id,"
    "是否起始站点,是否终点站点,运输距离,线路代码,是否要停靠"
)
NULL = "NULL"

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


def _neighbour(text: str) -> int:
    """A previous/next station id: ``NULL`` or anything unparsable reads as 0."""
    if text == NULL:
        return 0
    value = _parse_int(text)
    return 0 if value is None else value


def _neighbour_text(station_id: int) -> str:
    return NULL if station_id == 0 else str(station_id)


@dataclass
class Route:
    """One station on an operating line, with its neighbours and distances."""

    line_code: int = 0
    station_id: int = 0
    line_station_id: int = 0
    prev_station_id: int = 0
    distance: int = 0
    next_station_id: int = 0
    is_start: int = 0
    is_end: int = 0
    transport_distance: int = 0
    line_name: str = ""
    stops: int = 0

    def to_csv_row(self) -> str:
        return ",".join(
            [
                str(self.line_code),
                str(self.station_id),
                str(self.line_station_id),
                _neighbour_text(self.prev_station_id),
                str(self.distance),
                _neighbour_text(self.next_station_id),
                str(self.is_start),
                str(self.is_end),
                str(self.transport_distance),
                self.line_name,
                str(self.stops),
            ]
        )


def _parse_route(fields: list[str]) -> Route | None:
    required = {
        "line_code": 0,
        "station_id": 1,
        "line_station_id": 2,
        "distance": 4,
        "is_start": 6,
        "is_end": 7,
        "transport_distance": 8,
        "stops": 10,
    }
    values: dict[str, int] = {}
    for name, index in required.items():
        value = _parse_int(fields[index])
        if value is None:
            return None
        values[name] = value
    return Route(
        prev_station_id=_neighbour(fields[3]),
        next_station_id=_neighbour(fields[5]),
        line_name=fields[9].strip(),
        **values,
    )


def load_routes(path: PathLike) -> list[Route]:
    """Read route segments from a CSV file with two header lines.

    Lines with fewer than eleven fields or a non-numeric required field are
    skipped; a neighbour id of ``NULL`` reads as 0.
    """
    routes = []
    for line in _data_lines(path, header_lines=2):
        fields = line.split(",")
        if len(fields) < 11:
            continue
        route = _parse_route(fields)
        if route is not None:
            routes.append(route)
    return routes


def save_routes(routes: list[Route], path: PathLike) -> None:
    """Write route segments to a CSV file, both header lines first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        handle.write(HEADER_LOCAL + "\n")
        for route in routes:
            handle.write(route.to_csv_row() + "\n")


def add_route(routes: list[Route], route: Route, path: PathLike) -> None:
    """Append a route segment and save the list."""
    routes.append(route)
    save_routes(routes, path)


def delete_line(routes: list[Route], line_code: int, path: PathLike) -> None:
    """Remove every segment of a line and save the list.

    Raises LookupError if no segment belongs to that line.
    """
    remaining = [route for route in routes if route.line_code != line_code]
    if len(remaining) == len(routes):
        raise LookupError(f"line with code {line_code} not found")
    routes[:] = remaining
    save_routes(routes, path)


def update_route(routes: list[Route], route: Route, path: PathLike) -> None:
    """Replace the first segment with the same line code and line station id, then save.

    Raises LookupError if there is no such segment.
    """
    for index, existing in enumerate(routes):
        if (
            existing.line_code == route.line_code
            and existing.line_station_id == route.line_station_id
        ):
            routes[index] = route
            save_routes(routes, path)
            return
    raise LookupError(
        f"route {route.line_code}/{route.line_station_id} not found for update"
    )


def filter_routes(routes: list[Route], text: str) -> list[Route]:
    """Segments whose line code or station id contains ``text``, or whose line name does (any case)."""
    needle = text.lower()
    return [
        route
        for route in routes
        if text in str(route.line_code)
        or needle in route.line_name.lower()
        or text in str(route.station_id)
    ]


def routes_for_line(routes: list[Route], line_code: int) -> list[Route]:
    """The segments of one line, ordered by line station id."""
    return sorted(
        (route for route in routes if route.line_code == line_code),
        key=lambda route: route.line_station_id,
    )


def next_line_id(routes: list[Route]) -> int:
    """One more than the largest line code in use, and at least 1."""
    return max([0, *(route.line_code for route in routes)]) + 1