"""Station popularity: passenger totals per station and their ranking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Union

from railflow.records import TrafficRecord

PathLike = Union[str, Path]

DEFAULT_TOP_COUNT = 20
HEADER = "排名,站点ID,站点名称,总客流量,上客量,下客量,热度评分"

# Divisors that turn a total over the period into a per-unit score.
_UNIT_DIVISORS = {"hour": 24, "week": 7}


@dataclass
class StationHeat:
    """Passenger totals of one station and the score they earn it."""

    station_id: int
    station_name: str = ""
    total_flow: int = 0
    boarding: int = 0
    alighting: int = 0
    heat_score: float = 0.0
    ranking: int = 0

    def to_csv_row(self) -> str:
        return ",".join(
            [
                str(self.ranking),
                str(self.station_id),
                self.station_name,
                str(self.total_flow),
                str(self.boarding),
                str(self.alighting),
                f"{self.heat_score:.2f}",
            ]
        )


def station_heat(
    records: Iterable[TrafficRecord],
    start: date,
    end: date,
    time_unit: str = "day",
) -> list[StationHeat]:
    """Totals and heat score of every station with traffic between ``start`` and ``end``.

    The score is the total flow, divided by 24 for ``"hour"`` and by 7 for
    ``"week"``. Stations come in order of their id; a station takes the name
    of the first record seen for it.
    """
    stations: dict[int, StationHeat] = {}
    for record in records:
        day = record.run_date
        if day is None or day < start or day > end:
            continue
        heat = stations.setdefault(
            record.station_id,
            StationHeat(record.station_id, record.start_station_name),
        )
        heat.boarding += record.boarding
        heat.alighting += record.alighting
        heat.total_flow += record.total_flow

    divisor = _UNIT_DIVISORS.get(time_unit, 1)
    result = []
    for station_id in sorted(stations):
        heat = stations[station_id]
        heat.heat_score = heat.total_flow / divisor
        result.append(heat)
    return result


def heat_ranking(
    heat: Iterable[StationHeat], top_count: int = DEFAULT_TOP_COUNT
) -> list[StationHeat]:
    """The ``top_count`` hottest stations, hottest first, with their rank set from 1."""
    ranked = sorted(heat, key=lambda item: item.heat_score, reverse=True)
    numbered = [replace(item, ranking=rank) for rank, item in enumerate(ranked, start=1)]
    return numbered[: max(top_count, 0)]


def export_heat_ranking(ranking: Iterable[StationHeat], path: PathLike) -> None:
    """Write a ranking to a UTF-8 CSV file, header first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        for item in ranking:
            handle.write(item.to_csv_row() + "\n")