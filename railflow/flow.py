"""Daily passenger flow between Chengdu and Chongqing in both directions."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from railflow.records import TrafficRecord
from railflow.station import CHENGDU_TO_CHONGQING, CHONGQING_TO_CHENGDU, direction


@dataclass
class BidirectionalFlow:
    """Passengers carried each way on one day."""

    date: date
    chengdu_to_chongqing: int = 0
    chongqing_to_chengdu: int = 0
    net_flow: int = 0
    flow_difference: float = 0.0


def _make_flow(day: date, outbound: int, inbound: int) -> BidirectionalFlow:
    net = outbound - inbound
    total = outbound + inbound
    difference = net / total * 100.0 if total > 0 else 0.0
    return BidirectionalFlow(day, outbound, inbound, net, difference)


def bidirectional_flow(
    records: Iterable[TrafficRecord], start: date, end: date
) -> list[BidirectionalFlow]:
    """Flow each way for every day from ``start`` to ``end``, in date order.

    A train run's direction is taken from its first and last stop; all its
    boarding passengers count toward that direction. Days with no traffic
    appear with zero flow.
    """
    runs: defaultdict[tuple[int, date], list[TrafficRecord]] = defaultdict(list)
    for record in records:
        day = record.run_date
        if day is None or day < start or day > end:
            continue
        runs[(record.train_code, day)].append(record)

    daily: dict[date, list[int]] = {}
    for stops in runs.values():
        stops = sorted(stops, key=lambda record: record.order)
        way = direction(stops[0].station_id, stops[-1].station_id)
        passengers = sum(record.boarding for record in stops)
        day = stops[0].run_date
        if way == CHENGDU_TO_CHONGQING:
            daily.setdefault(day, [0, 0])[0] += passengers
        elif way == CHONGQING_TO_CHENGDU:
            daily.setdefault(day, [0, 0])[1] += passengers

    flows = {day: _make_flow(day, out, back) for day, (out, back) in daily.items()}
    day = start
    while day <= end:
        flows.setdefault(day, BidirectionalFlow(day))
        day += timedelta(days=1)
    return [flows[day] for day in sorted(flows)]


def _values(flows: Iterable[BidirectionalFlow], chengdu_to_chongqing: bool) -> list[int]:
    return [
        flow.chengdu_to_chongqing if chengdu_to_chongqing else flow.chongqing_to_chengdu
        for flow in flows
    ]


def daily_average(flows: Sequence[BidirectionalFlow], chengdu_to_chongqing: bool) -> float:
    """Mean daily flow in one direction, 0 for no data."""
    values = _values(flows, chengdu_to_chongqing)
    return sum(values) / len(values) if values else 0.0


def flow_difference(flows: Sequence[BidirectionalFlow]) -> float:
    """Net Chengdu→Chongqing flow as a percentage of all flow, 0 for none."""
    outbound = sum(flow.chengdu_to_chongqing for flow in flows)
    inbound = sum(flow.chongqing_to_chengdu for flow in flows)
    total = outbound + inbound
    return (outbound - inbound) / total * 100.0 if total > 0 else 0.0


def fluctuation(flows: Sequence[BidirectionalFlow], chengdu_to_chongqing: bool) -> float:
    """Coefficient of variation (sample deviation over mean) of daily flow.

    Returns 0 for fewer than two days or a mean that is not positive.
    """
    values = _values(flows, chengdu_to_chongqing)
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / (len(values) - 1)
    return math.sqrt(variance) / mean if mean > 0 else 0.0