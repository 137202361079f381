"""Short-term passenger flow forecasts per station."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta
from pathlib import Path
from typing import Union

from railflow.holidays import is_holiday
from railflow.records import TrafficRecord

PathLike = Union[str, Path]

DEFAULT_DAYS = 3
HISTORY_DAYS = 7
DEFAULT_RANGE = (0.0, 1000.0)
CONFIDENCE_Z = 1.96

HOLIDAY_FLOW_FACTOR = 1.4
HOLIDAY_UPPER_FACTOR = 1.5
HOLIDAY_LOWER_FACTOR = 1.2

HEADER = "日期,站点ID,站点名称,预测值,实际值,预测下界,预测上界,误差,是否节假日"
YES = "是"
NO = "否"


@dataclass
class FlowPrediction:
    """The forecast flow of one station on one day."""

    date: date
    station_id: int
    station_name: str = ""
    predicted_flow: int = 0
    actual_flow: int = 0
    upper_bound: float = 0.0
    lower_bound: float = 0.0
    error: float = 0.0
    is_holiday: bool = False

    def to_csv_row(self) -> str:
        return ",".join(
            [
                self.date.isoformat(),
                str(self.station_id),
                self.station_name,
                str(self.predicted_flow),
                str(self.actual_flow),
                f"{self.lower_bound:.2f}",
                f"{self.upper_bound:.2f}",
                f"{self.error:.2f}",
                YES if self.is_holiday else NO,
            ]
        )


def prediction_range(
    records: Iterable[TrafficRecord], station_id: int, day: date
) -> tuple[float, float]:
    """A 95% band for a station's flow on a day, from records on the same weekday.

    The lower end is never below 0; with no such records the band is (0, 1000).
    """
    flows = [
        record.total_flow
        for record in records
        if record.station_id == station_id
        and record.run_date is not None
        and record.run_date.weekday() == day.weekday()
    ]
    if not flows:
        return DEFAULT_RANGE
    mean = sum(flows) / len(flows)
    deviation = math.sqrt(sum((flow - mean) ** 2 for flow in flows) / len(flows))
    return max(0.0, mean - CONFIDENCE_Z * deviation), mean + CONFIDENCE_Z * deviation


def predict_flow(
    records: Sequence[TrafficRecord], start: date, days: int = DEFAULT_DAYS
) -> list[FlowPrediction]:
    """Forecast each station's flow for ``days`` days from ``start``.

    Only records from the seven days before ``start`` are used; each forecast
    is the mean daily flow over the seven days before the forecast day, over
    the days that have data. Stations come in order of their id.
    """
    history_start = start - timedelta(days=HISTORY_DAYS)
    by_station: defaultdict[int, list[TrafficRecord]] = defaultdict(list)
    for record in records:
        day = record.run_date
        if day is None or day < history_start or day >= start:
            continue
        by_station[record.station_id].append(record)

    predictions = []
    for station_id in sorted(by_station):
        station_records = by_station[station_id]
        daily: defaultdict[date, int] = defaultdict(int)
        for record in station_records:
            daily[record.run_date] += record.total_flow

        for offset in range(days):
            target = start + timedelta(days=offset)
            history = [
                daily[past]
                for past in (target - timedelta(days=back) for back in range(1, HISTORY_DAYS + 1))
                if past in daily
            ]
            if not history:
                continue
            lower, upper = prediction_range(records, station_id, target)
            predictions.append(
                FlowPrediction(
                    date=target,
                    station_id=station_id,
                    station_name=station_records[0].start_station_name,
                    predicted_flow=int(sum(history) / len(history)),
                    upper_bound=upper,
                    lower_bound=lower,
                    is_holiday=is_holiday(target),
                )
            )
    return predictions


def holiday_adjustment(
    predictions: Iterable[FlowPrediction], holidays: Iterable[date]
) -> list[FlowPrediction]:
    """Copies of the predictions with holiday days raised.

    On a holiday the flow grows by 40%, the upper bound by 50% and the
    lower bound by 20%.
    """
    holiday_set = set(holidays)
    adjusted = []
    for prediction in predictions:
        if prediction.date in holiday_set:
            prediction = replace(
                prediction,
                is_holiday=True,
                predicted_flow=int(prediction.predicted_flow * HOLIDAY_FLOW_FACTOR),
                upper_bound=prediction.upper_bound * HOLIDAY_UPPER_FACTOR,
                lower_bound=prediction.lower_bound * HOLIDAY_LOWER_FACTOR,
            )
        else:
            prediction = replace(prediction)
        adjusted.append(prediction)
    return adjusted


def prediction_error(predictions: Iterable[FlowPrediction]) -> tuple[float, float]:
    """Mean absolute error and root mean square error over predictions with an actual flow.

    Predictions whose actual flow is not positive are ignored; with none
    left both errors are 0.
    """
    errors = [
        prediction.predicted_flow - prediction.actual_flow
        for prediction in predictions
        if prediction.actual_flow > 0
    ]
    if not errors:
        return 0.0, 0.0
    mae = sum(abs(error) for error in errors) / len(errors)
    rmse = math.sqrt(sum(error * error for error in errors) / len(errors))
    return mae, rmse


def export_predictions(predictions: Iterable[FlowPrediction], path: PathLike) -> None:
    """Write predictions to a UTF-8 CSV file, header first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        for prediction in predictions:
            handle.write(prediction.to_csv_row() + "\n")