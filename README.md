# railflow

A library for keeping railway network records in CSV files and for
analysing passenger traffic on them. It uses only the standard library.

## Modules

### Network records

- `railflow.station`: the `Station` dataclass, with `load_stations`,
  `save_stations`, `add_station`, `update_station`, `delete_station`,
  `filter_stations`, `find_station` and `next_station_id`. The module also
  has `direction(from_station_id, to_station_id)`. Ids below 6000 are in
  the Chengdu area and ids from 6000 up are in the Chongqing area. The
  function returns `"成都→重庆"`, `"重庆→成都"`, `"成都内部"` or
  `"重庆内部"`.
- `railflow.train`: the `Train` dataclass, with `load_trains`,
  `save_trains`, `add_train`, `update_train`, `delete_train`,
  `filter_trains`, `find_train` and `next_train_id`. In the CSV file a
  capacity of 0 is written as `#N/A`.
  - `TrainSchedule` is one stop of a timetable.
  - `ScheduleBook` keeps timetables in memory, keyed by train code and
    route id, through `get`, `update` and `discard_train`.
  - When `delete_train` is given a `ScheduleBook`, it also drops that
    train's timetables.
- `railflow.route`: the `Route` dataclass, one station on an operating
  line. The module has `load_routes`, `save_routes`, `add_route`,
  `update_route`, `delete_line`, `filter_routes`, `routes_for_line` and
  `next_line_id`. In the CSV file a missing neighbour station is written
  as `NULL`.
- `railflow.user`: the `User` dataclass, with `load_users`, `save_users`,
  `validate_user`, `find_user`, `username_exists` and `register_user`.
  `register_user` creates the file if it does not exist.

How the record functions report problems:

- The `add_*`, `update_*`, `delete_*` and `register_user` functions change
  the list they are given in place, then save it to the path.
- Adding an id or username that is already taken raises `ValueError`.
- Updating or deleting an id that is not present raises `LookupError`.

### Traffic analysis

- `railflow.records`: `load_traffic(path, max_records)` reads passenger
  traffic exports into `TrafficRecord` objects. Passing `None` or `-1` as
  `max_records` reads every row. `aggregate_flow(records, group_by)`
  groups the records by `"station"`, `"date"` or `"train"`. Any other
  value puts every record under `"default"`.
- `railflow.holidays`: `chinese_holidays(year)` returns a fixed,
  simplified list of holidays. It puts the Spring Festival at 10–16
  February. `is_holiday(day)` also counts weekends as holidays.
- `railflow.loadfactor`:
  - `calculate_load_factor` gives the load and load factor of each train
    run at every stop. A train that has no capacity given is assumed to
    carry 1000 passengers.
  - `find_peak_sections` finds stretches of stops at or above a threshold,
    80% by default.
  - `top_trains` returns the results with the highest load factors.
- `railflow.flow`:
  - `bidirectional_flow` gives the daily Chengdu→Chongqing and
    Chongqing→Chengdu passenger totals. Days without traffic appear with
    zero flow.
  - `daily_average`, `flow_difference` and `fluctuation` summarise those
    totals. `fluctuation` is the coefficient of variation.
- `railflow.heat`:
  - `station_heat` totals boarding and alighting per station. Its
    `time_unit` can be `"hour"` or `"week"`, which divide the score by 24
    or by 7.
  - `heat_ranking` ranks the stations.
  - `export_heat_ranking` writes the ranking to a UTF-8 CSV file.
- `railflow.prediction`:
  - `predict_flow` makes a seven-day moving-average forecast for each
    station.
  - `holiday_adjustment` raises the predicted flow by 40%, the upper bound
    by 50% and the lower bound by 20% on the dates given.
  - `prediction_range` gives a 95% band from days on the same weekday.
  - `prediction_error` returns the MAE and RMSE.
  - `export_predictions` writes the predictions to a UTF-8 CSV file.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from datetime import date

from railflow.records import load_traffic
from railflow.loadfactor import calculate_load_factor, top_trains
from railflow.flow import bidirectional_flow, flow_difference

records = load_traffic("traffic.csv", -1)

results = calculate_load_factor(records, {1: 1200}, None, None)
for row in top_trains(results, 5):
    print(row.train_code, row.station_id, round(row.load_factor, 1))

flows = bidirectional_flow(records, date(2015, 1, 1), date(2015, 1, 7))
print(f"direction imbalance: {flow_difference(flows):.1f}%")
```

## Data files

- The traffic, train and route files start with two header lines.
- The station and user files start with one header line.
- Fields are split on commas, with no quoting.
- Rows with too few fields, or whose required numeric fields cannot be
  read, are skipped.

## What it does not do

- There is no command-line program, login screen or chart view. This is a
  library to call from Python.
- `ScheduleBook` timetables live only in memory and are never written to
  disk.
- User passwords are stored and compared as plain text.
- Nothing checks whether a train or line has traffic history before it is
  deleted.
- The `peak_time` of a `PeakSection` is the time at which it was computed.